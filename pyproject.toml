[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chessarm"
version = "0.1.0"
description = "Play chess against a UCI engine with a robot arm, a serial move board and a gripper"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = ["chess", "stockfish", "uci", "robot arm", "serial", "gripper"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
chessarm-gripper = "chessarm.gripper_cli:main"
chessarm-console = "chessarm.console:main"

[tool.hatch.build.targets.wheel]
packages = ["chessarm"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
