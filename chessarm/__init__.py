"""Chess against a UCI engine with a robot arm: serial link, engine driver, board model and game loop."""

__version__ = "0.1.0"