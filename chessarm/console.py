"""Interactive console for testing the serial link to the controller board."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from .serial_link import DEFAULT_BAUDRATE, SerialLink, SerialLinkError

DEFAULT_PORT = "/dev/ttyACM0"
EXAMPLE_MOVES = ("e2e4", "d2d4", "g1f3")
MENU = 'Enter command ("opengripper", "closegripper", "read", "legal", "move", "exit"):\n'


def _run(link: SerialLink, command: str, stdout: TextIO) -> None:
    if command == "closegripper":
        link.close_gripper()
    elif command == "opengripper":
        link.open_gripper()
    elif command == "read":
        stdout.write(f"Received: {link.read()}\n")
    elif command == "legal":
        link.send_legal_moves(EXAMPLE_MOVES)
    elif command == "move":
        stdout.write(f"Move from pico: {link.move_from_pico()}\n")
    else:
        stdout.write("Unknown command!\n")


def interact(link: SerialLink, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Read commands until ``exit`` or end of input and run them on ``link``."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    while True:
        stdout.write(MENU)
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        command = line.rstrip("\r\n")
        if command == "exit":
            break
        try:
            _run(link, command, stdout)
        except SerialLinkError as exc:
            stdout.write(f"Error: {exc}\n")


def main(argv: list[str] | None = None) -> int:
    """Open the serial port and run the command console."""
    parser = argparse.ArgumentParser(description="Talk to the controller board by hand.")
    parser.add_argument("--port", default=DEFAULT_PORT)
    parser.add_argument("--baudrate", type=int, default=DEFAULT_BAUDRATE)
    args = parser.parse_args(argv)
    link = SerialLink(args.baudrate)
    try:
        link.open(args.port)
    except SerialLinkError as exc:
        print(exc, file=sys.stderr)
        return 1
    print("Serial port opened successfully.")
    with link:
        interact(link)
    return 0