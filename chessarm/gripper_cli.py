"""Interactive gripper control over the serial link."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from .serial_link import (
    CLOSE_GRIPPER_COMMAND,
    OPEN_GRIPPER_COMMAND,
    SerialLink,
    SerialLinkError,
)

DEFAULT_PORT = "/dev/ttyACM0"
DEFAULT_BAUDRATE = 9600
INTRO = 'Enter command ("close" to send 1, "open" to send 0). Type "exit" to quit:\n'
COMMANDS = {"close": CLOSE_GRIPPER_COMMAND, "open": OPEN_GRIPPER_COMMAND}


def interact(link: SerialLink, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Read commands until ``exit`` or end of input, sending gripper codes."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stdout.write(INTRO)
    while True:
        stdout.write("> ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        command = line.rstrip("\r\n")
        if command == "exit":
            break
        code = COMMANDS.get(command)
        if code is None:
            stdout.write('Invalid command. Only "close" and "open" are accepted.\n')
            continue
        try:
            link.write(code)
        except SerialLinkError:
            stdout.write("Error writing to serial port\n")
        else:
            stdout.write(f"Sent: {code}\n")


def main(argv: list[str] | None = None) -> int:
    """Open the serial port and run the gripper prompt."""
    parser = argparse.ArgumentParser(description="Open and close the gripper by hand.")
    parser.add_argument("--port", default=DEFAULT_PORT)
    parser.add_argument("--baudrate", type=int, default=DEFAULT_BAUDRATE)
    args = parser.parse_args(argv)
    link = SerialLink(args.baudrate)
    try:
        link.open(args.port)
    except SerialLinkError as exc:
        print(f"Error opening serial port {args.port}: {exc}", file=sys.stderr)
        return 1
    with link:
        interact(link)
    return 0