"""Serial link to the move-input board and gripper controller."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import serial

log = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 115200
READ_SIZE = 256
MIN_MOVE_LENGTH = 4
CLOSE_GRIPPER_COMMAND = "1"
OPEN_GRIPPER_COMMAND = "0"


class SerialLinkError(Exception):
    """Raised when the serial link cannot be opened, read or written."""


def format_legal_moves(moves: Iterable[str]) -> str:
    """Return the wire form of a list of moves: space separated, newline ended."""
    return " ".join(moves) + "\n"


class SerialLink:
    """A byte link to the controller board, over a serial port or any stream."""

    def __init__(self, baudrate: int = DEFAULT_BAUDRATE) -> None:
        self.baudrate = baudrate
        self._stream: Any = None

    def open(self, port: str) -> SerialLink:
        """Open and configure ``port`` as 8N1 without flow control."""
        self.close()
        try:
            stream = serial.Serial(
                port=port,
                baudrate=self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                xonxoff=False,
                rtscts=False,
                timeout=None,
            )
        except (serial.SerialException, OSError, ValueError) as exc:
            raise SerialLinkError(f"cannot open serial port {port}: {exc}") from exc
        self._stream = stream
        return self

    def attach(self, stream: Any) -> SerialLink:
        """Use an already open stream with ``read``, ``write`` and ``close``."""
        self.close()
        self._stream = stream
        return self

    def is_open(self) -> bool:
        """Whether a stream is currently attached."""
        return self._stream is not None

    def _require_open(self) -> Any:
        if self._stream is None:
            raise SerialLinkError("serial port is not open")
        return self._stream

    def write(self, data: str | bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        stream = self._require_open()
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        try:
            written = stream.write(payload)
        except (serial.SerialException, OSError) as exc:
            raise SerialLinkError(f"error writing to serial port: {exc}") from exc
        return len(payload) if written is None else written

    def read(self) -> str:
        """Block for at least one byte and return what arrived, at most 256 bytes."""
        stream = self._require_open()
        try:
            waiting = getattr(stream, "in_waiting", None)
            if waiting is None:
                data = stream.read(READ_SIZE)
            else:
                data = stream.read(1)
                extra = min(stream.in_waiting, READ_SIZE - len(data))
                if data and extra > 0:
                    data += stream.read(extra)
        except (serial.SerialException, OSError) as exc:
            raise SerialLinkError(f"error reading from serial port: {exc}") from exc
        return bytes(data).decode("latin-1")

    def close(self) -> None:
        """Close the stream if one is open."""
        if self._stream is not None:
            stream, self._stream = self._stream, None
            stream.close()

    def send_legal_moves(self, moves: Iterable[str]) -> str:
        """Send the legal moves and return the line that was sent."""
        line = format_legal_moves(moves)
        self.write(line)
        log.info("sent legal moves: %s", line.rstrip("\n"))
        return line

    def move_from_pico(self) -> str:
        """Read packets until one of at least four characters arrives and return it."""
        while True:
            packet = self.read()
            if not packet:
                raise SerialLinkError("serial port closed while waiting for a move")
            if len(packet) >= MIN_MOVE_LENGTH:
                log.info("received from port: %s", packet)
                return packet
            log.warning("invalid packet received: %r", packet)

    def close_gripper(self) -> None:
        """Tell the controller to close the gripper."""
        self.write(CLOSE_GRIPPER_COMMAND)

    def open_gripper(self) -> None:
        """Tell the controller to open the gripper."""
        self.write(OPEN_GRIPPER_COMMAND)

    def __enter__(self) -> SerialLink:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()