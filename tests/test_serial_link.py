import pytest

from chessarm.serial_link import (
    READ_SIZE,
    SerialLink,
    SerialLinkError,
    format_legal_moves,
)


class FakeStream:
    def __init__(self, chunks=()):
        self.chunks = list(chunks)
        self.written = bytearray()
        self.closed = False

    def read(self, size):
        if not self.chunks:
            return b""
        return self.chunks.pop(0)[:size]

    def write(self, data):
        self.written += data
        return len(data)

    def close(self):
        self.closed = True


class BufferedStream(FakeStream):
    def __init__(self, data):
        super().__init__()
        self.buffer = bytearray(data)

    @property
    def in_waiting(self):
        return len(self.buffer)

    def read(self, size):
        chunk = bytes(self.buffer[:size])
        del self.buffer[:size]
        return chunk


class FailingStream(FakeStream):
    def write(self, data):
        raise OSError("device gone")

    def read(self, size):
        raise OSError("device gone")


def test_format_legal_moves():
    assert format_legal_moves(["e2e4", "d2d4", "g1f3"]) == "e2e4 d2d4 g1f3\n"


def test_format_legal_moves_empty():
    assert format_legal_moves([]) == "\n"


def test_write_requires_open_port():
    link = SerialLink()
    assert link.is_open() is False
    with pytest.raises(SerialLinkError):
        link.write("x")


def test_read_requires_open_port():
    with pytest.raises(SerialLinkError):
        SerialLink().read()


def test_gripper_commands():
    stream = FakeStream()
    link = SerialLink().attach(stream)
    link.open_gripper()
    link.close_gripper()
    assert bytes(stream.written) == b"01"


def test_write_returns_byte_count():
    stream = FakeStream()
    link = SerialLink().attach(stream)
    assert link.write("e2e4") == 4
    assert link.write(b"ab") == 2
    assert bytes(stream.written) == b"e2e4ab"


def test_send_legal_moves_writes_line():
    stream = FakeStream()
    link = SerialLink().attach(stream)
    sent = link.send_legal_moves(["e2e4", "d2d4", "g1f3"])
    assert sent == "e2e4 d2d4 g1f3\n"
    assert bytes(stream.written) == sent.encode()


def test_read_returns_chunk():
    link = SerialLink().attach(FakeStream([b"e2e4"]))
    assert link.read() == "e2e4"


def test_read_is_limited_to_read_size():
    data = bytes(range(32, 127)) * 4
    link = SerialLink().attach(BufferedStream(data))
    first = link.read()
    second = link.read()
    assert len(first) == READ_SIZE
    assert (first + second).encode("latin-1") == data


def test_move_from_pico_skips_short_packets():
    link = SerialLink().attach(FakeStream([b"e2", b"", b"abc", b"e7e8q"]))
    # the empty chunk ends the stream before the move arrives
    with pytest.raises(SerialLinkError):
        link.move_from_pico()


def test_move_from_pico_returns_first_long_packet():
    link = SerialLink().attach(FakeStream([b"e2", b"abc", b"g1f3", b"zzzz"]))
    assert link.move_from_pico() == "g1f3"


def test_write_error_is_wrapped():
    link = SerialLink().attach(FailingStream())
    with pytest.raises(SerialLinkError):
        link.write("1")


def test_read_error_is_wrapped():
    link = SerialLink().attach(FailingStream())
    with pytest.raises(SerialLinkError):
        link.read()


def test_context_manager_closes_stream():
    stream = FakeStream()
    with SerialLink().attach(stream) as link:
        assert link.is_open() is True
    assert stream.closed is True
    assert link.is_open() is False


def test_open_missing_port_raises(tmp_path):
    link = SerialLink()
    with pytest.raises(SerialLinkError):
        link.open(str(tmp_path / "no-such-port"))
    assert link.is_open() is False