import pytest

from x86disasm import ByteCursor, OperandWidth
from x86disasm.constants import END_OF_STREAM


class ChunkedSource:
    """Binary source that never returns more than ``step`` bytes per read."""

    def __init__(self, data: bytes, step: int) -> None:
        self.data = data
        self.step = step
        self.offset = 0
        self.reads = 0

    def read(self, size: int) -> bytes:
        self.reads += 1
        size = min(size, self.step)
        chunk = self.data[self.offset : self.offset + size]
        self.offset += len(chunk)
        return chunk


def test_current_does_not_consume():
    cursor = ByteCursor.from_bytes(b"\x01\x02")

    assert cursor.current() == 0x01
    assert cursor.current() == 0x01
    assert cursor.position == 0


def test_read_next_consumes_then_peeks():
    cursor = ByteCursor.from_bytes(b"\x01\x02\x03")

    assert cursor.read_next() == 0x02
    assert cursor.position == 1
    assert cursor.read_next() == 0x03
    assert cursor.position == 2


def test_refills_are_invisible_to_callers():
    data = bytes(range(10))
    source = ChunkedSource(data, step=3)
    cursor = ByteCursor(source, chunk_size=4)

    seen = []
    while not cursor.at_end():
        seen.append(cursor.current())
        cursor.advance()

    assert bytes(seen) == data
    assert cursor.position == len(data)
    # four short reads of data plus the empty read that marks end-of-stream
    assert source.reads == 5


def test_end_of_stream_returns_sentinel_and_counts_overrun():
    cursor = ByteCursor.from_bytes(b"\x7f")
    cursor.advance()

    assert cursor.at_end()
    assert cursor.current() == END_OF_STREAM
    cursor.advance()
    cursor.advance()
    assert cursor.position == 1
    assert cursor.overrun == 2


def test_empty_source_is_immediately_at_end():
    cursor = ByteCursor.from_bytes(b"")

    assert cursor.at_end()
    assert cursor.current() == END_OF_STREAM


def test_exhaustion_is_permanent():
    source = ChunkedSource(b"\x01", step=1)
    cursor = ByteCursor(source)
    cursor.advance()
    assert cursor.at_end()

    source.data += b"\x02"
    assert cursor.at_end()


def test_read_signed_and_unsigned_words_are_little_endian():
    cursor = ByteCursor.from_bytes(b"\x00\xd4\xfe\x05\x0d")

    assert cursor.read_signed(OperandWidth.WORD) == -300
    assert cursor.read_unsigned(OperandWidth.WORD) == 0x0D05
    assert cursor.position == 4


def test_read_signed_byte():
    cursor = ByteCursor.from_bytes(b"\x00\xff")

    assert cursor.read_signed(OperandWidth.BYTE) == -1


def test_rejects_non_positive_chunk_size():
    with pytest.raises(ValueError, match="chunk size"):
        ByteCursor.from_bytes(b"", chunk_size=0)


class InteractiveSource:
    """Source whose ``read`` would block for a full chunk; only ``read1`` is usable."""

    def __init__(self, data: bytes) -> None:
        self.data = data

    def read(self, size: int) -> bytes:
        raise AssertionError("read() waits for a full chunk on a pipe")

    def read1(self, size: int) -> bytes:
        chunk, self.data = self.data[:size], self.data[size:]
        return chunk


def test_refills_use_read1_when_available():
    cursor = ByteCursor(InteractiveSource(b"\x89\xd9"), chunk_size=1024)

    assert cursor.current() == 0x89
    assert cursor.read_next() == 0xD9
    cursor.advance()
    assert cursor.at_end()
    assert cursor.position == 2
