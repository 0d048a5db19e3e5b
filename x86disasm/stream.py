"""Chunked byte cursor over a binary input source."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

from .bits import combine, to_signed
from .constants import DEFAULT_CHUNK_SIZE, END_OF_STREAM
from .operands import OperandWidth

logger = logging.getLogger(__name__)


class ByteCursor:
    """Expose a byte source one byte at a time.

    The cursor sits *on* a byte: :meth:`current` peeks at it and
    :meth:`advance` consumes it.  ``position`` is the absolute offset of the
    byte under the cursor, which is also the number of bytes consumed so far.
    The internal buffer is refilled from ``source`` whenever it runs dry; the
    first empty read marks the stream as exhausted for good, after which
    :meth:`current` returns :data:`~x86disasm.constants.END_OF_STREAM`.
    """

    def __init__(self, source: BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk size must be positive")
        self.source = source
        self.chunk_size = chunk_size
        self.position = 0
        # Number of advance() calls made after the stream was exhausted.
        self.overrun = 0
        self._buffer = b""
        self._index = 0
        self._exhausted = False

    @classmethod
    def from_bytes(cls, data: bytes, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "ByteCursor":
        return cls(io.BytesIO(data), chunk_size=chunk_size)

    def _fill(self) -> None:
        if self._index < len(self._buffer) or self._exhausted:
            return
        # read1 returns what is available instead of waiting for a full chunk.
        read = getattr(self.source, "read1", None) or self.source.read
        chunk = read(self.chunk_size)
        if not chunk:
            self._exhausted = True
            self._buffer = b""
            self._index = 0
            logger.debug("end of stream after %d byte(s)", self.position)
            return
        self._buffer = bytes(chunk)
        self._index = 0
        logger.debug("refilled %d byte(s) at position %d", len(self._buffer), self.position)

    def current(self) -> int:
        self._fill()
        if self._index < len(self._buffer):
            return self._buffer[self._index]
        return END_OF_STREAM

    def advance(self) -> None:
        self._fill()
        if self._index < len(self._buffer):
            self._index += 1
            self.position += 1
        else:
            self.overrun += 1

    def read_next(self) -> int:
        """Consume the current byte and return the one that follows it."""

        self.advance()
        return self.current()

    def at_end(self) -> bool:
        self._fill()
        return self._index >= len(self._buffer)

    # ------------------------------------------------------------------
    # multi-byte fields
    # ------------------------------------------------------------------
    def read_unsigned(self, width: OperandWidth) -> int:
        if width is OperandWidth.WORD:
            low = self.read_next()
            high = self.read_next()
            return combine(high, low)
        return self.read_next()

    def read_signed(self, width: OperandWidth) -> int:
        if width is OperandWidth.WORD:
            return to_signed(self.read_unsigned(width), 16)
        return to_signed(self.read_unsigned(width), 8)
