"""Bit-level helpers shared by the cursor and the instruction decoder.

Everything in this module is pure: the helpers only slice, combine and
reinterpret integers.  8086 encodings store multi-byte fields low byte first,
so :func:`combine` takes the *high* byte first and callers pass
``(second_byte, first_byte)``.
"""

from __future__ import annotations

LOW_1BIT = 0b00000001
LOW_3BIT = 0b00000111

BYTE_MASK = 0xFF


def combine(high: int, low: int) -> int:
    """Return the 16-bit value ``high << 8 | low``."""

    return ((high & BYTE_MASK) << 8) | (low & BYTE_MASK)


def to_signed(value: int, bits: int) -> int:
    """Reinterpret the low ``bits`` bits of ``value`` as two's complement.

    >>> to_signed(0xFF, 8)
    -1
    >>> to_signed(0x7F, 8)
    127
    """

    if bits <= 0:
        raise ValueError("bit width must be positive")
    mask = (1 << bits) - 1
    value &= mask
    if value & (1 << (bits - 1)):
        return value - (1 << bits)
    return value


def field(byte: int, offset: int, width: int) -> int:
    """Extract ``width`` bits of ``byte`` starting at bit ``offset``."""

    return (byte >> offset) & ((1 << width) - 1)


def flag(byte: int, offset: int) -> bool:
    return bool(field(byte, offset, 1))


def opcode_prefix(byte: int, width: int) -> int:
    """Return the top ``width`` bits of an 8-bit value."""

    return (byte & BYTE_MASK) >> (8 - width)


def format_bits(byte: int) -> str:
    return f"{byte & BYTE_MASK:08b}"
