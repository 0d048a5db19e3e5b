"""Exceptions raised while decoding an instruction stream."""

from __future__ import annotations

from .bits import format_bits


class DecodeError(ValueError):
    """Terminal decoding failure at a specific stream position."""

    kind = "decoding failed"

    def __init__(self, byte: int, position: int) -> None:
        self.byte = byte
        self.position = position
        super().__init__(f"{self.kind}: byte = {format_bits(byte)}, position = {position}")


class UnknownInstructionError(DecodeError):
    kind = "unknown instruction"


class UnsupportedInstructionTypeError(DecodeError):
    """A recognised family reached an addressing mode it has no handling for."""

    kind = "unsupported instruction type"
