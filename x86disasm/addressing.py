"""Decoding of the shared mod/reg/r-m addressing byte."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .bits import field
from .constants import DIRECT_ADDRESS_RM
from .errors import UnsupportedInstructionTypeError
from .operands import EffectiveAddress, Operand, OperandWidth, Register
from .stream import ByteCursor


class AddressingMode(IntEnum):
    """Value of the 2-bit ``mod`` field."""

    MEMORY_NO_DISPLACEMENT = 0b00
    MEMORY_DISPLACEMENT_8 = 0b01
    MEMORY_DISPLACEMENT_16 = 0b10
    REGISTER = 0b11


@dataclass(frozen=True)
class ModRegRM:
    mode: AddressingMode
    reg: int
    rm: int

    @classmethod
    def decode(cls, byte: int) -> "ModRegRM":
        return cls(
            mode=AddressingMode(field(byte, 6, 2)),
            reg=field(byte, 3, 3),
            rm=field(byte, 0, 3),
        )

    def register(self, width: OperandWidth) -> Register:
        return Register(self.reg, width)

    @property
    def is_direct_address(self) -> bool:
        return self.mode is AddressingMode.MEMORY_NO_DISPLACEMENT and self.rm == DIRECT_ADDRESS_RM


def decode_rm_operand(cursor: ByteCursor, modrm: ModRegRM, width: OperandWidth) -> Operand:
    """Resolve the ``r/m`` side of ``modrm``, reading any displacement bytes.

    The cursor must sit on the addressing byte.  On return it sits on the last
    byte read (the addressing byte itself when nothing else was needed).
    """

    if modrm.mode is AddressingMode.REGISTER:
        return Register(modrm.rm, width)
    if modrm.mode is AddressingMode.MEMORY_NO_DISPLACEMENT:
        if modrm.is_direct_address:
            return EffectiveAddress.direct(cursor.read_unsigned(OperandWidth.WORD))
        return EffectiveAddress.from_rm(modrm.rm)
    if modrm.mode is AddressingMode.MEMORY_DISPLACEMENT_8:
        return EffectiveAddress.from_rm(modrm.rm, cursor.read_signed(OperandWidth.BYTE))
    if modrm.mode is AddressingMode.MEMORY_DISPLACEMENT_16:
        return EffectiveAddress.from_rm(modrm.rm, cursor.read_signed(OperandWidth.WORD))
    # mod is two bits wide so every value is handled above.
    raise UnsupportedInstructionTypeError(cursor.current(), cursor.position)  # pragma: no cover
