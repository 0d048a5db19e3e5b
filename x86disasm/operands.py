"""Operand value objects produced by the decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .constants import MEMORY_PATTERNS, REGISTER_NAMES_BYTE, REGISTER_NAMES_WORD


class OperandWidth(Enum):
    """Selects the register table and the size of immediate fields."""

    BYTE = 1
    WORD = 2

    @classmethod
    def from_bit(cls, bit: int) -> "OperandWidth":
        return cls.WORD if bit else cls.BYTE

    @property
    def size(self) -> int:
        return self.value


@dataclass(frozen=True)
class Register:
    index: int
    width: OperandWidth

    @property
    def name(self) -> str:
        table = REGISTER_NAMES_WORD if self.width is OperandWidth.WORD else REGISTER_NAMES_BYTE
        return table[self.index]

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class EffectiveAddress:
    """Memory operand: a direct address or a base+index pattern with displacement.

    Exactly one of ``address`` and ``pattern`` is set.  ``displacement`` is
    only meaningful for pattern based operands.
    """

    pattern: Optional[str] = None
    displacement: int = 0
    address: Optional[int] = None

    @classmethod
    def direct(cls, address: int) -> "EffectiveAddress":
        return cls(address=address)

    @classmethod
    def from_rm(cls, rm: int, displacement: int = 0) -> "EffectiveAddress":
        return cls(pattern=MEMORY_PATTERNS[rm], displacement=displacement)

    @property
    def is_direct(self) -> bool:
        return self.address is not None

    def describe(self) -> str:
        if self.is_direct:
            return f"[{self.address}]"
        if self.displacement == 0:
            return f"[{self.pattern}]"
        if self.displacement > 0:
            return f"[{self.pattern} + {self.displacement}]"
        return f"[{self.pattern} - {abs(self.displacement)}]"


Operand = Union[Register, EffectiveAddress]
