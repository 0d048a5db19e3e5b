"""Decoded instruction records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .operands import EffectiveAddress, Operand, Register


@dataclass(frozen=True)
class Instruction:
    """Base record: mnemonic plus where the instruction sits in the stream."""

    mnemonic: str
    offset: int
    size: int

    def operands(self) -> Tuple[Union[Operand, int, str], ...]:
        raise NotImplementedError


@dataclass(frozen=True)
class RegisterMemoryInstruction(Instruction):
    """``<op> reg, r/m`` or ``<op> r/m, reg`` depending on the direction bit.

    The direction bit only decides textual order: ``register`` is always the
    ``reg`` field and ``operand`` is always the ``r/m`` side.
    """

    register: Register
    operand: Operand
    register_is_destination: bool

    def operands(self) -> Tuple[Operand, Operand]:
        if self.register_is_destination:
            return (self.register, self.operand)
        return (self.operand, self.register)


@dataclass(frozen=True)
class ImmediateInstruction(Instruction):
    destination: Union[Register, EffectiveAddress]
    immediate: int

    def operands(self) -> Tuple[Operand, int]:
        return (self.destination, self.immediate)


@dataclass(frozen=True)
class BranchInstruction(Instruction):
    label: str
    target: int

    def operands(self) -> Tuple[str]:
        return (self.label,)
