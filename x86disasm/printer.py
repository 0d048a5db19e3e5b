"""Render decoded instructions as assembly text."""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from .errors import DecodeError
from .instruction import Instruction
from .operands import EffectiveAddress, Register


class InstructionTextRenderer:
    """Format instructions as ``<mnemonic> <operand>[, <operand>]`` lines."""

    def __init__(self, *, show_offsets: bool = False) -> None:
        self.show_offsets = show_offsets

    def render(self, instruction: Instruction) -> str:
        operands = ", ".join(self.render_operand(op) for op in instruction.operands())
        text = f"{instruction.mnemonic} {operands}" if operands else instruction.mnemonic
        if self.show_offsets:
            return f"{instruction.offset:08X}: {text}"
        return text

    def render_all(self, instructions: Iterable[Instruction]) -> Iterator[str]:
        for instruction in instructions:
            yield self.render(instruction)

    @staticmethod
    def render_operand(operand: Union[Register, EffectiveAddress, int, str]) -> str:
        if isinstance(operand, (Register, EffectiveAddress)):
            return operand.describe()
        # immediates and label names
        return str(operand)

    @staticmethod
    def render_error(error: DecodeError) -> str:
        return f"error: {error}"
