"""Priority-ordered opcode matching and per-family decode routines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from .addressing import ModRegRM, decode_rm_operand
from .bits import LOW_1BIT, LOW_3BIT, field, flag, opcode_prefix, to_signed
from .constants import ACCUMULATOR, BRANCH_MNEMONICS, IMMEDIATE_GROUP_MNEMONICS
from .errors import UnknownInstructionError
from .instruction import (
    BranchInstruction,
    ImmediateInstruction,
    Instruction,
    RegisterMemoryInstruction,
)
from .labels import LabelTable
from .operands import OperandWidth, Register
from .stream import ByteCursor

logger = logging.getLogger(__name__)

__all__ = ["OpcodePattern", "OPCODE_PATTERNS", "InstructionDecoder", "immediate_width"]


Handler = Callable[["InstructionDecoder", Optional[str], int, int], Instruction]


@dataclass(frozen=True)
class OpcodePattern:
    """Fixed-width prefix of the leading byte that identifies a family."""

    description: str
    bits: int
    width: int
    handler: Handler
    mnemonic: Optional[str] = None

    def matches(self, byte: int) -> bool:
        return opcode_prefix(byte, self.width) == self.bits


def immediate_width(width: OperandWidth, sign_extend: bool) -> OperandWidth:
    """Width of the immediate field in the ``100000sw`` group.

    Only the word+sign-extend combination shortens the field to one byte.
    """

    if width is OperandWidth.WORD and not sign_extend:
        return OperandWidth.WORD
    return OperandWidth.BYTE


class InstructionDecoder:
    """Decode one instruction at a time from a :class:`ByteCursor`.

    Each call to :meth:`decode` expects the cursor on the leading byte of an
    instruction and leaves it on the leading byte of the next one.  Matching
    walks :data:`OPCODE_PATTERNS` in order and commits to the first hit.
    """

    def __init__(self, cursor: ByteCursor, labels: Optional[LabelTable] = None) -> None:
        self.cursor = cursor
        self.labels = labels if labels is not None else LabelTable()

    def match(self, byte: int) -> Optional[OpcodePattern]:
        for pattern in OPCODE_PATTERNS:
            if pattern.matches(byte):
                return pattern
        return None

    def decode(self) -> Instruction:
        offset = self.cursor.position
        overrun = self.cursor.overrun
        opcode = self.cursor.current()

        pattern = self.match(opcode)
        if pattern is None:
            raise UnknownInstructionError(opcode, offset)

        instruction = pattern.handler(self, pattern.mnemonic, opcode, offset)
        missing = self.cursor.overrun - overrun
        if missing:
            # size is the encoded length, including bytes lost to end-of-stream
            instruction = replace(instruction, size=instruction.size + missing)
            logger.warning(
                "%s at offset %d is truncated: %d byte(s) missing",
                instruction.mnemonic,
                offset,
                missing,
            )
        logger.debug("decoded %s at offset %d (%d byte(s))", instruction.mnemonic, offset, instruction.size)
        return instruction

    def _consume(self, offset: int) -> int:
        """Step past the instruction's last byte and return its size."""

        self.cursor.advance()
        return self.cursor.position - offset

    # ------------------------------------------------------------------
    # generic shapes
    # ------------------------------------------------------------------
    def _decode_register_memory(self, mnemonic: Optional[str], opcode: int, offset: int) -> Instruction:
        """``oooooodw`` followed by mod/reg/r-m and an optional displacement."""

        register_is_destination = flag(opcode, 1)
        width = OperandWidth.from_bit(opcode & LOW_1BIT)
        modrm = ModRegRM.decode(self.cursor.read_next())
        operand = decode_rm_operand(self.cursor, modrm, width)
        return RegisterMemoryInstruction(
            mnemonic=mnemonic,
            offset=offset,
            size=self._consume(offset),
            register=modrm.register(width),
            operand=operand,
            register_is_destination=register_is_destination,
        )

    def _decode_immediate_register_memory(
        self,
        mnemonic: str,
        modrm: ModRegRM,
        width: OperandWidth,
        sign_extend: bool,
        offset: int,
    ) -> Instruction:
        destination = decode_rm_operand(self.cursor, modrm, width)
        immediate = self.cursor.read_signed(immediate_width(width, sign_extend))
        return ImmediateInstruction(
            mnemonic=mnemonic,
            offset=offset,
            size=self._consume(offset),
            destination=destination,
            immediate=immediate,
        )

    # ------------------------------------------------------------------
    # fixed-shape families
    # ------------------------------------------------------------------
    def _decode_immediate_group(self, mnemonic: Optional[str], opcode: int, offset: int) -> Instruction:
        sign_extend = flag(opcode, 1)
        width = OperandWidth.from_bit(opcode & LOW_1BIT)
        modrm = ModRegRM.decode(self.cursor.read_next())
        group_mnemonic = IMMEDIATE_GROUP_MNEMONICS.get(modrm.reg)
        if group_mnemonic is None:
            raise UnknownInstructionError(self.cursor.current(), self.cursor.position)
        return self._decode_immediate_register_memory(group_mnemonic, modrm, width, sign_extend, offset)

    def _decode_immediate_to_register(self, mnemonic: Optional[str], opcode: int, offset: int) -> Instruction:
        width = OperandWidth.from_bit(field(opcode, 3, 1))
        register = Register(opcode & LOW_3BIT, width)
        immediate = self.cursor.read_signed(width)
        return ImmediateInstruction(
            mnemonic=mnemonic,
            offset=offset,
            size=self._consume(offset),
            destination=register,
            immediate=immediate,
        )

    def _decode_immediate_to_accumulator(self, mnemonic: Optional[str], opcode: int, offset: int) -> Instruction:
        width = OperandWidth.from_bit(opcode & LOW_1BIT)
        immediate = self.cursor.read_signed(width)
        return ImmediateInstruction(
            mnemonic=mnemonic,
            offset=offset,
            size=self._consume(offset),
            destination=Register(ACCUMULATOR, width),
            immediate=immediate,
        )

    def _decode_branch(self, mnemonic: Optional[str], opcode: int, offset: int) -> Instruction:
        displacement = to_signed(self.cursor.read_next(), 8)
        size = self._consume(offset)
        # Relative to the instruction that follows the displacement byte.
        target = self.cursor.position + displacement
        return BranchInstruction(
            mnemonic=mnemonic,
            offset=offset,
            size=size,
            label=self.labels.resolve(target),
            target=target,
        )


def _branch_patterns() -> Tuple[OpcodePattern, ...]:
    return tuple(
        OpcodePattern(f"{mnemonic} short", opcode, 8, InstructionDecoder._decode_branch, mnemonic)
        for opcode, mnemonic in BRANCH_MNEMONICS.items()
    )


OPCODE_PATTERNS: Tuple[OpcodePattern, ...] = (
    OpcodePattern("mov r/m to/from register", 0b100010, 6, InstructionDecoder._decode_register_memory, "mov"),
    OpcodePattern("mov immediate to register", 0b1011, 4, InstructionDecoder._decode_immediate_to_register, "mov"),
    OpcodePattern("add r/m with register", 0b000000, 6, InstructionDecoder._decode_register_memory, "add"),
    OpcodePattern("cmp r/m with register", 0b001110, 6, InstructionDecoder._decode_register_memory, "cmp"),
    OpcodePattern("add immediate to accumulator", 0b0000010, 7, InstructionDecoder._decode_immediate_to_accumulator, "add"),
    OpcodePattern("sub immediate from accumulator", 0b0010110, 7, InstructionDecoder._decode_immediate_to_accumulator, "sub"),
    OpcodePattern("cmp immediate with accumulator", 0b0011110, 7, InstructionDecoder._decode_immediate_to_accumulator, "cmp"),
    OpcodePattern("sub r/m with register", 0b001010, 6, InstructionDecoder._decode_register_memory, "sub"),
    OpcodePattern("immediate to r/m", 0b100000, 6, InstructionDecoder._decode_immediate_group),
) + _branch_patterns()
