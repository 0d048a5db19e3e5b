"""Public package exports for the streaming 8086 disassembler."""

from .addressing import AddressingMode, ModRegRM, decode_rm_operand
from .decoder import OPCODE_PATTERNS, InstructionDecoder, OpcodePattern
from .disassembler import Disassembler, DisassemblyListing
from .errors import DecodeError, UnknownInstructionError, UnsupportedInstructionTypeError
from .instruction import (
    BranchInstruction,
    ImmediateInstruction,
    Instruction,
    RegisterMemoryInstruction,
)
from .labels import LabelTable
from .operands import EffectiveAddress, OperandWidth, Register
from .printer import InstructionTextRenderer
from .stream import ByteCursor

__all__ = [
    "AddressingMode",
    "ModRegRM",
    "decode_rm_operand",
    "OPCODE_PATTERNS",
    "InstructionDecoder",
    "OpcodePattern",
    "Disassembler",
    "DisassemblyListing",
    "DecodeError",
    "UnknownInstructionError",
    "UnsupportedInstructionTypeError",
    "Instruction",
    "RegisterMemoryInstruction",
    "ImmediateInstruction",
    "BranchInstruction",
    "LabelTable",
    "EffectiveAddress",
    "OperandWidth",
    "Register",
    "InstructionTextRenderer",
    "ByteCursor",
]
