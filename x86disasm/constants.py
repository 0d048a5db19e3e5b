"""Naming tables and opcode constants for the 8086 subset we decode."""

from __future__ import annotations

from typing import Dict, Tuple

# ---------------------------------------------------------------------------
# Register and addressing tables
# ---------------------------------------------------------------------------

# Indexed by the 3-bit ``reg`` / ``r/m`` field.
REGISTER_NAMES_BYTE: Tuple[str, ...] = ("al", "cl", "dl", "bl", "ah", "ch", "dh", "bh")
REGISTER_NAMES_WORD: Tuple[str, ...] = ("ax", "cx", "dx", "bx", "sp", "bp", "si", "di")

# Base+index expressions selected by ``r/m`` in the memory modes.
MEMORY_PATTERNS: Tuple[str, ...] = (
    "bx + si",
    "bx + di",
    "bp + si",
    "bp + di",
    "si",
    "di",
    "bp",
    "bx",
)

# With mod=00 this r/m value means a 16-bit direct address, not ``[bp]``.
DIRECT_ADDRESS_RM = 0b110

ACCUMULATOR = 0

# ---------------------------------------------------------------------------
# Opcodes
# ---------------------------------------------------------------------------

# Sub-opcodes carried in the ``reg`` field of the ``100000sw`` group.
IMMEDIATE_GROUP_MNEMONICS: Dict[int, str] = {
    0b000: "add",
    0b101: "sub",
    0b111: "cmp",
}

# Short relative branches, each followed by a single signed displacement byte.
BRANCH_MNEMONICS: Dict[int, str] = {
    0b01110100: "je",
    0b01111100: "jl",
    0b01111110: "jle",
    0b01110010: "jb",
    0b01110110: "jbe",
    0b01111010: "jp",
    0b01110000: "jo",
    0b01111000: "js",
    0b01110101: "jne",
    0b01111101: "jnl",
    0b01111111: "jnle",
    0b01110011: "jnb",
    0b01110111: "jnbe",
    0b01111011: "jnp",
    0b01110001: "jno",
    0b01111001: "jns",
    0b11100010: "loop",
    0b11100001: "loopz",
    0b11100000: "loopnz",
    0b11100011: "jcxz",
}

# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_CHUNK_SIZE = 1024
END_OF_STREAM = 0x00
LABEL_PREFIX = "label"
