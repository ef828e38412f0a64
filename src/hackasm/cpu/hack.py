"""
Hack CPU Instruction Encoding
=============================

Static encoding tables for the 16-bit Hack instruction format.

Instruction Formats
-------------------
Address instruction (A):

    0 vvvvvvvvvvvvvvv        v = 15-bit unsigned value

Compute instruction (C):

    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
          |<-- comp (7) -->| |dest| |jump|

The 'a' bit selects the memory operand M instead of the A register, so every
computation that mentions M has a twin mentioning A that differs only in
its leading bit.

All lookups are exact, case-sensitive string matches against closed sets.
There is no normalisation: "D+A" is known, "A+D" is not.
"""

from types import MappingProxyType
from typing import Mapping

from hackasm.errors import UnknownMnemonicError, ValueOutOfRangeError


# =============================================================================
# Architecture Constants
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1       # 32767, largest A-instruction value
MAX_SYMBOL_ADDRESS = MAX_ADDRESS - 1        # 32766, largest bindable address
VARIABLE_BASE_ADDRESS = 16                  # first RAM word after R0..R15

A_INSTRUCTION_PREFIX = "0"
C_INSTRUCTION_PREFIX = "111"


# =============================================================================
# Computation Table (a + c1..c6)
# =============================================================================

COMP_TABLE: Mapping[str, str] = MappingProxyType({
    # Constants and D-only forms
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "!D":  "0001101",
    "-D":  "0001111",
    "D+1": "0011111",
    "D-1": "0001110",
    # Forms on the A register (a=0)
    "A":   "0110000",
    "!A":  "0110001",
    "-A":  "0110011",
    "A+1": "0110111",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # Forms on memory M = RAM[A] (a=1)
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})


# =============================================================================
# Destination Table (d1 d2 d3 = A D M)
# =============================================================================

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
})


# =============================================================================
# Jump Table (j1 j2 j3 = <0 =0 >0)
# =============================================================================

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "":    "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})

NULL_DEST = DEST_TABLE[""]
NULL_JUMP = JUMP_TABLE[""]

MNEMONICS = frozenset(COMP_TABLE) | frozenset(DEST_TABLE) | frozenset(JUMP_TABLE)


# =============================================================================
# Predefined Symbols
# =============================================================================

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 16384,
    "KBD": 24576,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def computation_code(mnemonic: str) -> str:
    """
    Return the 7-bit code (a c1..c6) for a computation mnemonic.

    Raises:
        UnknownMnemonicError: If the mnemonic is not one of the 28 forms
    """
    try:
        return COMP_TABLE[mnemonic]
    except KeyError:
        raise UnknownMnemonicError(mnemonic, "comp", valid=list(COMP_TABLE)) from None


def destination_code(mnemonic: str) -> str:
    """
    Return the 3-bit code for a destination mnemonic ("" means none).

    Raises:
        UnknownMnemonicError: If the mnemonic is not a known destination
    """
    try:
        return DEST_TABLE[mnemonic]
    except KeyError:
        raise UnknownMnemonicError(mnemonic, "dest", valid=list(DEST_TABLE)) from None


def jump_code(mnemonic: str) -> str:
    """
    Return the 3-bit code for a jump mnemonic ("" means none).

    Raises:
        UnknownMnemonicError: If the mnemonic is not a known jump test
    """
    try:
        return JUMP_TABLE[mnemonic]
    except KeyError:
        raise UnknownMnemonicError(mnemonic, "jump", valid=list(JUMP_TABLE)) from None


def is_known_mnemonic(text: str) -> bool:
    """True if text exactly matches any computation, destination or jump mnemonic."""
    return text in MNEMONICS


def is_decimal_literal(text: str) -> bool:
    """True if text is a non-empty run of ASCII digits."""
    return text.isascii() and text.isdigit()


def immediate_code(value: int) -> str:
    """
    Return the 15-bit big-endian binary string for an unsigned value.

    Raises:
        ValueOutOfRangeError: If value is outside 0..32767
    """
    if value < 0 or value > MAX_ADDRESS:
        raise ValueOutOfRangeError(value, MAX_ADDRESS)
    return format(value, f"0{ADDRESS_BITS}b")
