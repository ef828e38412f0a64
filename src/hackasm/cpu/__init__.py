"""
Hack CPU Package
================

This package contains the Hack instruction-set definitions used by the
assembler: field encoding tables, architecture constants, and the
predefined symbol set.

Modules:
    hack: Encoding tables, lookup functions, and address-space constants.

Usage:
    from hackasm.cpu import (
        computation_code,
        destination_code,
        jump_code,
        PREDEFINED_SYMBOLS,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.cpu.hack import (
    # Architecture constants
    WORD_BITS,
    ADDRESS_BITS,
    MAX_ADDRESS,
    MAX_SYMBOL_ADDRESS,
    VARIABLE_BASE_ADDRESS,
    A_INSTRUCTION_PREFIX,
    C_INSTRUCTION_PREFIX,
    # Encoding tables
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    NULL_DEST,
    NULL_JUMP,
    MNEMONICS,
    PREDEFINED_SYMBOLS,
    # Lookup functions
    computation_code,
    destination_code,
    jump_code,
    immediate_code,
    is_known_mnemonic,
    is_decimal_literal,
)

__all__ = [
    "WORD_BITS",
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "MAX_SYMBOL_ADDRESS",
    "VARIABLE_BASE_ADDRESS",
    "A_INSTRUCTION_PREFIX",
    "C_INSTRUCTION_PREFIX",
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "NULL_DEST",
    "NULL_JUMP",
    "MNEMONICS",
    "PREDEFINED_SYMBOLS",
    "computation_code",
    "destination_code",
    "jump_code",
    "immediate_code",
    "is_known_mnemonic",
    "is_decimal_literal",
]
