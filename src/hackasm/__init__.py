"""
hackasm - Assembler for the Hack 16-bit Computer
================================================

This package translates Hack assembly language (.asm) into Hack machine
code (.hack): text files holding one 16-character binary instruction per
line, ready for the CPU emulator or a ROM loader.

Main Components
---------------
- **cpu**: Hack instruction encoding tables and predefined symbols
- **assembler**: Parser, symbol table, and two-pass code generator
- **cli**: The `hackasm` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from hackasm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tool:
    $ hackasm Max.asm -o Max.hack

Version History
---------------
1.0.0 - Initial release
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import Assembler, assemble, assemble_file
from hackasm.errors import (
    HackError,
    SourceLocation,
    AssemblerError,
    MalformedInstructionError,
    ConflictingInstructionFormError,
    UnknownMnemonicError,
    AddressOutOfRangeError,
    ValueOutOfRangeError,
    DuplicateLabelError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "SourceLocation",
    "AssemblerError",
    "MalformedInstructionError",
    "ConflictingInstructionFormError",
    "UnknownMnemonicError",
    "AddressOutOfRangeError",
    "ValueOutOfRangeError",
    "DuplicateLabelError",
]
