"""
Hack Assembler
==============

This package translates Hack assembly language into 16-bit binary machine
instructions, one per line, as consumed by the Hack CPU emulator and loader.

Main Components
---------------
- **Assembler**: Main class that orchestrates a translation run
- **parse_source / classify**: Line reader and instruction classifier
- **SymbolTable**: Predefined symbols, labels and variables
- **CodeGenerator**: Two-pass label collection, resolution and encoding

Assembly Process
----------------
1. **Parsing**: strip comments and blanks, classify each line as an
   address instruction, a compute instruction or a label declaration.

2. **Pass 1**: bind every label to the address of the next real
   instruction.

3. **Pass 2**: resolve address targets (literal, symbol, or new variable
   from address 16) and encode every instruction in order.

Example Usage
-------------
>>> from hackasm.assembler import assemble
>>> assemble("(LOOP)\\n@LOOP\\n0;JMP")
['0000000000000000', '1110101010000111']
"""

from hackasm.assembler.assembler import Assembler, assemble, assemble_file
from hackasm.assembler.parser import (
    Instruction,
    AddressInstruction,
    ComputeInstruction,
    LabelDeclaration,
    SourceLine,
    classify,
    iter_source_lines,
    parse_source,
)
from hackasm.assembler.symbols import Symbol, SymbolKind, SymbolTable
from hackasm.assembler.codegen import (
    CodeGenerator,
    ListingEntry,
    encode_address,
    encode_compute,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Parser
    "Instruction",
    "AddressInstruction",
    "ComputeInstruction",
    "LabelDeclaration",
    "SourceLine",
    "classify",
    "iter_source_lines",
    "parse_source",
    # Symbol table
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "ListingEntry",
    "encode_address",
    "encode_compute",
]
