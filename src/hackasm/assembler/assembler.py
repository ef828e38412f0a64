"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, the primary interface for
translating Hack assembly source into .hack machine code. It coordinates
the parser and the code generator.

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... @2
... D=A
... @3
... D=D+A
... @0
... M=D
... ''')
>>> asm.get_lines()[0]
'0000000000000010'
>>>
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
The assembler can also be invoked from the command line:

    $ hackasm Add.asm -o Add.hack -s Add.sym -l Add.lst
"""

import logging
from pathlib import Path

from hackasm.assembler.parser import parse_source
from hackasm.assembler.codegen import CodeGenerator
from hackasm.assembler.symbols import DEFAULT_RESERVED_CAPACITY, SymbolTable

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Each assemble call is an independent translation run with a fresh
    symbol table. Results of the last successful run stay available through
    the get_* and write_* methods.

    Attributes:
        reserved_capacity: Symbol table size hint for each run
    """

    def __init__(self, reserved_capacity: int = DEFAULT_RESERVED_CAPACITY):
        """
        Initialize the assembler.

        Args:
            reserved_capacity: Expected number of user symbols (advisory)
        """
        self.reserved_capacity = reserved_capacity
        self._codegen = CodeGenerator(reserved_capacity=reserved_capacity)
        self._lines: list[str] = []

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble(self, source: str, filename: str = "<input>",
                 output_path: str | Path | None = None) -> str:
        """
        Assemble source code and optionally write the .hack file.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages
            output_path: Optional output file path

        Returns:
            Machine code text, one binary word per line
        """
        code = self.assemble_string(source, filename)

        if output_path:
            self.write_hack(output_path)

        return code

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Machine code text, one binary word per line

        Raises:
            AssemblerError: If translation fails
        """
        logger.debug(f"Assembling {filename}")

        instructions = parse_source(source, filename)
        self._lines = self._codegen.generate(instructions)

        logger.info(f"Assembled {len(self._lines)} instructions from {filename}")
        return self.get_code()

    def assemble_file(self, filepath: str | Path) -> str:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            Machine code text, one binary word per line

        Raises:
            AssemblerError: If translation fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        source = filepath.read_text()
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_lines(self) -> list[str]:
        """Return the binary words of the last run, in input order."""
        return list(self._lines)

    def get_code(self) -> str:
        """Return the binary words joined with a line break after each."""
        return "".join(f"{line}\n" for line in self._lines)

    def get_instruction_count(self) -> int:
        """Return the number of emitted instructions."""
        return len(self._lines)

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary of predefined symbols, labels and variables
        """
        return self._codegen.get_symbols()

    def get_symbol_table(self) -> SymbolTable:
        """Return the symbol table object of the last run."""
        return self._codegen.get_symbol_table()

    def get_listing(self) -> str:
        """Return the assembly listing as a string."""
        return self._codegen.get_listing()

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the .hack machine code file.

        Args:
            filepath: Output file path
        """
        with open(filepath, "w") as f:
            f.write(self.get_code())
        logger.info(f"Wrote {len(self._lines)} instructions to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write assembly listing file."""
        self._codegen.write_listing(filepath)
        logger.info(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write symbol table file."""
        self._codegen.write_symbols(filepath)
        logger.info(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[str]:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors

    Returns:
        Binary words, one per instruction

    Raises:
        AssemblerError: If translation fails
    """
    asm = Assembler()
    asm.assemble_string(source, filename)
    return asm.get_lines()


def assemble_file(filepath: str | Path) -> list[str]:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file

    Returns:
        Binary words, one per instruction

    Raises:
        AssemblerError: If translation fails
    """
    asm = Assembler()
    asm.assemble_file(filepath)
    return asm.get_lines()
