"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the whole assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (translation-related)
    ├── MalformedInstructionError - line matches no instruction shape
    ├── ConflictingInstructionFormError - both dest= and ;jump forms present
    ├── UnknownMnemonicError - field text not in any encoding table
    ├── AddressOutOfRangeError - symbol bound outside the data address space
    ├── ValueOutOfRangeError - immediate does not fit in 15 bits
    └── DuplicateLabelError - label declared more than once

Design Philosophy
-----------------
The stage functions (encoding tables, encoders, symbol table) know nothing
about source files, so they raise errors without a location. The two-pass
code generator attaches the location and source text of the offending line
before re-raising, so that every error that escapes a translation run can
be rendered as:

    filename:line:column: error: description
        source_line_text
        ^
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all assembler errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all translation errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def with_context(
        self,
        location: SourceLocation,
        source_line: Optional[str] = None,
    ) -> "AssemblerError":
        """
        Attach a source location to an error raised without one.

        Errors that already carry a location are left untouched. The
        formatted message is rebuilt so str(error) reflects the context.

        Returns:
            The same error instance, for use in `raise err.with_context(...)`
        """
        if self.location is None:
            self.location = location
            self.source_line = source_line
            self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:7:1: error: unknown comp mnemonic 'D+2'
                D=D+2
                ^
            hint: comp must be one of '0', '1', '-1', 'D', ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MalformedInstructionError(AssemblerError):
    """
    Source line does not match any instruction shape.

    Examples:
        - A line with neither '@', '(' ... ')', '=' nor ';'
        - '@' with no target, '()' with no label name
        - 'D=' or ';JMP' where one side of the split is empty
    """
    pass


class ConflictingInstructionFormError(AssemblerError):
    """
    Compute instruction written in both the dest=comp and comp;jump forms.

    Example:
        D=M;JGT   // both splits succeed, so the line is rejected
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"'{text}' uses both the 'dest=comp' and 'comp;jump' forms",
            location=location,
            hint="split it into a store instruction and a jump instruction",
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblerError):
    """
    Field text does not match any entry of its encoding table.

    Attributes:
        mnemonic: The offending field text
        field: Which field was being encoded ("comp", "dest" or "jump")
    """

    def __init__(
        self,
        mnemonic: str,
        field: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.field = field

        hint = None
        if valid:
            shown = ", ".join(f"'{m}'" for m in valid if m)
            hint = f"{field} must be one of {shown}"

        super().__init__(
            f"unknown {field} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressOutOfRangeError(AssemblerError):
    """
    A symbol was bound to an address outside the symbol address range.

    Raised by the symbol table; the table is left unmodified.
    """

    def __init__(
        self,
        symbol: str,
        address: int,
        maximum: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.address = address
        super().__init__(
            f"address {address} for symbol '{symbol}' is outside 0..{maximum}",
            location=location,
            source_line=source_line,
        )


class ValueOutOfRangeError(AssemblerError):
    """
    An address instruction value cannot be encoded in 15 unsigned bits.

    Also raised for literal targets that are not decimal numbers, such as
    '@-1', since negative immediates do not exist in the instruction format.
    """

    def __init__(
        self,
        value: int | str,
        maximum: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        super().__init__(
            f"value {value} cannot be encoded as an address (range 0..{maximum})",
            location=location,
            source_line=source_line,
        )


class DuplicateLabelError(AssemblerError):
    """
    Label declared more than once, or declared over a predefined symbol.

    Includes the location of the first declaration when it is known.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        if original_location:
            hint = f"'{symbol}' was first declared at {original_location}"
        else:
            hint = f"'{symbol}' is a predefined symbol"

        super().__init__(
            f"duplicate label '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )
