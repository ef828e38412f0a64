"""
Hack Assembly Language Parser
=============================

This module turns assembly source text into classified instructions. It has
two layers:

1. **Line reader** (`iter_source_lines`): strips `//` comments and
   surrounding whitespace, drops blank lines, and remembers where each
   remaining line came from.

2. **Classifier** (`classify`): decides what kind of instruction a single
   trimmed line is and splits it into symbolic fields.

Instruction Types
-----------------
The classifier produces one of three instruction values:

1. **AddressInstruction**: loads a value into the A register
   ```asm
   @17         // decimal literal
   @LOOP       // label, predefined symbol or variable
   ```

2. **ComputeInstruction**: ALU computation with optional store and jump
   ```asm
   D=M+1       // dest=comp
   0;JMP       // comp;jump
   ```

3. **LabelDeclaration**: binds a name to the next instruction address
   ```asm
   (LOOP)
   ```

Classification Order
--------------------
The first matching rule wins:

| Rule                          | Kind                |
|-------------------------------|---------------------|
| starts with '@'               | AddressInstruction  |
| starts with '(' and has ')'   | LabelDeclaration    |
| contains '=' or ';'           | ComputeInstruction  |
| anything else                 | malformed           |

The classifier is purely syntactic. Whether 'D+2' is a real computation is
decided later, when the code generator looks the field up in the encoding
tables.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from hackasm.errors import (
    ConflictingInstructionFormError,
    MalformedInstructionError,
    SourceLocation,
)
from hackasm.cpu import is_decimal_literal

logger = logging.getLogger(__name__)

COMMENT_MARKER = "//"


# =============================================================================
# Instruction Data Classes
# =============================================================================

@dataclass
class Instruction:
    """
    Base class for all classified source lines.

    Attributes:
        location: Where the line came from, for error reporting
        source: The trimmed source text of the line
    """
    location: SourceLocation
    source: str


@dataclass
class AddressInstruction(Instruction):
    """
    Address instruction (@value).

    Attributes:
        target: Symbol name or decimal literal following '@'
    """
    target: str

    @property
    def is_literal(self) -> bool:
        """True if the target is a decimal literal rather than a symbol."""
        return is_decimal_literal(self.target)


@dataclass
class ComputeInstruction(Instruction):
    """
    Compute instruction (dest=comp or comp;jump).

    Attributes:
        computation: ALU computation mnemonic, always present
        destination: Store target mnemonic, or None
        jump: Jump test mnemonic, or None
    """
    computation: str
    destination: Optional[str] = None
    jump: Optional[str] = None


@dataclass
class LabelDeclaration(Instruction):
    """
    Label declaration ((NAME)). Consumes no instruction address.

    Attributes:
        name: Label name between the parentheses
    """
    name: str


@dataclass(frozen=True)
class SourceLine:
    """
    One non-blank source line after comment stripping.

    Attributes:
        location: File, 1-based line number, and column of the first character
        text: Trimmed instruction text
        raw: The line as it appeared in the file
    """
    location: SourceLocation
    text: str
    raw: str


# =============================================================================
# Line Reader
# =============================================================================

def iter_source_lines(source: str, filename: str = "<input>") -> Iterator[SourceLine]:
    """
    Yield the instruction-bearing lines of an assembly source.

    Comments run from '//' to the end of the line. Lines that are empty
    after comment removal and trimming are skipped, but line numbers still
    count them.

    Only a line feed ends a line. A trailing carriage return is dropped.
    Form feeds and Unicode line separators stay inside their line.

    Args:
        source: Assembly source text
        filename: Source filename for locations

    Yields:
        SourceLine for every non-blank line, in order
    """
    for line_number, raw in enumerate(source.split("\n"), start=1):
        if raw.endswith("\r"):
            raw = raw[:-1]
        code = raw.split(COMMENT_MARKER, 1)[0]
        text = code.strip()
        if not text:
            continue
        column = len(code) - len(code.lstrip()) + 1
        yield SourceLine(SourceLocation(filename, line_number, column), text, raw)


# =============================================================================
# Classifier
# =============================================================================

def classify(text: str, location: Optional[SourceLocation] = None) -> Instruction:
    """
    Classify one trimmed, non-empty line and extract its fields.

    Args:
        text: The trimmed instruction text
        location: Source location attached to the result and to errors

    Returns:
        AddressInstruction, ComputeInstruction or LabelDeclaration

    Raises:
        MalformedInstructionError: If the line matches no instruction shape
        ConflictingInstructionFormError: If both dest= and ;jump forms match
    """
    if location is None:
        location = SourceLocation("<input>", 0, 0)

    if text.startswith("@"):
        return _classify_address(text, location)

    if text.startswith("(") and ")" in text:
        return _classify_label(text, location)

    if "=" in text or ";" in text:
        return _classify_compute(text, location)

    raise MalformedInstructionError(
        f"cannot classify '{text}'",
        location=location,
        hint="expected '@value', '(LABEL)', 'dest=comp' or 'comp;jump'",
        source_line=text,
    )


def _classify_address(text: str, location: SourceLocation) -> AddressInstruction:
    """Split '@target' into its target."""
    target = text[1:]
    if not target:
        raise MalformedInstructionError(
            "address instruction has no target",
            location=location,
            source_line=text,
        )
    return AddressInstruction(location=location, source=text, target=target)


def _classify_label(text: str, location: SourceLocation) -> LabelDeclaration:
    """Take the name between the first '(' and the first ')' after it."""
    name = text[1:text.index(")")]
    if not name:
        raise MalformedInstructionError(
            "label declaration has an empty name",
            location=location,
            source_line=text,
        )
    return LabelDeclaration(location=location, source=text, name=name)


def _split_once(text: str, separator: str) -> Optional[tuple[str, str]]:
    """Split around the first separator; None unless both sides are non-empty."""
    left, found, right = text.partition(separator)
    if found and left and right:
        return left, right
    return None


def _classify_compute(text: str, location: SourceLocation) -> ComputeInstruction:
    """Split a compute line into either dest=comp or comp;jump."""
    assignment = _split_once(text, "=")
    branch = _split_once(text, ";")

    if assignment and branch:
        raise ConflictingInstructionFormError(text, location=location, source_line=text)

    if assignment:
        destination, computation = assignment
        return ComputeInstruction(
            location=location,
            source=text,
            computation=computation,
            destination=destination,
        )

    if branch:
        computation, jump = branch
        return ComputeInstruction(
            location=location,
            source=text,
            computation=computation,
            jump=jump,
        )

    raise MalformedInstructionError(
        f"incomplete compute instruction '{text}'",
        location=location,
        hint="both sides of '=' or ';' must be present",
        source_line=text,
    )


# =============================================================================
# Convenience Function
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> list[Instruction]:
    """
    Read and classify every instruction line of an assembly source.

    Args:
        source: Assembly source text
        filename: Source filename for error messages

    Returns:
        Classified instructions (labels included) in source order

    Raises:
        MalformedInstructionError, ConflictingInstructionFormError:
            On the first line that cannot be classified
    """
    instructions = [classify(line.text, line.location) for line in iter_source_lines(source, filename)]
    logger.debug(f"Parsed {len(instructions)} lines from {filename}")
    return instructions
