"""
Hack Code Generator
===================

This module turns classified instructions into 16-bit binary words. It
implements a two-pass translation:

Pass 1 (Label Collection)
-------------------------
- Walk the instructions in order with an instruction counter starting at 0
- Bind each label to the current counter (labels take no address)
- Queue every address and compute instruction and advance the counter

Pass 2 (Resolution and Emission)
--------------------------------
- Walk the queued instructions in order
- Resolve address targets: decimal literal, then bound symbol, then a new
  variable allocated from address 16 upward
- Encode each instruction and append it to the output

Pass 2 cannot start until pass 1 has seen the whole program, since an
address instruction may refer to a label declared further down.

Output Format
-------------
One 16-character string of '0'/'1' per address or compute instruction:

    @2      ->  0000000000000010
    D=A     ->  1110110000010000

Errors
------
Translation is fail-fast: the first error aborts the run. Errors raised by
the encoders or the symbol table are given the location and text of the
offending line before they propagate.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hackasm.errors import (
    AssemblerError,
    DuplicateLabelError,
    ValueOutOfRangeError,
)
from hackasm.assembler.parser import (
    AddressInstruction,
    ComputeInstruction,
    Instruction,
    LabelDeclaration,
)
from hackasm.assembler.symbols import (
    DEFAULT_RESERVED_CAPACITY,
    SymbolKind,
    SymbolTable,
)
from hackasm.cpu import (
    A_INSTRUCTION_PREFIX,
    C_INSTRUCTION_PREFIX,
    MAX_ADDRESS,
    NULL_DEST,
    NULL_JUMP,
    VARIABLE_BASE_ADDRESS,
    computation_code,
    destination_code,
    immediate_code,
    is_decimal_literal,
    is_known_mnemonic,
    jump_code,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Instruction Encoders
# =============================================================================

def encode_address(address: int) -> str:
    """
    Encode an address instruction for an already-resolved value.

    Args:
        address: Unsigned value in 0..32767

    Returns:
        '0' followed by the 15-bit big-endian binary value

    Raises:
        ValueOutOfRangeError: If address does not fit in 15 bits
    """
    return A_INSTRUCTION_PREFIX + immediate_code(address)


def encode_compute(
    destination: Optional[str],
    computation: str,
    jump: Optional[str],
) -> str:
    """
    Encode a compute instruction from its symbolic fields.

    Args:
        destination: Store target mnemonic, or None for no store
        computation: ALU computation mnemonic
        jump: Jump test mnemonic, or None for no jump

    Returns:
        '111' + comp(7) + dest(3) + jump(3)

    Raises:
        UnknownMnemonicError: If any present field is not a known mnemonic
    """
    comp_bits = computation_code(computation)
    dest_bits = destination_code(destination) if destination is not None else NULL_DEST
    jump_bits = jump_code(jump) if jump is not None else NULL_JUMP
    return C_INSTRUCTION_PREFIX + comp_bits + dest_bits + jump_bits


# =============================================================================
# Listing Entry
# =============================================================================

@dataclass
class ListingEntry:
    """
    One emitted word, for listing output.

    Attributes:
        address: ROM address of the instruction
        word: The 16-bit binary string
        instruction: The instruction it was generated from
    """
    address: int
    word: str
    instruction: Instruction


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Runs both translation passes over a list of classified instructions.

    The generator owns the symbol table for the duration of a run. Each call
    to generate() starts from a fresh table holding only the predefined
    symbols. A run that fails leaves the previous run's words, symbols and
    listing in place.

    Usage:
        codegen = CodeGenerator()
        words = codegen.generate(parse_source(source))
        symbols = codegen.get_symbols()
    """

    def __init__(self, reserved_capacity: int = DEFAULT_RESERVED_CAPACITY):
        """
        Initialize the code generator.

        Args:
            reserved_capacity: Size hint passed to each new symbol table
        """
        self._reserved_capacity = reserved_capacity
        self._symbols = SymbolTable(reserved_capacity)
        self._program: list[Instruction] = []
        self._words: list[str] = []
        self._listing: list[ListingEntry] = []
        self._next_variable_address = VARIABLE_BASE_ADDRESS

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, instructions: list[Instruction]) -> list[str]:
        """
        Translate classified instructions into binary words.

        Args:
            instructions: Instructions in source order, labels included

        Returns:
            One 16-bit binary string per address/compute instruction

        Raises:
            AssemblerError: On the first error from any stage. The results
                of the previous successful run are restored.
        """
        previous = (
            self._symbols,
            self._program,
            self._words,
            self._listing,
            self._next_variable_address,
        )

        self._symbols = SymbolTable(self._reserved_capacity)
        self._program = []
        self._words = []
        self._listing = []
        self._next_variable_address = VARIABLE_BASE_ADDRESS

        try:
            self._pass1(instructions)
            logger.debug(
                f"Pass 1 complete: {len(self._program)} instructions, "
                f"{len(self._symbols.symbols(SymbolKind.LABEL))} labels"
            )
            self._pass2()
        except AssemblerError:
            (
                self._symbols,
                self._program,
                self._words,
                self._listing,
                self._next_variable_address,
            ) = previous
            raise

        logger.debug(
            f"Pass 2 complete: {len(self._words)} words, "
            f"{len(self._symbols.symbols(SymbolKind.VARIABLE))} variables"
        )

        return list(self._words)

    def get_words(self) -> list[str]:
        """Return the words produced by the last run."""
        return list(self._words)

    def get_symbol_table(self) -> SymbolTable:
        """Return the symbol table of the last run."""
        return self._symbols

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to addresses."""
        return self._symbols.as_dict()

    def get_listing_entries(self) -> list[ListingEntry]:
        """Return one listing entry per emitted word."""
        return list(self._listing)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Address, word, and source for every instruction, followed by the
            user-defined symbols.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("Addr   Word              Line  Source")
        lines.append("-" * 60)
        for entry in self._listing:
            inst = entry.instruction
            lines.append(
                f"{entry.address:5d}  {entry.word}  {inst.location.line:4d}  {inst.source}"
            )
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for kind in (SymbolKind.LABEL, SymbolKind.VARIABLE):
            for sym in self._symbols.symbols(kind):
                lines.append(f"{sym.name:20s} = {sym.address:5d}  {kind.name.lower()}")
        return "\n".join(lines)

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())
            f.write("\n")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, ordered by address then name)
        """
        entries = sorted(self._symbols, key=lambda sym: (sym.address, sym.name))
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for sym in entries:
                f.write(f"{sym.name} {sym.address}\n")

    # =========================================================================
    # Pass 1: Label Collection
    # =========================================================================

    def _pass1(self, instructions: list[Instruction]) -> None:
        """
        First pass: bind labels and queue real instructions.

        Labels bind to the address of the next real instruction.
        """
        counter = 0

        for inst in instructions:
            if isinstance(inst, LabelDeclaration):
                self._define_label(inst, counter)
            elif isinstance(inst, (AddressInstruction, ComputeInstruction)):
                self._program.append(inst)
                counter += 1
            else:
                raise AssemblerError(
                    f"unexpected instruction type {type(inst).__name__}",
                    location=inst.location,
                    source_line=inst.source,
                )

    def _define_label(self, label: LabelDeclaration, address: int) -> None:
        """Bind a label to an instruction address."""
        existing = self._symbols.get(label.name)
        if existing is not None:
            raise DuplicateLabelError(
                label.name,
                location=label.location,
                original_location=existing.location,
                source_line=label.source,
            )

        try:
            self._symbols.add_entry(label.name, address, SymbolKind.LABEL, label.location)
        except AssemblerError as e:
            raise e.with_context(label.location, label.source)

        logger.debug(f"Label '{label.name}' = {address}")

    # =========================================================================
    # Pass 2: Resolution and Emission
    # =========================================================================

    def _pass2(self) -> None:
        """Second pass: resolve symbols and emit one word per instruction."""
        for address, inst in enumerate(self._program):
            try:
                if isinstance(inst, AddressInstruction):
                    word = encode_address(self._resolve_target(inst.target))
                else:
                    word = encode_compute(inst.destination, inst.computation, inst.jump)
            except AssemblerError as e:
                raise e.with_context(inst.location, inst.source)

            self._words.append(word)
            self._listing.append(ListingEntry(address, word, inst))

    def _resolve_target(self, target: str) -> int:
        """
        Resolve an address instruction target to a value.

        Order: decimal literal, mnemonic text, bound symbol, new variable.
        """
        if is_decimal_literal(target):
            return int(target)

        if is_known_mnemonic(target):
            # Mnemonic text such as '-1' or 'D+1' is literal, not a symbol.
            raise ValueOutOfRangeError(target, MAX_ADDRESS)

        address = self._symbols.get_address(target)
        if address is not None:
            return address

        address = self._next_variable_address
        self._symbols.add_entry(target, address, SymbolKind.VARIABLE)
        self._next_variable_address += 1
        logger.debug(f"Variable '{target}' allocated at {address}")
        return address
