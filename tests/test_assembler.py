# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end integration tests for the complete Hack assembler.
# These tests verify the full pipeline from source text to .hack output.
#
# Test coverage includes:
#   - Complete program assembly
#   - Symbol table after assembly
#   - Error reporting with line numbers
#   - File input and output (hack, listing, symbols)
# =============================================================================

import pytest
from pathlib import Path

from hackasm import Assembler, assemble, assemble_file
from hackasm.errors import (
    HackError,
    AssemblerError,
    ConflictingInstructionFormError,
    DuplicateLabelError,
    MalformedInstructionError,
    UnknownMnemonicError,
)


ADD_SOURCE = """\
// Computes R0 = 2 + 3
@2
D=A
@3
D=D+A
@0
M=D
"""

ADD_HACK = [
    "0000000000000010",
    "1110110000010000",
    "0000000000000011",
    "1110000010010000",
    "0000000000000000",
    "1110001100001000",
]

MAX_SOURCE = """\
// Computes R2 = max(R0, R1)
   @R0
   D=M              // D = first number
   @R1
   D=D-M            // D = first number - second number
   @OUTPUT_FIRST
   D;JGT            // if D>0 (first is greater) goto output_first
   @R1
   D=M              // D = second number
   @OUTPUT_D
   0;JMP            // goto output_d
(OUTPUT_FIRST)
   @R0
   D=M              // D = first number
(OUTPUT_D)
   @R2
   M=D              // M[2] = D (greatest number)
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP            // infinite loop
"""

MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]


# =============================================================================
# Full Assembly Pipeline Tests
# =============================================================================

class TestFullPipeline:
    """Test the complete assembly pipeline from source to machine code."""

    def test_add_program(self):
        """Load 2, add 3, store into RAM[0]."""
        asm = Assembler()
        code = asm.assemble(ADD_SOURCE)
        assert asm.get_lines() == ADD_HACK
        assert code == "".join(f"{w}\n" for w in ADD_HACK)

    def test_max_program(self):
        """Labels, forward references and predefined symbols together."""
        assert assemble(MAX_SOURCE) == MAX_HACK

    def test_one_line_per_instruction(self):
        """Output line count equals the number of non-label instructions."""
        asm = Assembler()
        asm.assemble(MAX_SOURCE)
        assert asm.get_instruction_count() == 16
        assert asm.get_code().count("\n") == 16

    def test_empty_source(self):
        """A source with only comments produces no output."""
        asm = Assembler()
        assert asm.assemble("// nothing\n\n") == ""
        assert asm.get_lines() == []

    def test_variables_program(self):
        """Variables are allocated from 16 in first-use order."""
        source = """
            @i
            M=1
            @sum
            M=0
            @i
            D=M
        """
        asm = Assembler()
        asm.assemble(source)
        lines = asm.get_lines()
        assert lines[0] == "0000000000010000"
        assert lines[2] == "0000000000010001"
        assert lines[4] == "0000000000010000"


# =============================================================================
# Symbol Table Tests
# =============================================================================

class TestSymbolTable:
    """Test symbol table access after assembly."""

    def test_get_symbols(self):
        asm = Assembler()
        asm.assemble(MAX_SOURCE)
        symbols = asm.get_symbols()
        assert symbols["OUTPUT_FIRST"] == 10
        assert symbols["OUTPUT_D"] == 12
        assert symbols["INFINITE_LOOP"] == 14
        assert symbols["R2"] == 2

    def test_independent_runs(self):
        asm = Assembler()
        asm.assemble("@a\n@b")
        asm.assemble("@b")
        symbols = asm.get_symbols()
        assert symbols["b"] == 16
        assert "a" not in symbols


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrorHandling:
    """Test fail-fast error reporting."""

    def test_all_errors_are_hack_errors(self):
        with pytest.raises(HackError):
            assemble("garbage")

    def test_malformed_line_number(self):
        with pytest.raises(MalformedInstructionError) as exc_info:
            assemble("@1\n\n// c\nnot an instruction\n", "prog.asm")
        assert exc_info.value.location.line == 4
        assert str(exc_info.value).startswith("prog.asm:4:1: error:")

    def test_line_number_after_form_feed(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            assemble("@1\x0c\nD=Q")
        assert exc_info.value.location.line == 2

    def test_conflicting_form(self):
        with pytest.raises(ConflictingInstructionFormError):
            assemble("D=M;JGT")

    def test_unknown_mnemonic_message(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            assemble("@1\nD=D*A", "mul.asm")
        message = str(exc_info.value)
        assert "mul.asm:2:1" in message
        assert "'D*A'" in message
        assert "D=D*A" in message

    def test_duplicate_label(self):
        with pytest.raises(DuplicateLabelError) as exc_info:
            assemble("(X)\n@1\n(X)\n@2")
        assert "first declared at <input>:1:1" in str(exc_info.value)

    def test_failed_run_keeps_previous_output(self):
        asm = Assembler()
        asm.assemble("@1")
        with pytest.raises(AssemblerError):
            asm.assemble("@1\nD=Q")
        assert asm.get_lines() == ["0000000000000001"]

    def test_failed_run_keeps_previous_symbols_and_listing(self, tmp_path: Path):
        """A run that fails in pass 2 leaves no variables or rows behind."""
        asm = Assembler()
        asm.assemble("@good\nD=A")
        with pytest.raises(UnknownMnemonicError):
            asm.assemble("@partial\nD=A\nD=Q")

        symbols = asm.get_symbols()
        assert symbols["good"] == 16
        assert "partial" not in symbols

        listing = asm.get_listing()
        assert "@good" in listing
        assert "partial" not in listing

        sym_file = tmp_path / "out.sym"
        asm.write_symbols(sym_file)
        assert "good 16" in sym_file.read_text().splitlines()
        assert "partial" not in sym_file.read_text()

    def test_failed_first_run_leaves_empty_state(self):
        asm = Assembler()
        with pytest.raises(DuplicateLabelError):
            asm.assemble("@x\n(L)\n(L)")
        assert asm.get_lines() == []
        assert "x" not in asm.get_symbols()
        assert "L" not in asm.get_symbols()


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFileIO:
    """Test reading sources and writing outputs."""

    def test_assemble_file(self, tmp_path: Path):
        src = tmp_path / "Max.asm"
        src.write_text(MAX_SOURCE)
        assert assemble_file(src) == MAX_HACK

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Assembler().assemble_file(tmp_path / "missing.asm")

    def test_error_names_file(self, tmp_path: Path):
        src = tmp_path / "Bad.asm"
        src.write_text("@1\nD=M;JMP\n")
        with pytest.raises(ConflictingInstructionFormError) as exc_info:
            Assembler().assemble_file(src)
        assert exc_info.value.location.filename == str(src)

    def test_write_hack(self, tmp_path: Path):
        out = tmp_path / "Add.hack"
        asm = Assembler()
        asm.assemble(ADD_SOURCE, output_path=out)
        assert out.read_text().splitlines() == ADD_HACK

    def test_write_symbols(self, tmp_path: Path):
        out = tmp_path / "Max.sym"
        asm = Assembler()
        asm.assemble(MAX_SOURCE)
        asm.write_symbols(out)
        lines = out.read_text().splitlines()
        assert lines[0].startswith("#")
        assert "OUTPUT_FIRST 10" in lines
        assert "SCREEN 16384" in lines
        entries = [line for line in lines if not line.startswith("#")]
        addresses = [int(line.split()[1]) for line in entries]
        assert addresses == sorted(addresses)

    def test_write_listing(self, tmp_path: Path):
        out = tmp_path / "Max.lst"
        asm = Assembler()
        asm.assemble(MAX_SOURCE)
        asm.write_listing(out)
        text = out.read_text()
        assert "Hack Assembler Listing" in text
        assert "@INFINITE_LOOP" in text
        assert "INFINITE_LOOP" in text.split("Symbol Table")[1]
