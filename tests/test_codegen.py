# =============================================================================
# test_codegen.py - Code Generator Unit Tests
# =============================================================================
# Tests for the instruction encoders and the two-pass CodeGenerator.
#
# Test coverage includes:
#   - Address instruction encoding and its 15-bit limit
#   - Compute instruction encoding with and without dest/jump
#   - Pass 1 label binding (labels take no address)
#   - Pass 2 literal, symbol and variable resolution
#   - Error propagation with source locations
# =============================================================================

import pytest

from hackasm.assembler.codegen import CodeGenerator, encode_address, encode_compute
from hackasm.assembler.parser import parse_source
from hackasm.assembler.symbols import SymbolKind
from hackasm.errors import (
    AddressOutOfRangeError,
    DuplicateLabelError,
    UnknownMnemonicError,
    ValueOutOfRangeError,
)


def generate(source: str) -> tuple[list[str], CodeGenerator]:
    """Helper to run both passes on a source string."""
    codegen = CodeGenerator()
    words = codegen.generate(parse_source(source, "<test>"))
    return words, codegen


# =============================================================================
# Encoder Tests
# =============================================================================

class TestEncodeAddress:
    """Test A-instruction encoding."""

    def test_zero(self):
        assert encode_address(0) == "0000000000000000"

    def test_value(self):
        assert encode_address(5) == "0000000000000101"

    def test_maximum(self):
        assert encode_address(32767) == "0111111111111111"

    def test_overflow(self):
        with pytest.raises(ValueOutOfRangeError):
            encode_address(32768)

    def test_injective_over_range(self):
        """Every value in range encodes to a distinct word with a 0 prefix."""
        words = {encode_address(v) for v in range(32768)}
        assert len(words) == 32768
        assert all(w[0] == "0" and len(w) == 16 for w in words)


class TestEncodeCompute:
    """Test C-instruction encoding."""

    def test_dest_comp(self):
        assert encode_compute("D", "A", None) == "1110110000010000"

    def test_comp_jump(self):
        assert encode_compute(None, "0", "JMP") == "1110101010000111"

    def test_memory_operand(self):
        assert encode_compute("M", "M+1", None) == "1111110111001000"

    def test_all_fields(self):
        assert encode_compute("AMD", "D|M", "JLE") == "1111010101111110"

    def test_unknown_field(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            encode_compute("X", "D", None)
        assert exc_info.value.field == "dest"


# =============================================================================
# Pass 1 Tests
# =============================================================================

class TestLabels:
    """Test label collection."""

    def test_label_takes_no_address(self):
        words, codegen = generate("(LOOP)\n@LOOP\n0;JMP")
        assert codegen.get_symbols()["LOOP"] == 0
        assert words == ["0000000000000000", "1110101010000111"]

    def test_label_binds_next_instruction(self):
        _, codegen = generate("@1\nD=A\n(END)\n(ALSO_END)\n@END\n0;JMP")
        symbols = codegen.get_symbols()
        assert symbols["END"] == 2
        assert symbols["ALSO_END"] == 2

    def test_forward_reference(self):
        words, _ = generate("@END\n0;JMP\n@0\n(END)\n@END\n0;JMP")
        assert words[0] == "0000000000000011"

    def test_duplicate_label(self):
        with pytest.raises(DuplicateLabelError) as exc_info:
            generate("(A1)\n@1\n(A1)\n")
        err = exc_info.value
        assert err.symbol == "A1"
        assert err.location.line == 3
        assert err.original_location.line == 1

    def test_label_over_predefined_symbol(self):
        with pytest.raises(DuplicateLabelError):
            generate("(SCREEN)\n@1")


# =============================================================================
# Pass 2 Tests
# =============================================================================

class TestResolution:
    """Test address target resolution."""

    def test_literal_bypasses_table(self):
        words, codegen = generate("@5")
        assert words == ["0000000000000101"]
        assert "5" not in codegen.get_symbols()

    def test_predefined(self):
        words, _ = generate("@SCREEN\n@R3\n@KBD")
        assert words == [
            "0100000000000000",
            "0000000000000011",
            "0110000000000000",
        ]

    def test_variables_allocated_from_16(self):
        words, codegen = generate("@foo\n@bar\n@foo")
        symbols = codegen.get_symbols()
        assert symbols["foo"] == 16
        assert symbols["bar"] == 17
        assert words == [
            "0000000000010000",
            "0000000000010001",
            "0000000000010000",
        ]
        kinds = {s.name: s.kind for s in codegen.get_symbol_table()}
        assert kinds["foo"] == SymbolKind.VARIABLE

    def test_label_is_not_a_variable(self):
        _, codegen = generate("@i\n@LOOP\n(LOOP)\n@j")
        symbols = codegen.get_symbols()
        assert symbols["i"] == 16
        assert symbols["LOOP"] == 2
        assert symbols["j"] == 17

    def test_literal_overflow(self):
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            generate("@1\n@32768")
        assert exc_info.value.location.line == 2

    def test_mnemonic_target_rejected(self):
        with pytest.raises(ValueOutOfRangeError):
            generate("@-1")

    def test_variable_space_exhausted(self):
        source = "\n".join(f"@v{i}" for i in range(32766 - 16 + 2))
        with pytest.raises(AddressOutOfRangeError) as exc_info:
            generate(source)
        assert exc_info.value.address == 32767

    def test_unknown_mnemonic_location(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            generate("@1\n\nD=D+2\n")
        err = exc_info.value
        assert err.location.line == 3
        assert err.source_line == "D=D+2"
        assert "<test>:3:1" in str(err)


# =============================================================================
# State and Listing Tests
# =============================================================================

class TestGeneratorState:
    """Test that runs are independent and results are exposed."""

    def test_fresh_table_each_run(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("@x"))
        codegen.generate(parse_source("@y"))
        symbols = codegen.get_symbols()
        assert "x" not in symbols
        assert symbols["y"] == 16

    def test_listing(self):
        _, codegen = generate("(LOOP)\n@LOOP\n0;JMP")
        listing = codegen.get_listing()
        assert "0000000000000000" in listing
        assert "0;JMP" in listing
        assert "LOOP" in listing
        entries = codegen.get_listing_entries()
        assert [e.address for e in entries] == [0, 1]
