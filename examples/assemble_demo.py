#!/usr/bin/env python3
"""
Hack Assembler Demo
===================

This script demonstrates how to use the assembler API to:
1. Assemble a source file
2. Inspect the generated words and the symbol table
3. Write the .hack, listing and symbol files

Usage:
    python examples/assemble_demo.py
"""

from pathlib import Path

from hackasm import Assembler, HackError


def main():
    source = Path(__file__).with_name("Max.asm")
    output_dir = Path("trash")
    output_dir.mkdir(exist_ok=True)

    asm = Assembler()
    try:
        asm.assemble_file(source)
    except HackError as e:
        print(e)
        return 1

    print(f"Assembled {asm.get_instruction_count()} instructions from {source.name}")
    for address, word in enumerate(asm.get_lines()):
        print(f"  {address:3d}: {word}")

    table = asm.get_symbol_table()
    print("\nLabels:")
    for name in ("OUTPUT_FIRST", "OUTPUT_D", "INFINITE_LOOP"):
        print(f"  {name:15s} {table.get_address(name)}")

    asm.write_hack(output_dir / "Max.hack")
    asm.write_listing(output_dir / "Max.lst")
    asm.write_symbols(output_dir / "Max.sym")
    print(f"\nWrote outputs to {output_dir}/")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
