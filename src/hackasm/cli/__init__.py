"""
hackasm Command-Line Interface
==============================

This package provides the `hackasm` command, a Click-based front end to
the assembler with help text and consistent exit codes.
"""

__all__ = ["hackasm"]
