"""
toyc Command-Line Interface
===========================

- **toyc**: compile a toy-language program to C, build and run it

The tool is a Click application with help text and unified error
reporting (see toyc.cli.errors).
"""

__all__ = ["toyc"]
