"""Lexical scanners and lookups for symbol definitions."""

from parse.identifiers import symbol_at_position
from parse.import_bindings import python_import_path, typescript_import_path
from parse.positions import line_column_to_offset, offset_to_line_column
from parse.python_scanners import PYTHON_SCANNERS
from parse.typescript_scanners import TYPESCRIPT_SCANNERS

__all__ = [
    "PYTHON_SCANNERS",
    "TYPESCRIPT_SCANNERS",
    "line_column_to_offset",
    "offset_to_line_column",
    "python_import_path",
    "symbol_at_position",
    "typescript_import_path",
]
