"""Python analyzer built from the Python declaration scanners."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.identifiers import symbol_at_position
from parse.import_bindings import python_import_path
from parse.python_scanners import PYTHON_SCANNERS

if TYPE_CHECKING:
    from contract.models import SymbolDefinition


class PythonAnalyzer:
    """Finds functions, classes, variables, parameters and imports in Python."""

    language_name = "python"

    def find_definitions(self, source: str) -> list[SymbolDefinition]:
        definitions: list[SymbolDefinition] = []
        for scanner in PYTHON_SCANNERS:
            definitions.extend(scanner(source))
        return definitions

    def symbol_at_position(self, source: str, line: int, column: int) -> str | None:
        return symbol_at_position(source, line, column)

    def import_path(self, source: str, name: str) -> str | None:
        return python_import_path(source, name)
