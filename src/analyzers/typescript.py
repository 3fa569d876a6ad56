"""TypeScript/JavaScript analyzer built from the TS declaration scanners."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.identifiers import symbol_at_position
from parse.import_bindings import typescript_import_path
from parse.typescript_scanners import TYPESCRIPT_SCANNERS

if TYPE_CHECKING:
    from contract.models import SymbolDefinition


class TypeScriptAnalyzer:
    """Finds functions, arrow functions, classes, interfaces, type aliases,
    variables and ES module imports. Also used for JavaScript.
    """

    language_name = "typescript"

    def find_definitions(self, source: str) -> list[SymbolDefinition]:
        definitions: list[SymbolDefinition] = []
        for scanner in TYPESCRIPT_SCANNERS:
            definitions.extend(scanner(source))
        return definitions

    def symbol_at_position(self, source: str, line: int, column: int) -> str | None:
        return symbol_at_position(source, line, column)

    def import_path(self, source: str, name: str) -> str | None:
        return typescript_import_path(source, name)
