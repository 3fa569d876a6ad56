"""Builders turning scanner matches into ``SymbolDefinition`` records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.models import SourceSpan, SymbolDefinition
from parse.positions import line_text_at, offset_to_line_column

if TYPE_CHECKING:
    from contract.models import SymbolKind


def identifier_definition(
    source: str, offset: int, name: str, kind: SymbolKind
) -> SymbolDefinition:
    """Build a definition whose span covers ``name`` starting at ``offset``."""
    line, column = offset_to_line_column(source, offset)
    return SymbolDefinition(
        name=name,
        kind=kind,
        span=SourceSpan.on_line(line, column, column + len(name)),
    )


def import_line_definition(source: str, offset: int, name: str) -> SymbolDefinition:
    """Build an import definition spanning the whole line containing ``offset``.

    The span runs from column 1 to the line length (1 for an empty line).
    Identifier spans treat ``end_col`` as exclusive; here it is the length
    itself, so the final character of the line falls outside the span.
    Consumers treat an import span as naming the whole line.
    """
    line, _ = offset_to_line_column(source, offset)
    line_length = len(line_text_at(source, offset))
    return SymbolDefinition(
        name=name,
        kind="import",
        span=SourceSpan.on_line(line, 1, line_length or 1),
    )


__all__ = ["identifier_definition", "import_line_definition"]
