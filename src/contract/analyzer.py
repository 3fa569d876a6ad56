"""Capability contracts implemented by language analyzers and their callers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from contract.models import DefinitionLocation

if TYPE_CHECKING:
    from contract.models import SymbolDefinition


@runtime_checkable
class LanguageAnalyzer(Protocol):
    """Per-language bundle of extraction and lookup operations.

    New languages are supported by registering any object with these three
    methods; there is no base class to inherit from.
    """

    def find_definitions(self, source: str) -> list[SymbolDefinition]:
        """Return every declaration site the analyzer recognises in ``source``."""
        ...

    def symbol_at_position(self, source: str, line: int, column: int) -> str | None:
        """Return the identifier touching the 1-based ``(line, column)``."""
        ...

    def import_path(self, source: str, name: str) -> str | None:
        """Return the module specifier that binds ``name``, if any."""
        ...


@runtime_checkable
class CancellationSignal(Protocol):
    @property
    def is_cancellation_requested(self) -> bool: ...


# (symbol_name, import_path, source_document_id) -> location or None
ExternalNavigationCallback = Callable[
    [str, str | None, str], Awaitable[DefinitionLocation | None]
]


__all__ = [
    "CancellationSignal",
    "DefinitionLocation",
    "ExternalNavigationCallback",
    "LanguageAnalyzer",
]
