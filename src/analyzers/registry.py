"""Language id -> analyzer lookup table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from analyzers.python import PythonAnalyzer
from analyzers.typescript import TypeScriptAnalyzer
from contract.analyzer import LanguageAnalyzer

if TYPE_CHECKING:
    from collections.abc import Iterator


class AnalyzerRegistry:
    """Mapping from language identifier to analyzer instance.

    A registry is plain state owned by whoever builds it: it is populated once
    (usually via :meth:`with_builtins`) and changes only through explicit
    :meth:`register`, :meth:`unregister` and :meth:`clear` calls. Several
    language ids may share one analyzer instance.
    """

    def __init__(self) -> None:
        self._analyzers: dict[str, LanguageAnalyzer] = {}

    @classmethod
    def with_builtins(cls) -> AnalyzerRegistry:
        """Create a registry holding the Python and TypeScript/JavaScript analyzers."""
        registry = cls()
        typescript = TypeScriptAnalyzer()
        registry.register("python", PythonAnalyzer())
        registry.register("typescript", typescript)
        registry.register("javascript", typescript)
        return registry

    def register(self, language_id: str, analyzer: LanguageAnalyzer) -> None:
        """Register ``analyzer`` for ``language_id``, replacing any existing entry."""
        if not isinstance(analyzer, LanguageAnalyzer):
            msg = (
                f"Analyzer for '{language_id}' must provide find_definitions, "
                "symbol_at_position and import_path"
            )
            raise TypeError(msg)
        self._analyzers[language_id] = analyzer

    def unregister(self, language_id: str) -> LanguageAnalyzer | None:
        return self._analyzers.pop(language_id, None)

    def get(self, language_id: str) -> LanguageAnalyzer | None:
        return self._analyzers.get(language_id)

    def clear(self) -> None:
        self._analyzers.clear()

    def language_ids(self) -> list[str]:
        return sorted(self._analyzers)

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._analyzers

    def __iter__(self) -> Iterator[str]:
        return iter(self.language_ids())

    def __len__(self) -> int:
        return len(self._analyzers)


__all__ = ["AnalyzerRegistry"]
