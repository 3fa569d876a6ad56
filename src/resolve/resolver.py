"""Two-phase "go to definition": same document first, then an external hook.

Resolution steps for a cursor position:

1. Look up the analyzer registered for the document's language.
2. Read the identifier touching the cursor.
3. Extract the document's definitions. A real declaration of the name wins
   outright, even when the name is also imported.
4. Otherwise find the module specifier that imported the name and, when an
   external navigation callback is configured, hand it
   ``(name, specifier, document_id)``; its answer is final.
5. Without a callback, fall back to the import statement that binds the
   name in this document.

Every failure mode ends in ``None``; nothing here raises to the caller.
The external callback is the only ``await`` and the only place cancellation
is observed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.models import NavigationTarget
from resolve.cancellation import is_cancelled

if TYPE_CHECKING:
    from collections.abc import Iterable

    from analyzers.registry import AnalyzerRegistry
    from contract.analyzer import CancellationSignal, ExternalNavigationCallback
    from contract.models import SymbolDefinition

logger = logging.getLogger(__name__)


def select_local_definition(
    definitions: Iterable[SymbolDefinition], name: str
) -> SymbolDefinition | None:
    """Pick the definition ``name`` should navigate to within its document.

    The first non-import definition wins; otherwise the first import binding
    of that name; otherwise ``None``.
    """
    first_import: SymbolDefinition | None = None
    for definition in definitions:
        if definition.name != name:
            continue
        if definition.kind != "import":
            return definition
        if first_import is None:
            first_import = definition
    return first_import


class DefinitionResolver:
    """Resolve a cursor position to a :class:`NavigationTarget`.

    Args:
        registry: Analyzers keyed by language id. Read, never modified.
        on_external_navigation: Optional async callback used when the name is
            imported and not declared locally.
        include_builtins: Reserved for analyzers that know a language's
            builtins; the built-in analyzers ignore it.
    """

    def __init__(
        self,
        registry: AnalyzerRegistry,
        *,
        on_external_navigation: ExternalNavigationCallback | None = None,
        include_builtins: bool = False,
    ) -> None:
        self.registry = registry
        self.on_external_navigation = on_external_navigation
        self.include_builtins = include_builtins

    async def resolve_definition(
        self,
        text: str,
        language_id: str,
        line: int,
        column: int,
        document_id: str,
        token: CancellationSignal | None = None,
    ) -> NavigationTarget | None:
        analyzer = self.registry.get(language_id)
        if analyzer is None:
            logger.debug("No analyzer registered for language '%s'", language_id)
            return None

        name = analyzer.symbol_at_position(text, line, column)
        if not name:
            return None

        local = select_local_definition(analyzer.find_definitions(text), name)
        if local is not None and local.kind != "import":
            logger.debug("Resolved '%s' locally as %s", name, local.kind)
            return NavigationTarget(
                origin="local", document_id=document_id, span=local.span
            )

        import_path = analyzer.import_path(text, name)
        if import_path and self.on_external_navigation is not None:
            return await self._resolve_external(name, import_path, document_id, token)

        if local is not None:
            logger.debug("Resolved '%s' to its import statement", name)
            return NavigationTarget(
                origin="local", document_id=document_id, span=local.span
            )

        logger.debug("'%s' has no local definition or import binding", name)
        return None

    async def _resolve_external(
        self,
        name: str,
        import_path: str,
        document_id: str,
        token: CancellationSignal | None,
    ) -> NavigationTarget | None:
        callback = self.on_external_navigation
        if callback is None:
            return None

        if is_cancelled(token):
            logger.debug("Request for '%s' cancelled before external lookup", name)
            return None

        try:
            location = await callback(name, import_path, document_id)
        except Exception:
            logger.exception(
                "External navigation failed for '%s' imported from '%s'",
                name,
                import_path,
            )
            return None

        if is_cancelled(token):
            logger.debug("Request for '%s' cancelled during external lookup", name)
            return None

        if location is None:
            return None

        return NavigationTarget(
            origin="external", document_id=location.document_id, span=location.span
        )


__all__ = ["DefinitionResolver", "select_local_definition"]
