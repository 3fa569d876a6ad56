"""Host-facing definition provider: per-language bindings over one resolver."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from analyzers.registry import AnalyzerRegistry
from resolve.resolver import DefinitionResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.analyzer import (
        CancellationSignal,
        ExternalNavigationCallback,
        LanguageAnalyzer,
    )
    from contract.models import NavigationTarget
    from rules.config import SymdefConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderOptions:
    """Options for :class:`DefinitionProvider`.

    ``on_external_navigation`` is consulted only for imported names with no
    local declaration; without it only same-document definitions resolve.
    ``include_builtins`` is passed through to the resolver and has no effect on
    the built-in analyzers.
    """

    on_external_navigation: ExternalNavigationCallback | None = None
    include_builtins: bool = False


class LanguageBinding:
    """Entry point a host calls for documents of one language."""

    def __init__(self, provider: DefinitionProvider, language_id: str) -> None:
        self._provider = provider
        self.language_id = language_id
        self.disposed = False

    async def provide_definition(
        self,
        text: str,
        line: int,
        column: int,
        document_id: str,
        token: CancellationSignal | None = None,
    ) -> NavigationTarget | None:
        if self.disposed:
            return None
        return await self._provider.provide_definition(
            text, self.language_id, line, column, document_id, token
        )

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        self._provider._release(self)


class DefinitionProvider:
    """Go-to-definition for the languages in its registry.

    The provider owns an :class:`AnalyzerRegistry` (the built-ins unless one
    is injected) and hands out :class:`LanguageBinding` objects through
    :meth:`register`. :meth:`dispose` releases every binding and empties the
    registry.

    Example::

        async def find_elsewhere(name, import_path, document_id):
            path = await workspace.resolve(import_path, relative_to=document_id)
            return DefinitionLocation(document_id=path, span=...)

        provider = DefinitionProvider(
            ProviderOptions(on_external_navigation=find_elsewhere)
        )
        python = provider.register("python")
        target = await python.provide_definition(text, 3, 7, "file:///a.py")
    """

    def __init__(
        self,
        options: ProviderOptions | None = None,
        registry: AnalyzerRegistry | None = None,
    ) -> None:
        self.options = options or ProviderOptions()
        self.registry = (
            registry if registry is not None else AnalyzerRegistry.with_builtins()
        )
        self.resolver = DefinitionResolver(
            self.registry,
            on_external_navigation=self.options.on_external_navigation,
            include_builtins=self.options.include_builtins,
        )
        self._bindings: list[LanguageBinding] = []

    @property
    def bindings(self) -> list[LanguageBinding]:
        return list(self._bindings)

    def register(self, language_id: str) -> LanguageBinding:
        """Bind this provider to ``language_id``.

        Binding a language without a registered analyzer is allowed; its
        requests resolve to ``None`` until an analyzer is registered.
        """
        if language_id not in self.registry:
            logger.debug("Binding '%s' before any analyzer is registered", language_id)
        binding = LanguageBinding(self, language_id)
        self._bindings.append(binding)
        return binding

    def register_analyzer(self, language_id: str, analyzer: LanguageAnalyzer) -> None:
        """Add or replace the analyzer used for ``language_id``."""
        self.registry.register(language_id, analyzer)

    async def provide_definition(
        self,
        text: str,
        language_id: str,
        line: int,
        column: int,
        document_id: str,
        token: CancellationSignal | None = None,
    ) -> NavigationTarget | None:
        return await self.resolver.resolve_definition(
            text, language_id, line, column, document_id, token
        )

    def dispose(self) -> None:
        for binding in list(self._bindings):
            binding.dispose()
        self._bindings.clear()
        self.registry.clear()

    def _release(self, binding: LanguageBinding) -> None:
        if binding in self._bindings:
            self._bindings.remove(binding)


def create_definition_provider(
    languages: Iterable[str],
    options: ProviderOptions | None = None,
    registry: AnalyzerRegistry | None = None,
) -> DefinitionProvider:
    """Build a provider and bind it to each of ``languages``."""
    provider = DefinitionProvider(options, registry)
    for language_id in languages:
        provider.register(language_id)
    return provider


def provider_from_config(
    config: SymdefConfig,
    on_external_navigation: ExternalNavigationCallback | None = None,
    registry: AnalyzerRegistry | None = None,
) -> DefinitionProvider:
    """Build a provider bound to ``config.languages``.

    ``include_builtins`` is taken from the config; the external navigation
    callback is host code and is passed in directly.
    """
    options = ProviderOptions(
        on_external_navigation=on_external_navigation,
        include_builtins=config.include_builtins,
    )
    return create_definition_provider(config.languages, options, registry)


__all__ = [
    "DefinitionProvider",
    "LanguageBinding",
    "ProviderOptions",
    "create_definition_provider",
    "provider_from_config",
]
