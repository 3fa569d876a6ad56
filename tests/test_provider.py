from __future__ import annotations

import pytest

from analyzers.registry import AnalyzerRegistry
from contract.models import DefinitionLocation, SourceSpan, SymbolDefinition
from resolve.provider import (
    DefinitionProvider,
    ProviderOptions,
    create_definition_provider,
    provider_from_config,
)
from rules.config import SymdefConfig

PYTHON_TEXT = "def hello():\n    pass\n\nhello()\n"


class _WordAnalyzer:
    """Treats every line as declaring the word it starts with."""

    def find_definitions(self, source: str) -> list[SymbolDefinition]:
        return [
            SymbolDefinition(
                name=line.split()[0],
                kind="variable",
                span=SourceSpan.on_line(number, 1, len(line.split()[0]) + 1),
            )
            for number, line in enumerate(source.split("\n"), start=1)
            if line.strip()
        ]

    def symbol_at_position(self, source: str, line: int, column: int) -> str | None:
        words = source.split("\n")[line - 1].split()
        return words[-1] if words else None

    def import_path(self, source: str, name: str) -> str | None:
        return None


@pytest.mark.asyncio
async def test_binding_resolves_for_its_language() -> None:
    provider = DefinitionProvider()
    binding = provider.register("python")

    target = await binding.provide_definition(PYTHON_TEXT, 4, 1, "file:///a.py")

    assert target is not None
    assert target.document_id == "file:///a.py"
    assert target.span.start_col == 5
    assert binding.language_id == "python"


@pytest.mark.asyncio
async def test_create_definition_provider_binds_each_language() -> None:
    provider = create_definition_provider(["python", "typescript"])

    assert [b.language_id for b in provider.bindings] == ["python", "typescript"]
    typescript = provider.bindings[1]
    target = await typescript.provide_definition(
        "function go() {}\ngo();\n", 2, 1, "file:///m.ts"
    )
    assert target is not None
    assert target.span.start_line == 1


@pytest.mark.asyncio
async def test_options_reach_the_resolver() -> None:
    calls: list[tuple[str, str, str]] = []
    span = SourceSpan.on_line(10, 5, 11)

    async def find_elsewhere(
        name: str, import_path: str, document_id: str
    ) -> DefinitionLocation:
        calls.append((name, import_path, document_id))
        return DefinitionLocation(document_id="file:///lib/util.py", span=span)

    provider = DefinitionProvider(
        ProviderOptions(on_external_navigation=find_elsewhere, include_builtins=True)
    )
    binding = provider.register("python")

    target = await binding.provide_definition(
        "from lib.util import helper\nhelper()\n", 2, 1, "file:///a.py"
    )

    assert target is not None
    assert target.is_external
    assert target.document_id == "file:///lib/util.py"
    assert calls == [("helper", "lib.util", "file:///a.py")]
    assert provider.resolver.include_builtins is True


@pytest.mark.asyncio
async def test_register_analyzer_for_new_language() -> None:
    provider = DefinitionProvider()
    binding = provider.register("words")

    assert await binding.provide_definition("alpha\nuse alpha", 2, 5, "doc") is None

    provider.register_analyzer("words", _WordAnalyzer())
    target = await binding.provide_definition("alpha\nuse alpha", 2, 5, "doc")

    assert target is not None
    assert target.span == SourceSpan.on_line(1, 1, 6)


@pytest.mark.asyncio
async def test_register_analyzer_replaces_builtin() -> None:
    provider = DefinitionProvider()
    provider.register_analyzer("python", _WordAnalyzer())

    target = await provider.provide_definition(
        "x = 1\nprint x", "python", 2, 7, "doc"
    )

    assert target is not None
    assert target.span.start_line == 1


@pytest.mark.asyncio
async def test_disposed_binding_stops_answering() -> None:
    provider = DefinitionProvider()
    kept = provider.register("python")
    dropped = provider.register("python")

    dropped.dispose()
    dropped.dispose()

    assert dropped.disposed
    assert provider.bindings == [kept]
    assert await dropped.provide_definition(PYTHON_TEXT, 4, 1, "doc") is None
    assert await kept.provide_definition(PYTHON_TEXT, 4, 1, "doc") is not None


@pytest.mark.asyncio
async def test_dispose_releases_bindings_and_analyzers() -> None:
    registry = AnalyzerRegistry.with_builtins()
    provider = create_definition_provider(["python"], registry=registry)
    (binding,) = provider.bindings

    provider.dispose()

    assert provider.bindings == []
    assert binding.disposed
    assert len(registry) == 0
    assert (
        await provider.provide_definition(PYTHON_TEXT, "python", 4, 1, "doc") is None
    )


def test_providers_do_not_share_registries() -> None:
    first = DefinitionProvider()
    second = DefinitionProvider()

    first.dispose()

    assert second.registry.get("python") is not None


def test_provider_from_config_binds_configured_languages() -> None:
    config = SymdefConfig(languages=["python", "javascript"], include_builtins=True)

    provider = provider_from_config(config)

    assert [b.language_id for b in provider.bindings] == ["python", "javascript"]
    assert provider.options.include_builtins is True
    assert provider.resolver.include_builtins is True
    assert provider.options.on_external_navigation is None


@pytest.mark.asyncio
async def test_provider_from_config_passes_external_callback() -> None:
    async def nowhere(
        name: str, import_path: str, document_id: str
    ) -> DefinitionLocation | None:
        return None

    provider = provider_from_config(
        SymdefConfig(languages=["python"]), on_external_navigation=nowhere
    )
    (binding,) = provider.bindings

    assert provider.resolver.on_external_navigation is nowhere
    assert (
        await binding.provide_definition("import json\njson\n", 2, 1, "doc") is None
    )
