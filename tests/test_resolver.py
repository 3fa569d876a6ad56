from __future__ import annotations

import asyncio
import logging

import pytest

from analyzers.registry import AnalyzerRegistry
from contract.models import (
    DefinitionLocation,
    NavigationTarget,
    SourceSpan,
    SymbolDefinition,
)
from resolve.cancellation import CancellationToken
from resolve.resolver import DefinitionResolver, select_local_definition

FORMAT_SPAN = SourceSpan(start_line=5, start_col=17, end_line=5, end_col=23)


class _RecordingCallback:
    def __init__(self, location: DefinitionLocation | None) -> None:
        self.location = location
        self.calls: list[tuple[str, str, str]] = []

    async def __call__(
        self, name: str, import_path: str, document_id: str
    ) -> DefinitionLocation | None:
        self.calls.append((name, import_path, document_id))
        return self.location


def _resolver(callback: object | None = None) -> DefinitionResolver:
    return DefinitionResolver(
        AnalyzerRegistry.with_builtins(),
        on_external_navigation=callback,  # type: ignore[arg-type]
    )


def _definition(name: str, kind: str, line: int) -> SymbolDefinition:
    return SymbolDefinition(
        name=name,
        kind=kind,  # type: ignore[arg-type]
        span=SourceSpan(start_line=line, start_col=1, end_line=line, end_col=2),
    )


def test_select_local_prefers_declaration_over_import() -> None:
    definitions = [
        _definition("helper", "import", 1),
        _definition("other", "function", 2),
        _definition("helper", "function", 3),
        _definition("helper", "variable", 4),
    ]

    selected = select_local_definition(definitions, "helper")

    assert selected is not None
    assert selected.span.start_line == 3


def test_select_local_falls_back_to_first_import() -> None:
    definitions = [_definition("np", "import", 2), _definition("np", "import", 5)]

    selected = select_local_definition(definitions, "np")

    assert selected is not None
    assert selected.span.start_line == 2
    assert select_local_definition(definitions, "missing") is None


@pytest.mark.asyncio
async def test_resolves_python_function_locally() -> None:
    text = "def hello():\n    pass\n\nhello()\n"

    target = await _resolver().resolve_definition(text, "python", 4, 2, "file:///a.py")

    assert target == NavigationTarget(
        origin="local",
        document_id="file:///a.py",
        span=SourceSpan(start_line=1, start_col=5, end_line=1, end_col=10),
    )
    assert not target.is_external


@pytest.mark.asyncio
async def test_local_declaration_wins_over_import() -> None:
    text = "from lib import helper\n\ndef helper():\n    pass\n\nhelper()\n"
    callback = _RecordingCallback(
        DefinitionLocation(document_id="file:///lib.py", span=FORMAT_SPAN)
    )

    target = await _resolver(callback).resolve_definition(
        text, "python", 6, 3, "file:///a.py"
    )

    assert target is not None
    assert target.origin == "local"
    assert target.span.start_line == 3
    assert callback.calls == []


@pytest.mark.asyncio
async def test_imported_name_goes_to_external_callback() -> None:
    text = "import { format } from './utils';\n\nformat('x');\n"
    location = DefinitionLocation(document_id="file:///utils.ts", span=FORMAT_SPAN)
    callback = _RecordingCallback(location)

    target = await _resolver(callback).resolve_definition(
        text, "typescript", 3, 2, "file:///main.ts"
    )

    assert target == NavigationTarget(
        origin="external", document_id="file:///utils.ts", span=FORMAT_SPAN
    )
    assert target.is_external
    assert callback.calls == [("format", "./utils", "file:///main.ts")]


@pytest.mark.asyncio
async def test_imported_name_without_callback_lands_on_import_line() -> None:
    text = "import numpy as np\n\nnp.array([1])\n"

    target = await _resolver().resolve_definition(text, "python", 3, 1, "file:///a.py")

    assert target is not None
    assert target.origin == "local"
    assert target.span == SourceSpan(
        start_line=1, start_col=1, end_line=1, end_col=18
    )


@pytest.mark.asyncio
async def test_callback_returning_none_yields_none() -> None:
    text = "from os.path import join\njoin('a', 'b')\n"
    callback = _RecordingCallback(None)

    target = await _resolver(callback).resolve_definition(
        text, "python", 2, 1, "file:///a.py"
    )

    assert target is None
    assert callback.calls == [("join", "os.path", "file:///a.py")]


@pytest.mark.asyncio
async def test_unknown_name_yields_none_without_calling_back() -> None:
    text = "print(value)\n"
    callback = _RecordingCallback(None)

    target = await _resolver(callback).resolve_definition(
        text, "python", 1, 8, "file:///a.py"
    )

    assert target is None
    assert callback.calls == []


@pytest.mark.asyncio
async def test_unregistered_language_yields_none() -> None:
    target = await _resolver().resolve_definition(
        "fn main() {}", "rust", 1, 4, "file:///main.rs"
    )

    assert target is None


@pytest.mark.asyncio
async def test_position_off_any_word_yields_none() -> None:
    text = "def hello():\n    pass\n"

    assert await _resolver().resolve_definition(text, "python", 1, 13, "d") is None
    assert await _resolver().resolve_definition(text, "python", 9, 1, "d") is None


@pytest.mark.asyncio
async def test_cancelled_before_lookup_skips_callback() -> None:
    text = "from os.path import join\njoin('a', 'b')\n"
    callback = _RecordingCallback(
        DefinitionLocation(document_id="file:///posixpath.py", span=FORMAT_SPAN)
    )
    token = CancellationToken()
    token.cancel()

    target = await _resolver(callback).resolve_definition(
        text, "python", 2, 1, "file:///a.py", token
    )

    assert target is None
    assert callback.calls == []


@pytest.mark.asyncio
async def test_cancelled_while_callback_runs_discards_result() -> None:
    text = "from os.path import join\njoin('a', 'b')\n"
    token = CancellationToken()
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow_callback(
        name: str, import_path: str, document_id: str
    ) -> DefinitionLocation:
        started.set()
        await release.wait()
        return DefinitionLocation(document_id="file:///posixpath.py", span=FORMAT_SPAN)

    task = asyncio.create_task(
        _resolver(slow_callback).resolve_definition(
            text, "python", 2, 1, "file:///a.py", token
        )
    )
    await started.wait()
    token.cancel()
    release.set()

    assert await task is None


@pytest.mark.asyncio
async def test_failing_callback_is_logged_and_yields_none(
    caplog: pytest.LogCaptureFixture,
) -> None:
    text = "import { format } from './utils';\nformat('x');\n"

    async def broken(
        name: str, import_path: str, document_id: str
    ) -> DefinitionLocation | None:
        msg = "workspace unavailable"
        raise RuntimeError(msg)

    with caplog.at_level(logging.ERROR, logger="resolve.resolver"):
        target = await _resolver(broken).resolve_definition(
            text, "typescript", 2, 1, "file:///main.ts"
        )

    assert target is None
    assert "External navigation failed for 'format'" in caplog.text
    assert "workspace unavailable" in caplog.text


@pytest.mark.asyncio
async def test_javascript_shares_typescript_rules() -> None:
    text = "const add = (a, b) => a + b;\nadd(1, 2);\n"

    target = await _resolver().resolve_definition(
        text, "javascript", 2, 1, "file:///m.js"
    )

    assert target is not None
    assert target.span == SourceSpan(
        start_line=1, start_col=7, end_line=1, end_col=10
    )
