"""Command-line interface for symdef."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from analyzers.registry import AnalyzerRegistry
from artifacts.utils import dumps_jsonl, flatten_definition
from artifacts.write import extract_tree
from resolve.provider import provider_from_config
from rules.config import ConfigError, SymdefConfig, load_config

if TYPE_CHECKING:
    from contract.analyzer import LanguageAnalyzer


class UsageError(Exception):
    """Raised for bad command-line input that argparse cannot catch."""


def _add_file_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Source file to analyze")
    parser.add_argument(
        "--language",
        default=None,
        help="Language id (default: inferred from the file suffix)",
    )
    parser.add_argument(
        "--config-root",
        default=".",
        help="Directory holding symdef.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="symdef")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    definitions_parser = subparsers.add_parser(
        "definitions", help="List definitions found in a file as JSONL"
    )
    _add_file_arguments(definitions_parser)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve the definition under a cursor position"
    )
    _add_file_arguments(resolve_parser)
    resolve_parser.add_argument(
        "--line", type=int, required=True, help="1-based line"
    )
    resolve_parser.add_argument(
        "--column", type=int, required=True, help="1-based column"
    )

    import_parser = subparsers.add_parser(
        "import-path", help="Print the module specifier that imports a name"
    )
    _add_file_arguments(import_parser)
    import_parser.add_argument("name", help="Identifier to look up")

    extract_parser = subparsers.add_parser(
        "extract", help="Write definitions for a whole tree to JSONL"
    )
    extract_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Root directory (default: .)",
    )
    extract_parser.add_argument(
        "--out",
        default=None,
        help="Output file (default: config output inside the root)",
    )

    return parser


def _read_source(
    file: str, language: str | None, config: SymdefConfig
) -> tuple[Path, str, str]:
    path = Path(file).expanduser().resolve()
    language_id = language or config.language_for_path(path)
    if language_id is None:
        msg = f"cannot infer language for '{file}'; pass --language"
        raise UsageError(msg)
    if language_id not in config.languages:
        msg = f"language '{language_id}' is not enabled in the languages config"
        raise UsageError(msg)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"cannot read '{file}': {exc}"
        raise UsageError(msg) from exc
    return path, language_id, text


def _analyzer_for(registry: AnalyzerRegistry, language_id: str) -> LanguageAnalyzer:
    analyzer = registry.get(language_id)
    if analyzer is None:
        msg = f"no analyzer registered for language '{language_id}'"
        raise UsageError(msg)
    return analyzer


def _handle_definitions(args: argparse.Namespace, config: SymdefConfig) -> int:
    _, language_id, text = _read_source(args.file, args.language, config)
    analyzer = _analyzer_for(AnalyzerRegistry.with_builtins(), language_id)
    records = [
        flatten_definition(definition, language=language_id)
        for definition in analyzer.find_definitions(text)
    ]
    sys.stdout.write(dumps_jsonl(records).decode("utf-8"))
    return 0


def _handle_resolve(args: argparse.Namespace, config: SymdefConfig) -> int:
    path, language_id, text = _read_source(args.file, args.language, config)
    provider = provider_from_config(config)
    try:
        target = asyncio.run(
            provider.provide_definition(
                text, language_id, args.line, args.column, path.as_uri()
            )
        )
    finally:
        provider.dispose()
    if target is None:
        return 1
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    payload = orjson.dumps(target.model_dump(), option=opts)
    sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


def _handle_import_path(args: argparse.Namespace, config: SymdefConfig) -> int:
    _, language_id, text = _read_source(args.file, args.language, config)
    analyzer = _analyzer_for(AnalyzerRegistry.with_builtins(), language_id)
    import_path = analyzer.import_path(text, args.name)
    if import_path is None:
        return 1
    sys.stdout.write(f"{import_path}\n")
    return 0


def _handle_extract(root: Path, out: str | None) -> int:
    out_path = Path(out).expanduser().resolve() if out is not None else None
    summary = extract_tree(root=root, out_path=out_path)
    sys.stderr.write(
        f"{summary['definitions']} definitions from {summary['files']} files"
        f" -> {summary['output']}\n"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "extract":
            root = Path(args.root).expanduser().resolve()
            return _handle_extract(root, args.out)

        config = load_config(Path(args.config_root).expanduser().resolve())

        if args.command == "definitions":
            return _handle_definitions(args, config)

        if args.command == "resolve":
            return _handle_resolve(args, config)

        if args.command == "import-path":
            return _handle_import_path(args, config)
    except (ConfigError, UsageError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
