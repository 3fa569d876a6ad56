from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from analyzers.registry import AnalyzerRegistry
from artifacts.utils import _write_jsonl, flatten_definition
from rules.config import load_config, resolve_output_path
from scan.files import find_source_files

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import SymdefConfig

logger = logging.getLogger(__name__)


def collect_definitions(
    root: Path,
    *,
    config: SymdefConfig,
    registry: AnalyzerRegistry,
    skip: tuple[Path, ...] = (),
) -> list[dict[str, Any]]:
    """Run the matching analyzer over every supported file under ``root``.

    Only languages enabled in ``config.languages`` and present in ``registry``
    are scanned.

    Records are flat dicts (``path``, ``language``, ``name``, ``kind`` and the
    span fields) ordered by path, line and column.
    """
    extension_map = {
        suffix: language_id
        for suffix, language_id in config.extension_map().items()
        if language_id in registry and language_id in config.languages
    }

    records: list[dict[str, Any]] = []
    for file_path in find_source_files(
        root,
        extension_map.keys(),
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
        skip=skip,
    ):
        relative_path = file_path.relative_to(root).as_posix()
        language_id = extension_map[file_path.suffix.lower()]
        analyzer = registry.get(language_id)
        if analyzer is None:
            continue

        try:
            source = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", relative_path, exc)
            continue

        records.extend(
            flatten_definition(definition, path=relative_path, language=language_id)
            for definition in analyzer.find_definitions(source)
        )

    records.sort(
        key=lambda r: (r["path"], r["start_line"], r["start_col"], r["kind"], r["name"])
    )
    return records


def extract_tree(
    *,
    root: Path,
    out_path: Path | None = None,
    config: SymdefConfig | None = None,
    registry: AnalyzerRegistry | None = None,
) -> dict[str, object]:
    """Write a JSONL file of every definition found under ``root``.

    Args:
        root: Directory to scan
        out_path: Output file (default: config ``output`` inside ``root``)
        config: Optional configuration; loaded from ``root`` when omitted
        registry: Analyzers to use (default: the built-ins)

    Returns:
        Dictionary with the output path, the number of files that produced
        definitions, and the definition count.
    """
    if config is None:
        config = load_config(root)

    if out_path is None:
        out_path = resolve_output_path(root, config.output)

    if registry is None:
        registry = AnalyzerRegistry.with_builtins()

    records = collect_definitions(
        root, config=config, registry=registry, skip=(out_path,)
    )

    out_path.parent.mkdir(parents=True, exist_ok=True)
    _write_jsonl(out_path, records)

    return {
        "output": str(out_path),
        "files": len({r["path"] for r in records}),
        "definitions": len(records),
    }


__all__ = ["collect_definitions", "extract_tree"]
