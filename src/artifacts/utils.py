"""Serialization helpers for definition output."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def _to_dict(obj: object) -> object:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    return obj


def dumps_record(obj: object) -> bytes:
    """One compact JSON document with sorted keys."""
    return orjson.dumps(_to_dict(obj), option=orjson.OPT_SORT_KEYS)


def dumps_jsonl(records: Iterable[object]) -> bytes:
    return b"".join(dumps_record(rec) + b"\n" for rec in records)


def _write_jsonl(path: Path, records: Iterable[object]) -> None:
    with path.open("wb") as f:
        for rec in records:
            f.write(dumps_record(rec))
            f.write(b"\n")


def flatten_definition(definition: object, **extra: object) -> dict[str, object]:
    """Flatten a ``SymbolDefinition`` into a single-level record."""
    data = _to_dict(definition)
    if not isinstance(data, dict):
        msg = f"Cannot flatten {type(definition).__name__}"
        raise TypeError(msg)
    span = data.pop("span", {})
    return {**extra, **data, **span}


__all__ = ["dumps_jsonl", "dumps_record", "flatten_definition"]
