"""Source file discovery for tree extraction."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterator
    from pathlib import Path


def _is_within_root(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _matches_filters(
    rel_path: str,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    if include_patterns and not any(fnmatch(rel_path, p) for p in include_patterns):
        return False
    return not (exclude_patterns and any(fnmatch(rel_path, p) for p in exclude_patterns))


def _gitignore_files(root: Path) -> list[Path]:
    """Return .gitignore files under root (including root), ordered by path."""
    candidates = {root / ".gitignore", *root.rglob(".gitignore")}
    found = [
        path
        for path in candidates
        if path.is_file() and not path.is_symlink() and _is_within_root(path, root)
    ]
    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


def build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    """Build a predicate for ignored paths, or None when nothing is ignored.

    Only the root ``.gitignore`` is honoured unless ``nested_gitignore`` is set.
    """
    if not nested_gitignore:
        root_gitignore = root / ".gitignore"
        if root_gitignore.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(root_gitignore))
        return None

    matchers = [parse_gitignore(path) for path in _gitignore_files(root)]
    if not matchers:
        return None

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # Path outside this .gitignore's base directory.
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    suffixes: Collection[str],
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
    skip: Collection[Path] = (),
) -> Iterator[Path]:
    """Yield files under ``directory`` whose suffix is in ``suffixes``.

    Symlinks, files resolving outside ``directory``, gitignored files and
    anything in ``skip`` are left out. Patterns are fnmatch globs applied to
    the POSIX path relative to ``directory``. Files are yielded sorted by
    relative path.
    """
    wanted = {suffix.lower() for suffix in suffixes}
    ignored = build_gitignore_matcher(directory, nested_gitignore=nested_gitignore)
    skipped = {path.resolve() for path in skip}

    matched: list[tuple[str, Path]] = []
    for path in directory.rglob("*"):
        if path.suffix.lower() not in wanted:
            continue
        if not path.is_file() or path.is_symlink():
            continue
        if not _is_within_root(path, directory) or path.resolve() in skipped:
            continue
        if ignored is not None and ignored(str(path)):
            continue

        rel_path = path.relative_to(directory).as_posix()
        if _matches_filters(rel_path, include_patterns, exclude_patterns):
            matched.append((rel_path, path))

    matched.sort(key=lambda item: item[0])
    for _, path in matched:
        yield path


__all__ = ["build_gitignore_matcher", "find_source_files"]
