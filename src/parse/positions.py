"""Offset <-> (line, column) conversion for source text.

Lines are separated by ``\\n`` only; a trailing ``\\r`` stays part of its line.
Both line and column are 1-based.
"""

from __future__ import annotations


def offset_to_line_column(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a 1-based ``(line, column)`` pair.

    Examples:
        >>> offset_to_line_column("def hello():", 0)
        (1, 1)
        >>> offset_to_line_column("a = 1\\nb = 2", 6)
        (2, 1)
        >>> offset_to_line_column("ab", 2)
        (1, 3)
    """
    if offset < 0 or offset > len(text):
        msg = f"offset {offset} outside text of length {len(text)}"
        raise ValueError(msg)

    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def line_column_to_offset(text: str, line: int, column: int) -> int:
    """Inverse of :func:`offset_to_line_column`.

    ``column`` may point one past the last character of the line.
    """
    lines = text.split("\n")
    if line < 1 or line > len(lines):
        msg = f"line {line} outside 1..{len(lines)}"
        raise ValueError(msg)

    line_text = lines[line - 1]
    if column < 1 or column > len(line_text) + 1:
        msg = f"column {column} outside 1..{len(line_text) + 1} on line {line}"
        raise ValueError(msg)

    line_start = sum(len(previous) + 1 for previous in lines[: line - 1])
    return line_start + column - 1


def line_text_at(text: str, offset: int) -> str:
    """Return the full line containing ``offset`` without its newline."""
    line_start = text.rfind("\n", 0, offset) + 1
    line_end = text.find("\n", offset)
    if line_end == -1:
        line_end = len(text)
    return text[line_start:line_end]


__all__ = ["line_column_to_offset", "line_text_at", "offset_to_line_column"]
