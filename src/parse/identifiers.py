"""Language-agnostic identifier lookup at a cursor position."""

from __future__ import annotations

import re

_WORD_BEFORE = re.compile(r"\w*\Z")
_WORD_AFTER = re.compile(r"\w*")


def symbol_at_position(source: str, line: int, column: int) -> str | None:
    """Return the identifier touching the 1-based ``(line, column)``.

    The cursor may sit anywhere inside a word or directly after its last
    character. Out-of-range positions and positions touching no word
    characters yield ``None``.

    Examples:
        >>> symbol_at_position("def hello():", 1, 5)
        'hello'
        >>> symbol_at_position("def hello():", 1, 10)
        'hello'
        >>> symbol_at_position("x = (1)", 1, 5) is None
        True
    """
    lines = source.split("\n")
    if line < 1 or line > len(lines):
        return None

    line_text = lines[line - 1]
    if column < 1 or column > len(line_text) + 1:
        return None

    before = _WORD_BEFORE.search(line_text, 0, column - 1)
    after = _WORD_AFTER.match(line_text, column - 1)

    word = (before.group(0) if before else "") + (after.group(0) if after else "")
    return word or None


__all__ = ["symbol_at_position"]
