"""Pattern-based declaration scanners for Python source.

Each scanner sweeps the whole text for one construct family and returns
``SymbolDefinition`` records. Matching is lexical: declarations inside strings
or comments are reported too, and only the first line of a multi-line
construct is inspected.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from parse.definitions import identifier_definition, import_line_definition

if TYPE_CHECKING:
    from contract.models import SymbolDefinition

# Deeper indentation is treated as function-local and not reported.
MAX_VARIABLE_INDENT = 4

_SELF_PARAMETERS = frozenset({"self", "cls"})
_OPENING_BRACKETS = "([{"
_CLOSING_BRACKETS = ")]}"
_QUOTES = "'\""

FUNCTION_DEF = re.compile(
    r"^[ \t]*(?:async[ \t]+)?def[ \t]+(\w+)[ \t]*\(", re.MULTILINE
)
CLASS_DEF = re.compile(r"^[ \t]*class[ \t]+(\w+)[ \t]*[:(]", re.MULTILINE)
VARIABLE_ASSIGNMENT = re.compile(
    r"^([ \t]*)(\w+)[ \t]*(?::[ \t]*\w+)?[ \t]*=", re.MULTILINE
)
IMPORT_FROM = re.compile(
    r"^from[ \t]+([\w.]+)[ \t]+import[ \t]+(.+)$", re.MULTILINE
)
IMPORT_SIMPLE = re.compile(
    r"^import[ \t]+([\w.]+)(?:[ \t]+as[ \t]+(\w+))?[ \t]*(?:#.*)?\r?$", re.MULTILINE
)

_IDENTIFIER = re.compile(r"\w+")
_ALIAS_SPLIT = re.compile(r"\s+as\s+")


def find_functions(source: str) -> list[SymbolDefinition]:
    return [
        identifier_definition(source, match.start(1), match.group(1), "function")
        for match in FUNCTION_DEF.finditer(source)
    ]


def _parameter_items(source: str, open_paren: int) -> list[tuple[int, str]]:
    """Split the parameters after ``open_paren`` on top-level commas.

    Commas nested in brackets or string literals do not split. Scanning stops
    at the matching ``)`` or at the end of the line. Each item is returned
    with its offset in ``source``.
    """
    items: list[tuple[int, str]] = []
    depth = 0
    quote: str | None = None
    start = position = open_paren + 1
    while position < len(source) and source[position] != "\n":
        char = source[position]
        if quote is not None:
            if char == "\\":
                position += 1
            elif char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENING_BRACKETS:
            depth += 1
        elif char in _CLOSING_BRACKETS:
            if depth == 0:
                break
            depth -= 1
        elif char == "," and depth == 0:
            items.append((start, source[start:position]))
            start = position + 1
        position += 1
    items.append((start, source[start:position]))
    return items


def _parameter_name(raw: str) -> str:
    """Strip annotation, default value and star prefix from one parameter."""
    name = re.split(r"[=:]", raw, maxsplit=1)[0].strip()
    return name.lstrip("*").strip()


def find_parameters(source: str) -> list[SymbolDefinition]:
    """Report parameters declared on each function's ``def`` line."""
    definitions: list[SymbolDefinition] = []
    for match in FUNCTION_DEF.finditer(source):
        for offset, raw in _parameter_items(source, match.end() - 1):
            name = _parameter_name(raw)
            if (
                name
                and name not in _SELF_PARAMETERS
                and _IDENTIFIER.fullmatch(name)
            ):
                definitions.append(
                    identifier_definition(
                        source, offset + raw.index(name), name, "parameter"
                    )
                )
    return definitions


def find_classes(source: str) -> list[SymbolDefinition]:
    return [
        identifier_definition(source, match.start(1), match.group(1), "class")
        for match in CLASS_DEF.finditer(source)
    ]


def find_variables(source: str) -> list[SymbolDefinition]:
    """Report module-level and shallow (class-body) assignments.

    A name is reported once per indentation width; private names (leading
    underscore, except ``_`` itself) are skipped.
    """
    definitions: list[SymbolDefinition] = []
    seen: set[tuple[int, str]] = set()
    for match in VARIABLE_ASSIGNMENT.finditer(source):
        indent, name = match.group(1), match.group(2)
        if len(indent) > MAX_VARIABLE_INDENT:
            continue

        key = (len(indent), name)
        if key in seen:
            continue
        seen.add(key)

        if name.startswith("_") and name != "_":
            continue

        definitions.append(
            identifier_definition(source, match.start(2), name, "variable")
        )
    return definitions


def imported_names(import_list: str) -> list[str]:
    """Return the names bound by a ``from m import ...`` clause."""
    import_list = import_list.split("#", 1)[0].strip().strip("()")
    names: list[str] = []
    for item in import_list.split(","):
        parts = _ALIAS_SPLIT.split(item.strip())
        name = (parts[1] if len(parts) > 1 else parts[0]).strip()
        if name and _IDENTIFIER.fullmatch(name):
            names.append(name)
    return names


def find_from_imports(source: str) -> list[SymbolDefinition]:
    return [
        import_line_definition(source, match.start(), name)
        for match in IMPORT_FROM.finditer(source)
        for name in imported_names(match.group(2))
    ]


def find_simple_imports(source: str) -> list[SymbolDefinition]:
    """Report ``import a.b [as c]``; binds the alias or the last segment."""
    definitions: list[SymbolDefinition] = []
    for match in IMPORT_SIMPLE.finditer(source):
        module, alias = match.group(1), match.group(2)
        name = alias or module.split(".")[-1] or module
        definitions.append(import_line_definition(source, match.start(), name))
    return definitions


def find_imports(source: str) -> list[SymbolDefinition]:
    return [*find_from_imports(source), *find_simple_imports(source)]


PYTHON_SCANNERS = (
    find_functions,
    find_parameters,
    find_classes,
    find_variables,
    find_imports,
)


__all__ = [
    "MAX_VARIABLE_INDENT",
    "PYTHON_SCANNERS",
    "find_classes",
    "find_from_imports",
    "find_functions",
    "find_imports",
    "find_parameters",
    "find_simple_imports",
    "find_variables",
    "imported_names",
]
