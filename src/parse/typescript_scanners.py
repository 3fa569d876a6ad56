"""Pattern-based declaration scanners for TypeScript and JavaScript source.

Interfaces and type aliases are reported with kind ``class`` since they name
types. Import definitions span their whole line.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from parse.definitions import identifier_definition, import_line_definition

if TYPE_CHECKING:
    from contract.models import SymbolDefinition, SymbolKind

MAX_VARIABLE_INDENT = 4

FUNCTION_DECL = re.compile(
    r"^[ \t]*(?:export[ \t]+(?:default[ \t]+)?)?(?:async[ \t]+)?"
    r"function[ \t]+(\w+)[ \t]*[<(]",
    re.MULTILINE,
)
ARROW_FUNCTION = re.compile(
    r"^([ \t]*)(?:export[ \t]+)?(?:const|let|var)[ \t]+(\w+)[ \t]*(?::[^=\n]+)?="
    r"[ \t]*(?:async[ \t]+)?(?:\([^)]*\)|\w+)[ \t]*(?::[^=\n]+)?=>",
    re.MULTILINE,
)
CLASS_DECL = re.compile(
    r"^[ \t]*(?:export[ \t]+(?:default[ \t]+)?)?(?:abstract[ \t]+)?class[ \t]+(\w+)",
    re.MULTILINE,
)
INTERFACE_DECL = re.compile(
    r"^[ \t]*(?:export[ \t]+)?interface[ \t]+(\w+)", re.MULTILINE
)
TYPE_DECL = re.compile(r"^[ \t]*(?:export[ \t]+)?type[ \t]+(\w+)", re.MULTILINE)
VARIABLE_DECL = re.compile(
    r"^([ \t]*)(?:export[ \t]+)?(?:const|let|var)[ \t]+(\w+)[ \t]*(?::[^=\n]+)?=",
    re.MULTILINE,
)
IMPORT_NAMED = re.compile(
    r"^import[ \t]+(?:type[ \t]+)?\{([^}]+)\}[ \t]*from[ \t]*['\"]([^'\"]+)['\"]",
    re.MULTILINE,
)
IMPORT_DEFAULT = re.compile(
    r"^import[ \t]+(\w+)[ \t]+from[ \t]*['\"]([^'\"]+)['\"]", re.MULTILINE
)
IMPORT_NAMESPACE = re.compile(
    r"^import[ \t]+\*[ \t]+as[ \t]+(\w+)[ \t]+from[ \t]*['\"]([^'\"]+)['\"]",
    re.MULTILINE,
)

_IDENTIFIER = re.compile(r"\w+")
_ALIAS_SPLIT = re.compile(r"\s+as\s+")
_TYPE_MODIFIER = re.compile(r"^type\s+")


def _named_declarations(
    pattern: re.Pattern[str], source: str, kind: SymbolKind
) -> list[SymbolDefinition]:
    return [
        identifier_definition(source, match.start(1), match.group(1), kind)
        for match in pattern.finditer(source)
    ]


def find_functions(source: str) -> list[SymbolDefinition]:
    return _named_declarations(FUNCTION_DECL, source, "function")


def find_arrow_functions(source: str) -> list[SymbolDefinition]:
    """Report ``const name = (...) =>`` bindings as functions."""
    definitions: list[SymbolDefinition] = []
    seen: set[tuple[int, str]] = set()
    for match in ARROW_FUNCTION.finditer(source):
        key = (len(match.group(1)), match.group(2))
        if key in seen:
            continue
        seen.add(key)
        definitions.append(
            identifier_definition(source, match.start(2), match.group(2), "function")
        )
    return definitions


def find_classes(source: str) -> list[SymbolDefinition]:
    return _named_declarations(CLASS_DECL, source, "class")


def find_interfaces(source: str) -> list[SymbolDefinition]:
    return _named_declarations(INTERFACE_DECL, source, "class")


def find_type_aliases(source: str) -> list[SymbolDefinition]:
    return _named_declarations(TYPE_DECL, source, "class")


def find_variables(source: str) -> list[SymbolDefinition]:
    """Report shallow ``const``/``let``/``var`` bindings that are not arrow functions."""
    definitions: list[SymbolDefinition] = []
    seen: set[tuple[int, str]] = set()
    for match in VARIABLE_DECL.finditer(source):
        if ARROW_FUNCTION.match(source, match.start()):
            continue

        indent, name = match.group(1), match.group(2)
        if len(indent) > MAX_VARIABLE_INDENT:
            continue

        key = (len(indent), name)
        if key in seen:
            continue
        seen.add(key)

        definitions.append(
            identifier_definition(source, match.start(2), name, "variable")
        )
    return definitions


def named_import_bindings(import_list: str) -> list[str]:
    """Return the local names bound by ``{ a, b as c }``."""
    names: list[str] = []
    for item in import_list.split(","):
        item = _TYPE_MODIFIER.sub("", item.strip())
        parts = _ALIAS_SPLIT.split(item)
        name = (parts[1] if len(parts) > 1 else parts[0]).strip()
        if name and _IDENTIFIER.fullmatch(name):
            names.append(name)
    return names


def find_imports(source: str) -> list[SymbolDefinition]:
    definitions = [
        import_line_definition(source, match.start(), name)
        for match in IMPORT_NAMED.finditer(source)
        for name in named_import_bindings(match.group(1))
    ]
    for pattern in (IMPORT_DEFAULT, IMPORT_NAMESPACE):
        definitions.extend(
            import_line_definition(source, match.start(), match.group(1))
            for match in pattern.finditer(source)
        )
    return definitions


TYPESCRIPT_SCANNERS = (
    find_functions,
    find_arrow_functions,
    find_classes,
    find_interfaces,
    find_type_aliases,
    find_variables,
    find_imports,
)


__all__ = [
    "MAX_VARIABLE_INDENT",
    "TYPESCRIPT_SCANNERS",
    "find_arrow_functions",
    "find_classes",
    "find_functions",
    "find_imports",
    "find_interfaces",
    "find_type_aliases",
    "find_variables",
    "named_import_bindings",
]
