"""Import-binding lookup: which module specifier introduced a name.

Each language checks its import shapes in a fixed order and returns on the
first match, so the result is deterministic even when a name is imported twice.
Only names an import actually binds are found: an aliased import binds the
alias, not the original name.
"""

from __future__ import annotations

from parse.python_scanners import IMPORT_FROM, IMPORT_SIMPLE, imported_names
from parse.typescript_scanners import (
    IMPORT_DEFAULT,
    IMPORT_NAMED,
    IMPORT_NAMESPACE,
    named_import_bindings,
)


def python_import_path(source: str, name: str) -> str | None:
    """Return the module that binds ``name`` in Python source.

    Checked in order: ``from M import ... name``, ``import M as name``,
    ``import [pkg.]name``. The last shape returns the full dotted path.

    Examples:
        >>> python_import_path("import numpy as np", "np")
        'numpy'
        >>> python_import_path("from os.path import join", "join")
        'os.path'
        >>> python_import_path("import os.path", "path")
        'os.path'
        >>> python_import_path("import numpy as np", "numpy") is None
        True
    """
    for match in IMPORT_FROM.finditer(source):
        if name in imported_names(match.group(2)):
            return match.group(1)

    simple_imports = [
        (match.group(1), match.group(2)) for match in IMPORT_SIMPLE.finditer(source)
    ]
    for module, alias in simple_imports:
        if alias == name:
            return module
    for module, alias in simple_imports:
        if alias is None and module.split(".")[-1] == name:
            return module
    return None


def typescript_import_path(source: str, name: str) -> str | None:
    """Return the module specifier that binds ``name`` in TS/JS source.

    Checked in order: named ``import { ... name ... } from 'M'``, default
    ``import name from 'M'``, namespace ``import * as name from 'M'``.

    Examples:
        >>> typescript_import_path("import { readFile } from 'fs'", "readFile")
        'fs'
        >>> typescript_import_path("import * as utils from './utils'", "utils")
        './utils'
    """
    for match in IMPORT_NAMED.finditer(source):
        if name in named_import_bindings(match.group(1)):
            return match.group(2)

    for pattern in (IMPORT_DEFAULT, IMPORT_NAMESPACE):
        for match in pattern.finditer(source):
            if match.group(1) == name:
                return match.group(2)
    return None


__all__ = ["python_import_path", "typescript_import_path"]
