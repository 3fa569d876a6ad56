"""Models shared by scanners, analyzers and the resolver.

All positions are 1-based. Every span produced by the built-in scanners sits on
a single line (``start_line == end_line``); multi-line declarations are reported
at the line where the declaring keyword appears.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SymbolKind = Literal[
    "function",
    "class",
    "method",
    "variable",
    "parameter",
    "import",
    "module",
]

TargetOrigin = Literal["local", "external"]


class SourceSpan(BaseModel):
    """A 1-based region of a document."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(ge=1)
    start_col: int = Field(ge=1)
    end_line: int = Field(ge=1)
    end_col: int = Field(ge=1)

    @classmethod
    def on_line(cls, line: int, start_col: int, end_col: int) -> SourceSpan:
        return cls(start_line=line, start_col=start_col, end_line=line, end_col=end_col)


class SymbolDefinition(BaseModel):
    """A located declaration of a name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    kind: SymbolKind
    span: SourceSpan


class DefinitionLocation(BaseModel):
    """A definition site in some document, as reported by an external resolver."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    span: SourceSpan


class NavigationTarget(BaseModel):
    """Where "go to definition" should land."""

    model_config = ConfigDict(frozen=True)

    origin: TargetOrigin
    document_id: str
    span: SourceSpan

    @property
    def is_external(self) -> bool:
        return self.origin == "external"


__all__ = [
    "DefinitionLocation",
    "NavigationTarget",
    "SourceSpan",
    "SymbolDefinition",
    "SymbolKind",
    "TargetOrigin",
]
