"""Stable surface shared between analyzers, the resolver and host integrations.

Custom analyzers and external navigation callbacks only need the names
exported here.
"""

from contract.analyzer import (
    CancellationSignal,
    ExternalNavigationCallback,
    LanguageAnalyzer,
)
from contract.models import (
    DefinitionLocation,
    NavigationTarget,
    SourceSpan,
    SymbolDefinition,
    SymbolKind,
    TargetOrigin,
)

__all__ = [
    "CancellationSignal",
    "DefinitionLocation",
    "ExternalNavigationCallback",
    "LanguageAnalyzer",
    "NavigationTarget",
    "SourceSpan",
    "SymbolDefinition",
    "SymbolKind",
    "TargetOrigin",
]
