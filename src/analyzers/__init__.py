"""Built-in language analyzers and the registry that dispatches to them."""

from analyzers.python import PythonAnalyzer
from analyzers.registry import AnalyzerRegistry
from analyzers.typescript import TypeScriptAnalyzer

__all__ = ["AnalyzerRegistry", "PythonAnalyzer", "TypeScriptAnalyzer"]
