"""Definition dumps for whole source trees."""

from artifacts.write import collect_definitions, extract_tree

__all__ = ["collect_definitions", "extract_tree"]
