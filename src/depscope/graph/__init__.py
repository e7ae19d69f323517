"""Module dependency graphs: construction, SCCs, reduction, layering."""

from .builder import build_module_graph, resolve_by_suffix
from .engine import DependencyAnalyzer
from .models import Component, Condensation, Layering, ModuleGraph

__all__ = [
    "DependencyAnalyzer",
    "build_module_graph",
    "resolve_by_suffix",
    "Component",
    "Condensation",
    "Layering",
    "ModuleGraph",
]
