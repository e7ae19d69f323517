"""
depscope - module dependency layering for C/C++ source trees

Builds a module graph from #include directives (a header and its source
file form one module), collapses circular dependencies into strongly
connected components, drops transitively implied edges and assigns every
component a build-order layer. Results render as text, JSON or a Mermaid
flowchart.
"""

__version__ = "0.1.0"

from .config import AnalysisConfig, load_config
from .graph.engine import DependencyAnalyzer
from .scanning.models import FileRecord
from .scanning.scanner import IncludeScanner

__all__ = [
    "DependencyAnalyzer",  # Main entry point
    "FileRecord",
    "IncludeScanner",
    "AnalysisConfig",
    "load_config",
]
