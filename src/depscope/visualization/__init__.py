"""Diagram rendering for the component graph."""

from .mermaid import MermaidRenderer

__all__ = ["MermaidRenderer"]
