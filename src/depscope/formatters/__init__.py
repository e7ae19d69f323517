"""Output formatters for depscope."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .mermaid_formatter import MermaidFormatter
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter

FORMATTERS = {
    "text": TextFormatter,
    "rich": RichFormatter,
    "json": JsonFormatter,
    "mermaid": MermaidFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "text", "rich", "json", "mermaid"

    Raises:
        ValueError: If name is not recognized
    """
    cls = FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(FORMATTERS))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "TextFormatter",
    "RichFormatter",
    "JsonFormatter",
    "MermaidFormatter",
    "get_formatter",
]
