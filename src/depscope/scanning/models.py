"""Data models for the scanning layer."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FileRecord:
    """What the graph pipeline needs to know about one source file.

    ``name`` is a path or bare file name; only its last component and stem
    matter downstream. ``included_headers`` keeps the raw include targets in
    the order they appear. ``defined_types`` is carried for reporting and is
    not used by the graph algorithms.
    """

    name: str
    included_headers: list[str] = field(default_factory=list)
    defined_types: list[str] = field(default_factory=list)
