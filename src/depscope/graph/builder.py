"""Module dependency graph construction from include directives."""

import re
from pathlib import PurePosixPath
from typing import Callable, Optional, Sequence

from ..logging_config import get_logger
from ..scanning.models import FileRecord
from .models import ModuleGraph

logger = get_logger(__name__)

# (bare header name, all records) -> the record the header refers to, or None
HeaderResolver = Callable[[str, Sequence[FileRecord]], Optional[FileRecord]]

_SEPARATORS = re.compile(r"[/\\]")


def resolve_by_suffix(header: str, records: Sequence[FileRecord]) -> Optional[FileRecord]:
    """Return the first record whose name ends with ``header``.

    This is a zero-configuration heuristic, not an include-path resolver:
    ``"util.h"`` also matches ``"netutil.h"`` if that record comes first, and
    two ``config.h`` files in different directories resolve to whichever was
    listed first.
    """
    for record in records:
        if record.name.endswith(header):
            return record
    return None


def module_key(name: str) -> str:
    """Module identity for a file: its base name without extension."""
    return PurePosixPath(name.replace("\\", "/")).stem


def bare_header_name(header: str) -> str:
    """Strip any directory prefix from an include target."""
    return _SEPARATORS.split(header.strip())[-1]


def build_module_graph(
    records: Sequence[FileRecord],
    resolver: HeaderResolver = resolve_by_suffix,
) -> ModuleGraph:
    """Build the module graph from include references in ``records``.

    Every record contributes its own module key even when none of its
    includes resolve. Self-edges (``a.cpp`` including ``a.h``) are dropped.
    An include that matches no record is logged as a warning, once per
    including file, and kept in ``ModuleGraph.unresolved``.
    """
    adjacency: dict[str, set[str]] = {}
    unresolved: dict[str, list[str]] = {}
    resolved_cache: dict[str, Optional[FileRecord]] = {}

    for record in records:
        src_key = module_key(record.name)
        adjacency.setdefault(src_key, set())

        for raw_header in record.included_headers:
            header = bare_header_name(raw_header)
            if not header:
                continue

            if header not in resolved_cache:
                resolved_cache[header] = resolver(header, records)
            target = resolved_cache[header]

            if target is None:
                missing = unresolved.setdefault(record.name, [])
                if header not in missing:
                    logger.warning(
                        "Skip included file: %s for %s as it's not under the scanned directory",
                        header,
                        record.name,
                    )
                    missing.append(header)
                continue

            tgt_key = module_key(target.name)
            adjacency.setdefault(tgt_key, set())
            if src_key != tgt_key:
                adjacency[src_key].add(tgt_key)

    graph = ModuleGraph(adjacency=adjacency, unresolved=unresolved)
    logger.debug(
        "Built module graph: %d modules, %d edges, %d unresolved includes",
        len(adjacency),
        graph.edge_count,
        graph.unresolved_count,
    )
    return graph
