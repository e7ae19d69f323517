"""Dependency analysis engine: runs the graph pipeline once and exposes the results."""

from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from ..config import AnalysisConfig
from ..logging_config import get_logger
from ..scanning.models import FileRecord
from ..visualization.mermaid import MermaidRenderer
from .algorithms import condense, transitive_reduction
from .builder import HeaderResolver, build_module_graph, resolve_by_suffix
from .layers import compute_layering, topological_sort
from .models import Component
from .validation import run_all_validations

logger = get_logger(__name__)


class DependencyAnalyzer:
    """Module dependency analysis over a fixed set of file records.

    The whole pipeline runs in the constructor, in a fixed order:

        build module graph -> SCCs + condensation -> transitive reduction
        -> topological sort -> depth layering -> invariant checks

    Afterwards the analyzer is read-only: accessors hand out read-only views
    and nothing is recomputed, so one instance can be queried from several
    threads without locking. Analyze a changed file set by constructing a
    new analyzer.
    """

    def __init__(
        self,
        records: Sequence[FileRecord],
        config: Optional[AnalysisConfig] = None,
        resolver: HeaderResolver = resolve_by_suffix,
    ):
        self._config = config or AnalysisConfig()
        self._records = tuple(records)

        graph = build_module_graph(self._records, resolver)
        condensation = condense(graph.adjacency)
        reduced = transitive_reduction(condensation.edges)
        order = topological_sort(reduced, [c.index for c in condensation.components])
        layering = compute_layering(reduced, order)

        if self._config.enable_validation:
            run_all_validations(graph, condensation, reduced, layering)

        self._graph = graph
        self._condensation = condensation
        self._reduced = reduced
        self._layering = layering
        self._renderer = MermaidRenderer(
            condensation.components, reduced, direction=self._config.diagram_direction
        )

        logger.info(
            "Analyzed %d files: %d modules, %d components (%d cycles), max depth %d",
            len(self._records),
            len(graph.adjacency),
            len(condensation.components),
            len(condensation.cycles),
            layering.max_depth,
        )

    # ── Module level ───────────────────────────────────────────────

    @property
    def records(self) -> tuple[FileRecord, ...]:
        return self._records

    @property
    def module_dependencies(self) -> Mapping[str, frozenset[str]]:
        """Module key -> modules it includes (transitive reduction NOT applied)."""
        return MappingProxyType(
            {module: frozenset(deps) for module, deps in self._graph.adjacency.items()}
        )

    def dependencies_of(self, module: str) -> Optional[frozenset[str]]:
        """Direct dependencies of ``module``, or None if the module is unknown."""
        deps = self._graph.adjacency.get(module)
        return frozenset(deps) if deps is not None else None

    @property
    def unresolved_includes(self) -> Mapping[str, tuple[str, ...]]:
        """Record name -> include targets that matched no scanned file."""
        return MappingProxyType(
            {name: tuple(headers) for name, headers in self._graph.unresolved.items()}
        )

    # ── Component level ────────────────────────────────────────────

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._condensation.components)

    @property
    def component_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self._condensation.components)

    @property
    def cycles(self) -> tuple[Component, ...]:
        """Components with more than one module."""
        return tuple(self._condensation.cycles)

    @property
    def module_to_component(self) -> Mapping[str, int]:
        return MappingProxyType(self._condensation.module_to_component)

    def component_of(self, module: str) -> Optional[Component]:
        index = self._condensation.module_to_component.get(module)
        if index is None:
            return None
        return self._condensation.components[index]

    @property
    def component_dependencies(self) -> Mapping[int, frozenset[int]]:
        """Full condensation edges. Use these for reachability questions."""
        return MappingProxyType(
            {node: frozenset(deps) for node, deps in self._condensation.edges.items()}
        )

    @property
    def reduced_component_dependencies(self) -> Mapping[int, frozenset[int]]:
        """Condensation edges with transitively implied edges removed (presentation only)."""
        return MappingProxyType({node: frozenset(deps) for node, deps in self._reduced.items()})

    # ── Layering ───────────────────────────────────────────────────

    @property
    def topological_order(self) -> tuple[int, ...]:
        """Component indices, dependencies before dependents."""
        return tuple(self._layering.order)

    @property
    def depth_map(self) -> Mapping[int, int]:
        return MappingProxyType(self._layering.depth)

    @property
    def layers(self) -> Mapping[int, tuple[int, ...]]:
        """Depth -> component indices at that depth, leaf layer first."""
        return MappingProxyType(
            {depth: tuple(nodes) for depth, nodes in self._layering.layers.items()}
        )

    @property
    def max_depth(self) -> int:
        return self._layering.max_depth

    @property
    def layer_count(self) -> int:
        """Number of layers; 0 for an empty input."""
        return self._layering.layer_count

    # ── Output ─────────────────────────────────────────────────────

    def render_diagram(self, keyword: str = "") -> str:
        """Mermaid flowchart of the reduced component graph.

        With a keyword, only components whose name contains it and
        everything downstream of them are drawn.
        """
        return self._renderer.render(keyword)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view of every derived structure."""
        components = self._condensation.components
        return {
            "modules": {
                module: sorted(deps) for module, deps in self._graph.adjacency.items()
            },
            "unresolved_includes": {
                name: list(headers) for name, headers in self._graph.unresolved.items()
            },
            "components": [
                {
                    "index": c.index,
                    "name": c.name,
                    "members": list(c.members),
                    "depth": self._layering.depth[c.index],
                }
                for c in components
            ],
            "component_dependencies": {
                str(node): sorted(deps) for node, deps in self._condensation.edges.items()
            },
            "reduced_component_dependencies": {
                str(node): sorted(deps) for node, deps in self._reduced.items()
            },
            "topological_order": list(self._layering.order),
            "layers": {
                str(depth): [components[i].name for i in nodes]
                for depth, nodes in self._layering.layers.items()
            },
            "max_depth": self._layering.max_depth,
            "layer_count": self._layering.layer_count,
        }
