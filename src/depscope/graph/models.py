"""Data models for the module dependency pipeline.

Levels, leaves first:
  Modules     : file stems, one node per .cpp/.h pair
  Components  : strongly connected groups of modules
  Condensation: the acyclic component graph
  Layering    : topological order and depth over the reduced condensation
"""

from dataclasses import dataclass, field

# ── Module level ───────────────────────────────────────────────────


@dataclass
class ModuleGraph:
    """Module-level dependency graph built from include relationships.

    Edges are directed: adjacency[A] contains B means A includes something
    that resolves to module B. Key order is first-appearance order.
    """

    adjacency: dict[str, set[str]] = field(default_factory=dict)

    # record name -> bare header names that matched no in-scope file
    unresolved: dict[str, list[str]] = field(default_factory=dict)

    @property
    def modules(self) -> list[str]:
        return list(self.adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.adjacency.values())

    @property
    def unresolved_count(self) -> int:
        return sum(len(headers) for headers in self.unresolved.values())


# ── Component level ────────────────────────────────────────────────


@dataclass(frozen=True)
class Component:
    """A strongly connected component. Members are kept in stack-pop order."""

    index: int
    members: tuple[str, ...]

    @property
    def name(self) -> str:
        return "|".join(self.members)

    @property
    def is_cluster(self) -> bool:
        """True when the component is a real cycle (more than one module)."""
        return len(self.members) > 1


@dataclass
class Condensation:
    """Components plus the component-level edges projected from module edges.

    ``edges`` has a key for every component index, possibly with an empty set.
    """

    components: list[Component] = field(default_factory=list)
    module_to_component: dict[str, int] = field(default_factory=dict)
    edges: dict[int, set[int]] = field(default_factory=dict)

    @property
    def cycles(self) -> list[Component]:
        return [c for c in self.components if c.is_cluster]


# ── Layering ───────────────────────────────────────────────────────


@dataclass
class Layering:
    """Topological order and depth assignment over reduced component edges."""

    order: list[int] = field(default_factory=list)  # dependencies first
    depth: dict[int, int] = field(default_factory=dict)
    layers: dict[int, list[int]] = field(default_factory=dict)  # depth -> components
    max_depth: int = 0

    @property
    def layer_count(self) -> int:
        return len(self.layers)
