"""Post-construction consistency checks for the analysis pipeline.

Run once after the pipeline has produced every derived structure, to catch
bookkeeping bugs before they reach a report. All checks are linear in the
size of the graph.
"""

from __future__ import annotations

from typing import Mapping

from ..exceptions import GraphInvariantError
from ..logging_config import get_logger
from .models import Condensation, Layering, ModuleGraph

logger = get_logger(__name__)


def validate_partition(graph: ModuleGraph, condensation: Condensation) -> None:
    """Every module key belongs to exactly one component."""
    seen: dict[str, int] = {}
    for component in condensation.components:
        for module in component.members:
            if module in seen:
                raise GraphInvariantError(
                    "partition",
                    f"module appears in components {seen[module]} and {component.index}",
                    subject=module,
                )
            seen[module] = component.index

    missing = [m for m in graph.adjacency if m not in seen]
    if missing:
        raise GraphInvariantError(
            "partition",
            f"{len(missing)} modules have no component",
            subject=", ".join(missing[:5]),
        )


def validate_projection(graph: ModuleGraph, condensation: Condensation) -> None:
    """Each component edge comes from at least one module edge, and no self-loops."""
    projected: set[tuple[int, int]] = set()
    m2c = condensation.module_to_component
    for module, deps in graph.adjacency.items():
        for dep in deps:
            if m2c[module] != m2c[dep]:
                projected.add((m2c[module], m2c[dep]))

    for source, targets in condensation.edges.items():
        for target in targets:
            if source == target:
                raise GraphInvariantError(
                    "projection", "component edge loops back to itself", subject=str(source)
                )
            if (source, target) not in projected:
                raise GraphInvariantError(
                    "projection",
                    "component edge has no underlying module edge",
                    subject=f"{source} -> {target}",
                )

    if len(projected) != sum(len(t) for t in condensation.edges.values()):
        raise GraphInvariantError("projection", "module edges were not all projected")


def validate_layering(
    reduced_edges: Mapping[int, set[int]],
    layering: Layering,
    component_count: int,
) -> None:
    """Topological order is a permutation and depth strictly falls along every edge."""
    if sorted(layering.order) != list(range(component_count)):
        raise GraphInvariantError(
            "topological-order",
            f"order lists {len(layering.order)} entries for {component_count} components",
        )

    position = {node: i for i, node in enumerate(layering.order)}
    for source, targets in reduced_edges.items():
        for target in targets:
            if position[target] >= position[source]:
                raise GraphInvariantError(
                    "topological-order",
                    "dependency is ordered after its dependent",
                    subject=f"{source} -> {target}",
                )
            if layering.depth[source] <= layering.depth[target]:
                raise GraphInvariantError(
                    "depth",
                    "depth does not decrease along a dependency",
                    subject=f"{source} -> {target}",
                )


def run_all_validations(
    graph: ModuleGraph,
    condensation: Condensation,
    reduced_edges: Mapping[int, set[int]],
    layering: Layering,
) -> None:
    """Run every pipeline check; raises GraphInvariantError on the first failure."""
    validate_partition(graph, condensation)
    validate_projection(graph, condensation)
    validate_layering(reduced_edges, layering, len(condensation.components))
    logger.debug("Graph invariants hold for %d components", len(condensation.components))
