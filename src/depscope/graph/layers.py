"""Layer assignment for the reduced component graph.

1. Topological sort (dependencies before dependents)
2. Depth = longest dependency chain beneath each component
3. Group components by depth, leaf layer (depth 0) first
"""

from typing import Iterable, Mapping, Sequence

from ..exceptions import GraphInvariantError
from .models import Layering


def topological_sort(edges: Mapping[int, Iterable[int]], nodes: Sequence[int]) -> list[int]:
    """Order ``nodes`` so that for every edge A -> B, B comes before A.

    DFS postorder over the depends-on edges: a component is emitted only
    once everything it depends on has been emitted. Roots are taken in the
    order of ``nodes`` and dependencies in sorted order. When there are no
    edges at all the nodes are returned in their given order.
    """
    if not any(edges.get(node) for node in nodes):
        return list(nodes)

    visited: set[int] = set()
    order: list[int] = []

    for root in nodes:
        if root in visited:
            continue

        visited.add(root)
        call_stack = [(root, iter(sorted(edges.get(root, ()))))]
        while call_stack:
            node, it = call_stack[-1]
            for dep in it:
                if dep not in visited:
                    visited.add(dep)
                    call_stack.append((dep, iter(sorted(edges.get(dep, ())))))
                    break
            else:
                call_stack.pop()
                order.append(node)

    return order


def compute_layering(edges: Mapping[int, Iterable[int]], order: Sequence[int]) -> Layering:
    """Assign each component its depth over ``edges``.

    depth(X) is 0 when X has no dependency, otherwise 1 + the largest depth
    among its dependencies. ``order`` must list dependencies first.

    Raises:
        GraphInvariantError: If a dependency shows up after its dependent
    """
    depth: dict[int, int] = {}
    max_depth = 0

    for node in order:
        node_depth = 0
        for dep in edges.get(node, ()):
            if dep not in depth:
                raise GraphInvariantError(
                    "topological-order",
                    "dependency has no depth yet when its dependent is layered",
                    subject=f"{node} -> {dep}",
                )
            node_depth = max(node_depth, depth[dep] + 1)
        depth[node] = node_depth
        max_depth = max(max_depth, node_depth)

    layers: dict[int, list[int]] = {}
    for node in order:
        layers.setdefault(depth[node], []).append(node)

    return Layering(
        order=list(order),
        depth=depth,
        layers={d: layers[d] for d in sorted(layers)},
        max_depth=max_depth,
    )
