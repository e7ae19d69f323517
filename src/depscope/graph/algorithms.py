"""Graph algorithms: SCC detection, condensation, transitive reduction."""

from collections import deque
from typing import Iterable, Mapping

from ..exceptions import GraphInvariantError
from .models import Component, Condensation


def tarjan_scc(adjacency: Mapping[str, Iterable[str]]) -> list[list[str]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Roots are tried in mapping order and neighbors in sorted order, so the
    result is deterministic for a given adjacency. Components come out in
    finish order, each listing its members in the order they were popped
    off the Tarjan stack. This is exactly what the textbook recursive
    formulation produces; the explicit call stack only avoids Python's
    recursion limit on deep include chains.

    A neighbor that is not itself a key is treated as a module with no
    dependencies.
    """
    counter = 0
    scc_stack: list[str] = []
    on_stack: set[str] = set()
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    result: list[list[str]] = []

    def neighbors_of(node: str) -> list[str]:
        return sorted(adjacency.get(node, ()))

    for root in adjacency:
        if root in index:
            continue

        # Explicit call stack: each frame is (node, neighbor_iterator)
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        call_stack = [(root, iter(neighbors_of(root)))]

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    # "Recurse" into w
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    call_stack.append((w, iter(neighbors_of(w))))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if pushed:
                continue

            # All neighbors processed, "return" from v
            call_stack.pop()
            if call_stack:
                caller = call_stack[-1][0]
                lowlink[caller] = min(lowlink[caller], lowlink[v])

            if lowlink[v] == index[v]:
                component: list[str] = []
                while True:
                    w = scc_stack.pop()
                    on_stack.discard(w)
                    component.append(w)
                    if w == v:
                        break
                result.append(component)

    return result


def condense(adjacency: Mapping[str, Iterable[str]]) -> Condensation:
    """Collapse the module graph into its component graph.

    Component indices follow Tarjan finish order. Every module edge u -> v
    whose endpoints fall in different components becomes a component edge;
    edges inside a component disappear.
    """
    components = [
        Component(index=i, members=tuple(members))
        for i, members in enumerate(tarjan_scc(adjacency))
    ]

    module_to_component: dict[str, int] = {}
    for component in components:
        for module in component.members:
            module_to_component[module] = component.index

    edges: dict[int, set[int]] = {c.index: set() for c in components}
    for module, deps in adjacency.items():
        source = _component_of(module, module_to_component)
        for dep in deps:
            target = _component_of(dep, module_to_component)
            if source != target:
                edges[source].add(target)

    return Condensation(
        components=components,
        module_to_component=module_to_component,
        edges=edges,
    )


def _component_of(module: str, module_to_component: Mapping[str, int]) -> int:
    try:
        return module_to_component[module]
    except KeyError:
        raise GraphInvariantError(
            "partition",
            "module was not assigned to any component",
            subject=module,
        ) from None


def collect_reachable(edges: Mapping[int, Iterable[int]], starts: Iterable[int]) -> set[int]:
    """All nodes reachable from ``starts`` by one or more edges.

    A start node is only included if some path leads back to it.
    """
    reachable: set[int] = set()
    queue: deque[int] = deque()
    for start in starts:
        queue.extend(edges.get(start, ()))
    while queue:
        node = queue.popleft()
        if node in reachable:
            continue
        reachable.add(node)
        queue.extend(n for n in edges.get(node, ()) if n not in reachable)
    return reachable


def transitive_reduction(edges: Mapping[int, Iterable[int]]) -> dict[int, set[int]]:
    """Drop every edge A -> C where C is also reachable through another dependency of A.

    Reachability is always evaluated on ``edges`` as given, never on the
    partially reduced result, so the outcome does not depend on iteration
    order. The input is not modified. Running this on its own output
    changes nothing.

    For example ``{A: {B, C}, B: {C}}`` becomes ``{A: {B}, B: {C}}``.
    """
    reduced: dict[int, set[int]] = {}
    for node, deps in edges.items():
        direct = set(deps)
        implied = collect_reachable(edges, direct)
        implied.discard(node)
        reduced[node] = direct - implied
    return reduced
