"""Mermaid flowchart rendering of the component graph.

Output shape::

    graph LR
        SCC_0_contains["SCC_0 contains:<br/><br/>a<br/>b<br/>"]
        SCC_0
        c
        SCC_0 --> c

Multi-module components are referenced as ``SCC_<index>`` and spelled out
in a companion ``_contains`` label node. Singletons use their module name
as the node id when Mermaid accepts it as one.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

if TYPE_CHECKING:
    from ..graph.models import Component

_BARE_ID = re.compile(r"^[A-Za-z0-9_]+$")
_NON_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")
# Shape of the ids generated for multi-module components
_CLUSTER_ID = re.compile(r"^SCC_\d+$")

# Words the flowchart parser treats as syntax when used as a bare node id
_RESERVED_IDS = frozenset(
    {"end", "graph", "flowchart", "subgraph", "style", "class", "classdef", "click",
     "linkstyle", "direction", "default"}
)

_INDENT = "    "


class MermaidRenderer:
    """Serializes components and their (reduced) edges into Mermaid text."""

    def __init__(
        self,
        components: Sequence[Component],
        edges: Mapping[int, Iterable[int]],
        direction: str = "LR",
    ):
        self.components = components
        self.edges = {node: sorted(deps) for node, deps in edges.items()}
        self.direction = direction.upper()
        self._ids = self._assign_ids()

    def render(self, keyword: str = "") -> str:
        """Render the whole graph, or only what is downstream of ``keyword`` matches.

        A component matches when ``keyword`` is a substring of its display
        name. An empty keyword matches everything and gives the full render.
        """
        if not keyword:
            return self.render_full()
        return self.render_keyword(keyword)

    def render_full(self) -> str:
        lines = [self._header()]
        for component in self.components:
            lines.extend(self._node_lines(component))

        for source in sorted(self.edges):
            for target in self.edges[source]:
                if source != target:
                    lines.append(self._edge_line(source, target))

        return _join(lines)

    def render_keyword(self, keyword: str) -> str:
        lines = [self._header()]
        visited: set[int] = set()

        for component in self.components:
            if keyword not in component.name or component.index in visited:
                continue

            visited.add(component.index)
            lines.extend(self._node_lines(component))
            call_stack = [(component.index, iter(self.edges.get(component.index, ())))]
            while call_stack:
                node, it = call_stack[-1]
                for dep in it:
                    if dep == node:
                        continue
                    lines.append(self._edge_line(node, dep))
                    if dep not in visited:
                        visited.add(dep)
                        lines.extend(self._node_lines(self.components[dep]))
                        call_stack.append((dep, iter(self.edges.get(dep, ()))))
                        break
                else:
                    call_stack.pop()

        return _join(lines)

    def node_id(self, index: int) -> str:
        return self._ids[index]

    def _assign_ids(self) -> list[str]:
        """One distinct Mermaid id per component.

        Cluster ids and usable bare names are claimed first. Every other
        singleton gets ``<sanitized name>_<index>``, suffixed further until
        it no longer clashes with an id already taken.
        """
        ids: dict[int, str] = {}
        for component in self.components:
            if component.is_cluster:
                ids[component.index] = f"SCC_{component.index}"
        taken = set(ids.values()) | {f"{node}_contains" for node in ids.values()}

        for component in self.components:
            name = component.name
            if component.is_cluster or not _is_bare_id(name) or name in taken:
                continue
            ids[component.index] = name
            taken.add(name)

        for component in self.components:
            if component.index in ids:
                continue
            candidate = f"{_NON_ID_CHARS.sub('_', component.name)}_{component.index}"
            while candidate in taken:
                candidate = f"{candidate}_{component.index}"
            ids[component.index] = candidate
            taken.add(candidate)

        return [ids[i] for i in range(len(self.components))]

    def _header(self) -> str:
        return f"graph {self.direction}"

    def _node_lines(self, component: Component) -> list[str]:
        node = self.node_id(component.index)
        if component.is_cluster:
            members = "".join(f"{_escape(m)}<br/>" for m in component.members)
            return [
                f'{_INDENT}{node}_contains["{node} contains:<br/><br/>{members}"]',
                f"{_INDENT}{node}",
            ]
        if node == component.name:
            return [f"{_INDENT}{node}"]
        return [f'{_INDENT}{node}["{_escape(component.name)}"]']

    def _edge_line(self, source: int, target: int) -> str:
        return f"{_INDENT}{self.node_id(source)} --> {self.node_id(target)}"


def _is_bare_id(name: str) -> bool:
    return (
        bool(_BARE_ID.match(name))
        and name.lower() not in _RESERVED_IDS
        and not _CLUSTER_ID.match(name)
    )


def _escape(text: str) -> str:
    return text.replace('"', "#quot;")


def _join(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"
