"""
Struct embedding graph.

Edges run from a struct to the types it embeds anonymously. Promoted methods
are found by walking this graph breadth-first from the requested struct.
"""

from collections import deque
from typing import Dict, Iterator, List, Mapping


class EmbeddingGraph:
    """
    Adjacency lists keyed by struct name.

    Edges accumulate on merge; only the derived closure is deduplicated.
    The graph may contain cycles (mutual or self embedding).
    """

    def __init__(self, edges: Mapping[str, List[str]] = None):
        self._edges: Dict[str, List[str]] = {}
        for parent, children in (edges or {}).items():
            self._edges[parent] = list(children)

    def add_node(self, parent: str) -> None:
        """Registers a struct even if it embeds nothing."""
        self._edges.setdefault(parent, [])

    def add_edge(self, parent: str, embedded: str) -> None:
        self._edges.setdefault(parent, []).append(embedded)

    def merge(self, other: "EmbeddingGraph") -> None:
        """Appends every edge of another graph to this one."""
        for parent, children in other.items():
            self._edges.setdefault(parent, []).extend(children)

    def embedded(self, parent: str) -> List[str]:
        """Embedded type names of a struct, in declaration order."""
        return list(self._edges.get(parent, []))

    def closure(self, start: str) -> List[str]:
        """
        All type names reachable from `start` through embedding.

        Breadth-first, so nearer types come first; each name appears once.
        The start type itself is only included when a cycle leads back to it.
        """
        seen: Dict[str, None] = {}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for embedded in self._edges.get(current, []):
                if embedded in seen:
                    continue
                seen[embedded] = None
                queue.append(embedded)

        return list(seen)

    def items(self) -> Iterator:
        return iter(self._edges.items())

    def __contains__(self, parent: str) -> bool:
        return parent in self._edges

    def __getitem__(self, parent: str) -> List[str]:
        return self._edges[parent]

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other) -> bool:
        if isinstance(other, EmbeddingGraph):
            return self._edges == other._edges
        if isinstance(other, dict):
            return self._edges == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"EmbeddingGraph({self._edges!r})"
