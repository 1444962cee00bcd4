"""Ordered adjacency-list graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable, Mapping


@dataclass(frozen=True, slots=True)
class AdjacencyGraph[V: Hashable]:
    """An immutable directed graph storing ordered successor lists.

    It is generic over the vertex type V (e.g., int, str, tuple) and
    satisfies the AdjacencySource protocol. Cycles and self-loops are allowed.

    Attributes:
        _successors: Mapping from vertex to its direct successors, in edge
            insertion order. Every vertex of the graph is a key.

    """

    _successors: dict[V, tuple[V, ...]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[V, V]]) -> AdjacencyGraph[V]:
        """Build a graph from (source, target) edges.

        Successors keep the order in which their edges appear. Repeated
        edges are collapsed into one.

        Args:
            edges: Iterable of (source, target) tuples.

        Returns:
            A new AdjacencyGraph instance.

        Example:
            >>> graph = AdjacencyGraph.from_edges([(1, 2), (1, 3), (3, 1)])
            >>> graph.adjacent_vertices(1)
            (2, 3)

        """
        successors: dict[V, dict[V, None]] = {}

        for src, dst in edges:
            successors.setdefault(src, {})[dst] = None
            # Ensure both vertices exist in the graph
            successors.setdefault(dst, {})

        return cls(_successors={k: tuple(v) for k, v in successors.items()})

    @classmethod
    def from_mapping(cls, adjacency: Mapping[V, Iterable[V]]) -> AdjacencyGraph[V]:
        """Build a graph from a mapping of vertex to successors.

        Vertices that only appear as successors are added as sinks.

        Example:
            >>> graph = AdjacencyGraph.from_mapping({"a": ["b"], "c": []})
            >>> sorted(graph.nodes)
            ['a', 'b', 'c']

        """
        successors: dict[V, dict[V, None]] = {}

        for src, dsts in adjacency.items():
            targets = successors.setdefault(src, {})
            for dst in dsts:
                targets[dst] = None
                successors.setdefault(dst, {})

        return cls(_successors={k: tuple(v) for k, v in successors.items()})

    @property
    def nodes(self) -> frozenset[V]:
        """All vertices in the graph."""
        return frozenset(self._successors)

    def adjacent_vertices(self, vertex: V) -> tuple[V, ...]:
        """Get the direct successors of a vertex.

        Args:
            vertex: The vertex to query.

        Returns:
            Successors in edge insertion order. Empty for sinks and for
            vertices that are not in the graph.

        """
        return self._successors.get(vertex, ())

    def sinks(self) -> frozenset[V]:
        """Get vertices with no outgoing edges."""
        return frozenset(v for v, succ in self._successors.items() if not succ)

    def __len__(self) -> int:
        """Return the number of vertices in the graph."""
        return len(self._successors)

    def __contains__(self, vertex: object) -> bool:
        """Check if a vertex is in the graph."""
        return vertex in self._successors
