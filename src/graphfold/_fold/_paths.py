"""Walk enumeration between two vertices."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._engine import fold, require_vertex

if TYPE_CHECKING:
    from collections.abc import Hashable

    from graphfold._graph import AdjacencySource

    from ._engine import Walk


def find_all_paths[V: Hashable](graph: AdjacencySource[V], source: V, target: V) -> set[Walk[V]]:
    """Find every walk from source that steps onto target.

    The search follows the same cycle rules as fold, so each loop is
    walked at most once per branch. A walk is recorded each time the fold
    steps onto target, provided it has taken at least one edge.

    Only a self-loop on source is ever stepped, since every other vertex
    is an ancestor of itself once reached. That step does not grow the
    walk, but it yields ``(source, source)`` when source is also the target.

    Args:
        graph: The graph to search.
        source: First vertex of every walk.
        target: Last vertex of every walk.

    Returns:
        Walks as tuples of vertices.

    Raises:
        VertexNotFoundError: If source or target is not in graph.

    Example:
        >>> graph = AdjacencyGraph.from_edges([(1, 1), (1, 2), (2, 3), (2, 1)])
        >>> sorted(find_all_paths(graph, 1, 1))
        [(1, 1), (1, 2, 1)]

    """
    require_vertex(graph, target)
    paths: set[Walk[V]] = set()

    def step(walk: Walk[V], vertex: V) -> Walk[V]:
        extended = (*walk, vertex)
        if vertex == target and len(extended) > 1:
            paths.add(extended)
        # self-loop on source
        if walk and walk[-1] == vertex:
            return walk
        return extended

    fold(graph, source, (), step)
    return paths
