"""Bottom-up fold from the sinks of the reachable subgraph back to its root."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from graphfold._context import check_depth, get_depth_limit

from ._engine import require_vertex

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

    from graphfold._graph import AdjacencySource

    from ._engine import Walk

logger = logging.getLogger(__name__)


def aggregate[V: Hashable, R](
    graph: AdjacencySource[V],
    root: V,
    leaf_step: Callable[[V], R],
    node_step: Callable[[list[R], V], R],
) -> R:
    """Compute one value per reachable vertex, children before parents.

    A vertex without successors gets leaf_step(vertex). Any other vertex gets
    node_step(children, vertex), where children holds the values of its
    successors that are not ancestors on the current branch, in adjacency
    order. That list is empty when every successor is an ancestor.

    Values are cached by vertex for the whole traversal: the first branch to
    finish a vertex decides its value, and later branches reuse it even when
    they reach the vertex with different ancestors.

    Raises:
        VertexNotFoundError: If root is not in graph.
        DepthLimitExceededError: If a walk exceeds the active depth limit.

    """
    require_vertex(graph, root)
    limit = get_depth_limit()
    vcache: dict[V, R] = {}

    def visit(vertex: V, walk: Walk[V], ancestors: frozenset[V]) -> R:
        if vertex in vcache:
            return vcache[vertex]
        check_depth(limit, walk)

        targets = graph.adjacent_vertices(vertex)
        if not targets:
            result = leaf_step(vertex)
        else:
            inner = ancestors | {vertex}
            children = [visit(target, (*walk, target), inner) for target in targets if target not in ancestors]
            result = node_step(children, vertex)

        vcache[vertex] = result
        return result

    result = visit(root, (root,), frozenset())
    logger.debug("Aggregated %d vertices reachable from %r", len(vcache), root)
    return result


def fold_right[V: Hashable, A](
    graph: AdjacencySource[V],
    root: V,
    init: A,
    combine: Callable[[A | frozenset[A], V], A],
) -> A:
    """Fold the reachable subgraph bottom-up into a single value.

    Sinks are combined with init. Every other vertex is combined with the
    frozenset of its children's results; duplicates among them collapse.
    The combiner therefore has to accept both shapes. A vertex whose
    successors are all ancestors receives an empty frozenset, not init.

    Args:
        graph: The graph to traverse.
        root: Vertex to aggregate into.
        init: Value combined with every sink.
        combine: Called as combine(init, sink) or combine(frozenset(children), vertex).
            Its results must be hashable.

    Returns:
        The value computed for root.

    Example:
        >>> def add(accum, v):
        ...     return (sum(accum) if isinstance(accum, frozenset) else accum) + v
        >>> graph = AdjacencyGraph.from_edges([(1, 2), (2, 3), (2, 4), (4, 5), (6, 4), (1, 6)])
        >>> fold_right(graph, 1, 0, add)
        30

    """
    return aggregate(
        graph,
        root,
        lambda vertex: combine(init, vertex),
        lambda children, vertex: combine(frozenset(children), vertex),
    )
