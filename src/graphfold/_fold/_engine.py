"""Depth-first path fold over the cycle-safe walks of a graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphfold._context import check_depth, get_depth_limit
from graphfold._errors import VertexNotFoundError

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

    from graphfold._graph import AdjacencySource

logger = logging.getLogger(__name__)

type Walk[V] = tuple[V, ...]


@dataclass(frozen=True, slots=True)
class BranchEnd[V, A]:
    """The last step of one depth-first branch.

    Attributes:
        walk: Vertices from the root to the end of the branch.
        value: Value accumulated along the walk.
        reaches_sink: True if the branch ended on a vertex without successors,
            False if it ended because every successor was already on the walk.

    """

    walk: Walk[V]
    value: A
    reaches_sink: bool


def require_vertex[V: Hashable](graph: AdjacencySource[V], vertex: V) -> None:
    """Raise VertexNotFoundError unless vertex belongs to graph."""
    if vertex not in graph:
        raise VertexNotFoundError(vertex)


def explore[V: Hashable, A](
    graph: AdjacencySource[V],
    root: V,
    init: A,
    combine: Callable[[A, V], A],
) -> list[BranchEnd[V, A]]:
    """Walk every cycle-safe branch from root, combining vertices on the way down.

    The root is combined with init first. Each successor that is not already
    an ancestor on the current branch is then combined with the value of its
    parent and descended into. The root itself is not treated as an ancestor,
    so a branch may come back to it once.

    Args:
        graph: The graph to traverse.
        root: Vertex the walks start from.
        init: Value combined with the root.
        combine: Called as combine(accum, vertex) for every step.

    Returns:
        The end of every branch, in depth-first order.

    Raises:
        VertexNotFoundError: If root is not in graph.
        DepthLimitExceededError: If a walk exceeds the active depth limit.

    """
    require_vertex(graph, root)
    limit = get_depth_limit()
    ends: list[BranchEnd[V, A]] = []

    def descend(vertex: V, accum: A, walk: Walk[V], ancestors: frozenset[V]) -> None:
        check_depth(limit, walk)
        targets = graph.adjacent_vertices(vertex)
        if not targets:
            ends.append(BranchEnd(walk, accum, reaches_sink=True))
            return

        descended = False
        for target in targets:
            if target in ancestors:
                continue
            descended = True
            descend(target, combine(accum, target), (*walk, target), ancestors | {target})

        if not descended:
            ends.append(BranchEnd(walk, accum, reaches_sink=False))

    descend(root, combine(init, root), (root,), frozenset())
    return ends


def fold[V: Hashable, A](
    graph: AdjacencySource[V],
    root: V,
    init: A,
    combine: Callable[[A, V], A],
) -> set[A]:
    """Fold combine along every walk from root that ends on a sink.

    Works on both cyclic and acyclic graphs: a branch never revisits one of
    its own ancestors, and a branch that runs out of non-ancestor successors
    before reaching a sink contributes nothing.

    Args:
        graph: The graph to traverse.
        root: Vertex the walks start from.
        init: Value combined with the root.
        combine: Called as combine(accum, vertex); must return a hashable value.

    Returns:
        The set of values accumulated along each sink-terminated walk.

    Example:
        >>> graph = AdjacencyGraph.from_edges([(1, 2), (2, 3), (2, 4), (4, 5), (6, 4), (1, 6)])
        >>> sorted(fold(graph, 1, 0, lambda total, v: total + v))
        [6, 12, 16]

    """
    ends = explore(graph, root, init, combine)
    results = {end.value for end in ends if end.reaches_sink}
    logger.debug("Folded %d branches from %r into %d results", len(ends), root, len(results))
    return results
