"""Compiled fold plans: discover walks once, replay them with any combiner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._engine import explore

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

    from graphfold._graph import AdjacencySource

    from ._engine import Walk

logger = logging.getLogger(__name__)


def _append[V](walk: Walk[V], vertex: V) -> Walk[V]:
    return (*walk, vertex)


@dataclass(frozen=True, slots=True)
class CompiledFoldPlan[V: Hashable]:
    """Every branch a fold from root explores, independent of any combiner.

    The plan does not reference the graph. It is immutable, so replay may run
    concurrently from several threads.

    Attributes:
        root: The vertex the walks start from.
        branches: (walk, reaches_sink) for every depth-first branch, in the
            order the traversal ended them. Branches that stop short of a sink
            are kept so that replay invokes the combiner exactly as often, and
            in the same order, as a direct fold.

    """

    root: V
    branches: tuple[tuple[Walk[V], bool], ...]

    @property
    def walks(self) -> frozenset[Walk[V]]:
        """Walks that end on a sink, i.e. the walks a fold yields results for."""
        return frozenset(walk for walk, reaches_sink in self.branches if reaches_sink)

    @property
    def dead_ends(self) -> frozenset[Walk[V]]:
        """Branches cut off because every successor was already an ancestor."""
        return frozenset(walk for walk, reaches_sink in self.branches if not reaches_sink)

    def replay[A](self, init: A, combine: Callable[[A, V], A]) -> set[A]:
        """Fold combine along the recorded walks.

        Produces the same result as ``fold(graph, root, init, combine)``.
        Walks sharing a prefix share its accumulated value, so combine runs
        once per distinct prefix.

        Args:
            init: Value combined with the root.
            combine: Called as combine(accum, vertex); must return a hashable value.

        Returns:
            The set of values accumulated along each sink-terminated walk.

        """
        # (prefix id, next vertex) -> (extended prefix id, accumulated value); prefix id 0 is the empty walk
        prefixes: dict[tuple[int, V], tuple[int, A]] = {}
        results: set[A] = set()

        for walk, reaches_sink in self.branches:
            prefix_id, value = 0, init
            for vertex in walk:
                key = (prefix_id, vertex)
                cached = prefixes.get(key)
                if cached is None:
                    cached = (len(prefixes) + 1, combine(value, vertex))
                    prefixes[key] = cached
                prefix_id, value = cached
            if reaches_sink:
                results.add(value)

        logger.debug("Replayed %d branches of %r with %d combine calls", len(self.branches), self.root, len(prefixes))
        return results

    def __call__[A](self, init: A, combine: Callable[[A, V], A]) -> set[A]:
        """Alias for replay."""
        return self.replay(init, combine)


def compile_fold[V: Hashable](graph: AdjacencySource[V], root: V) -> CompiledFoldPlan[V]:
    """Traverse the graph once and record every walk a fold from root explores.

    Args:
        graph: The graph to traverse.
        root: Vertex the walks start from.

    Returns:
        A plan whose replay(init, combine) equals fold(graph, root, init, combine).

    Raises:
        VertexNotFoundError: If root is not in graph.
        DepthLimitExceededError: If a walk exceeds the active depth limit.

    Example:
        >>> plan = compile_fold(graph, 1)
        >>> plan.replay((), lambda walk, v: (*walk, v)) == plan.walks
        True

    """
    ends = explore(graph, root, (), _append)
    plan = CompiledFoldPlan(root=root, branches=tuple((end.value, end.reaches_sink) for end in ends))
    logger.debug("Compiled fold plan from %r: %d walks, %d dead ends", root, len(plan.walks), len(plan.dead_ends))
    return plan
