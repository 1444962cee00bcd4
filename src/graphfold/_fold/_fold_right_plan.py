"""Compiled fold-right plans: a post-order trace of combine steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._fold_right import aggregate

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

    from graphfold._graph import AdjacencySource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FoldRightInstruction[V: Hashable]:
    """One combine step of a fold-right.

    Attributes:
        child_refs: Identities of the instructions whose results are merged
            into the input of this step, in adjacency order. Each refers to an
            earlier instruction.
        vertex: The vertex combined at this step.
        identity: Identity of this step's result, unique within a plan.
        is_sink: True if vertex has no successors, in which case the step
            combines init rather than a merged set.

    """

    child_refs: tuple[int, ...]
    vertex: V
    identity: int
    is_sink: bool = False


@dataclass(frozen=True, slots=True)
class CompiledFoldRightPlan[V: Hashable]:
    """The combine steps of a fold-right from root, independent of any combiner.

    Attributes:
        root: The vertex the plan aggregates into.
        instructions: Steps in post-order; children precede their parents.
        result: Identity of the root's step.

    """

    root: V
    instructions: tuple[FoldRightInstruction[V], ...]
    result: int

    def replay[A](self, init: A, combine: Callable[[A | frozenset[A], V], A]) -> A:
        """Execute the recorded steps with a real combiner.

        Produces the same value as ``fold_right(graph, root, init, combine)``
        with the same number of combine calls, without consulting the graph.

        Args:
            init: Value combined with every sink.
            combine: Called as combine(init, sink) or combine(frozenset(children), vertex).

        Returns:
            The value computed for root.

        """
        values: dict[int, A] = {}
        for instruction in self.instructions:
            if instruction.is_sink:
                values[instruction.identity] = combine(init, instruction.vertex)
            else:
                merged = frozenset(values[ref] for ref in instruction.child_refs)
                values[instruction.identity] = combine(merged, instruction.vertex)

        logger.debug("Replayed %d fold-right instructions of %r", len(self.instructions), self.root)
        return values[self.result]

    def __call__[A](self, init: A, combine: Callable[[A | frozenset[A], V], A]) -> A:
        """Alias for replay."""
        return self.replay(init, combine)


def compile_fold_right[V: Hashable](graph: AdjacencySource[V], root: V) -> CompiledFoldRightPlan[V]:
    """Run one reference fold-right from root and record its combine steps.

    Instead of real values the reference run passes around instruction
    identities. An identity is handed out per distinct (child identities,
    vertex) pair, so repeated structure is recorded once.

    Args:
        graph: The graph to traverse.
        root: Vertex to aggregate into.

    Returns:
        A plan whose replay(init, combine) equals fold_right(graph, root, init, combine).

    Raises:
        VertexNotFoundError: If root is not in graph.
        DepthLimitExceededError: If a walk exceeds the active depth limit.

    """
    instructions: list[FoldRightInstruction[V]] = []
    identities: dict[tuple[tuple[int, ...], V, bool], int] = {}

    def record(child_refs: tuple[int, ...], vertex: V, *, is_sink: bool) -> int:
        key = (child_refs, vertex, is_sink)
        identity = identities.get(key)
        if identity is None:
            identity = len(identities)
            identities[key] = identity
            instructions.append(FoldRightInstruction(child_refs, vertex, identity, is_sink=is_sink))
        return identity

    result = aggregate(
        graph,
        root,
        lambda vertex: record((), vertex, is_sink=True),
        lambda children, vertex: record(tuple(dict.fromkeys(children)), vertex, is_sink=False),
    )
    logger.debug("Compiled fold-right plan from %r: %d instructions", root, len(instructions))
    return CompiledFoldRightPlan(root=root, instructions=tuple(instructions), result=result)
