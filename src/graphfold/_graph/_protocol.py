"""AdjacencySource protocol -- the only capability the fold engines need from a graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence


@runtime_checkable
class AdjacencySource[V: Hashable](Protocol):
    """Read-only view of a directed graph.

    Any graph type can be folded over as long as it satisfies this
    protocol; no subclassing is required.
    """

    def adjacent_vertices(self, vertex: V) -> Sequence[V]:
        """Return the direct successors of *vertex*, in a stable order.

        The sequence must not contain duplicates and must be the same every
        time the vertex is queried during one traversal. Its order decides
        the order in which walks are explored and combiners are invoked.
        """
        ...

    def __contains__(self, vertex: object) -> bool:
        """Check whether *vertex* belongs to the graph."""
        ...
