"""Graph module providing the adjacency abstraction folded over.

This module contains:
- AdjacencySource[V]: The protocol a graph must satisfy to be folded over
- AdjacencyGraph[V]: An immutable, ordered adjacency-list implementation
"""

from ._adjacency_graph import AdjacencyGraph
from ._protocol import AdjacencySource

__all__ = ["AdjacencyGraph", "AdjacencySource"]
