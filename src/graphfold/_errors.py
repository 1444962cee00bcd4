"""Exceptions raised by graphfold."""

from __future__ import annotations

from typing import Any


class GraphFoldError(Exception):
    """Base exception for graphfold."""


class VertexNotFoundError(GraphFoldError, KeyError):
    """Raised when a root, source or target vertex is absent from the graph."""

    def __init__(self, vertex: Any) -> None:
        self.vertex = vertex
        super().__init__(f"Vertex {vertex!r} not found in graph")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class DepthLimitExceededError(GraphFoldError):
    """Raised when a walk grows beyond the active depth limit."""

    def __init__(self, limit: int, walk: tuple[Any, ...]) -> None:
        self.limit = limit
        self.walk = walk
        super().__init__(f"Walk exceeded depth limit of {limit} vertices: {walk!r}")


class PlanFormatError(GraphFoldError):
    """Raised when a compiled plan cannot be exported or loaded."""


class ConfigError(GraphFoldError):
    """Error in graphfold configuration."""
