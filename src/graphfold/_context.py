"""Context variables for graphfold.

This module contains context variables used across the library.
It is kept separate to avoid circular imports.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from ._errors import DepthLimitExceededError

if TYPE_CHECKING:
    from collections.abc import Iterator

# Maximum number of vertices a walk may hold before a traversal aborts.
# None means unbounded (only the interpreter's recursion limit applies).
_depth_limit_var: ContextVar[int | None] = ContextVar("depth_limit", default=None)


def get_depth_limit() -> int | None:
    """Get the current walk depth limit from context.

    Returns None if no limit is set.
    """
    return _depth_limit_var.get()


def set_depth_limit(max_depth: int | None) -> object:
    """Set the walk depth limit in context.

    Returns a token that can be used to reset the value.

    Raises:
        ValueError: If max_depth is not a positive integer or None.

    """
    if max_depth is not None and max_depth < 1:
        msg = f"max_depth must be a positive integer, got {max_depth}"
        raise ValueError(msg)
    return _depth_limit_var.set(max_depth)


def reset_depth_limit(token: object) -> None:
    """Reset the walk depth limit using a token from set_depth_limit."""
    _depth_limit_var.reset(token)  # type: ignore[arg-type]


@contextmanager
def depth_limit(max_depth: int | None) -> Iterator[None]:
    """Context manager bounding the length of walks explored by the fold operators.

    Example:
        with depth_limit(100):
            results = fold(graph, root, (), append)

    """
    token = set_depth_limit(max_depth)
    try:
        yield
    finally:
        reset_depth_limit(token)


def check_depth(limit: int | None, walk: tuple[object, ...]) -> None:
    """Raise DepthLimitExceededError if walk holds more vertices than limit allows."""
    if limit is not None and len(walk) > limit:
        raise DepthLimitExceededError(limit, walk)
