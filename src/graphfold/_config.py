"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ._context import depth_limit
from ._errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterator

_KNOWN_KEYS = frozenset({"max_depth"})


@dataclass(slots=True, frozen=True)
class GraphFoldConfig:
    """Configuration loaded from the [tool.graphfold] table of pyproject.toml.

    Attributes:
        max_depth: Longest walk, in vertices, the fold operators may explore.
            None means no limit.
        project_root: Directory containing the pyproject.toml, if one was found.

    """

    max_depth: int | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def load_config(pyproject_path: Path) -> GraphFoldConfig:
    """Load and validate [tool.graphfold] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed GraphFoldConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("graphfold", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.graphfold] configuration: expected a table"
        raise ConfigError(msg)

    unknown = sorted(set(section) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown [tool.graphfold] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    max_depth: int | None = None
    if "max_depth" in section:
        value = section["max_depth"]
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            msg = f"Invalid [tool.graphfold].max_depth: expected a positive integer, got {value!r}"
            raise ConfigError(msg)
        max_depth = value

    return GraphFoldConfig(max_depth=max_depth, project_root=project_root)


def get_config() -> GraphFoldConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        GraphFoldConfig (may be empty if no pyproject.toml or no [tool.graphfold] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return GraphFoldConfig()
    return load_config(pyproject_path)


@contextmanager
def configured(config: GraphFoldConfig | None = None) -> Iterator[GraphFoldConfig]:
    """Apply a configuration to the fold operators for the duration of the block.

    Uses get_config() when no configuration is given.
    """
    if config is None:
        config = get_config()
    with depth_limit(config.max_depth):
        yield config
