"""Tests for the configuration module."""

from pathlib import Path

import pytest

from graphfold import (
    AdjacencyGraph,
    ConfigError,
    DepthLimitExceededError,
    GraphFoldConfig,
    configured,
    fold,
    get_depth_limit,
    load_config,
)
from graphfold._config import find_pyproject_toml, get_config


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        result = find_pyproject_toml(tmp_path)

        assert result == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        result = find_pyproject_toml(subdir)

        assert result == pyproject


class TestLoadConfig:
    """Tests for loading [tool.graphfold]."""

    def test_max_depth(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.graphfold]
max_depth = 64
""",
        )

        config = load_config(pyproject)

        assert config == GraphFoldConfig(max_depth=64, project_root=tmp_path)

    def test_no_section_returns_empty_config(self, tmp_path: Path) -> None:
        """Should return config without limits when [tool.graphfold] is missing."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config.max_depth is None
        assert config.project_root == tmp_path

    @pytest.mark.parametrize("value", ["0", "-3", "true", "'deep'", "2.5"])
    def test_invalid_max_depth_raises_error(self, tmp_path: Path, value: str) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f"[tool.graphfold]\nmax_depth = {value}\n")

        with pytest.raises(ConfigError, match="max_depth"):
            load_config(pyproject)

    def test_unknown_key_raises_error(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.graphfold]\nmax_dept = 3\n")

        with pytest.raises(ConfigError, match="Unknown .* keys: max_dept"):
            load_config(pyproject)

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for malformed TOML."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.graphfold\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)

    def test_get_config_searches_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.graphfold]\nmax_depth = 7\n")
        subdir = tmp_path / "nested"
        subdir.mkdir()
        monkeypatch.chdir(subdir)

        assert get_config().max_depth == 7


class TestConfigured:
    """Tests for applying a configuration."""

    def test_applies_depth_limit(self) -> None:
        with configured(GraphFoldConfig(max_depth=12)) as config:
            assert config.max_depth == 12
            assert get_depth_limit() == 12
        assert get_depth_limit() is None

    def test_loads_config_when_none_given(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.graphfold]\nmax_depth = 5\n")
        monkeypatch.chdir(tmp_path)

        with configured():
            assert get_depth_limit() == 5

    def test_pyproject_limit_applies_only_inside_configured(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.graphfold]\nmax_depth = 3\n")
        monkeypatch.chdir(tmp_path)
        graph = AdjacencyGraph.from_edges([(1, 2), (2, 3), (2, 4), (4, 5), (6, 4), (1, 6)])

        assert fold(graph, 1, 0, lambda total, v: total + v) == {6, 12, 16}
        with configured(), pytest.raises(DepthLimitExceededError):
            fold(graph, 1, 0, lambda total, v: total + v)
