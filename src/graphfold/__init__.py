"""Cycle-safe folds over the walks of a directed graph."""

__all__ = [
    "AdjacencyGraph",
    "AdjacencySource",
    "CompiledFoldPlan",
    "CompiledFoldRightPlan",
    "ConfigError",
    "DepthLimitExceededError",
    "FoldRightInstruction",
    "GraphFoldConfig",
    "GraphFoldError",
    "PlanFormatError",
    "VertexNotFoundError",
    "Walk",
    "compile_fold",
    "compile_fold_right",
    "configured",
    "depth_limit",
    "export_plan_to_toml",
    "find_all_paths",
    "fold",
    "fold_right",
    "get_config",
    "get_depth_limit",
    "load_config",
    "load_plan_from_toml",
    "plan_from_dict",
    "plan_to_dict",
]

from ._config import GraphFoldConfig, configured, get_config, load_config
from ._context import depth_limit, get_depth_limit
from ._errors import ConfigError, DepthLimitExceededError, GraphFoldError, PlanFormatError, VertexNotFoundError
from ._fold import (
    CompiledFoldPlan,
    CompiledFoldRightPlan,
    FoldRightInstruction,
    Walk,
    compile_fold,
    compile_fold_right,
    find_all_paths,
    fold,
    fold_right,
)
from ._graph import AdjacencyGraph, AdjacencySource
from ._io import export_plan_to_toml, load_plan_from_toml, plan_from_dict, plan_to_dict
