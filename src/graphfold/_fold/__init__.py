"""Fold engines for graph walks.

This module provides the traversal operators and their compiled forms:
- fold / compile_fold: Leftward fold along every walk from a root
- fold_right / compile_fold_right: Bottom-up aggregation into a root
- find_all_paths: Walks between two vertices
"""

from ._engine import Walk, fold
from ._fold_right import fold_right
from ._fold_right_plan import CompiledFoldRightPlan, FoldRightInstruction, compile_fold_right
from ._paths import find_all_paths
from ._plan import CompiledFoldPlan, compile_fold

__all__ = [
    "CompiledFoldPlan",
    "CompiledFoldRightPlan",
    "FoldRightInstruction",
    "Walk",
    "compile_fold",
    "compile_fold_right",
    "find_all_paths",
    "fold",
    "fold_right",
]
