"""Tests for compiled fold plans."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from graphfold import (
    AdjacencyGraph,
    CompiledFoldPlan,
    DepthLimitExceededError,
    VertexNotFoundError,
    compile_fold,
    depth_limit,
    fold,
)


def append(walk: tuple, vertex: int) -> tuple:
    return (*walk, vertex)


class CountingCombiner:
    """Sums vertices and records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def __call__(self, total: int, vertex: int) -> int:
        self.calls.append((total, vertex))
        return total + vertex


GRAPHS = {
    "dag": AdjacencyGraph.from_edges([(1, 2), (2, 3), (2, 4), (4, 5), (6, 4), (1, 6)]),
    "cycle_back_to_root": AdjacencyGraph.from_edges([(1, 2), (2, 3), (3, 4), (3, 1)]),
    "self_loops": AdjacencyGraph.from_edges([(1, 1), (1, 2), (2, 3), (2, 1)]),
    "dense_cycles": AdjacencyGraph.from_edges(
        [(1, 2), (2, 1), (2, 3), (3, 2), (3, 4), (1, 5), (5, 1), (5, 3), (4, 4)],
    ),
    "no_sink": AdjacencyGraph.from_edges([(1, 2), (2, 1)]),
}


@pytest.fixture
def dag() -> AdjacencyGraph[int]:
    return GRAPHS["dag"]


class TestCompileFold:
    """Tests for the recorded plan."""

    def test_walks(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        assert plan.root == 1
        assert plan.walks == frozenset({(1, 2, 3), (1, 2, 4, 5), (1, 6, 4, 5)})
        assert plan.dead_ends == frozenset()

    def test_branches_keep_traversal_order(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        assert plan.branches == (((1, 2, 3), True), ((1, 2, 4, 5), True), ((1, 6, 4, 5), True))

    def test_dead_ends_are_recorded(self) -> None:
        plan = compile_fold(GRAPHS["cycle_back_to_root"], 1)
        assert plan.walks == frozenset({(1, 2, 3, 4)})
        assert plan.dead_ends == frozenset({(1, 2, 3, 1)})

    def test_missing_root_raises(self, dag: AdjacencyGraph[int]) -> None:
        with pytest.raises(VertexNotFoundError):
            compile_fold(dag, 42)

    def test_depth_limit_aborts_compilation(self, dag: AdjacencyGraph[int]) -> None:
        with depth_limit(3), pytest.raises(DepthLimitExceededError) as exc_info:
            compile_fold(dag, 1)
        assert exc_info.value.limit == 3
        assert exc_info.value.walk == (1, 2, 4, 5)

    def test_plan_is_immutable(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        with pytest.raises(AttributeError):
            plan.root = 2  # type: ignore[misc]


class TestReplay:
    """Tests for CompiledFoldPlan.replay."""

    def test_replay_paths(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        assert plan.replay((), append) == {(1, 2, 3), (1, 2, 4, 5), (1, 6, 4, 5)}

    def test_replay_sums(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        assert plan.replay(0, lambda total, v: total + v) == {6, 12, 16}

    def test_plan_is_callable(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        assert plan(10, lambda total, v: total + v) == {16, 22, 26}

    def test_replay_does_not_touch_graph(self) -> None:
        class OneShotGraph:
            def __init__(self) -> None:
                self.queries = 0
                self._graph = GRAPHS["dag"]

            def adjacent_vertices(self, vertex: int) -> tuple[int, ...]:
                self.queries += 1
                return self._graph.adjacent_vertices(vertex)

            def __contains__(self, vertex: object) -> bool:
                return vertex in self._graph

        graph = OneShotGraph()
        plan = compile_fold(graph, 1)
        queries = graph.queries
        plan.replay(0, lambda total, v: total + v)
        assert graph.queries == queries

    def test_replay_is_idempotent(self, dag: AdjacencyGraph[int]) -> None:
        plan = compile_fold(dag, 1)
        assert plan.replay((), append) == plan.replay((), append)

    def test_manually_built_plan(self) -> None:
        plan = CompiledFoldPlan(root="a", branches=((("a", "b"), True), (("a", "c", "a"), False)))
        assert plan.replay("", lambda accum, v: accum + v) == {"ab"}

    @pytest.mark.parametrize("name", sorted(GRAPHS))
    def test_replay_matches_direct_fold(self, name: str) -> None:
        graph = GRAPHS[name]
        plan = compile_fold(graph, 1)
        assert plan.replay((), append) == fold(graph, 1, (), append)

    @pytest.mark.parametrize("name", sorted(GRAPHS))
    def test_combine_calls_match_direct_fold(self, name: str) -> None:
        graph = GRAPHS[name]
        direct = CountingCombiner()
        replayed = CountingCombiner()

        fold(graph, 1, 0, direct)
        compile_fold(graph, 1).replay(0, replayed)

        assert replayed.calls == direct.calls

    def test_shared_prefixes_are_combined_once(self, dag: AdjacencyGraph[int]) -> None:
        combiner = CountingCombiner()
        compile_fold(dag, 1).replay(0, combiner)
        # prefixes (1) and (1, 2) are shared between walks
        assert len(combiner.calls) == 8

    def test_combiner_exception_propagates(self, dag: AdjacencyGraph[int]) -> None:
        def failing(total: int, vertex: int) -> int:
            if vertex == 6:
                msg = "no sixes"
                raise RuntimeError(msg)
            return total + vertex

        with pytest.raises(RuntimeError, match="no sixes"):
            compile_fold(dag, 1).replay(0, failing)

    def test_concurrent_replay_on_shared_plan(self) -> None:
        plan = compile_fold(GRAPHS["dense_cycles"], 1)
        expected = plan.replay((), append)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: plan.replay((), append), range(32)))

        assert all(result == expected for result in results)
