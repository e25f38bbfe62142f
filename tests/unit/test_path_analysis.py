"""
tests/unit/test_path_analysis.py

Unit tests for graphmapper.analysis.paths.find_paths.

Coverage
--------
  - single chain 1→2→3 gives exactly one path with node/edge lists
  - identical source and target skipped → zero result
  - empty source or target lists → zero result
  - unknown source / target skipped and counted, no exception
  - diamond graph enumerates both branches
  - cycles terminate and every path is simple
  - max_length bounds node count (boundary values)
  - paths end at the target and never extend past it
  - multiple source/target pairs accumulate
  - max_paths budget truncates enumeration
  - path metadata carries length and hops
  - long chain beyond the default recursion depth
"""
from __future__ import annotations

import itertools

from graphmapper.analysis.paths import find_paths
from graphmapper.models.graph import Dataset, Entity, Relationship


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _dataset(nodes: list[str], edges: list[tuple[str, str]]) -> Dataset:
    return Dataset.of(
        [Entity(id=n, type="node", label=n) for n in nodes],
        [Relationship(id=f"{s}->{t}", source=s, target=t, type="link") for s, t in edges],
    )


def _chain() -> Dataset:
    return _dataset(["1", "2", "3"], [("1", "2"), ("2", "3")])


def _diamond() -> Dataset:
    return _dataset(
        ["a", "b", "c", "d"],
        [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")],
    )


def _complete(n: int) -> Dataset:
    nodes = [str(i) for i in range(n)]
    edges = [(s, t) for s, t in itertools.permutations(nodes, 2)]
    return _dataset(nodes, edges)


# ---------------------------------------------------------------------------
# Basic scenarios
# ---------------------------------------------------------------------------

class TestFindPathsBasics:
    def test_single_chain(self) -> None:
        result = find_paths(_chain(), ["1"], ["3"], 10)

        assert len(result.paths) == 1
        path = result.paths[0]
        assert path.nodes == ["1", "2", "3"]
        assert path.edges == ["1->2", "2->3"]
        assert result.metrics.total_paths == 1
        assert result.metrics.shortest_path_length == 3
        assert result.metrics.longest_path_length == 3

    def test_identical_source_and_target(self) -> None:
        result = find_paths(_chain(), ["1"], ["1"], 10)

        assert result.paths == []
        assert result.metrics.total_paths == 0
        assert result.metrics.shortest_path_length == 0
        assert result.metrics.longest_path_length == 0

    def test_empty_inputs(self) -> None:
        assert find_paths(_chain(), [], ["3"]).metrics.total_paths == 0
        assert find_paths(_chain(), ["1"], []).metrics.total_paths == 0

    def test_unknown_endpoints_skipped(self) -> None:
        result = find_paths(_chain(), ["missing", "1"], ["3", "nowhere"], 10)

        assert [p.nodes for p in result.paths] == [["1", "2", "3"]]
        # (missing, 3), (missing, nowhere), (1, nowhere)
        assert result.skipped_pairs == 3

    def test_no_route_against_edge_direction(self) -> None:
        result = find_paths(_chain(), ["3"], ["1"], 10)
        assert result.paths == []
        assert result.skipped_pairs == 0

    def test_path_metadata(self) -> None:
        path = find_paths(_chain(), ["1"], ["3"]).paths[0]
        assert path.metadata == {"length": 3, "hops": 2}


# ---------------------------------------------------------------------------
# Enumeration semantics
# ---------------------------------------------------------------------------

class TestFindPathsEnumeration:
    def test_diamond_both_branches(self) -> None:
        result = find_paths(_diamond(), ["a"], ["d"], 10)
        assert [p.nodes for p in result.paths] == [["a", "b", "d"], ["a", "c", "d"]]

    def test_cycle_terminates_with_simple_paths(self) -> None:
        dataset = _dataset(
            ["a", "b", "c", "d"],
            [("a", "b"), ("b", "c"), ("c", "a"), ("c", "d"), ("b", "a")],
        )

        result = find_paths(dataset, ["a"], ["d"], 10)

        assert [p.nodes for p in result.paths] == [["a", "b", "c", "d"]]

    def test_every_path_is_simple_in_complete_graph(self) -> None:
        result = find_paths(_complete(5), ["0"], ["4"], 10)

        # 0→4 directly, or through any ordered subset of {1, 2, 3}.
        assert result.metrics.total_paths == 1 + 3 + 6 + 6
        for path in result.paths:
            assert len(set(path.nodes)) == len(path.nodes)
            assert len(path.edges) == len(path.nodes) - 1
            assert path.nodes[0] == "0"
            assert path.nodes[-1] == "4"
        assert result.metrics.shortest_path_length == 2
        assert result.metrics.longest_path_length == 5

    def test_path_does_not_extend_past_target(self) -> None:
        dataset = _dataset(["a", "b", "c"], [("a", "b"), ("b", "c"), ("c", "b")])
        result = find_paths(dataset, ["a"], ["b"], 10)
        assert [p.nodes for p in result.paths] == [["a", "b"]]

    def test_multiple_pairs_accumulate(self) -> None:
        result = find_paths(_diamond(), ["a", "b"], ["d"], 10)
        assert [p.nodes for p in result.paths] == [
            ["a", "b", "d"],
            ["a", "c", "d"],
            ["b", "d"],
        ]
        assert result.metrics.shortest_path_length == 2
        assert result.metrics.longest_path_length == 3


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------

class TestFindPathsBounds:
    def test_max_length_is_node_count(self) -> None:
        assert find_paths(_chain(), ["1"], ["3"], 3).metrics.total_paths == 1
        assert find_paths(_chain(), ["1"], ["3"], 2).metrics.total_paths == 0

    def test_max_length_one_finds_nothing(self) -> None:
        assert find_paths(_chain(), ["1"], ["2"], 1).metrics.total_paths == 0

    def test_max_length_two_finds_direct_edges(self) -> None:
        assert [p.nodes for p in find_paths(_chain(), ["1"], ["2"], 2).paths] == [["1", "2"]]

    def test_length_bound_holds_for_all_paths(self) -> None:
        for bound in range(1, 7):
            result = find_paths(_complete(6), ["0"], ["5"], bound)
            assert all(len(p.nodes) <= bound for p in result.paths)

    def test_max_paths_budget_truncates(self) -> None:
        result = find_paths(_complete(6), ["0"], ["5"], 10, max_paths=4)
        assert result.truncated is True
        assert result.metrics.total_paths == 4

    def test_budget_not_hit(self) -> None:
        result = find_paths(_diamond(), ["a"], ["d"], 10, max_paths=100)
        assert result.truncated is False
        assert result.metrics.total_paths == 2

    def test_long_chain_without_recursion(self) -> None:
        size = 5000
        nodes = [f"n{i}" for i in range(size)]
        edges = [(nodes[i], nodes[i + 1]) for i in range(size - 1)]

        result = find_paths(_dataset(nodes, edges), ["n0"], [nodes[-1]], size)

        assert result.metrics.total_paths == 1
        assert result.metrics.longest_path_length == size
