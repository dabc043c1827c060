"""Tests for the ordering module."""

import pytest

from testagg.ordering import build_order, compute_sccs, reachable


class TestComputeSCCs:
    """Tests for SCC computation."""

    def test_empty_graph(self):
        """Empty graph should return empty SCCs."""
        assert compute_sccs({}) == []

    def test_single_node(self):
        """Single node should be its own SCC."""
        assert compute_sccs({"a": []}) == [["a"]]

    def test_chain(self):
        """Linear chain should have each target as its own SCC."""
        # a -> b -> c
        sccs = compute_sccs({"a": ["b"], "b": ["c"], "c": []})

        assert len(sccs) == 3
        assert all(len(scc) == 1 for scc in sccs)

    def test_cycle(self):
        """A cycle collapses into one SCC."""
        sccs = compute_sccs({"a": ["b"], "b": ["c"], "c": ["a"]})

        assert len(sccs) == 1
        assert set(sccs[0]) == {"a", "b", "c"}

    def test_dependency_only_nodes(self):
        """Targets that appear only as dependencies are included."""
        sccs = compute_sccs({"a": ["b"]})
        assert {n for scc in sccs for n in scc} == {"a", "b"}


class TestReachable:
    """Tests for reachability."""

    def test_includes_root(self):
        assert reachable({"a": ["b"], "b": []}, ["a"]) == {"a", "b"}

    def test_ignores_unrelated(self):
        graph = {"a": ["b"], "b": [], "c": ["b"]}
        assert reachable(graph, ["a"]) == {"a", "b"}


class TestBuildOrder:
    """Tests for dependency-first ordering."""

    def test_chain_dependencies_first(self):
        """Dependencies come before their dependents."""
        order = build_order({"a": ["b"], "b": ["c"], "c": []})
        assert order.index("c") < order.index("b") < order.index("a")

    def test_diamond(self):
        """Diamond pattern should have correct ordering."""
        #     a
        #    / \
        #   b   c
        #    \ /
        #     d
        order = build_order({"a": ["b", "c"], "b": ["d"], "c": ["d"], "d": []})

        assert order[0] == "d"
        assert order[-1] == "a"

    def test_restricted_to_roots(self):
        """Only what the root needs is included."""
        graph = {"all": ["x"], "x": [], "other": ["y"], "y": []}
        assert build_order(graph, ["all"]) == ["x", "all"]

    def test_cycle_rejected(self):
        with pytest.raises(ValueError, match="cycle"):
            build_order({"a": ["b"], "b": ["a"]})

    def test_self_loop_rejected(self):
        with pytest.raises(ValueError, match="cycle"):
            build_order({"a": ["a"]})
