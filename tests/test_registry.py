"""Tests for the target registry."""

import pytest

from testagg.errors import CycleError, DuplicateTargetError, UnknownTargetError
from testagg.models import TargetKind
from testagg.registry import TargetRegistry


@pytest.fixture
def registry():
    """Registry with a small chain: all -> wrap -> exe."""
    reg = TargetRegistry()
    reg.create("exe", TargetKind.EXECUTABLE)
    reg.create("wrap", TargetKind.RUN_WRAPPER)
    reg.create("all", TargetKind.AGGREGATE)
    reg.add_dependency("wrap", "exe")
    reg.add_dependency("all", "wrap")
    return reg


class TestCreate:
    """Tests for target creation and lookup."""

    def test_exists(self):
        reg = TargetRegistry()
        assert reg.exists("foo") is False
        reg.create("foo", TargetKind.EXECUTABLE)
        assert reg.exists("foo") is True
        assert "foo" in reg
        assert len(reg) == 1

    def test_create_returns_target(self):
        """Created target carries name, kind and extra attributes."""
        reg = TargetRegistry()
        target = reg.create("foo", TargetKind.EXECUTABLE, source="foo.cpp")

        assert target.name == "foo"
        assert target.kind == TargetKind.EXECUTABLE
        assert target.source == "foo.cpp"
        assert reg.get("foo") is target

    def test_kind_from_string(self):
        reg = TargetRegistry()
        assert reg.create("agg", "aggregate").kind == TargetKind.AGGREGATE

    def test_duplicate_rejected(self):
        """Names are unique across the registry, regardless of kind."""
        reg = TargetRegistry()
        reg.create("foo", TargetKind.EXECUTABLE)
        with pytest.raises(DuplicateTargetError, match="foo"):
            reg.create("foo", TargetKind.AGGREGATE)

    def test_get_unknown(self):
        with pytest.raises(UnknownTargetError):
            TargetRegistry().get("missing")

    def test_names_in_registration_order(self, registry):
        assert registry.names() == ["exe", "wrap", "all"]
        assert [t.name for t in registry] == ["exe", "wrap", "all"]


class TestAddDependency:
    """Tests for edge creation."""

    def test_unknown_endpoints(self, registry):
        """Both endpoints must exist."""
        with pytest.raises(UnknownTargetError, match="ghost"):
            registry.add_dependency("ghost", "exe")
        with pytest.raises(UnknownTargetError, match="ghost"):
            registry.add_dependency("exe", "ghost")

    def test_self_dependency(self, registry):
        with pytest.raises(CycleError):
            registry.add_dependency("exe", "exe")

    def test_transitive_cycle(self, registry):
        """exe -> all would close all -> wrap -> exe."""
        before = registry.snapshot()
        with pytest.raises(CycleError):
            registry.add_dependency("exe", "all")
        assert registry.snapshot() == before

    def test_duplicate_edge_is_noop(self, registry):
        registry.add_dependency("wrap", "exe")
        assert registry.dependencies_of("wrap") == {"exe"}

    def test_diamond_allowed(self, registry):
        """A second path to the same target is not a cycle."""
        registry.add_dependency("all", "exe")
        assert registry.dependencies_of("all") == {"wrap", "exe"}


class TestQueries:
    """Tests for graph queries."""

    def test_dependents_of(self, registry):
        assert registry.dependents_of("exe") == {"wrap"}
        assert registry.dependents_of("all") == set()

    def test_transitive_dependencies(self, registry):
        assert registry.transitive_dependencies("all") == {"wrap", "exe"}
        assert registry.transitive_dependencies("exe") == set()

    def test_depends_on(self, registry):
        assert registry.depends_on("all", "exe") is True
        assert registry.depends_on("exe", "all") is False

    def test_build_order(self, registry):
        assert registry.build_order("all") == ["exe", "wrap", "all"]

    def test_build_order_whole_graph(self, registry):
        registry.create("lonely", TargetKind.EXECUTABLE)
        order = registry.build_order()
        assert set(order) == {"exe", "wrap", "all", "lonely"}
        assert order.index("exe") < order.index("wrap") < order.index("all")

    def test_build_order_unknown_root(self, registry):
        with pytest.raises(UnknownTargetError):
            registry.build_order("nope")

    def test_snapshot_is_a_copy(self, registry):
        """Snapshots do not change when the registry does."""
        snap = registry.snapshot()
        registry.create("new", TargetKind.EXECUTABLE)
        registry.add_dependency("all", "new")
        assert "new" not in snap
        assert snap["all"] == ("aggregate", frozenset({"wrap"}))

    def test_to_dict(self, registry):
        d = registry.to_dict()
        names = [t["name"] for t in d["targets"]]
        assert names == ["exe", "wrap", "all"]
