"""Lazy, create-once management of the aggregate test targets."""

from .constants import BUILD_ALL_TESTS, RUN_ALL_TESTS
from .errors import DuplicateTargetError
from .models import Target, TargetKind
from .registry import TargetRegistry


class AggregateTargetManager:
    """Guarantees each aggregate exists exactly once in a registry.

    Tests may register in any order, so the first caller creates an
    aggregate and every later caller gets the same Target back.
    """

    def __init__(self, registry: TargetRegistry):
        self.registry = registry

    def ensure_aggregate(self, name: str) -> Target:
        """
        Return the aggregate target ``name``, creating it on first use.

        Raises:
            DuplicateTargetError: If a non-aggregate target holds the name
        """
        if self.registry.exists(name):
            target = self.registry.get(name)
            if target.kind != TargetKind.AGGREGATE:
                raise DuplicateTargetError(
                    f"Target {name} exists but is a {target.kind.value}, not an aggregate"
                )
            return target
        return self.registry.create(name, TargetKind.AGGREGATE)

    def build_all(self) -> Target:
        return self.ensure_aggregate(BUILD_ALL_TESTS)

    def run_all(self) -> Target:
        return self.ensure_aggregate(RUN_ALL_TESTS)

    def members(self, name: str) -> list[str]:
        """Sorted direct dependencies of an aggregate (empty if not created yet)."""
        if not self.registry.exists(name):
            return []
        return sorted(self.registry.dependencies_of(name))
