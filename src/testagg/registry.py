"""Registry of build targets and their dependency edges."""

from collections.abc import Iterator
from typing import Any

from .errors import CycleError, DuplicateTargetError, UnknownTargetError
from .models import Target, TargetKind
from .ordering import build_order, reachable


class TargetRegistry:
    """Stores every target of a build session and the edges between them.

    Edges point from a target to the targets that must complete before it.
    The registry refuses duplicate names, dangling edges, and any edge that
    would close a cycle, so the graph it holds is always a DAG.
    """

    def __init__(self):
        self._targets: dict[str, Target] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(list(self._targets.values()))

    def exists(self, name: str) -> bool:
        """Check whether a target with this name was registered."""
        return name in self._targets

    def create(self, name: str, kind: TargetKind, **attrs: Any) -> Target:
        """
        Register a new target.

        Args:
            name: Unique target name
            kind: Kind of target
            **attrs: Extra Target fields (source, results_path, ...)

        Raises:
            DuplicateTargetError: If the name is already taken
        """
        if name in self._targets:
            raise DuplicateTargetError(f"Target already exists: {name}")
        target = Target(name=name, kind=TargetKind(kind), **attrs)
        self._targets[name] = target
        return target

    def get(self, name: str) -> Target:
        """Look up a target by name, raising UnknownTargetError if absent."""
        try:
            return self._targets[name]
        except KeyError:
            raise UnknownTargetError(f"Unknown target: {name}") from None

    def names(self) -> list[str]:
        """Target names in registration order."""
        return list(self._targets)

    def add_dependency(self, target: str, depends_on: str) -> None:
        """
        Make ``target`` depend on ``depends_on``.

        Raises:
            UnknownTargetError: If either endpoint is not registered
            CycleError: If the edge would make ``target`` depend on itself
        """
        for name in (target, depends_on):
            if name not in self._targets:
                raise UnknownTargetError(f"Unknown target: {name}")

        if target == depends_on:
            raise CycleError(f"Target cannot depend on itself: {target}")

        node = self._targets[target]
        if depends_on in node.dependencies:
            return

        # The new edge closes a cycle iff depends_on already reaches target
        if target in reachable(self.graph(), [depends_on]):
            raise CycleError(
                f"Edge {target} -> {depends_on} would create a dependency cycle"
            )

        node.dependencies.add(depends_on)

    def dependencies_of(self, name: str) -> set[str]:
        """Direct dependencies of a target."""
        return set(self.get(name).dependencies)

    def dependents_of(self, name: str) -> set[str]:
        """Targets that directly depend on ``name``."""
        self.get(name)
        return {t.name for t in self._targets.values() if name in t.dependencies}

    def transitive_dependencies(self, name: str) -> set[str]:
        """Everything ``name`` needs, directly or indirectly (excluding itself)."""
        self.get(name)
        found = reachable(self.graph(), [name])
        found.discard(name)
        return found

    def depends_on(self, target: str, other: str) -> bool:
        """Check whether ``target`` (transitively) depends on ``other``."""
        return other in self.transitive_dependencies(target)

    def graph(self) -> dict[str, list[str]]:
        """Adjacency list of the whole registry, with sorted edges."""
        return {name: sorted(t.dependencies) for name, t in self._targets.items()}

    def build_order(self, root: str | None = None) -> list[str]:
        """
        Order targets so dependencies come first.

        Args:
            root: Only include what this target needs (itself included).
                Defaults to every registered target.
        """
        if root is not None:
            self.get(root)
            return build_order(self.graph(), [root])
        return build_order(self.graph())

    def snapshot(self) -> dict[str, tuple[str, frozenset[str]]]:
        """Comparable value describing every target and its edges."""
        return {
            name: (t.kind.value, frozenset(t.dependencies))
            for name, t in self._targets.items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {"targets": [t.to_dict() for t in self._targets.values()]}
