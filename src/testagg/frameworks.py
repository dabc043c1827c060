"""Resolution of the test framework's main entry point."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Collection
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Framework(Enum):
    """Supported test frameworks."""

    GTEST = "gtest"
    CATCH2 = "catch2"


# Well-known names of the target providing main(), most preferred first
ENTRY_POINT_NAMES: dict[Framework, tuple[str, ...]] = {
    Framework.GTEST: ("GTest::gtest_main", "GTest::Main", "gtest_main"),
    Framework.CATCH2: ("Catch2::Catch2WithMain", "Catch2WithMain"),
}


def output_args(framework: Framework | str, results_path: Path) -> list[str]:
    """
    Command-line arguments that make a test binary write XML results.

    Args:
        framework: Framework the binary was linked against
        results_path: Where the XML report should go
    """
    framework = Framework(framework)
    if framework == Framework.GTEST:
        return [f"--gtest_output=xml:{results_path}"]
    elif framework == Framework.CATCH2:
        return ["--reporter", "junit", "--out", str(results_path)]
    else:
        raise ValueError(f"Unknown framework: {framework}")


@dataclass(frozen=True)
class FrameworkEntry:
    """A resolved framework entry point."""

    framework: Framework
    target_name: str


class FrameworkResolver(ABC):
    """Strategy for locating the test framework's main entry point."""

    @abstractmethod
    def resolve(self) -> FrameworkEntry | None:
        """
        Probe the environment for an entry point.

        Returns:
            The entry point found, or None if no known variant is available
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _as_predicate(available: Collection[str] | Callable[[str], bool]) -> Callable[[str], bool]:
    if callable(available):
        return available
    names = frozenset(available)
    return names.__contains__


class KnownTargetResolver(FrameworkResolver):
    """Probes one framework's well-known entry names, in preference order."""

    def __init__(
        self,
        framework: Framework,
        available: Collection[str] | Callable[[str], bool],
    ):
        """
        Args:
            framework: Framework whose names are probed
            available: Names the build environment provides, or a predicate
                answering whether a name is available. Consulted on every
                resolve() call.
        """
        self.framework = Framework(framework)
        self._is_available = _as_predicate(available)

    @property
    def candidates(self) -> tuple[str, ...]:
        return ENTRY_POINT_NAMES[self.framework]

    def resolve(self) -> FrameworkEntry | None:
        for name in self.candidates:
            if self._is_available(name):
                return FrameworkEntry(self.framework, name)
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(framework={self.framework.value!r})"


class AnyFrameworkResolver(FrameworkResolver):
    """Tries every supported framework in turn and takes the first match."""

    def __init__(
        self,
        available: Collection[str] | Callable[[str], bool],
        frameworks: tuple[Framework, ...] = tuple(Framework),
    ):
        self.resolvers = [KnownTargetResolver(fw, available) for fw in frameworks]

    def resolve(self) -> FrameworkEntry | None:
        for resolver in self.resolvers:
            entry = resolver.resolve()
            if entry is not None:
                return entry
        return None


def create_resolver(
    framework_type: str,
    available: Collection[str] | Callable[[str], bool],
) -> FrameworkResolver:
    """
    Create an entry point resolver.

    Args:
        framework_type: One of "auto", "gtest", "catch2"
        available: Available target names, or a predicate over names

    Returns:
        A FrameworkResolver instance
    """
    if framework_type == "auto":
        return AnyFrameworkResolver(available)
    elif framework_type in {fw.value for fw in Framework}:
        return KnownTargetResolver(Framework(framework_type), available)
    else:
        raise ValueError(f"Unknown framework type: {framework_type}")
