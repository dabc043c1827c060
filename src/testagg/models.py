"""Data models for test targets and their execution results."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class TargetKind(str, Enum):
    """Kind of node in the target graph."""

    EXECUTABLE = "executable"
    AGGREGATE = "aggregate"
    RUN_WRAPPER = "run-wrapper"


@dataclass
class Target:
    """A named node in the dependency graph."""

    name: str
    kind: TargetKind
    dependencies: set[str] = field(default_factory=set)
    source: str | None = None  # e.g. "test_alpha.cpp"
    link_libraries: list[str] = field(default_factory=list)
    command_target: str | None = None  # executable run by a run-wrapper
    results_path: Path | None = None
    framework: str | None = None  # "gtest", "catch2"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "dependencies": sorted(self.dependencies),
            "source": self.source,
            "link_libraries": list(self.link_libraries),
            "command_target": self.command_target,
            "results_path": str(self.results_path) if self.results_path else None,
            "framework": self.framework,
        }


@dataclass(frozen=True)
class UnitDescriptor:
    """Names and paths derived from a single test name."""

    name: str
    source: str
    wrapper_name: str
    results_path: Path


@dataclass
class RunResult:
    """Outcome of executing one run-wrapper target.

    ``succeeded`` is the wrapper's own completion status and is always True;
    the wrapped executable's real status lives in ``exit_code``.
    """

    target: str
    executable: Path
    results_path: Path
    exit_code: int | None
    succeeded: bool = True
    timed_out: bool = False
    output: str = ""

    @property
    def test_passed(self) -> bool:
        """Whether the wrapped test executable itself exited cleanly."""
        return self.exit_code == 0 and not self.timed_out

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "executable": str(self.executable),
            "results_path": str(self.results_path),
            "exit_code": self.exit_code,
            "succeeded": self.succeeded,
            "timed_out": self.timed_out,
            "test_passed": self.test_passed,
        }
