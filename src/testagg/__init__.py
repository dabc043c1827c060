"""Registration of test executables with shared build and run aggregate targets."""

from .aggregates import AggregateTargetManager
from .config import SessionConfig
from .constants import BUILD_ALL_TESTS, RUN_ALL_TESTS
from .descriptor import make_test_unit, validate_test_name
from .errors import (
    CycleError,
    DuplicateTargetError,
    ExecutionError,
    InvalidNameError,
    MissingDependencyError,
    TargetError,
    UnknownTargetError,
)
from .frameworks import Framework, FrameworkResolver, create_resolver
from .models import RunResult, Target, TargetKind, UnitDescriptor
from .orchestrator import RegisteredTest, RegistrationOrchestrator
from .registry import TargetRegistry
from .runner import RunWrapper, TargetRunner

__all__ = [
    "AggregateTargetManager",
    "BUILD_ALL_TESTS",
    "CycleError",
    "DuplicateTargetError",
    "ExecutionError",
    "Framework",
    "FrameworkResolver",
    "InvalidNameError",
    "MissingDependencyError",
    "RUN_ALL_TESTS",
    "RegisteredTest",
    "RegistrationOrchestrator",
    "RunResult",
    "RunWrapper",
    "SessionConfig",
    "Target",
    "TargetError",
    "TargetKind",
    "TargetRegistry",
    "TargetRunner",
    "UnitDescriptor",
    "create_resolver",
    "make_test_unit",
    "validate_test_name",
]
