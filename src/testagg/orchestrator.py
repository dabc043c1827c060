"""Registration of test executables with the aggregate test targets."""

from dataclasses import dataclass
from pathlib import Path

from .aggregates import AggregateTargetManager
from .config import SessionConfig
from .constants import BUILD_ALL_TESTS, RUN_ALL_TESTS
from .descriptor import make_test_unit
from .errors import DuplicateTargetError, MissingDependencyError
from .frameworks import FrameworkEntry, FrameworkResolver, create_resolver
from .models import Target, TargetKind, UnitDescriptor
from .registry import TargetRegistry


@dataclass
class RegisteredTest:
    """Targets produced by one successful registration."""

    unit: UnitDescriptor
    executable: Target
    wrapper: Target
    entry: FrameworkEntry


class RegistrationOrchestrator:
    """Registers test executables and wires them into the aggregates.

    Each ``register_test`` call creates the executable target, a run-wrapper
    target that runs it, and adds both to ``build-all-tests`` and
    ``run-all-tests``. Every check happens before the registry is touched,
    so a failed call leaves the registry exactly as it was.
    """

    def __init__(
        self,
        registry: TargetRegistry,
        resolver: FrameworkResolver,
        build_root: Path,
        project_name: str,
        verbose: bool = False,
    ):
        self.registry = registry
        self.resolver = resolver
        self.build_root = Path(build_root)
        self.project_name = project_name
        self.verbose = verbose
        self.aggregates = AggregateTargetManager(registry)
        self._registered: list[str] = []

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        registry: TargetRegistry | None = None,
    ) -> "RegistrationOrchestrator":
        """Create an orchestrator (and a fresh registry) from session settings."""
        resolver = create_resolver(config.framework, config.available_targets)
        return cls(
            registry if registry is not None else TargetRegistry(),
            resolver,
            config.build_root,
            config.project_name,
            verbose=config.verbose,
        )

    def register_test(self, test_name: str) -> RegisteredTest:
        """
        Register one test executable.

        Args:
            test_name: Test name; also names the target and its source file

        Returns:
            RegisteredTest with the created targets

        Raises:
            InvalidNameError: If the name is not usable
            MissingDependencyError: If no framework entry point is available
            DuplicateTargetError: If the test was already registered
        """
        unit = make_test_unit(test_name, self.build_root, self.project_name)

        # Re-resolved on every call; the environment is not cached
        entry = self.resolver.resolve()
        if entry is None:
            raise MissingDependencyError("test framework main entry point not found")

        for name in (unit.name, unit.wrapper_name):
            if self.registry.exists(name):
                raise DuplicateTargetError(f"Target already exists: {name}")
        for name in (BUILD_ALL_TESTS, RUN_ALL_TESTS):
            if self.registry.exists(name) and self.registry.get(name).kind != TargetKind.AGGREGATE:
                raise DuplicateTargetError(f"Target {name} exists but is not an aggregate")

        if self.verbose:
            print(f"[Register] {unit.name} ({entry.framework.value}, linked to {entry.target_name})")

        executable = self.registry.create(
            unit.name,
            TargetKind.EXECUTABLE,
            source=unit.source,
            link_libraries=[entry.target_name],
        )

        wrapper = self.registry.create(
            unit.wrapper_name,
            TargetKind.RUN_WRAPPER,
            command_target=unit.name,
            results_path=unit.results_path,
            framework=entry.framework.value,
        )
        self.registry.add_dependency(wrapper.name, executable.name)

        build_all = self.aggregates.ensure_aggregate(BUILD_ALL_TESTS)
        run_all = self.aggregates.ensure_aggregate(RUN_ALL_TESTS)
        self.registry.add_dependency(build_all.name, executable.name)
        self.registry.add_dependency(run_all.name, wrapper.name)

        self._registered.append(unit.name)
        if self.verbose:
            print(f"[Register] {unit.name}: results -> {unit.results_path}")

        return RegisteredTest(unit=unit, executable=executable, wrapper=wrapper, entry=entry)

    def registered_tests(self) -> list[str]:
        """Names registered through this orchestrator, in registration order."""
        return list(self._registered)
