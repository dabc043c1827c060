"""Execution of registered test targets.

A run-wrapper always reports success to whatever depends on it, even when
the test executable exits non-zero or times out. This is intentional: one
failing test must not stop ``run-all-tests`` from running the others. The
real outcome is kept in the XML report and in ``RunResult.exit_code``.
Do not turn a failing exit status into an exception here.
"""

import os
import signal
import subprocess
from pathlib import Path

from .constants import TIMEOUT_TEST_RUN
from .errors import ExecutionError
from .frameworks import output_args
from .models import RunResult, Target, TargetKind
from .registry import TargetRegistry


class RunWrapper:
    """Runs one test executable and captures its structured output.

    Each run gets its own process group. On timeout the whole group is
    killed, so children that inherited the output pipes cannot keep the
    wrapper waiting.
    """

    def __init__(self, timeout: float | None = TIMEOUT_TEST_RUN, verbose: bool = False):
        self.timeout = timeout
        self.verbose = verbose

    def command(self, target: Target, executable: Path) -> list[str]:
        """Command line for a run-wrapper target."""
        if target.kind != TargetKind.RUN_WRAPPER:
            raise ExecutionError(f"Not a run-wrapper target: {target.name}")
        if target.results_path is None or target.framework is None:
            raise ExecutionError(f"Run-wrapper {target.name} has no results path or framework")
        return [str(executable), *output_args(target.framework, target.results_path)]

    def execute(self, target: Target, executable: Path) -> RunResult:
        """
        Run the executable behind a run-wrapper target.

        Args:
            target: The run-wrapper target
            executable: Path of the built test binary

        Returns:
            RunResult whose ``succeeded`` is True regardless of exit status

        Raises:
            ExecutionError: If the target is malformed or the binary cannot
                be started at all
        """
        cmd = self.command(target, executable)
        target.results_path.parent.mkdir(parents=True, exist_ok=True)

        if self.verbose:
            print(f"[Run] {' '.join(cmd)}")

        try:
            # Own process group, so a timeout can take down forked children too
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                start_new_session=True,
            )
        except OSError as e:
            raise ExecutionError(f"Cannot execute {executable}: {e}") from e

        try:
            stdout, stderr = proc.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            self._kill_group(proc)
            stdout, stderr = proc.communicate()
            if self.verbose:
                print(f"[Run] {target.name}: timed out after {self.timeout}s")
            return RunResult(
                target=target.name,
                executable=executable,
                results_path=target.results_path,
                exit_code=None,
                timed_out=True,
                output=(stdout or "") + (stderr or ""),
            )

        if self.verbose and proc.returncode != 0:
            print(f"[Run] {target.name}: exit code {proc.returncode} (recorded, not propagated)")

        return RunResult(
            target=target.name,
            executable=executable,
            results_path=target.results_path,
            exit_code=proc.returncode,
            output=stdout + stderr,
        )

    @staticmethod
    def _kill_group(proc: subprocess.Popen) -> None:
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass  # group already gone
        proc.wait()


class TargetRunner:
    """Executes a target and everything it depends on, one at a time."""

    def __init__(
        self,
        registry: TargetRegistry,
        bin_dir: Path,
        wrapper: RunWrapper | None = None,
        verbose: bool = False,
    ):
        self.registry = registry
        self.bin_dir = Path(bin_dir)
        self.wrapper = wrapper or RunWrapper(verbose=verbose)
        self.verbose = verbose

    def artifact_path(self, name: str) -> Path:
        """Where the compiled binary for an executable target is expected."""
        return self.bin_dir / name

    def _build(self, target: Target) -> Path:
        # Compilation is done by the external build tool; only check its output
        path = self.artifact_path(target.name)
        if not path.is_file():
            raise ExecutionError(f"Executable for {target.name} not found: {path}")
        if self.verbose:
            print(f"[Build] {target.name}: {path}")
        return path

    def run(self, root: str) -> list[RunResult]:
        """
        Execute ``root`` after all of its dependencies.

        Returns:
            One RunResult per run-wrapper executed, in execution order
        """
        built: dict[str, Path] = {}
        results: list[RunResult] = []

        for name in self.registry.build_order(root):
            target = self.registry.get(name)
            if target.kind == TargetKind.EXECUTABLE:
                built[name] = self._build(target)
            elif target.kind == TargetKind.RUN_WRAPPER:
                executable = built.get(target.command_target)
                if executable is None:
                    raise ExecutionError(f"{name} runs {target.command_target}, which was not built")
                results.append(self.wrapper.execute(target, executable))
            elif self.verbose:
                print(f"[Aggregate] {name}")

        return results
