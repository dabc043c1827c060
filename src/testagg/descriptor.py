"""Derivation of target names and result paths from a test name."""

import re
from pathlib import Path

from .constants import (
    AGGREGATE_NAMES,
    RESULTS_DIR_NAME,
    RESULTS_EXTENSION,
    RUN_WRAPPER_PREFIX,
    RUN_WRAPPER_SUFFIX,
    SOURCE_EXTENSION,
)
from .errors import InvalidNameError
from .models import UnitDescriptor

# Letters, digits and underscore first; ".", "+" and "-" allowed after that
_TEST_NAME_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.+-]*")


def validate_test_name(test_name: str) -> None:
    """
    Check that a test name can be used as both a target and a file name.

    Raises:
        InvalidNameError: If the name is empty, contains whitespace or a
            path separator, or collides with an aggregate target
    """
    if not isinstance(test_name, str) or not test_name:
        raise InvalidNameError("Test name must be a non-empty string")

    if "/" in test_name or "\\" in test_name:
        raise InvalidNameError(f"Test name contains a path separator: {test_name!r}")

    if any(ch.isspace() for ch in test_name):
        raise InvalidNameError(f"Test name contains whitespace: {test_name!r}")

    if not _TEST_NAME_RE.fullmatch(test_name):
        raise InvalidNameError(f"Test name has unsupported characters: {test_name!r}")

    if test_name in AGGREGATE_NAMES:
        raise InvalidNameError(f"Test name is reserved for an aggregate target: {test_name}")


def wrapper_name(test_name: str) -> str:
    """Name of the run-wrapper target for a test, e.g. ``run-wrapper(foo)``."""
    return f"{RUN_WRAPPER_PREFIX}{test_name}{RUN_WRAPPER_SUFFIX}"


def results_path(build_root: Path, project_name: str, test_name: str) -> Path:
    """``<build_root>/test_results/<project_name>/<test_name>.xml``"""
    return Path(build_root) / RESULTS_DIR_NAME / project_name / f"{test_name}{RESULTS_EXTENSION}"


def make_test_unit(test_name: str, build_root: Path, project_name: str) -> UnitDescriptor:
    """
    Build the descriptor for one test executable.

    Args:
        test_name: Name of the test; also the target name and source stem
        build_root: Root of the build tree
        project_name: Project the results directory is scoped to

    Returns:
        UnitDescriptor with source, wrapper name and results path filled in
    """
    validate_test_name(test_name)
    return UnitDescriptor(
        name=test_name,
        source=f"{test_name}{SOURCE_EXTENSION}",
        wrapper_name=wrapper_name(test_name),
        results_path=results_path(build_root, project_name, test_name),
    )
