"""Errors raised while registering and running test targets."""


class TargetError(Exception):
    """Base class for all registration and execution errors."""

    pass


class InvalidNameError(TargetError):
    """A test name is empty or unsafe to use as a target or file name."""

    pass


class MissingDependencyError(TargetError):
    """The test framework main entry point is not available."""

    pass


class DuplicateTargetError(TargetError):
    """A target with the same name is already registered."""

    pass


class UnknownTargetError(TargetError):
    """An edge refers to a target that was never registered."""

    pass


class CycleError(TargetError):
    """Adding an edge would make a target depend on itself."""

    pass


class ExecutionError(TargetError):
    """A target could not be executed (e.g. its artifact was never built)."""

    pass
