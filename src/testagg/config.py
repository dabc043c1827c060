"""Session configuration."""

from dataclasses import dataclass, field
from pathlib import Path

from .constants import BIN_DIR_NAME, RESULTS_DIR_NAME


@dataclass
class SessionConfig:
    """Settings shared by every registration in one build session."""

    build_root: Path
    project_name: str
    framework: str = "auto"  # "auto", "gtest", "catch2"
    available_targets: list[str] = field(default_factory=list)
    bin_dir: Path | None = None
    verbose: bool = False

    def __post_init__(self):
        self.build_root = Path(self.build_root)
        if self.bin_dir is not None:
            self.bin_dir = Path(self.bin_dir)
        if not self.project_name:
            raise ValueError("Project name must not be empty")
        if "/" in self.project_name or "\\" in self.project_name:
            raise ValueError(f"Project name contains a path separator: {self.project_name!r}")

    @property
    def results_dir(self) -> Path:
        """``<build_root>/test_results/<project_name>``"""
        return self.build_root / RESULTS_DIR_NAME / self.project_name

    @property
    def artifacts_dir(self) -> Path:
        """Directory holding compiled test executables."""
        return self.bin_dir if self.bin_dir is not None else self.build_root / BIN_DIR_NAME
