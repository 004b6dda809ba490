"""
Shared pytest fixtures for the toyc test suite.

Provides a recording NativeToolchain and a patched subprocess.run so
the driver, the toolchain and the CLI can be tested without a C
compiler.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

import pytest

from toyc import native
from toyc.errors import BuildError, ExecutionError
from toyc.native import NativeToolchain, ExecutionResult


class FakeToolchain(NativeToolchain):
    """
    Toolchain double that records calls and returns canned results.

    Attributes:
        stdout: Output reported by run()
        build_error: Raised by build() when set
        run_error: Raised by run() when set
        calls: ("build", path) / ("run", path) tuples in call order
    """

    def __init__(
        self,
        stdout: str = "",
        build_error: Optional[BuildError] = None,
        run_error: Optional[ExecutionError] = None,
    ):
        self.stdout = stdout
        self.build_error = build_error
        self.run_error = run_error
        self.calls: list[tuple[str, Path]] = []

    def build(self, source_path: Path, executable_path: Path) -> Path:
        self.calls.append(("build", source_path))
        if self.build_error is not None:
            raise self.build_error
        return executable_path

    def run(self, executable_path: Path) -> ExecutionResult:
        self.calls.append(("run", executable_path))
        if self.run_error is not None:
            raise self.run_error
        return ExecutionResult(0, self.stdout, "")


class FakeRun:
    """Stand-in for subprocess.run that records commands."""

    def __init__(self, returncode=0, stdout="", stderr="", raises=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.raises = raises
        self.commands = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(cmd)
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    return FakeToolchain(stdout="10\n")


@pytest.fixture
def fake_run(monkeypatch):
    """Patch subprocess.run inside toyc.native; call with FakeRun arguments."""
    def install(**kwargs):
        runner = FakeRun(**kwargs)
        monkeypatch.setattr(native.subprocess, "run", runner)
        return runner
    return install


requires_gcc = pytest.mark.skipif(
    shutil.which("gcc") is None,
    reason="gcc not available",
)
