"""
toyc Configuration
==================

Build configuration for the driver: where the generated C artifact goes,
which native compiler builds it, and whether the result is run.

Configuration can come from:
- Default values (defined here)
- Environment variables (BuildConfig.from_env)
- Command-line options (toyc.cli), which override both

The defaults reproduce the classic behavior: write `output.c`, build it
with `gcc` into `./output`, then run it.
"""

import os
import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional


@dataclass
class BuildConfig:
    """
    Configuration for artifact generation and the native toolchain.

    Attributes:
        output_path: Where the generated C program is written
        executable_path: Where the native compiler puts the binary
        cc: Native C compiler command
        cflags: Extra arguments passed to the C compiler
        run_program: Run the binary after building it
        timeout: Seconds before a build or run is abandoned (None = no limit)
    """

    output_path: Path = field(default_factory=lambda: Path("output.c"))
    executable_path: Path = field(default_factory=lambda: Path("output"))
    cc: str = "gcc"
    cflags: List[str] = field(default_factory=list)
    run_program: bool = True
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "BuildConfig":
        """
        Create a BuildConfig from environment variables.

        Environment variables (all optional):
            TOYC_CC: C compiler command (default: gcc)
            TOYC_CFLAGS: Extra compiler arguments, shell-quoted
            TOYC_OUTPUT: Path of the generated C file
            TOYC_EXECUTABLE: Path of the compiled binary
        """
        config = cls()

        if cc := os.environ.get("TOYC_CC"):
            config.cc = cc
        if cflags := os.environ.get("TOYC_CFLAGS"):
            config.cflags = shlex.split(cflags)
        if output := os.environ.get("TOYC_OUTPUT"):
            config.output_path = Path(output)
        if executable := os.environ.get("TOYC_EXECUTABLE"):
            config.executable_path = Path(executable)

        return config

    def with_overrides(self, **overrides) -> "BuildConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
