"""Thin wrapper around subprocess for running external GDAL tools.

Commands are always passed as an argument list and never through a shell,
so filenames and layer names coming from uploads cannot inject anything.
"""

import logging
import subprocess
from dataclasses import dataclass

from gateway.errors import ToolLaunchError, ToolTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a finished subprocess."""

    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    def stdout_text(self) -> str:
        """Standard output decoded as UTF-8, replacing invalid sequences."""
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")


def run_command(argv: list[str], timeout: float | None = None) -> CommandResult:
    """Run a command to completion and capture its output.

    Blocks until the process exits. A non-zero exit status is returned, not raised.

    Args:
        argv: Executable followed by its arguments
        timeout: Seconds to wait before killing the process (None = no limit)

    Raises:
        ToolLaunchError: If the executable cannot be started
        ToolTimeoutError: If the process outlives ``timeout``
    """
    executable = argv[0]
    logger.debug(f"Running {argv}")
    try:
        completed = subprocess.run(argv, capture_output=True, check=False, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise ToolTimeoutError(executable, e.timeout) from e
    except OSError as e:
        raise ToolLaunchError(executable, str(e)) from e

    return CommandResult(
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
