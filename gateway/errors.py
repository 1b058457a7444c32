"""Error definitions for the conversion flow.

Every failure a request can hit derives from GatewayError. The HTTP layer
collapses all of them into the same failure page; the distinct classes only
show up in server-side logs.
"""

from pathlib import Path


class GatewayError(Exception):
    """Base class for conversion flow failures."""


class NoUploadError(GatewayError):
    """No usable file was found in the request."""


class StagingError(GatewayError):
    """Moving an uploaded component into the staging directory failed."""

    def __init__(self, source: Path, destination: Path, reason: str):
        self.source = source
        self.destination = destination
        super().__init__(f"Failed to stage {source} -> {destination}: {reason}")


class ConversionError(GatewayError):
    """ogr2ogr did not produce a converted document."""


class ToolLaunchError(ConversionError):
    """An external executable could not be started."""

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        super().__init__(f"Failed to execute {executable}: {reason}")


class ToolExitError(ConversionError):
    """An external executable ran but exited with a non-zero status."""

    def __init__(self, executable: str, returncode: int, stderr: str, stdout: str):
        self.executable = executable
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(f"{executable} exited with status {returncode}")


class ToolTimeoutError(ConversionError):
    """An external executable did not finish within the configured timeout."""

    def __init__(self, executable: str, timeout: float):
        self.executable = executable
        self.timeout = timeout
        super().__init__(f"{executable} did not finish within {timeout}s")


class CleanupError(GatewayError):
    """A staged file could not be removed after conversion."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to remove staged file {path}: {reason}")
