"""Temporary staging of Shapefile components.

GDAL only finds the sidecar files of a Shapefile (.dbf, .shx, .prj, .cpg)
when they share the base name of the .shp. Uploaded parts arrive under
arbitrary spool names, so every component of one bundle is moved to
``<staging_dir>/<unique_base>.<extension>``. The unique base is a random
UUID, which keeps concurrent uploads apart in the shared directory without
any locking.
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path
from uuid import uuid4

from gateway.config import SHAPEFILE
from gateway.errors import CleanupError, StagingError

logger = logging.getLogger(__name__)


class TempStager:
    """Moves uploaded components into the staging directory and removes them afterwards."""

    def __init__(self, staging_dir: Path):
        self.staging_dir = staging_dir

    @staticmethod
    def generate_unique_base() -> str:
        """Return a collision-resistant file stem (UUID4 without separators)."""
        return uuid4().hex

    def destination_for(self, unique_base: str, extension: str) -> Path:
        return self.staging_dir / f"{unique_base}.{extension}"

    def stage(self, source: Path, destination: Path) -> Path:
        """Move ``source`` to ``destination``.

        Raises:
            StagingError: If the move fails. The source is left in place.
        """
        try:
            shutil.move(source, destination)
        except OSError as e:
            error = StagingError(source, destination, str(e))
            logger.error(str(error))
            raise error from e
        logger.debug(f"Staged {source} -> {destination}")
        return destination

    def cleanup(self, staged_shape_path: Path) -> None:
        """Delete a staged .shp and its sidecar files.

        Files are removed in a fixed order (shp, dbf, prj, shx, cpg) and the
        sequence stops at the first file that is missing or cannot be
        removed, so later sidecars may be left behind.

        Raises:
            CleanupError: Naming the first file that could not be removed.
        """
        for path in self._bundle_paths(staged_shape_path):
            try:
                path.unlink()
            except OSError as e:
                raise CleanupError(path, str(e)) from e
            logger.debug(f"Removed staged file {path}")

    def discard(self, paths: Iterable[Path]) -> None:
        """Best-effort removal of staged components that will never be converted."""
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not discard staged file {path}: {e}")

    @staticmethod
    def _bundle_paths(staged_shape_path: Path) -> list[Path]:
        return [staged_shape_path] + [
            staged_shape_path.with_suffix(f".{extension}")
            for extension in SHAPEFILE.SIDECAR_EXTENSIONS
        ]
