"""ogr2ogr and gdalinfo invocation."""

import logging
from dataclasses import dataclass
from pathlib import Path

from gateway.config import ConverterConfig
from gateway.errors import ToolExitError
from gateway.models.formats import OutputFormat
from gateway.tools.command import run_command

logger = logging.getLogger(__name__)

STDOUT_DESTINATION = "/dev/stdout"


@dataclass(frozen=True)
class Ogr2OgrCommand:
    """A single ogr2ogr conversion writing its result to standard output.

    Attributes:
        output_format: Format driver for -f
        target_srs: CRS for -t_srs (e.g. "EPSG:4326")
        layer_name: Output layer name for -nln
        source_path: Input dataset, passed last
    """

    output_format: OutputFormat
    target_srs: str
    layer_name: str
    source_path: Path

    def argv(self, executable: str = "ogr2ogr") -> list[str]:
        return [
            executable,
            "-f",
            self.output_format.value,
            "-t_srs",
            self.target_srs,
            "-nln",
            self.layer_name,
            STDOUT_DESTINATION,
            str(self.source_path),
        ]


class OgrConverter:
    """Converts staged inputs by shelling out to ogr2ogr."""

    def __init__(self, config: ConverterConfig):
        self.config = config

    def convert(self, staged_path: Path, layer_name: str, output_format: OutputFormat) -> str:
        """Reproject and convert a dataset, returning the converted document.

        Args:
            staged_path: Readable input file (.shp for Shapefile bundles)
            layer_name: Name of the output layer
            output_format: Requested output format

        Returns:
            ogr2ogr standard output, decoded lossily as UTF-8

        Raises:
            ToolLaunchError: If ogr2ogr cannot be executed
            ToolTimeoutError: If ogr2ogr exceeds the configured timeout
            ToolExitError: If ogr2ogr exits with a non-zero status
        """
        command = Ogr2OgrCommand(
            output_format=output_format,
            target_srs=self.config.target_srs,
            layer_name=layer_name,
            source_path=staged_path,
        )
        result = run_command(
            command.argv(self.config.ogr2ogr_path), timeout=self.config.timeout_seconds
        )

        if not result.succeeded:
            logger.error(
                f"status: {result.returncode} stderr: {result.stderr_text()} "
                f"stdout: {result.stdout_text()}"
            )
            raise ToolExitError(
                self.config.ogr2ogr_path,
                result.returncode,
                stderr=result.stderr_text(),
                stdout=result.stdout_text(),
            )

        logger.info(
            f"Converted {staged_path} to {output_format.name} "
            f"(layer {layer_name}, {len(result.stdout)} bytes)"
        )
        return result.stdout_text()


def read_gdal_version(config: ConverterConfig) -> str:
    """Return the ``gdalinfo --version`` banner, or "" if gdalinfo reports failure.

    Raises:
        ToolLaunchError: If gdalinfo cannot be executed
    """
    result = run_command([config.gdalinfo_path, "--version"])
    if not result.succeeded:
        logger.warning(f"{config.gdalinfo_path} --version exited with status {result.returncode}")
        return ""
    return result.stdout_text()
