"""Models describing uploaded files and conversion-ready inputs."""

from dataclasses import dataclass
from pathlib import Path

from gateway.models.formats import OutputFormat


@dataclass(frozen=True)
class UploadedPart:
    """One multipart file part spooled to disk for the lifetime of a request.

    Attributes:
        filename: Client-supplied filename (e.g. "roads.shp")
        path: Location of the spooled content
    """

    filename: str
    path: Path

    @property
    def base_name(self) -> str:
        """Filename with its final extension stripped."""
        return split_filename(self.filename)[0]

    @property
    def extension(self) -> str | None:
        """Final extension without the dot, or None if the filename has none."""
        return split_filename(self.filename)[1]


@dataclass(frozen=True)
class StagedInput:
    """A conversion-ready input.

    Attributes:
        original_base_name: Upload filename minus extension, used as output layer name
        staged_path: Path ogr2ogr reads from
        is_multi_component: True for Shapefile bundles, whose staged files
            must be cleaned up after conversion
    """

    original_base_name: str
    staged_path: Path
    is_multi_component: bool = False


@dataclass(frozen=True)
class ConvertedDocument:
    """Successful conversion output."""

    payload: str
    output_format: OutputFormat

    @property
    def mime_type(self) -> str:
        return self.output_format.mime_type


def split_filename(filename: str) -> tuple[str, str | None]:
    """Split a client filename into base name and final extension.

    Any directory part some clients send along is ignored.

    Examples:
        "parcels.geojson" -> ("parcels", "geojson")
        "roads.v2.shp" -> ("roads.v2", "shp")
        "README" -> ("README", None)
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    base, dot, extension = name.rpartition(".")
    if not dot or not base or not extension:
        return name, None
    return base, extension
