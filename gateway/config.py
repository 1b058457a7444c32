"""Configuration and constants for the OGR conversion gateway.

Includes configuration for:
- HTTP server binding and asset locations (ServerConfig with API_ prefix)
- External GDAL tools and temporary staging (ConverterConfig with OGR_ prefix)

Configuration can be overridden via:
1. Environment variables (e.g., API_PORT=8080, OGR_STAGING_DIR=/var/tmp)
2. .env file in the current directory
3. Default values in code
"""

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVICE_VERSION = "0.0.1"

PACKAGE_DIR = Path(__file__).parent


@dataclass(frozen=True)
class ShapefileLayout:
    """Fixed extensions making up an ESRI Shapefile bundle.

    The index extension identifies the component handed to ogr2ogr; the
    sidecars are read implicitly by GDAL and removed after conversion,
    in this order.
    """

    INDEX_EXTENSION: str = "shp"
    SIDECAR_EXTENSIONS: tuple[str, ...] = ("dbf", "prj", "shx", "cpg")


SHAPEFILE = ShapefileLayout()


class ServerConfig(BaseSettings):
    """Configuration for the HTTP server.

    Can be overridden via environment variables with API_ prefix:
    - API_HOST (default: 127.0.0.1)
    - API_PORT (default: 3000)
    - API_STATIC_DIR, API_TEMPLATES_DIR (default: the directories shipped in the package)
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="127.0.0.1", description="Interface to bind the server to")
    port: int = Field(default=3000, ge=1, le=65535, description="Port for the HTTP server")
    static_dir: Path = Field(
        default=PACKAGE_DIR / "static", description="Directory served under /static"
    )
    templates_dir: Path = Field(
        default=PACKAGE_DIR / "templates", description="Directory holding the landing page template"
    )


class ConverterConfig(BaseSettings):
    """Configuration for the external GDAL tools and upload staging.

    Can be overridden via environment variables with OGR_ prefix:
    - OGR_OGR2OGR_PATH, OGR_GDALINFO_PATH: executables (resolved on PATH)
    - OGR_TARGET_SRS: CRS every conversion is reprojected to
    - OGR_STAGING_DIR: where Shapefile components are gathered
    - OGR_TIMEOUT_SECONDS: subprocess timeout (unset = wait indefinitely)
    - OGR_DISCARD_ORPHANS: remove staged components when no .shp was uploaded

    Attributes:
        ogr2ogr_path: Conversion executable
        gdalinfo_path: Executable queried once at startup for the GDAL version
        target_srs: Target spatial reference passed as -t_srs
        staging_dir: Shared directory for multi-file uploads
        timeout_seconds: Optional limit on a single ogr2ogr run
        discard_orphans: Whether staged components without an index file are deleted
    """

    model_config = SettingsConfigDict(
        env_prefix="OGR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ogr2ogr_path: str = Field(default="ogr2ogr", description="ogr2ogr executable")
    gdalinfo_path: str = Field(default="gdalinfo", description="gdalinfo executable")
    target_srs: str = Field(default="EPSG:4326", description="Target CRS for every conversion")
    staging_dir: Path = Field(
        default=Path("/tmp"), description="Staging directory for Shapefile components"
    )
    timeout_seconds: float | None = Field(
        default=None, gt=0, description="ogr2ogr timeout in seconds (None = no timeout)"
    )
    discard_orphans: bool = Field(
        default=True,
        description="Delete staged components of a multi-file upload that has no .shp",
    )
