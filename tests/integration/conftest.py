"""Integration test fixtures running the real GDAL command line tools.

Tests in this directory are skipped unless ogr2ogr and gdalinfo are on PATH.
"""

import shutil
import subprocess
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gateway.api import create_app
from gateway.config import ConverterConfig, ServerConfig

PARCELS_GEOJSON = """{
  "type": "FeatureCollection",
  "crs": {"type": "name", "properties": {"name": "urn:ogc:def:crs:EPSG::27700"}},
  "features": [
    {
      "type": "Feature",
      "properties": {"name": "Site A"},
      "geometry": {
        "type": "Polygon",
        "coordinates": [[[450000, 100000], [450100, 100000], [450100, 100100],
                         [450000, 100100], [450000, 100000]]]
      }
    }
  ]
}
"""


@pytest.fixture(scope="session", autouse=True)
def require_gdal():
    """Skip the whole directory when GDAL is not installed."""
    if shutil.which("ogr2ogr") is None or shutil.which("gdalinfo") is None:
        pytest.skip("GDAL command line tools (ogr2ogr, gdalinfo) are not installed")


@pytest.fixture
def parcels_geojson(tmp_path: Path) -> Path:
    path = tmp_path / "parcels.geojson"
    path.write_text(PARCELS_GEOJSON)
    return path


@pytest.fixture
def shapefile_bundle(tmp_path: Path, parcels_geojson: Path) -> Path:
    """Build a real Shapefile (roads.shp + sidecars) from the GeoJSON fixture."""
    out_dir = tmp_path / "shapefile"
    out_dir.mkdir()
    subprocess.run(
        [
            "ogr2ogr",
            "-f",
            "ESRI Shapefile",
            "-lco",
            "ENCODING=UTF-8",
            str(out_dir / "roads.shp"),
            str(parcels_geojson),
        ],
        check=True,
        capture_output=True,
    )
    return out_dir / "roads.shp"


@pytest.fixture
def gdal_client(staging_dir: Path):
    """TestClient for a gateway using the installed GDAL tools."""
    config = ConverterConfig(staging_dir=staging_dir)
    with TestClient(create_app(ServerConfig(), config)) as client:
        yield client
