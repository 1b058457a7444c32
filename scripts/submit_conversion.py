#!/usr/bin/env python

"""Submit a file to a running conversion gateway for local testing.

Posts a single geospatial file, or every component of a Shapefile, to
POST /convert and writes the converted document to stdout or a file.

Usage:
    uv run python scripts/submit_conversion.py tests/data/parcels.geojson
    uv run python scripts/submit_conversion.py roads.shp --output geojson -o roads.json
    uv run python scripts/submit_conversion.py --help
"""

import logging
import sys
from contextlib import ExitStack
from pathlib import Path

import httpx
import typer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Submit files to a local OGR conversion gateway")

SHAPEFILE_EXTENSIONS = [".shp", ".shx", ".dbf", ".prj", ".cpg"]


def collect_shapefile_components(shapefile_path: Path) -> list[Path]:
    """Collect the .shp and whichever sidecar files exist next to it.

    Args:
        shapefile_path: Path to .shp file

    Raises:
        FileNotFoundError: If .shx or .dbf is missing
    """
    components = []
    for ext in SHAPEFILE_EXTENSIONS:
        component = shapefile_path.with_suffix(ext)
        if component.exists():
            components.append(component)
        elif ext in [".shp", ".shx", ".dbf"]:
            raise FileNotFoundError(f"Required component {component} not found")
    return components


@app.command()
def submit(
    geometry_file: Path = typer.Argument(
        ...,
        help="Path to a geospatial file; a .shp is sent with its sidecar files",
        exists=True,
    ),
    output_format: str = typer.Option(
        "gml",
        "--output",
        help="Output format: gml or geojson",
    ),
    destination: Path | None = typer.Option(
        None,
        "--out-file",
        "-o",
        help="Write the converted document here instead of stdout",
    ),
    gateway_url: str = typer.Option(
        "http://localhost:3000",
        "--gateway",
        help="Base URL of the conversion gateway",
    ),
    timeout: float = typer.Option(
        120.0,
        "--timeout",
        help="Request timeout in seconds",
    ),
):
    """Convert a file through the gateway."""
    if geometry_file.suffix.lower() == ".shp":
        try:
            paths = collect_shapefile_components(geometry_file)
        except FileNotFoundError as e:
            logger.error(f"Incomplete shapefile: {e}")
            raise typer.Exit(1)
        logger.info(f"Sending {len(paths)} shapefile components")
    else:
        paths = [geometry_file]

    with ExitStack() as stack:
        files = [("file", (path.name, stack.enter_context(open(path, "rb")))) for path in paths]
        try:
            response = httpx.post(
                f"{gateway_url.rstrip('/')}/convert",
                files=files,
                data={"output": output_format},
                timeout=timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Request failed: {e}")
            raise typer.Exit(1)

    content_type = response.headers.get("content-type", "")
    if content_type.startswith("text/html"):
        logger.error("Gateway reported a failed conversion (see gateway logs)")
        raise typer.Exit(1)

    logger.info(f"Received {len(response.content)} bytes ({content_type})")
    if destination is None:
        typer.echo(response.text)
    else:
        destination.write_text(response.text, encoding="utf-8")
        logger.info(f"Wrote {destination}")


if __name__ == "__main__":
    app()
