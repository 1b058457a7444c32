"""Shared fixtures for gateway tests."""

import stat
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from gateway.api import create_app
from gateway.config import ConverterConfig, ServerConfig

GDAL_VERSION = "GDAL 3.8.4, released 2024/02/08\n"

# Echoes its arguments, one per line, after checking the input (8th argument) exists
ECHO_OGR2OGR = """#!/bin/sh
[ -f "$8" ] || { echo "input not found: $8" >&2; exit 3; }
printf '%s\\n' "$@"
"""

FAILING_OGR2OGR = """#!/bin/sh
echo "ERROR 1: Unable to open datasource" >&2
echo "partial output"
exit 1
"""


@pytest.fixture
def make_tool(tmp_path: Path) -> Callable[[str, str], Path]:
    """Create an executable shell script standing in for a GDAL tool."""

    def _make_tool(name: str, script: str) -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        tool = bin_dir / name
        tool.write_text(script)
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return tool

    return _make_tool


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def echo_config(make_tool, staging_dir) -> ConverterConfig:
    """Converter config pointing at the echoing ogr2ogr stand-in."""
    return ConverterConfig(
        ogr2ogr_path=str(make_tool("ogr2ogr", ECHO_OGR2OGR)),
        staging_dir=staging_dir,
    )


@pytest.fixture
def failing_config(make_tool, staging_dir) -> ConverterConfig:
    """Converter config pointing at an ogr2ogr stand-in that always fails."""
    return ConverterConfig(
        ogr2ogr_path=str(make_tool("ogr2ogr", FAILING_OGR2OGR)),
        staging_dir=staging_dir,
    )


@pytest.fixture
def make_client():
    """Build a TestClient for a gateway app with the given converter config."""
    clients = []

    def _make_client(converter_config: ConverterConfig) -> TestClient:
        app = create_app(ServerConfig(), converter_config, gdal_version=GDAL_VERSION)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make_client

    for client in clients:
        client.__exit__(None, None, None)
