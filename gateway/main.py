"""Server entry point for the conversion gateway."""

import json
import logging
import logging.config
import os
import sys
from pathlib import Path

import uvicorn

from gateway.api import create_app
from gateway.config import ConverterConfig, ServerConfig
from gateway.errors import ToolLaunchError
from gateway.tools.ogr import read_gdal_version


def is_running_in_ecs() -> bool:
    """Detect if running in AWS ECS.

    ECS automatically injects metadata URI environment variables into containers.
    These are always present in ECS and never present locally.
    """
    return bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI_V4")
        or os.environ.get("ECS_CONTAINER_METADATA_URI")
    )


def configure_logging() -> None:
    """Configure logging based on environment.

    In ECS: Uses logging.json with structured JSON output, trace ID injection
    and health check filtering.

    Locally: Uses logging-dev.json with simple text format for readability.
    """
    config_file = "logging.json" if is_running_in_ecs() else "logging-dev.json"
    config_path = Path(__file__).parent.parent / config_file

    if config_path.exists():
        with open(config_path) as f:
            logging.config.dictConfig(json.load(f))
    else:
        # Fallback to basic config if file not found
        logging.basicConfig(
            level=logging.INFO,
            format=(
                '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
                '"logger": "%(name)s", "message": "%(message)s"}'
            ),
            datefmt="%Y-%m-%dT%H:%M:%S",
        )


logger = logging.getLogger(__name__)


def main():
    """Main entry point: configure logging, read the GDAL version and serve the app."""
    configure_logging()

    try:
        server_config = ServerConfig()
        converter_config = ConverterConfig()
        gdal_version = read_gdal_version(converter_config)
        app = create_app(server_config, converter_config, gdal_version=gdal_version)
    except ToolLaunchError as e:
        logger.error(f"GDAL tools are not available: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Gateway failed to initialise: {e}")
        sys.exit(1)

    logger.info(f"Starting gateway on {server_config.host}:{server_config.port}")
    uvicorn.run(
        app,
        host=server_config.host,
        port=server_config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
