"""HTTP application for the conversion gateway.

Follows the APIRouter pattern: each feature has its own router module,
assembled here into a single FastAPI app.

Endpoints:
    GET  /          - Landing page with service and GDAL versions
    GET  /health    - Health check
    POST /convert   - Convert an uploaded file or Shapefile bundle
    GET  /static/*  - Static assets
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway.api.convert_router import router as convert_router
from gateway.api.pages import CONTENT_404, load_template
from gateway.api.pages_router import router as pages_router
from gateway.common.tracing import TraceIdMiddleware
from gateway.config import SERVICE_VERSION, ConverterConfig, ServerConfig
from gateway.orchestrator import ConversionOrchestrator
from gateway.tools.ogr import read_gdal_version

logger = logging.getLogger(__name__)


def create_app(
    server_config: ServerConfig | None = None,
    converter_config: ConverterConfig | None = None,
    gdal_version: str | None = None,
) -> FastAPI:
    """Create the gateway application.

    The GDAL version shown on the landing page is read once during startup,
    before the first request is served, unless ``gdal_version`` is given.

    Args:
        server_config: Server settings (defaults to environment)
        converter_config: Converter settings (defaults to environment)
        gdal_version: Fixed version banner, skips querying gdalinfo

    Raises:
        FileNotFoundError: If the landing page template is missing
    """
    server_config = server_config or ServerConfig()
    converter_config = converter_config or ConverterConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if gdal_version is None:
            app.state.gdal_version = read_gdal_version(converter_config)
        else:
            app.state.gdal_version = gdal_version
        logger.info(f"Gateway {SERVICE_VERSION} ready ({app.state.gdal_version.strip()})")
        yield

    app = FastAPI(title="OGR Conversion Gateway", version=SERVICE_VERSION, lifespan=lifespan)
    app.state.index_template = load_template(server_config.templates_dir)
    app.state.orchestrator = ConversionOrchestrator(converter_config)

    app.add_middleware(TraceIdMiddleware)
    app.include_router(pages_router)
    app.include_router(convert_router)
    app.mount("/static", StaticFiles(directory=server_config.static_dir), name="static")

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return HTMLResponse(content=CONTENT_404, status_code=404)
        return await http_exception_handler(request, exc)

    return app
