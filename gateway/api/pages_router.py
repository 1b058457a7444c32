"""Landing page and health check router."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from gateway.api.pages import render_index
from gateway.config import SERVICE_VERSION

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the landing page with the service and GDAL versions."""
    return render_index(
        request.app.state.index_template,
        version=SERVICE_VERSION,
        gdal_version=request.app.state.gdal_version,
    )


@router.get("/health")
async def health():
    """Return health status for load balancer checks."""
    return {"status": "ok"}
