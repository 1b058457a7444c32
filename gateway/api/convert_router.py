"""Conversion endpoint.

POST /convert accepts a multipart form:
- file:   one geospatial file, or every component of a Shapefile bundle
- output: optional, "geojson" (any case) for GeoJSON, anything else for GML

The response status is always 200. The body is either the converted
document or a fixed failure page; the cause of a failure is only logged.
"""

import logging
import tempfile
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from starlette.concurrency import run_in_threadpool

from gateway.api.pages import CONTENT_FAILED
from gateway.errors import GatewayError, NoUploadError
from gateway.orchestrator import ConversionOrchestrator
from gateway.uploads import read_upload_field

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_FIELD = "file"
OUTPUT_FIELD = "output"


def get_orchestrator(request: Request) -> ConversionOrchestrator:
    return request.app.state.orchestrator


def failure_response() -> HTMLResponse:
    return HTMLResponse(content=CONTENT_FAILED, status_code=200)


@router.post("/convert")
async def convert(
    request: Request,
    orchestrator: ConversionOrchestrator = Depends(get_orchestrator),
):
    """Convert the uploaded file(s) and return the document as text."""
    staging_dir = orchestrator.config.staging_dir
    try:
        async with request.form() as form:
            with tempfile.TemporaryDirectory(prefix="ogr-gateway-", dir=staging_dir) as spool_dir:
                upload = await read_upload_field(form, UPLOAD_FIELD, Path(spool_dir))
                document = await run_in_threadpool(
                    orchestrator.convert_upload, upload, form.get(OUTPUT_FIELD)
                )
    except NoUploadError as e:
        logger.warning(f"Conversion request rejected: {e}")
        return failure_response()
    except GatewayError as e:
        logger.error(f"Conversion failed ({type(e).__name__}): {e}")
        return failure_response()
    except Exception as e:
        logger.exception(f"Unexpected error during conversion: {e}")
        return failure_response()

    return Response(content=document.payload, media_type=document.mime_type, status_code=200)
