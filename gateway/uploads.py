"""Upload classification: turn a multipart field into a conversion-ready input.

A ``file`` field arrives in one of these shapes:
- nothing (field missing, or only empty parts) -> no input
- a plain string value -> no input
- one file -> converted in place, layer named after the file
- several files -> a Shapefile bundle, staged under one shared name

Only the .shp component of a bundle is handed to ogr2ogr; the other
components just have to sit next to it under the same base name.
"""

import logging
import shutil
from pathlib import Path

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile

from gateway.config import SHAPEFILE
from gateway.errors import StagingError
from gateway.models.staging import StagedInput, UploadedPart
from gateway.staging import TempStager

logger = logging.getLogger(__name__)

UploadValue = UploadedPart | str
FieldValue = UploadValue | list[UploadValue] | None


async def read_upload_field(form: FormData, name: str, spool_dir: Path) -> FieldValue:
    """Spool every file part of a form field to disk.

    File parts without a filename (what browsers send for an empty file
    input) are dropped. Non-file values are kept as strings. Copies run in
    the threadpool so large bundles do not block the event loop.

    Args:
        form: Parsed multipart form
        name: Field name to read
        spool_dir: Request-scoped directory owned by the caller

    Returns:
        None if the field holds nothing, the single value if it holds one,
        otherwise a list of values in submission order.
    """
    values: list[UploadValue] = []
    for index, item in enumerate(form.getlist(name)):
        if isinstance(item, UploadFile):
            if not item.filename:
                continue
            spooled_path = spool_dir / f"part-{index}"
            await item.seek(0)
            with spooled_path.open("wb") as fh:
                await run_in_threadpool(shutil.copyfileobj, item.file, fh)
            values.append(UploadedPart(filename=item.filename, path=spooled_path))
        else:
            values.append(item)

    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def classify_upload(
    value: FieldValue, stager: TempStager, discard_orphans: bool = True
) -> StagedInput | None:
    """Decide how an upload field is converted.

    Args:
        value: Field value as returned by read_upload_field
        stager: Staging used for multi-file bundles
        discard_orphans: Remove staged components again when the bundle has no .shp

    Returns:
        StagedInput, or None when the request holds no usable file
    """
    if isinstance(value, UploadedPart):
        return _single_file(value)
    if isinstance(value, list):
        if len(value) == 1:
            item = value[0]
            return _single_file(item) if isinstance(item, UploadedPart) else None
        return _multiple_files(value, stager, discard_orphans)
    return None


def _single_file(part: UploadedPart) -> StagedInput:
    return StagedInput(
        original_base_name=part.base_name,
        staged_path=part.path,
        is_multi_component=False,
    )


def _multiple_files(
    values: list[UploadValue], stager: TempStager, discard_orphans: bool
) -> StagedInput | None:
    unique_base = stager.generate_unique_base()
    staged_paths: list[Path] = []
    staged_input = None

    for part in values:
        if not isinstance(part, UploadedPart):
            continue
        extension = part.extension
        if extension is None:
            logger.warning(f"Ignoring upload component without extension: {part.filename}")
            continue

        destination = stager.destination_for(unique_base, extension)
        try:
            stager.stage(part.path, destination)
        except StagingError:
            continue
        staged_paths.append(destination)

        # Exact match: "SHP" does not count as the index component
        if extension == SHAPEFILE.INDEX_EXTENSION:
            staged_input = StagedInput(
                original_base_name=part.base_name,
                staged_path=destination,
                is_multi_component=True,
            )

    if staged_input is None:
        logger.warning(
            f"Multi-file upload without a usable .{SHAPEFILE.INDEX_EXTENSION} component "
            f"({len(staged_paths)} staged as {unique_base})"
        )
        if discard_orphans:
            stager.discard(staged_paths)
        return None

    logger.info(
        f"Staged {len(staged_paths)} Shapefile components for layer "
        f"{staged_input.original_base_name} as {unique_base}"
    )
    return staged_input
