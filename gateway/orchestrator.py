"""Conversion orchestrator - coordinates classification, conversion and cleanup."""

import logging
import time

from gateway.config import ConverterConfig
from gateway.errors import CleanupError, NoUploadError
from gateway.models.formats import select_output_format
from gateway.models.staging import ConvertedDocument, StagedInput
from gateway.staging import TempStager
from gateway.tools.ogr import OgrConverter
from gateway.uploads import FieldValue, classify_upload

logger = logging.getLogger(__name__)


class ConversionOrchestrator:
    """Orchestrates one conversion: classify upload → select format → ogr2ogr → cleanup."""

    def __init__(
        self,
        config: ConverterConfig,
        stager: TempStager | None = None,
        converter: OgrConverter | None = None,
    ):
        self.config = config
        self.stager = stager or TempStager(config.staging_dir)
        self.converter = converter or OgrConverter(config)

    def convert_upload(self, upload: FieldValue, output: object = None) -> ConvertedDocument:
        """Convert the uploaded file(s) of one request.

        Blocks while ogr2ogr runs. Staged Shapefile components are removed
        once the conversion attempt is over, whatever its outcome; a failed
        cleanup is logged and does not change the result.

        Args:
            upload: Value of the ``file`` field (see read_upload_field)
            output: Raw value of the ``output`` field

        Returns:
            ConvertedDocument with payload and selected format

        Raises:
            NoUploadError: If the request holds no usable file
            ConversionError: If ogr2ogr cannot be run or fails
        """
        staged = classify_upload(upload, self.stager, self.config.discard_orphans)
        if staged is None:
            msg = "No usable file found in upload"
            raise NoUploadError(msg)

        output_format = select_output_format(output)
        start_time = time.time()
        logger.info(
            f"Converting {staged.original_base_name} to {output_format.name} "
            f"(multi-component: {staged.is_multi_component})"
        )

        try:
            payload = self.converter.convert(
                staged.staged_path, staged.original_base_name, output_format
            )
        finally:
            if staged.is_multi_component:
                self._cleanup(staged)

        logger.info(
            f"Conversion of {staged.original_base_name} finished in "
            f"{time.time() - start_time:.2f}s"
        )
        return ConvertedDocument(payload=payload, output_format=output_format)

    def _cleanup(self, staged: StagedInput) -> None:
        try:
            self.stager.cleanup(staged.staged_path)
        except CleanupError as e:
            logger.warning(f"Something went wrong while removing temporary files: {e}")
