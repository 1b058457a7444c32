"""Domain models for the conversion gateway."""

from gateway.models.formats import OutputFormat, select_output_format
from gateway.models.staging import ConvertedDocument, StagedInput, UploadedPart

__all__ = [
    "OutputFormat",
    "select_output_format",
    "UploadedPart",
    "StagedInput",
    "ConvertedDocument",
]
