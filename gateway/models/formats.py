"""Output format selection for converted documents."""

from enum import StrEnum


class OutputFormat(StrEnum):
    """Output formats the gateway can produce.

    The member name is the canonical format name, the value is the driver
    name handed to ogr2ogr with -f.
    """

    GML = "GML"
    GEOJSON = "geojson"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_MIME_TYPES = {
    OutputFormat.GML: "text/xml",
    OutputFormat.GEOJSON: "text/json",
}

DEFAULT_OUTPUT_FORMAT = OutputFormat.GML


def select_output_format(value: object) -> OutputFormat:
    """Map the optional ``output`` request parameter to an output format.

    Only the case is normalised, so ``GeoJSON`` selects GeoJSON but ``" geojson "``
    does not. Anything else, including a missing or non-string value, falls
    back to GML.
    """
    if not isinstance(value, str):
        return DEFAULT_OUTPUT_FORMAT
    if value.lower() == "geojson":
        return OutputFormat.GEOJSON
    return DEFAULT_OUTPUT_FORMAT
