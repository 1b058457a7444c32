"""Unit tests for upload and staging models."""

from pathlib import Path

import pytest

from gateway.models.formats import OutputFormat
from gateway.models.staging import ConvertedDocument, UploadedPart, split_filename


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("parcels.geojson", ("parcels", "geojson")),
        ("roads.shp", ("roads", "shp")),
        ("roads.v2.shp", ("roads.v2", "shp")),
        ("README", ("README", None)),
        (".hidden", (".hidden", None)),
        ("trailing.", ("trailing.", None)),
        ("C:\\data\\parcels.gml", ("parcels", "gml")),
        ("some/dir/roads.dbf", ("roads", "dbf")),
    ],
)
def test_split_filename(filename, expected):
    assert split_filename(filename) == expected


def test_uploaded_part_properties():
    part = UploadedPart(filename="roads.SHP", path=Path("/tmp/part-0"))

    assert part.base_name == "roads"
    assert part.extension == "SHP"


def test_converted_document_mime_type():
    document = ConvertedDocument(payload="{}", output_format=OutputFormat.GEOJSON)

    assert document.mime_type == "text/json"
