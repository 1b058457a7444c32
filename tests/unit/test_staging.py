"""Unit tests for temporary staging of Shapefile components."""

from pathlib import Path

import pytest

from gateway.errors import CleanupError, StagingError
from gateway.staging import TempStager

BUNDLE_EXTENSIONS = ["shp", "dbf", "prj", "shx", "cpg"]


@pytest.fixture
def stager(staging_dir) -> TempStager:
    return TempStager(staging_dir)


def _write_bundle(directory: Path, base: str, extensions=BUNDLE_EXTENSIONS) -> Path:
    for ext in extensions:
        (directory / f"{base}.{ext}").write_bytes(b"component")
    return directory / f"{base}.shp"


class TestUniqueBase:
    """Tests for generated staging names."""

    def test_is_hex_without_separators(self):
        base = TempStager.generate_unique_base()

        assert len(base) == 32
        assert "-" not in base
        int(base, 16)

    def test_names_do_not_repeat(self):
        bases = {TempStager.generate_unique_base() for _ in range(1000)}

        assert len(bases) == 1000

    def test_destination_shares_base(self, stager, staging_dir):
        assert stager.destination_for("abc", "dbf") == staging_dir / "abc.dbf"


class TestStage:
    """Tests for moving uploaded parts into the staging directory."""

    def test_moves_file(self, stager, tmp_path, staging_dir):
        source = tmp_path / "part-0"
        source.write_bytes(b"shape data")
        destination = staging_dir / "abc.shp"

        result = stager.stage(source, destination)

        assert result == destination
        assert destination.read_bytes() == b"shape data"
        assert not source.exists()

    def test_failure_leaves_source_and_raises(self, stager, tmp_path, caplog):
        source = tmp_path / "part-0"
        source.write_bytes(b"shape data")
        destination = tmp_path / "missing-dir" / "abc.shp"

        with pytest.raises(StagingError) as exc_info:
            stager.stage(source, destination)

        assert source.read_bytes() == b"shape data"
        assert exc_info.value.destination == destination
        assert "Failed to stage" in caplog.text

    def test_missing_source_raises(self, stager, tmp_path, staging_dir):
        with pytest.raises(StagingError):
            stager.stage(tmp_path / "nope", staging_dir / "abc.shp")


class TestCleanup:
    """Tests for removing a staged bundle after conversion."""

    def test_removes_all_five_components(self, stager, staging_dir):
        shp = _write_bundle(staging_dir, "abc")

        stager.cleanup(shp)

        assert list(staging_dir.iterdir()) == []

    def test_stops_at_first_missing_component(self, stager, staging_dir):
        # prj missing: shp and dbf go, shx and cpg stay behind
        shp = _write_bundle(staging_dir, "abc", ["shp", "dbf", "shx", "cpg"])

        with pytest.raises(CleanupError) as exc_info:
            stager.cleanup(shp)

        assert exc_info.value.path == staging_dir / "abc.prj"
        remaining = sorted(p.name for p in staging_dir.iterdir())
        assert remaining == ["abc.cpg", "abc.shx"]

    def test_missing_index_removes_nothing(self, stager, staging_dir):
        _write_bundle(staging_dir, "abc", ["dbf", "prj", "shx", "cpg"])

        with pytest.raises(CleanupError):
            stager.cleanup(staging_dir / "abc.shp")

        assert len(list(staging_dir.iterdir())) == 4

    def test_only_touches_own_bundle(self, stager, staging_dir):
        shp = _write_bundle(staging_dir, "abc")
        _write_bundle(staging_dir, "def")

        stager.cleanup(shp)

        assert len(list(staging_dir.glob("def.*"))) == 5
        assert list(staging_dir.glob("abc.*")) == []


class TestDiscard:
    """Tests for removing staged components that are never converted."""

    def test_removes_given_paths_and_ignores_missing(self, stager, staging_dir):
        dbf = staging_dir / "abc.dbf"
        dbf.write_bytes(b"x")

        stager.discard([dbf, staging_dir / "abc.shx"])

        assert not dbf.exists()
