"""
Unit tests for stretch catalog seeding.

Tests manifest parsing, manifest validation errors and seeding through
StretchRepository.
"""

import json

import pytest

from mdb_typed.core import load_stretch_manifest, parse_stretch_manifest, seed_stretch_catalog
from mdb_typed.core.seeding import REGION_DISPLAY_NAMES, REGION_ICONS
from mdb_typed.exceptions import ManifestValidationError
from mdb_typed.models import BodyRegion
from mdb_typed.repositories import StretchRepository


@pytest.fixture
def manifest_file(tmp_path, sample_stretch_manifest):
    path = tmp_path / "stretches.json"
    path.write_text(json.dumps(sample_stretch_manifest), encoding="utf-8")
    return path


@pytest.mark.unit
class TestParseStretchManifest:
    def test_every_region_has_display_name_and_icon(self):
        assert set(REGION_DISPLAY_NAMES) == set(BodyRegion)
        assert set(REGION_ICONS) == set(BodyRegion)

    def test_maps_regions(self, sample_stretch_manifest):
        regions = parse_stretch_manifest(sample_stretch_manifest)

        by_key = {r.region: r for r in regions}
        assert set(by_key) == {BodyRegion.NECK, BodyRegion.CALVES}
        assert by_key[BodyRegion.NECK].display_name == "Neck"
        assert by_key[BodyRegion.NECK].icon_name == "person.crop.circle"
        assert by_key[BodyRegion.CALVES].icon_name == "shoe"
        assert [s.id for s in by_key[BodyRegion.CALVES].stretches] == ["wall-calf", "step-calf"]

    def test_drops_media(self, sample_stretch_manifest):
        regions = parse_stretch_manifest(sample_stretch_manifest)

        neck = next(r for r in regions if r.region is BodyRegion.NECK)
        assert neck.stretches[0].image is None
        assert "audioFiles" not in neck.stretches[0].model_dump(by_alias=True)

    def test_unknown_region(self, sample_stretch_manifest):
        sample_stretch_manifest["regions"]["wrists"] = {"stretches": []}

        with pytest.raises(ManifestValidationError) as exc_info:
            parse_stretch_manifest(sample_stretch_manifest)
        assert exc_info.value.error_paths == ["regions.wrists"]

    def test_region_without_stretches(self, sample_stretch_manifest):
        sample_stretch_manifest["regions"]["neck"]["stretches"] = []

        with pytest.raises(ManifestValidationError) as exc_info:
            parse_stretch_manifest(sample_stretch_manifest)
        assert exc_info.value.error_paths == ["regions.neck.stretches"]

    def test_stretch_without_description(self, sample_stretch_manifest):
        del sample_stretch_manifest["regions"]["calves"]["stretches"][1]["description"]

        with pytest.raises(ManifestValidationError) as exc_info:
            parse_stretch_manifest(sample_stretch_manifest)
        assert exc_info.value.error_paths == ["regions.calves.stretches[1].description"]

    def test_malformed_stretch(self, sample_stretch_manifest):
        sample_stretch_manifest["regions"]["neck"]["stretches"][0]["bilateral"] = "sometimes"

        with pytest.raises(ManifestValidationError) as exc_info:
            parse_stretch_manifest(sample_stretch_manifest)
        assert exc_info.value.error_paths[0].startswith("regions.neck.stretches")

    def test_missing_regions(self):
        with pytest.raises(ManifestValidationError):
            parse_stretch_manifest({"shared": {}})


@pytest.mark.unit
class TestLoadStretchManifest:
    def test_load(self, manifest_file):
        assert len(load_stretch_manifest(manifest_file)) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestValidationError) as exc_info:
            load_stretch_manifest(tmp_path / "missing.json")
        assert exc_info.value.manifest_path.endswith("missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ManifestValidationError):
            load_stretch_manifest(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ManifestValidationError):
            load_stretch_manifest(path)


@pytest.mark.unit
class TestSeedStretchCatalog:
    @pytest.mark.asyncio
    async def test_seed(self, fake_collection, fixed_clock, manifest_file):
        repo = StretchRepository(fake_collection, clock=fixed_clock)

        written = await seed_stretch_catalog(repo, manifest_file)

        assert written == 2
        regions = await repo.find_all()
        assert [r.id for r in regions] == ["calves", "neck"]
        assert all(s.image is None for r in regions for s in r.stretches)

    @pytest.mark.asyncio
    async def test_invalid_manifest_writes_nothing(self, fake_collection, tmp_path):
        path = tmp_path / "stretches.json"
        path.write_text(json.dumps({"regions": {"neck": {"stretches": []}}}), encoding="utf-8")
        repo = StretchRepository(fake_collection)

        with pytest.raises(ManifestValidationError):
            await seed_stretch_catalog(repo, path)
        assert fake_collection.write_calls == 0
