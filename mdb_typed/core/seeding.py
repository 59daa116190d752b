"""
Stretch catalog seeding.

Turns the stretch manifest shipped with the mobile app into region
documents and writes them through ``StretchRepository.seed``. Images and
audio file references in the manifest are not carried over.

Manifest shape::

    {
      "regions": {
        "neck": {"stretches": [{"id": ..., "name": ..., "description": ...,
                                "bilateral": true, "image": ..., "audioFiles": {...}}]},
        ...
      },
      "shared": {...}
    }

This module is part of MDB_TYPED.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import ManifestValidationError
from ..models import BodyRegion, CreateStretchRegionInput
from ..repositories import StretchRepository

logger = logging.getLogger(__name__)

REGION_DISPLAY_NAMES: dict[BodyRegion, str] = {
    BodyRegion.NECK: "Neck",
    BodyRegion.SHOULDERS: "Shoulders",
    BodyRegion.BACK: "Back",
    BodyRegion.HIP_FLEXORS: "Hip Flexors",
    BodyRegion.GLUTES: "Glutes",
    BodyRegion.HAMSTRINGS: "Hamstrings",
    BodyRegion.QUADS: "Quads",
    BodyRegion.CALVES: "Calves",
}

# SF Symbol names used by the iOS client
REGION_ICONS: dict[BodyRegion, str] = {
    BodyRegion.NECK: "person.crop.circle",
    BodyRegion.SHOULDERS: "figure.arms.open",
    BodyRegion.BACK: "figure.stand",
    BodyRegion.HIP_FLEXORS: "figure.walk",
    BodyRegion.GLUTES: "figure.cooldown",
    BodyRegion.HAMSTRINGS: "figure.flexibility",
    BodyRegion.QUADS: "figure.run",
    BodyRegion.CALVES: "shoe",
}

_STRETCH_FIELDS = ("id", "name", "description", "bilateral")


def parse_stretch_manifest(
    manifest: dict[str, Any], manifest_path: str | None = None
) -> list[CreateStretchRegionInput]:
    """
    Convert a decoded manifest into region creation inputs.

    Raises:
        ManifestValidationError: On unknown regions, regions without
            stretches, stretches without a description, or malformed entries
    """
    regions_raw = manifest.get("regions")
    if not isinstance(regions_raw, dict):
        raise ManifestValidationError(
            "Manifest has no 'regions' object",
            error_paths=["regions"],
            manifest_path=manifest_path,
        )

    regions: list[CreateStretchRegionInput] = []
    for region_key, region_data in regions_raw.items():
        try:
            region = BodyRegion(region_key)
        except ValueError as e:
            raise ManifestValidationError(
                f"Unknown region: {region_key}",
                error_paths=[f"regions.{region_key}"],
                manifest_path=manifest_path,
            ) from e

        stretches_raw = region_data.get("stretches") if isinstance(region_data, dict) else None
        if not stretches_raw:
            raise ManifestValidationError(
                f"Region {region_key} has no stretches",
                error_paths=[f"regions.{region_key}.stretches"],
                manifest_path=manifest_path,
            )

        stretches = []
        for index, stretch in enumerate(stretches_raw):
            path = f"regions.{region_key}.stretches[{index}]"
            if not isinstance(stretch, dict) or not stretch.get("description"):
                raise ManifestValidationError(
                    f"Stretch {path} has no description",
                    error_paths=[f"{path}.description"],
                    manifest_path=manifest_path,
                )
            stretches.append({k: stretch.get(k) for k in _STRETCH_FIELDS})

        try:
            regions.append(
                CreateStretchRegionInput(
                    region=region,
                    display_name=REGION_DISPLAY_NAMES[region],
                    icon_name=REGION_ICONS[region],
                    stretches=stretches,
                )
            )
        except ValidationError as e:
            raise ManifestValidationError(
                f"Invalid stretches in region {region_key}: {e.error_count()} error(s)",
                error_paths=[
                    f"regions.{region_key}." + ".".join(str(loc) for loc in err["loc"])
                    for err in e.errors()
                ],
                manifest_path=manifest_path,
            ) from e

    return regions


def load_stretch_manifest(path: str | Path) -> list[CreateStretchRegionInput]:
    """
    Read and validate a stretch manifest file.

    Raises:
        ManifestValidationError: If the file is unreadable, not JSON, or invalid
    """
    manifest_path = str(path)
    try:
        manifest = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestValidationError(
            f"Could not read stretch manifest: {e}",
            manifest_path=manifest_path,
        ) from e

    if not isinstance(manifest, dict):
        raise ManifestValidationError(
            "Stretch manifest must be a JSON object", manifest_path=manifest_path
        )

    regions = parse_stretch_manifest(manifest, manifest_path=manifest_path)
    logger.info(
        f"Parsed {len(regions)} regions with "
        f"{sum(len(r.stretches) for r in regions)} total stretches from {manifest_path}"
    )
    return regions


async def seed_stretch_catalog(repository: StretchRepository, path: str | Path) -> int:
    """
    Load a manifest and seed it. Safe to re-run: documents are keyed by region.

    Returns:
        Number of regions written
    """
    regions = load_stretch_manifest(path)
    written = await repository.seed(regions)
    for region in regions:
        logger.info(
            f"  {region.display_name} ({region.region.value}): {len(region.stretches)} stretches"
        )
    return written
