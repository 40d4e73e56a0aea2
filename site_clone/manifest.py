"""Aggregate run statistics into clone-manifest.json."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

from .classifier import classify
from .models import AssetCategory, CloneManifest, ResourceRecord
from .utils import utc_timestamp

MANIFEST_FILENAME = "clone-manifest.json"
BREAKDOWN_CATEGORIES = (
    AssetCategory.CSS,
    AssetCategory.JS,
    AssetCategory.IMAGES,
    AssetCategory.FONTS,
)


def count_categories(records: Iterable[ResourceRecord]) -> Dict[str, int]:
    """Count records per reported category; media and other are left out."""
    counts = {category.value: 0 for category in BREAKDOWN_CATEGORIES}
    for record in records:
        category, _ = classify(record)
        if category.value in counts:
            counts[category.value] += 1
    return counts


def build_manifest(
    original_url: str,
    records: Mapping[str, ResourceRecord],
    failed: Iterable[str],
    directory_name: str,
    cloned_at: Optional[str] = None,
) -> CloneManifest:
    return CloneManifest(
        original_url=original_url,
        cloned_at=cloned_at or utc_timestamp(),
        total_resources=len(records),
        failed_resources=len(set(failed)),
        breakdown=count_categories(records.values()),
        cloned_directory=directory_name,
    )


def write_manifest(manifest: CloneManifest, output_dir: Path) -> Path:
    destination = output_dir / MANIFEST_FILENAME
    destination.write_text(json.dumps(manifest.to_dict(), indent=2), encoding="utf-8")
    return destination
