"""Persistence of captured resources into the clone directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .errors import DirectoryCreationFailure
from .models import ASSET_DIRECTORIES, AssetCategory, AssignedAsset, ResourceRecord

logger = logging.getLogger("site_clone")


class OutputWriter:
    """Writes one run's assets with sequential ``asset_<n>`` names.

    The counter is shared by every category and only advances after a
    successful write, so committed ids never repeat.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.assets: List[AssignedAsset] = []
        self.omitted: List[str] = []
        self._counter = 0

    @property
    def next_id(self) -> int:
        return self._counter

    def prepare(self) -> None:
        """Create the output root and one subdirectory per category."""
        for path in [self.output_dir] + [self.output_dir / name for name in ASSET_DIRECTORIES]:
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DirectoryCreationFailure(path, exc.strerror or str(exc)) from exc
        logger.debug("Prepared output directory %s", self.output_dir)

    def write(
        self,
        record: ResourceRecord,
        category: AssetCategory,
        extension: str,
    ) -> Optional[AssignedAsset]:
        """Persist one record; returns ``None`` when the file could not be written."""
        filename = f"asset_{self._counter}{extension}"
        directory = category.directory
        if directory:
            destination = self.output_dir / directory / filename
            relative_path = f"./{directory}/{filename}"
        else:
            destination = self.output_dir / filename
            relative_path = f"./{filename}"

        try:
            destination.write_bytes(record.content)
        except OSError as exc:
            logger.warning("Failed to write %s for %s: %s", destination, record.url, exc)
            self.omitted.append(record.url)
            return None

        asset = AssignedAsset(
            asset_id=self._counter,
            source_url=record.url,
            category=category,
            path=destination,
            relative_path=relative_path,
        )
        self._counter += 1
        self.assets.append(asset)
        return asset

    def write_text(self, name: str, text: str) -> Path:
        destination = self.output_dir / name
        destination.write_text(text, encoding="utf-8")
        logger.info("Saved %s", destination)
        return destination
