"""Data models used throughout the clone pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class ResourceKind(str, Enum):
    """Resource type as declared by the browser for a network exchange."""

    STYLESHEET = "stylesheet"
    SCRIPT = "script"
    IMAGE = "image"
    FONT = "font"
    MEDIA = "media"
    OTHER = "other"

    @classmethod
    def from_browser(cls, value: Optional[str]) -> "ResourceKind":
        try:
            return cls(value or "other")
        except ValueError:
            return cls.OTHER


class AssetCategory(str, Enum):
    """Bucket a persisted resource is filed under."""

    CSS = "css"
    JS = "js"
    IMAGES = "images"
    FONTS = "fonts"
    MEDIA = "media"
    OTHER = "other"

    @property
    def directory(self) -> Optional[str]:
        """Subdirectory name, or ``None`` for files kept at the output root."""
        if self is AssetCategory.OTHER:
            return None
        return self.value


ASSET_DIRECTORIES = [
    category.directory for category in AssetCategory if category.directory
]


@dataclass
class ResourceRecord:
    """Response body captured from the rendered page."""

    url: str
    kind: ResourceKind
    content: bytes
    content_type: str
    extension: str


@dataclass
class AssignedAsset:
    """Captured resource after it has been written to disk."""

    asset_id: int
    source_url: str
    category: AssetCategory
    path: Path
    relative_path: str


@dataclass
class CloneManifest:
    """Summary of a finished clone run, serialized to clone-manifest.json."""

    original_url: str
    cloned_at: str
    total_resources: int
    failed_resources: int
    breakdown: Dict[str, int]
    cloned_directory: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "originalUrl": self.original_url,
            "clonedAt": self.cloned_at,
            "totalResources": self.total_resources,
            "failedResources": self.failed_resources,
            "resourceBreakdown": dict(self.breakdown),
            "clonedDirectory": self.cloned_directory,
        }


@dataclass
class CloneResult:
    """Everything a successful run produced."""

    manifest: CloneManifest
    output_dir: Path
    assets: List[AssignedAsset] = field(default_factory=list)
    omitted: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
