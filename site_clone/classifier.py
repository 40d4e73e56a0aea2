"""Extension inference and category assignment for captured resources."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

from filetype import guess

from .models import AssetCategory, ResourceKind, ResourceRecord

CATEGORY_EXTENSIONS: List[Tuple[AssetCategory, Tuple[str, ...]]] = [
    (AssetCategory.CSS, (".css",)),
    (AssetCategory.JS, (".js", ".mjs")),
    (
        AssetCategory.IMAGES,
        (".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico", ".avif", ".bmp", ".img"),
    ),
    (AssetCategory.FONTS, (".woff", ".woff2", ".ttf", ".eot", ".otf", ".font")),
    (AssetCategory.MEDIA, (".mp4", ".webm", ".mp3", ".wav", ".ogg", ".m4a", ".media")),
]

KNOWN_EXTENSIONS = {ext for _, exts in CATEGORY_EXTENSIONS for ext in exts}

KIND_CATEGORIES = {
    ResourceKind.STYLESHEET: AssetCategory.CSS,
    ResourceKind.SCRIPT: AssetCategory.JS,
    ResourceKind.IMAGE: AssetCategory.IMAGES,
}

CONTENT_TYPE_EXTENSIONS: Dict[str, str] = {
    "text/css": ".css",
    "text/javascript": ".js",
    "application/javascript": ".js",
    "application/x-javascript": ".js",
    "application/ecmascript": ".js",
    "text/ecmascript": ".js",
    "image/jpeg": ".jpg",
    "image/pjpeg": ".jpg",
    "image/svg+xml": ".svg",
    "image/x-icon": ".ico",
    "image/vnd.microsoft.icon": ".ico",
    "application/font-woff": ".woff",
    "application/x-font-woff": ".woff",
    "application/font-woff2": ".woff2",
    "application/x-font-ttf": ".ttf",
    "application/x-font-otf": ".otf",
    "application/vnd.ms-fontobject": ".eot",
    "font/sfnt": ".ttf",
    "audio/mpeg": ".mp3",
    "audio/x-wav": ".wav",
    "audio/wave": ".wav",
    "audio/mp4": ".m4a",
    "video/ogg": ".ogg",
}

MEDIA_FAMILIES = ("image/", "font/", "audio/", "video/")

DEFAULT_EXTENSIONS = {
    ResourceKind.STYLESHEET: ".css",
    ResourceKind.SCRIPT: ".js",
    ResourceKind.IMAGE: ".img",
    ResourceKind.FONT: ".font",
    ResourceKind.MEDIA: ".media",
    ResourceKind.OTHER: ".bin",
}

_SUBTYPE_PATTERN = re.compile(r"[^a-z0-9]+")


def extension_from_url(url: str) -> Optional[str]:
    """Return the URL path suffix when it is one we file assets under."""
    try:
        path = urlparse(url).path
    except ValueError:
        return None
    suffix = PurePosixPath(path).suffix.lower()
    if suffix in KNOWN_EXTENSIONS:
        return suffix
    return None


def extension_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Map a Content-Type header to an extension, falling back to the subtype."""
    if not content_type:
        return None
    mime = content_type.split(";")[0].strip().lower()
    if mime in CONTENT_TYPE_EXTENSIONS:
        return CONTENT_TYPE_EXTENSIONS[mime]
    if mime.startswith(MEDIA_FAMILIES):
        subtype = _SUBTYPE_PATTERN.sub("", mime.split("/", 1)[1])
        if subtype:
            return f".{subtype}"
    return None


def extension_from_bytes(data: bytes) -> Optional[str]:
    """Detect the extension from the file signature using filetype."""
    if not data:
        return None
    kind = guess(data)
    if kind is None:
        return None
    ext = kind.extension.lower()
    if ext == "jpeg":
        return ".jpg"
    return f".{ext}"


def infer_extension(
    url: str,
    content_type: Optional[str],
    kind: ResourceKind,
    data: bytes = b"",
) -> str:
    """Pick a file extension: URL suffix, then Content-Type, then signature, then a default."""
    return (
        extension_from_url(url)
        or extension_from_content_type(content_type)
        or extension_from_bytes(data)
        or DEFAULT_EXTENSIONS[kind]
    )


def categorize(kind: ResourceKind, extension: str) -> AssetCategory:
    if kind in KIND_CATEGORIES:
        return KIND_CATEGORIES[kind]
    extension = extension.lower()
    for category, extensions in CATEGORY_EXTENSIONS:
        if extension in extensions:
            return category
    return AssetCategory.OTHER


def classify(record: ResourceRecord) -> Tuple[AssetCategory, str]:
    """Return the category and extension a captured record is written with."""
    extension = record.extension or infer_extension(
        record.url, record.content_type, record.kind, record.content
    )
    return categorize(record.kind, extension), extension
