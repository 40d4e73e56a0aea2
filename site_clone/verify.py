"""Read-only check that local references in a cloned page resolve on disk."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List
from urllib.parse import unquote

from bs4 import BeautifulSoup

REFERENCE_ATTRIBUTES = ("src", "href", "poster", "data-src")
CSS_URL_PATTERN = re.compile(r"url\(\s*['\"]?(\./[^'\")\s]+)['\"]?\s*\)")


def _srcset_urls(value: str) -> Iterable[str]:
    for candidate in value.split(","):
        parts = candidate.strip().split()
        if parts:
            yield parts[0]


def collect_local_references(html: str) -> List[str]:
    """Return every ``./``-relative reference in attributes and inline CSS, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    found: List[str] = []
    for tag in soup.find_all(True):
        for attr in REFERENCE_ATTRIBUTES:
            value = tag.get(attr)
            if isinstance(value, str):
                found.append(value.strip())
        srcset = tag.get("srcset")
        if isinstance(srcset, str):
            found.extend(_srcset_urls(srcset))
        style = tag.get("style")
        if isinstance(style, str):
            found.extend(CSS_URL_PATTERN.findall(style))
    for block in soup.find_all("style"):
        found.extend(CSS_URL_PATTERN.findall(block.get_text()))
    return [ref for ref in found if ref.startswith("./")]


def find_unresolved_references(html: str, output_dir: Path) -> List[str]:
    """Local references that do not point at an existing file under ``output_dir``."""
    root = output_dir.resolve()
    missing: List[str] = []
    for reference in collect_local_references(html):
        relative = unquote(reference.split("#", 1)[0].split("?", 1)[0])
        target = (root / relative).resolve()
        if root not in target.parents or not target.is_file():
            if reference not in missing:
                missing.append(reference)
    return missing
