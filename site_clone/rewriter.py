"""Rewrite captured URLs in the page markup to local relative paths."""

from __future__ import annotations

import html as html_lib
import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

logger = logging.getLogger("site_clone")

HEAD_TAG_PATTERN = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)

META_TEMPLATE = """
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <base href="{url}">
"""


def url_path(url: str) -> Optional[str]:
    """Path component of ``url``, or ``None`` when it cannot be parsed."""
    try:
        return urlparse(url).path
    except ValueError as exc:
        logger.debug("Skipping path rewrite for %s: %s", url, exc)
        return None


def _compile(keys: Iterable[str]) -> re.Pattern[str]:
    ordered = sorted(keys, key=len, reverse=True)
    return re.compile("|".join(re.escape(key) for key in ordered))


def _replace_all(text: str, replacements: Mapping[str, str]) -> str:
    """Replace every literal key in one scan, preferring the longest match."""
    if not replacements:
        return text
    pattern = _compile(replacements)
    return pattern.sub(lambda match: replacements[match.group(0)], text)


def _split_replace(text: str, replacements: Mapping[str, str]) -> List[Tuple[str, bool]]:
    """Replace keys in one scan and return segments flagged ``True`` when already local."""
    if not replacements:
        return [(text, False)]
    segments: List[Tuple[str, bool]] = []
    position = 0
    for match in _compile(replacements).finditer(text):
        segments.append((text[position : match.start()], False))
        segments.append((replacements[match.group(0)], True))
        position = match.end()
    segments.append((text[position:], False))
    return segments


def rewrite_references(html: str, path_table: Mapping[str, str]) -> str:
    """Point every captured URL in ``html`` at its local copy.

    Absolute URLs are replaced first. Bare paths (``/static/app.css``) are
    replaced afterwards, and only in text the first pass left alone, so they
    can neither clobber part of a longer absolute URL nor a local path that
    is already in place. The root path ``/`` is never replaced.
    """
    protected: Dict[str, str] = {path: path for path in path_table.values()}
    protected.update(path_table)
    segments = _split_replace(html, protected)

    path_replacements: Dict[str, str] = {}
    for source_url, relative_path in path_table.items():
        path = url_path(source_url)
        if not path or path == "/":
            continue
        # First captured URL wins when two hosts serve the same path.
        path_replacements.setdefault(path, relative_path)

    return "".join(
        text if is_local else _replace_all(text, path_replacements)
        for text, is_local in segments
    )


def inject_meta_tags(html: str, original_url: str) -> str:
    """Insert charset, viewport and base tags right after the opening ``<head>``."""
    match = HEAD_TAG_PATTERN.search(html)
    if match is None:
        logger.debug("No <head> tag found; leaving markup without meta tags")
        return html
    meta = META_TEMPLATE.format(url=html_lib.escape(original_url, quote=True))
    return html[: match.end()] + meta + html[match.end() :]
