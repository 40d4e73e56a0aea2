"""High-level orchestration for capturing a page and writing its local clone."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set

from .classifier import classify
from .config import CloneConfig
from .interceptor import ResourceInterceptor
from .lazyload import trigger_lazy_content
from .manifest import build_manifest, write_manifest
from .models import CloneResult, ResourceRecord
from .rewriter import inject_meta_tags, rewrite_references
from .session import RenderSession
from .utils import normalize_url, output_dir_name
from .verify import find_unresolved_references
from .writer import OutputWriter

logger = logging.getLogger("site_clone")

FAILURE_MARKER = "Clone failed:"

SessionFactory = Callable[[CloneConfig], Any]


@dataclass
class CapturedPage:
    """Rendered markup plus every resource observed while rendering."""

    url: str
    html: str
    records: Dict[str, ResourceRecord]
    failed: Set[str]


async def capture_page(
    url: str,
    config: CloneConfig,
    session_factory: SessionFactory = RenderSession,
) -> CapturedPage:
    """Render ``url``, sweep it for lazy content and snapshot the DOM."""
    interceptor = ResourceInterceptor()
    async with session_factory(config) as session:
        interceptor.attach(session)
        await session.navigate(url, config.navigation_timeout)
        await trigger_lazy_content(session, config)
        html = await session.snapshot_html()
        records, failed = await interceptor.drain()
    logger.info("Captured %d resources (%d failed)", len(records), len(failed))
    return CapturedPage(url=url, html=html, records=records, failed=failed)


async def clone_website(
    url: str,
    config: Optional[CloneConfig] = None,
    session_factory: SessionFactory = RenderSession,
) -> CloneResult:
    """Clone one page to disk. Raises on fatal failures."""
    config = config or CloneConfig()
    url = normalize_url(url)
    directory_name = output_dir_name(url, int(time.time() * 1000))

    page = await capture_page(url, config, session_factory)

    writer = OutputWriter(config.output_root / directory_name)
    writer.prepare()
    path_table: Dict[str, str] = {}
    for record in page.records.values():
        category, extension = classify(record)
        asset = writer.write(record, category, extension)
        if asset is not None:
            path_table[record.url] = asset.relative_path

    html = rewrite_references(page.html, path_table)
    html = inject_meta_tags(html, url)
    writer.write_text("index.html", html)

    manifest = build_manifest(url, page.records, page.failed, directory_name)
    write_manifest(manifest, writer.output_dir)

    unresolved = find_unresolved_references(html, writer.output_dir)
    for reference in unresolved:
        logger.warning("Local reference does not resolve: %s", reference)

    return CloneResult(
        manifest=manifest,
        output_dir=writer.output_dir,
        assets=list(writer.assets),
        omitted=list(writer.omitted),
        unresolved=unresolved,
    )


def format_summary(result: CloneResult) -> str:
    manifest = result.manifest
    counts = manifest.breakdown
    summary = (
        f"Clone completed: '{manifest.original_url}' cloned with "
        f"{manifest.total_resources} resources ({counts['css']} CSS, {counts['js']} JS, "
        f"{counts['images']} images, {counts['fonts']} fonts) "
        f"in directory '{manifest.cloned_directory}'."
    )
    if manifest.failed_resources:
        summary += f" {manifest.failed_resources} resources could not be captured."
    if result.omitted:
        summary += f" {len(result.omitted)} resources could not be saved and keep their original URLs."
    if result.unresolved:
        summary += f" {len(result.unresolved)} local references do not resolve."
    return summary


async def clone_to_summary(
    url: str,
    config: Optional[CloneConfig] = None,
    session_factory: SessionFactory = RenderSession,
) -> str:
    """Clone ``url`` and describe the outcome in a single line of text."""
    try:
        result = await clone_website(url, config, session_factory)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Cloning %s failed", url)
        return f"{FAILURE_MARKER} {exc}"
    summary = format_summary(result)
    logger.info(summary)
    return summary
