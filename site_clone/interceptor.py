"""Capture of response bodies observed while the page renders."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from .classifier import infer_extension
from .models import ResourceKind, ResourceRecord

logger = logging.getLogger("site_clone")

CAPTURED_KINDS = {
    ResourceKind.STYLESHEET,
    ResourceKind.SCRIPT,
    ResourceKind.IMAGE,
    ResourceKind.FONT,
    ResourceKind.MEDIA,
}
CONTENT_TYPE_MARKERS = ("css", "javascript")


def is_capturable(kind: ResourceKind, content_type: Optional[str]) -> bool:
    """Whether a response should have its body captured.

    Some servers report the wrong resource type but a correct content type,
    so stylesheets and scripts are also recognized by their Content-Type.
    """
    if kind in CAPTURED_KINDS:
        return True
    content_type = (content_type or "").lower()
    return any(marker in content_type for marker in CONTENT_TYPE_MARKERS)


@dataclass
class PendingCapture:
    """Response whose body read was started but not yet folded in."""

    url: str
    kind: ResourceKind
    content_type: str
    task: asyncio.Task[bytes]


class ResourceInterceptor:
    """Collects eligible responses from a render session.

    Responses are appended in notification order while the page loads;
    :meth:`drain` waits for the outstanding body reads and folds them into
    the record table and the failed set.
    """

    def __init__(self) -> None:
        self.records: Dict[str, ResourceRecord] = {}
        self.failed: Set[str] = set()
        self._pending: List[PendingCapture] = []

    def attach(self, session: Any) -> None:
        session.on_request(self.handle_request)
        session.on_response(self.handle_response)

    def handle_request(self, request: Any) -> None:
        logger.debug("Request %s %s", request.resource_type, request.url)

    def handle_response(self, response: Any) -> None:
        kind = ResourceKind.from_browser(response.request.resource_type)
        content_type = response.headers.get("content-type", "")
        if not is_capturable(kind, content_type):
            return
        task = asyncio.get_running_loop().create_task(response.body())
        self._pending.append(PendingCapture(response.url, kind, content_type, task))

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self) -> Tuple[Dict[str, ResourceRecord], Set[str]]:
        """Finish all outstanding body reads and return (records, failed URLs).

        Responses that arrive while earlier reads are awaited are picked up
        too; the method returns only once nothing is pending.
        """
        while self._pending:
            pending, self._pending = self._pending, []
            await asyncio.gather(*(item.task for item in pending), return_exceptions=True)
            for item in pending:
                self._fold(item)
        return self.records, self.failed

    def _fold(self, item: PendingCapture) -> None:
        if item.task.cancelled():
            error: Optional[BaseException] = asyncio.CancelledError()
        else:
            error = item.task.exception()
        if error is not None:
            logger.warning("Failed to capture %s: %s", item.url, error)
            self.failed.add(item.url)
            return
        content = item.task.result()
        self.records[item.url] = ResourceRecord(
            url=item.url,
            kind=item.kind,
            content=content,
            content_type=item.content_type,
            extension=infer_extension(item.url, item.content_type, item.kind, content),
        )
        logger.debug("Captured %s (%d bytes)", item.url, len(content))
