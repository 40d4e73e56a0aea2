"""Shared fixtures: a scripted stand-in for the Playwright render session."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pytest

from site_clone.config import CloneConfig
from site_clone.errors import NavigationFailure


class FakeRequest:
    def __init__(self, url: str, resource_type: str) -> None:
        self.url = url
        self.resource_type = resource_type


class FakeResponse:
    """Mimics the parts of ``playwright.async_api.Response`` the interceptor reads."""

    def __init__(
        self,
        url: str,
        resource_type: str,
        body: Optional[bytes] = b"",
        content_type: str = "",
        error: Optional[Exception] = None,
    ) -> None:
        self.url = url
        self.request = FakeRequest(url, resource_type)
        self.headers: Dict[str, str] = {}
        if content_type:
            self.headers["content-type"] = content_type
        self._body = body
        self._error = error

    async def body(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._body or b""


class FakeSession:
    """Replays scripted responses through the same hooks a real session exposes."""

    def __init__(
        self,
        config: CloneConfig,
        html: str = "<html><head></head><body></body></html>",
        responses: Sequence[FakeResponse] = (),
        navigation_error: Optional[str] = None,
    ) -> None:
        self.config = config
        self.html = html
        self.responses = list(responses)
        self.navigation_error = navigation_error
        self.request_handlers: List[Callable[[Any], None]] = []
        self.response_handlers: List[Callable[[Any], None]] = []
        self.scripts: List[Tuple[str, Any]] = []
        self.waits: List[float] = []
        self.navigated_to: Optional[str] = None
        self.closed = False

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True

    def on_request(self, handler: Callable[[Any], None]) -> None:
        self.request_handlers.append(handler)

    def on_response(self, handler: Callable[[Any], None]) -> None:
        self.response_handlers.append(handler)

    async def navigate(self, url: str, timeout: float) -> None:
        self.navigated_to = url
        if self.navigation_error:
            raise NavigationFailure(url, self.navigation_error)
        for response in self.responses:
            for handler in self.request_handlers:
                handler(response.request)
            for handler in self.response_handlers:
                handler(response)

    async def run_script(self, script: str, arg: Any = None) -> Any:
        self.scripts.append((script, arg))
        return 0

    async def wait(self, seconds: float) -> None:
        self.waits.append(seconds)

    async def snapshot_html(self) -> str:
        return self.html


class SessionRecorder:
    """Session factory that remembers every session it built."""

    def __init__(self, **session_kwargs: Any) -> None:
        self.session_kwargs = session_kwargs
        self.sessions: List[FakeSession] = []

    def __call__(self, config: CloneConfig) -> FakeSession:
        session = FakeSession(config, **self.session_kwargs)
        self.sessions.append(session)
        return session


@pytest.fixture
def clone_config(tmp_path: Path) -> CloneConfig:
    return CloneConfig(
        output_root=tmp_path,
        navigation_timeout=1.0,
        settle_before_scroll=0.0,
        settle_after_scroll=0.0,
    )
