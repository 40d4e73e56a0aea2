"""Playwright-backed browser session that renders a single page."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import CloneConfig
from .errors import NavigationFailure

logger = logging.getLogger("site_clone")


class RenderSession:
    """One headless Chromium instance with one page.

    Use it as an async context manager so the browser is released on every
    exit path, including navigation failures.
    """

    def __init__(self, config: CloneConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "RenderSession":
        try:
            await self.launch()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Render session has not been launched")
        return self._page

    async def launch(self) -> None:
        config = self.config
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=config.headless,
            args=list(config.launch_args),
        )
        self._context = await self._browser.new_context(
            viewport={"width": config.viewport_width, "height": config.viewport_height},
            user_agent=config.user_agent,
            bypass_csp=True,
            ignore_https_errors=True,
        )
        self._page = await self._context.new_page()
        logger.debug("Launched Chromium (headless=%s)", config.headless)

    async def close(self) -> None:
        """Release the browser; safe to call more than once."""
        browser, playwright = self._browser, self._playwright
        self._page = self._context = self._browser = self._playwright = None
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Error while closing browser: %s", exc)
        if playwright is not None:
            await playwright.stop()

    def on_request(self, handler: Callable[[Any], None]) -> None:
        self.page.on("request", handler)

    def on_response(self, handler: Callable[[Any], None]) -> None:
        self.page.on("response", handler)

    async def navigate(self, url: str, timeout: float) -> None:
        """Load ``url`` and wait for DOM content plus network idle within ``timeout`` seconds."""
        deadline = time.monotonic() + timeout
        logger.info("Loading %s", url)
        try:
            await self.page.goto(
                url, wait_until="domcontentloaded", timeout=timeout * 1000
            )
            remaining = max(deadline - time.monotonic(), 0.001)
            await self.page.wait_for_load_state("networkidle", timeout=remaining * 1000)
        except PlaywrightTimeoutError as exc:
            raise NavigationFailure(url, f"timed out after {timeout:g}s") from exc
        except PlaywrightError as exc:
            raise NavigationFailure(url, exc.message) from exc

    async def run_script(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def wait(self, seconds: float) -> None:
        if seconds > 0:
            await self.page.wait_for_timeout(seconds * 1000)

    async def snapshot_html(self) -> str:
        return await self.page.content()
