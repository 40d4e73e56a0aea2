"""Scroll sweep that makes lazy-loaded content request its resources."""

from __future__ import annotations

import logging
from typing import Any

from .config import CloneConfig

logger = logging.getLogger("site_clone")

SCROLL_SWEEP_SCRIPT = """
async ({ step, interval, maxSteps }) => {
    await new Promise((resolve) => {
        let travelled = 0;
        let steps = 0;
        const timer = setInterval(() => {
            const scrollHeight = Math.max(
                document.body ? document.body.scrollHeight : 0,
                document.documentElement ? document.documentElement.scrollHeight : 0,
            );
            window.scrollBy(0, step);
            travelled += step;
            steps += 1;
            if (travelled >= scrollHeight || steps >= maxSteps) {
                clearInterval(timer);
                resolve();
            }
        }, interval);
    });
    return window.scrollY;
}
"""

SCROLL_TO_TOP_SCRIPT = "() => window.scrollTo(0, 0)"


async def trigger_lazy_content(session: Any, config: CloneConfig) -> None:
    """Let the page settle, sweep it top to bottom, return to the top and settle again.

    Content that only loads on clicks or other gestures is not reached.
    """
    await session.wait(config.settle_before_scroll)
    logger.debug("Scrolling page in %dpx steps", config.scroll_step)
    reached = await session.run_script(
        SCROLL_SWEEP_SCRIPT,
        {
            "step": config.scroll_step,
            "interval": int(config.scroll_interval * 1000),
            "maxSteps": config.max_scroll_steps,
        },
    )
    logger.debug("Scroll sweep stopped at offset %s", reached)
    await session.run_script(SCROLL_TO_TOP_SCRIPT)
    await session.wait(config.settle_after_scroll)
