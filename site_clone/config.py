"""Configuration objects and constants for the cloner."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
    "--window-size=1920,1080",
)


@dataclass
class CloneConfig:
    """Top-level settings that control rendering, capture and output."""

    output_root: Path = field(default_factory=Path.cwd)
    navigation_timeout: float = 45.0
    settle_before_scroll: float = 5.0
    settle_after_scroll: float = 3.0
    scroll_step: int = 100
    scroll_interval: float = 0.1
    max_scroll_steps: int = 1000
    viewport_width: int = 1920
    viewport_height: int = 1080
    user_agent: str = DEFAULT_USER_AGENT
    headless: bool = True
    launch_args: Tuple[str, ...] = DEFAULT_LAUNCH_ARGS
