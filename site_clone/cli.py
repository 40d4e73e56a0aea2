"""Command-line entry point for the site cloner."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .cloner import FAILURE_MARKER, clone_to_summary
from .config import CloneConfig

logger = logging.getLogger("site_clone.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render a web page with Playwright and save a self-contained local copy.",
    )
    parser.add_argument("url", help="URL of the page to clone")
    parser.add_argument(
        "--output",
        default=Path.cwd(),
        type=Path,
        help="Directory in which the cloned_<host>_<timestamp> folder is created",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=45.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--settle-before",
        type=float,
        default=5.0,
        help="Seconds to wait after load before scrolling the page",
    )
    parser.add_argument(
        "--settle-after",
        type=float,
        default=3.0,
        help="Seconds to wait after scrolling back to the top before taking the snapshot",
    )
    parser.add_argument(
        "--scroll-step",
        type=int,
        default=100,
        help="Pixels scrolled per step while triggering lazy-loaded content",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = CloneConfig(
        output_root=Path(args.output).resolve(),
        navigation_timeout=args.timeout,
        settle_before_scroll=args.settle_before,
        settle_after_scroll=args.settle_after,
        scroll_step=args.scroll_step,
        headless=not args.headed,
    )

    overall_start = time.perf_counter()
    result = asyncio.run(clone_to_summary(args.url, config))
    logger.debug("Finished in %.2fs", time.perf_counter() - overall_start)

    sys.stdout.write(result + "\n")
    sys.stdout.flush()
    if result.startswith(FAILURE_MARKER):
        sys.exit(1)


if __name__ == "__main__":
    main()
