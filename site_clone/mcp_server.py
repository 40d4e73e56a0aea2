"""MCP server exposing the site cloner as a tool."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from .cloner import clone_to_summary
from .config import CloneConfig

logger = logging.getLogger("site_clone.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="site-clone")


@mcp.tool()
async def clone_website(url: str) -> str:
    """Clone a web page with all its CSS, JS, images, fonts and media into a local folder.

    Returns a one-line summary, or a message starting with "Clone failed:".
    """
    return await clone_to_summary(url, CloneConfig())


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
