"""FastMCP server initialization for Tech Dash MCP."""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from techdash_mcp.config import load_settings

# Initialize the MCP server
mcp = FastMCP("techdash_mcp")


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout carries the MCP stdio transport."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    """Run the MCP server."""
    settings = load_settings()
    configure_logging(settings.log_level)
    logging.getLogger(__name__).info("Starting techdash_mcp with database %s", settings.db_path)
    mcp.run()


if __name__ == "__main__":
    # Tools register against the package's server module, not this __main__ copy
    from techdash_mcp.server import run as _run

    _run()
