"""esa MCP Server - Expose esa.io posts to AI assistants over stdio."""
import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from . import __version__
from .config import ESA_MCP_LOG_LEVEL, get_env
from .errors import ConfigurationError
from .tools import ToolRegistry

logger = logging.getLogger("esa-mcp")


def configure_logging() -> None:
    """Log to stderr; stdout carries the MCP stdio transport."""
    logging.basicConfig(
        level=get_env(ESA_MCP_LOG_LEVEL, "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


def create_server(registry: Optional[ToolRegistry] = None) -> Server:
    """Build the MCP server around a tool registry.

    Without an explicit registry one is built from the environment, which
    raises ConfigurationError when DEFAULT_ESA_TEAM is not set.
    """
    registry = registry or ToolRegistry()
    app = Server("esa-mcp", version=__version__)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available esa tools."""
        return registry.get_tools()

    # Arguments are validated by the registry so that schema failures get
    # the same error envelope as every other failure.
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Any) -> CallToolResult:
        return await registry.call(name, arguments)

    return app


async def main():
    """Run the MCP server."""
    app = create_server()
    logger.info(f"esa MCP server {__version__} starting")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    configure_logging()
    try:
        asyncio.run(main())
    except ConfigurationError as e:
        logger.error(f"Cannot start esa MCP server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
