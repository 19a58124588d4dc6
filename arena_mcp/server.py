"""
Are.na MCP Server - Main Entry Point

FastMCP server with STDIO, SSE and streamable HTTP transport support.
"""

import argparse
import logging
from fastmcp import FastMCP

from arena_mcp.config import get_settings
from arena_mcp.logging_config import configure_logging
from arena_mcp import prompts, resources

# Import tools (registered on their routers with decorators)
from arena_mcp.tools import (
    search_arena,
    get_channel_contents,
    get_block_details,
    get_block_connections,
    get_user,
    get_user_contents,
    create_channel,
    create_block,
    connect_block,
    disconnect_connection,
    move_connection,
)

logger = logging.getLogger(__name__)

TOOL_MODULES = (
    search_arena,
    get_channel_contents,
    get_block_details,
    get_block_connections,
    get_user,
    get_user_contents,
    create_channel,
    create_block,
    connect_block,
    disconnect_connection,
    move_connection,
)


def create_app() -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(
        name="arena-mcp",
        instructions=(
            "Use search and retrieval tools before mutation tools. "
            "For local files, request a public URL first."
        ),
    )

    for module in TOOL_MODULES:
        mcp.mount(module.router)
    mcp.mount(resources.router)
    mcp.mount(prompts.router)

    return mcp


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Are.na MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "http"],
        default=None,
        help="Transport protocol (default: from env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for SSE/HTTP transport (default: from env)"
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)
    transport = args.transport or settings.mcp.transport
    port = args.port or settings.mcp.port

    mcp = create_app()
    logger.info("Starting Are.na MCP server over %s", transport)

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport=transport, host=settings.mcp.host, port=port)


if __name__ == "__main__":
    main()
