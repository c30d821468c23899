"""MCP protocol wiring over stdio.

Uses the low-level mcp Server so the error payload text is exactly what the
tool boundary produced. Raising from the call-tool handler is how the SDK
marks a result with isError, so hard failures are re-raised as ToolCallError
carrying the boundary's ``Error: <message>`` text.
"""

from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from yfmcp.config import AppSettings
from yfmcp.logging import get_logger
from yfmcp.tools import ToolBoundary

logger = get_logger(__name__)


class ToolCallError(Exception):
    """Carries an error payload text through the SDK's isError path."""


def build_server(boundary: ToolBoundary, settings: AppSettings) -> Server:
    """Create an MCP server exposing the boundary's tools."""
    server: Server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["inputSchema"],
            )
            for definition in boundary.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        result = await boundary.call(name, arguments)
        if result.is_error:
            raise ToolCallError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def serve_stdio(server: Server) -> None:
    """Run the server on stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("mcp_server_running", transport="stdio", server=server.name)
        await server.run(read_stream, write_stream, server.create_initialization_options())
