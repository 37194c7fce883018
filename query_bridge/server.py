"""
MCP server exposing ``query_table`` over stdio.

Loads the configured tables at startup, reporting progress to the client
as ``notifications/message`` notifications, then serves tool calls.
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.message import SessionMessage

from query_bridge import __version__
from query_bridge.config import Settings, configure_logging
from query_bridge.core.exceptions import ConfigurationError, ToolNotFoundError
from query_bridge.orchestrator import QueryOrchestrator

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-dynamodb-server"
QUERY_TOOL = "query_table"

TOOLS = [
    types.Tool(
        name=QUERY_TOOL,
        description="Run a natural language query over a configured DynamoDB table",
        inputSchema={
            "type": "object",
            "properties": {
                "prompt": {
                    "type": "string",
                    "description": "Natural language question about the table data",
                },
            },
            "required": ["prompt"],
        },
    )
]

# MCP log levels for each notification kind
NOTIFICATION_LEVELS = {
    "info": "info",
    "success": "notice",
    "error": "error",
}


class StreamNotifier:
    """
    Sends progress notifications straight to the transport's write stream.

    Works before the MCP session exists, which is when tables load.
    Delivery is best-effort: a failed send is logged and dropped.
    """

    def __init__(self, write_stream: Any):
        self.write_stream = write_stream

    async def notify(self, kind: str, message: str) -> None:
        notification = types.JSONRPCNotification(
            jsonrpc="2.0",
            method="notifications/message",
            params={
                "level": NOTIFICATION_LEVELS.get(kind, "info"),
                "logger": SERVER_NAME,
                "data": {"type": kind, "message": message},
            },
        )
        try:
            await self.write_stream.send(SessionMessage(types.JSONRPCMessage(notification)))
        except Exception as e:
            logger.warning("Could not deliver %s notification: %s", kind, e)


async def handle_call_tool(
    orchestrator: QueryOrchestrator, name: str, arguments: Optional[Dict[str, Any]]
) -> List[types.TextContent]:
    """
    Dispatch a tool call.

    Args:
        orchestrator: Loaded orchestrator
        name: Tool name
        arguments: Tool arguments

    Returns:
        Text content blocks with the query result

    Raises:
        ToolNotFoundError: Unknown tool, or no arguments
    """
    if not arguments or name != QUERY_TOOL:
        raise ToolNotFoundError()

    prompt = arguments.get("prompt")
    if not isinstance(prompt, str):
        raise ToolNotFoundError()

    text = await orchestrator.query_table(prompt)
    return [types.TextContent(type="text", text=text)]


def create_server(orchestrator: QueryOrchestrator) -> Server:
    """Build the MCP server around an orchestrator."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return TOOLS

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return await handle_call_tool(orchestrator, name, arguments)

    return server


async def serve(settings: Settings) -> None:
    """Load the tables and serve MCP requests on stdio until the client leaves."""
    orchestrator = QueryOrchestrator.from_dynamodb(
        tables=settings.tables,
        region=settings.aws_region,
        llm_model=settings.llm.model,
        llm_api_key=settings.llm.api_key,
        llm_base_url=settings.llm.base_url,
        memory_budget_bytes=settings.max_record_memory_bytes,
    )
    server = create_server(orchestrator)

    async with stdio_server() as (read_stream, write_stream):
        notifier = StreamNotifier(write_stream)
        await orchestrator.initialize(notifier)
        await notifier.notify("info", "MCP DynamoDB server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Console entry point."""
    try:
        settings = Settings.load()
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except Exception:
        logger.exception("Fatal error in main()")
        sys.exit(1)


if __name__ == "__main__":
    main()
