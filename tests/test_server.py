"""
Tests for the MCP server surface.
"""
import anyio
import mcp.types as types
import pytest

from query_bridge.core.exceptions import ToolNotFoundError
from query_bridge.server import (
    QUERY_TOOL,
    TOOLS,
    StreamNotifier,
    create_server,
    handle_call_tool,
)


COUNT_RESPONSE = {
    "result": "OK",
    "tableName": "students",
    "filterList": [{"field": "grade", "matchValue": 10, "operator": "equals"}],
    "sortList": [],
    "fieldList": [],
    "queryType": "count",
}


@pytest.mark.mcp
class TestTools:

    def test_single_query_tool(self):
        assert [tool.name for tool in TOOLS] == [QUERY_TOOL]
        schema = TOOLS[0].inputSchema
        assert schema["required"] == ["prompt"]
        assert schema["properties"]["prompt"]["type"] == "string"

    def test_create_server(self, make_orchestrator):
        server = create_server(make_orchestrator())
        assert server.name == "mcp-dynamodb-server"


@pytest.mark.mcp
class TestHandleCallTool:

    @pytest.mark.asyncio
    async def test_query_table_returns_text_content(self, make_orchestrator):
        orchestrator = make_orchestrator(COUNT_RESPONSE)
        await orchestrator.initialize()

        content = await handle_call_tool(
            orchestrator, QUERY_TOOL, {"prompt": "how many students are in grade 10?"}
        )

        assert content == [types.TextContent(type="text", text="Found 1 matching records.")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name, arguments", [
        ("drop_table", {"prompt": "x"}),
        (QUERY_TOOL, None),
        (QUERY_TOOL, {}),
        (QUERY_TOOL, {"prompt": 42}),
    ])
    async def test_unknown_tool_or_missing_arguments(self, make_orchestrator, name, arguments):
        with pytest.raises(ToolNotFoundError, match="Tool not found or missing arguments"):
            await handle_call_tool(make_orchestrator(), name, arguments)


@pytest.mark.mcp
class TestStreamNotifier:

    @pytest.mark.asyncio
    async def test_sends_logging_notification(self):
        send_stream, receive_stream = anyio.create_memory_object_stream(10)
        notifier = StreamNotifier(send_stream)

        await notifier.notify("success", "Initialization complete. Tables loaded: students")

        message = receive_stream.receive_nowait()
        notification = message.message.root
        assert notification.method == "notifications/message"
        assert notification.params["level"] == "notice"
        assert notification.params["data"] == {
            "type": "success",
            "message": "Initialization complete. Tables loaded: students",
        }

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self):
        send_stream, receive_stream = anyio.create_memory_object_stream(1)
        await receive_stream.aclose()
        notifier = StreamNotifier(send_stream)

        await notifier.notify("error", "boom")
