"""Tests for the MCP transport adapter."""

import io
import json

import mcp.types as types
import pytest
from mcp.shared.exceptions import McpError
from mcp_learning.capabilities import build_handler
from mcp_learning.server import build_server, print_banner


@pytest.fixture
def handler():
    return build_handler()


@pytest.fixture
def server(handler):
    return build_server(handler, handler.dispatcher())


async def call(server, request_type, request):
    result = await server.request_handlers[request_type](request)
    return result.root


class TestTools:
    """Test tools/list and tools/call."""

    @pytest.mark.anyio
    async def test_list_tools(self, server):
        """Test tool listing order and schema."""
        result = await call(server, types.ListToolsRequest, types.ListToolsRequest(method="tools/list"))
        names = [tool.name for tool in result.tools]
        assert names[:3] == ["calculate", "text-utils", "greeting"]
        assert len(names) == 9
        assert result.tools[0].inputSchema["properties"]["operation"]["enum"] == [
            "add", "subtract", "multiply", "divide",
        ]

    @pytest.mark.anyio
    async def test_call_tool(self, server):
        """Test a successful tool call."""
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(
                name="calculate", arguments={"operation": "add", "a": 15, "b": 27}
            ),
        )
        result = await call(server, types.CallToolRequest, request)
        assert not result.isError
        assert result.content[0].text == "Result: 15 add 27 = 42"

    @pytest.mark.anyio
    async def test_call_tool_failure(self, server):
        """Test that handler failures become error results."""
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(
                name="calculate", arguments={"operation": "divide", "a": 10, "b": 0}
            ),
        )
        result = await call(server, types.CallToolRequest, request)
        assert result.isError
        assert "Division by zero is not allowed" in result.content[0].text

    @pytest.mark.anyio
    async def test_call_tool_invalid_arguments(self, server):
        """Test that validation messages reach the client."""
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(
                name="calculate", arguments={"operation": "frobnicate", "a": 1, "b": 2}
            ),
        )
        result = await call(server, types.CallToolRequest, request)
        assert result.isError
        assert "must be one of [add, subtract, multiply, divide]" in result.content[0].text


class TestResources:
    """Test resources/list and resources/read."""

    @pytest.mark.anyio
    async def test_list_resources(self, server):
        """Test resource listing."""
        result = await call(
            server, types.ListResourcesRequest, types.ListResourcesRequest(method="resources/list")
        )
        assert len(result.resources) == 7
        first = result.resources[0]
        assert first.name == "MCP Learning Guide - Basics"
        assert first.mimeType == "text/markdown"

    @pytest.mark.anyio
    async def test_read_resource(self, server):
        """Test reading a JSON resource."""
        request = types.ReadResourceRequest(
            method="resources/read",
            params=types.ReadResourceRequestParams(uri="project://info"),
        )
        result = await call(server, types.ReadResourceRequest, request)
        contents = result.contents[0]
        assert contents.mimeType == "application/json"
        assert json.loads(contents.text)["name"] == "MCP Learning Project"

    @pytest.mark.anyio
    async def test_read_unknown_resource(self, server):
        """Test that unknown URIs are JSON-RPC errors."""
        request = types.ReadResourceRequest(
            method="resources/read",
            params=types.ReadResourceRequestParams(uri="project://missing"),
        )
        with pytest.raises(McpError) as exc:
            await call(server, types.ReadResourceRequest, request)
        assert exc.value.error.code == types.METHOD_NOT_FOUND
        assert exc.value.error.message == "Resource not found: project://missing"


class TestPrompts:
    """Test prompts/list and prompts/get."""

    @pytest.mark.anyio
    async def test_list_prompts(self, server):
        """Test prompt listing with arguments."""
        result = await call(
            server, types.ListPromptsRequest, types.ListPromptsRequest(method="prompts/list")
        )
        assert [p.name for p in result.prompts][0] == "code-review"
        assert result.prompts[0].arguments[0].name == "language"
        assert result.prompts[0].arguments[0].required is True

    @pytest.mark.anyio
    async def test_get_prompt(self, server):
        """Test rendering a prompt."""
        request = types.GetPromptRequest(
            method="prompts/get",
            params=types.GetPromptRequestParams(
                name="code-review", arguments={"language": "go", "code": "package main"}
            ),
        )
        result = await call(server, types.GetPromptRequest, request)
        assert result.description == "Code review prompt for go code"
        assert result.messages[0].role == "user"
        assert "```go\npackage main\n```" in result.messages[0].content.text

    @pytest.mark.anyio
    async def test_get_prompt_invalid(self, server):
        """Test that invalid prompt arguments are JSON-RPC errors."""
        request = types.GetPromptRequest(
            method="prompts/get",
            params=types.GetPromptRequestParams(name="code-review", arguments={"language": "go"}),
        )
        with pytest.raises(McpError) as exc:
            await call(server, types.GetPromptRequest, request)
        assert exc.value.error.code == types.INVALID_PARAMS
        assert "Missing required argument: code" in exc.value.error.message


class TestBanner:
    """Test the startup banner."""

    def test_print_banner(self, handler):
        """Test that every capability is named."""
        stream = io.StringIO()
        print_banner(handler, stream)
        lines = stream.getvalue().splitlines()
        assert lines[0] == "mcp-learning-server v1.0.0 running on stdio"
        assert lines[2].startswith("- Tools: calculate, text-utils, greeting, text_analyzer")
        assert lines[3].startswith("- Resources: learning-guide://mcp-basics, project://info")
        assert lines[4] == (
            "- Prompts: code-review, writing-helper, meeting-summary, "
            "learning-tutor, project-planner"
        )
