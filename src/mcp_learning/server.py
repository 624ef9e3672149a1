"""MCP stdio transport adapter around the dispatcher."""

import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from .dispatcher import Dispatcher, Request
from .handler import LearningHandler
from .registry import CapabilityKind
from .response import Response

logger = logging.getLogger(__name__)


def _raise_for_error(response: Response) -> None:
    if response.error is not None:
        raise McpError(types.ErrorData(
            code=response.error.code,
            message=response.error.message,
            data=response.error.data,
        ))


def _resource_uri(dispatcher: Dispatcher, uri: AnyUrl) -> str:
    """Map a parsed URI back to a registered identifier."""
    text = str(uri)
    registry = dispatcher.registry
    if registry.get(CapabilityKind.RESOURCE, text) is None and text.endswith("/"):
        trimmed = text.rstrip("/")
        if registry.get(CapabilityKind.RESOURCE, trimmed) is not None:
            return trimmed
    return text


def build_server(handler: LearningHandler, dispatcher: Dispatcher) -> Server:
    """Wire a dispatcher into an MCP low-level server.

    Args:
        handler: Handler that owns the registry, for name and version
        dispatcher: Dispatcher over the frozen registry

    Returns:
        Server with list/call tools, list/read resources and list/get
        prompts handlers registered
    """
    server = Server(handler.name, version=handler.version)

    async def dispatch(kind: CapabilityKind, identifier: str,
                       arguments: Optional[Dict[str, Any]] = None) -> Response:
        request = Request(kind, identifier, arguments)
        return await anyio.to_thread.run_sync(dispatcher.dispatch, request)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [types.Tool(**entry) for entry in dispatcher.list(CapabilityKind.TOOL)]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        response = await dispatch(CapabilityKind.TOOL, name, arguments)
        _raise_for_error(response)
        return [types.TextContent(type="text", text=block.text) for block in response.content]

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return [types.Resource(**entry) for entry in dispatcher.list(CapabilityKind.RESOURCE)]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
        response = await dispatch(CapabilityKind.RESOURCE, _resource_uri(dispatcher, uri))
        _raise_for_error(response)
        return [
            ReadResourceContents(content=block.text, mime_type=block.mime_type)
            for block in response.content
        ]

    @server.list_prompts()
    async def list_prompts() -> List[types.Prompt]:
        prompts = []
        for entry in dispatcher.list(CapabilityKind.PROMPT):
            arguments = [types.PromptArgument(**arg) for arg in entry.get("arguments", [])]
            prompts.append(types.Prompt(
                name=entry["name"],
                description=entry["description"],
                arguments=arguments or None,
            ))
        return prompts

    @server.get_prompt()
    async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        response = await dispatch(CapabilityKind.PROMPT, name, arguments)
        _raise_for_error(response)
        return types.GetPromptResult(
            description=response.description,
            messages=[
                types.PromptMessage(
                    role=block.role or "user",
                    content=types.TextContent(type="text", text=block.text),
                )
                for block in response.content
            ],
        )

    return server


def print_banner(handler: LearningHandler, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stderr
    for line in handler.banner():
        print(line, file=stream)


async def serve(handler: LearningHandler, dispatcher: Dispatcher, banner: bool = True) -> None:
    """Serve one client over stdin/stdout until the stream closes.

    Args:
        handler: Handler with every capability registered
        dispatcher: Dispatcher built from the handler
        banner: Whether to write the startup banner to stderr
    """
    server = build_server(handler, dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        if banner:
            print_banner(handler)
        logger.info("%s %s ready on stdio", handler.name, handler.version)
        await server.run(read_stream, write_stream, server.create_initialization_options())
