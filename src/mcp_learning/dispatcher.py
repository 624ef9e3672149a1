"""Request dispatch: lookup, validation, invocation, response normalization."""

import asyncio
import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .registry import Capability, CapabilityKind, Registry
from .response import HandlerError, Response, TextContent, format_number
from .schema import validate_arguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    kind: CapabilityKind
    identifier: str
    arguments: Optional[Mapping[str, Any]] = None


class HandlerTimeout(Exception):
    pass


class MalformedResult(Exception):
    """A handler returned something that cannot become content blocks."""


class Dispatcher:
    """Turns requests into responses using a registry of capabilities.

    Dispatch is stateless: every request gets exactly one response, and no
    failure inside a handler escapes ``dispatch``.
    """

    def __init__(self, registry: Registry, timeout: Optional[float] = None):
        """Initialize a dispatcher.

        Args:
            registry: Registry to resolve capabilities from
            timeout: Per-request handler budget in seconds; None or 0 runs
                handlers inline without a budget
        """
        self.registry = registry
        self.timeout = timeout or None

    def dispatch(self, request: Request) -> Response:
        """Resolve, validate and invoke the capability a request names.

        Args:
            request: Inbound request

        Returns:
            Success response, or an error response of one of the
            ErrorKind variants
        """
        kind = request.kind
        logger.debug("Dispatching %s %r", kind.value, request.identifier)

        record = self.registry.get(kind, request.identifier)
        if record is None:
            logger.debug("No %s registered as %r", kind.value, request.identifier)
            return Response.not_found(kind.value, request.identifier)

        validation = validate_arguments(record.arguments, request.arguments)
        if not validation.ok:
            error = validation.error
            return Response.invalid_arguments(
                f"Invalid arguments for {request.identifier}: {error.message}",
                error.to_dict(),
            )

        try:
            result = self._invoke(record, validation.arguments)
            return self._normalize(record, result)
        except HandlerError as e:
            logger.warning("%s %r failed: %s", kind.value, request.identifier, e)
            return Response.handler_failed(str(e))
        except HandlerTimeout:
            logger.warning(
                "%s %r timed out after %ss", kind.value, request.identifier, self.timeout
            )
            return Response.timeout(self.timeout)
        except Exception:
            logger.exception("Unexpected error in %s %r", kind.value, request.identifier)
            return Response.internal()

    def list(self, kind: CapabilityKind) -> List[Dict[str, Any]]:
        """List the capabilities of one kind in registration order.

        Args:
            kind: Capability kind

        Returns:
            MCP listing entries for each record
        """
        return [_describe(record) for record in self.registry.list(kind)]

    def _invoke(self, record: Capability, arguments: Dict[str, Any]) -> Any:
        if self.timeout is None:
            return _call(record.handler, arguments)

        outcome: Dict[str, Any] = {}
        done = threading.Event()

        def worker():
            try:
                outcome["value"] = _call(record.handler, arguments)
            except BaseException as e:
                outcome["error"] = e
            finally:
                done.set()

        thread = threading.Thread(
            target=worker,
            name=f"handler-{record.identifier}",
            daemon=True,
        )
        thread.start()
        # An expired handler is abandoned; its thread finishes on its own.
        if not done.wait(self.timeout):
            raise HandlerTimeout()
        if "error" in outcome:
            raise outcome["error"]
        return outcome["value"]

    def _normalize(self, record: Capability, result: Any) -> Response:
        if record.kind is CapabilityKind.RESOURCE:
            return Response.success([_resource_content(record, result)])
        if record.kind is CapabilityKind.PROMPT:
            description, messages = _prompt_messages(record, result)
            return Response.success(messages, description=description)
        return Response.success(_tool_content(result))


def _call(handler: Callable, arguments: Dict[str, Any]) -> Any:
    if asyncio.iscoroutinefunction(handler):
        return asyncio.run(handler(**arguments))
    return handler(**arguments)


def _tool_content(result: Any) -> Tuple[TextContent, ...]:
    if result is None:
        return ()
    if isinstance(result, TextContent):
        return (result,)
    if isinstance(result, (list, tuple)) and result and all(
        isinstance(block, TextContent) for block in result
    ):
        return tuple(result)
    if isinstance(result, str):
        return (TextContent(result),)
    if isinstance(result, bool):
        return (TextContent(str(result).lower()),)
    if isinstance(result, (int, float)):
        return (TextContent(format_number(result)),)
    if isinstance(result, (dict, list)):
        return (TextContent(json.dumps(result, indent=2)),)
    return (TextContent(str(result)),)


def _resource_content(record: Capability, result: Any) -> TextContent:
    mime_type = record.mime_type or "text/plain"
    if isinstance(result, TextContent):
        return TextContent(
            result.text,
            uri=record.identifier,
            mime_type=result.mime_type or mime_type,
        )

    if isinstance(result, str):
        text_content = result
    elif isinstance(result, (dict, list)):
        text_content = json.dumps(result, indent=2)
    elif mime_type == "application/json":
        text_content = json.dumps(result)
    else:
        text_content = str(result)

    return TextContent(text_content, uri=record.identifier, mime_type=mime_type)


def _prompt_messages(
    record: Capability, result: Any
) -> Tuple[str, List[TextContent]]:
    description = record.description
    if isinstance(result, tuple) and len(result) == 2 and isinstance(result[0], str):
        description, result = result

    if isinstance(result, str):
        return description, [TextContent(result, role="user")]
    if not isinstance(result, list):
        raise MalformedResult("Prompt handler must return a list of messages")

    messages = []
    for msg in result:
        if isinstance(msg, TextContent):
            messages.append(msg if msg.role else TextContent(msg.text, role="user"))
            continue
        if not (isinstance(msg, dict) and "role" in msg and "content" in msg):
            raise MalformedResult("Invalid message format in prompt")
        content = msg["content"]
        if isinstance(content, dict):
            content = content.get("text", "")
        messages.append(TextContent(str(content), role=msg["role"]))
    return description, messages


def _describe(record: Capability) -> Dict[str, Any]:
    if record.kind is CapabilityKind.TOOL:
        return {
            "name": record.identifier,
            "description": record.description,
            "inputSchema": record.arguments.to_json_schema(),
        }

    if record.kind is CapabilityKind.RESOURCE:
        result = {
            "uri": record.identifier,
            "name": record.title or record.identifier,
        }
        if record.description:
            result["description"] = record.description
        if record.mime_type:
            result["mimeType"] = record.mime_type
        return result

    result = {
        "name": record.identifier,
        "description": record.description,
    }
    arguments = record.arguments.summary()
    if arguments:
        result["arguments"] = arguments
    return result
