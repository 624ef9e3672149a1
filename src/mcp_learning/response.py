"""Response envelope and error taxonomy for dispatched requests."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Iterable, Optional, Tuple


class ErrorCodes(IntEnum):
    """JSON-RPC error codes used in MCP."""

    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_ERROR = -32000
    REQUEST_TIMEOUT = -32001


class ErrorKind(Enum):
    """Closed set of failures the dispatcher reports."""

    NOT_FOUND = "not_found"
    INVALID_ARGUMENTS = "invalid_arguments"
    HANDLER_FAILED = "handler_failed"
    INTERNAL = "internal"
    TIMEOUT = "timeout"

    @property
    def code(self) -> ErrorCodes:
        return _ERROR_CODES[self]


_ERROR_CODES = {
    ErrorKind.NOT_FOUND: ErrorCodes.METHOD_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENTS: ErrorCodes.INVALID_PARAMS,
    ErrorKind.HANDLER_FAILED: ErrorCodes.SERVER_ERROR,
    ErrorKind.INTERNAL: ErrorCodes.INTERNAL_ERROR,
    ErrorKind.TIMEOUT: ErrorCodes.REQUEST_TIMEOUT,
}


class HandlerError(Exception):
    """Raised by a handler to report a domain failure to the caller.

    The message is surfaced verbatim in a ``handler_failed`` response.
    """


@dataclass(frozen=True)
class TextContent:
    """A text content block.

    ``uri`` and ``mime_type`` are set for resource contents, ``role`` for
    prompt messages.
    """

    text: str
    uri: Optional[str] = None
    mime_type: Optional[str] = None
    role: Optional[str] = None

    type = "text"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type, "text": self.text}
        if self.uri is not None:
            result["uri"] = self.uri
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        if self.role is not None:
            result["role"] = self.role
        return result


@dataclass(frozen=True)
class ResponseError:
    kind: ErrorKind
    message: str
    data: Optional[Any] = None

    @property
    def code(self) -> int:
        return int(self.kind.code)


@dataclass(frozen=True)
class Response:
    """Outcome of one dispatched request.

    Exactly one of ``content`` (success) and ``error`` is meaningful. Build
    instances with the class methods rather than the constructor.
    """

    content: Tuple[TextContent, ...] = field(default_factory=tuple)
    error: Optional[ResponseError] = None
    description: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)

    @classmethod
    def success(
        cls,
        content: Iterable[TextContent],
        description: Optional[str] = None
    ) -> "Response":
        """Create a successful response.

        Args:
            content: Content blocks, in order
            description: Optional description (prompt results)

        Returns:
            Success response
        """
        return cls(content=tuple(content), description=description)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        data: Optional[Any] = None
    ) -> "Response":
        """Create an error response.

        Args:
            kind: Error kind
            message: Human-readable message
            data: Optional structured error data

        Returns:
            Error response
        """
        return cls(error=ResponseError(kind, message, data))

    @classmethod
    def not_found(cls, kind: str, identifier: str) -> "Response":
        return cls.failure(
            ErrorKind.NOT_FOUND,
            f"{kind.capitalize()} not found: {identifier}",
            {"kind": kind, "identifier": identifier},
        )

    @classmethod
    def invalid_arguments(cls, message: str, data: Optional[Any] = None) -> "Response":
        return cls.failure(ErrorKind.INVALID_ARGUMENTS, message, data)

    @classmethod
    def handler_failed(cls, message: str) -> "Response":
        return cls.failure(ErrorKind.HANDLER_FAILED, message)

    @classmethod
    def internal(cls, message: str = "Internal error while handling request") -> "Response":
        return cls.failure(ErrorKind.INTERNAL, message)

    @classmethod
    def timeout(cls, seconds: float) -> "Response":
        return cls.failure(
            ErrorKind.TIMEOUT,
            f"Handler did not finish within {seconds:g} seconds",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the MCP result/error envelope.

        Returns:
            ``{"result": ...}`` or ``{"error": {"code", "message", "data"?}}``
        """
        if self.error is not None:
            error_obj: Dict[str, Any] = {
                "code": self.error.code,
                "message": self.error.message,
            }
            if self.error.data is not None:
                error_obj["data"] = self.error.data
            return {"error": error_obj}

        result: Dict[str, Any] = {
            "content": [block.to_dict() for block in self.content]
        }
        if self.description is not None:
            result["description"] = self.description
        return {"result": result}


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
