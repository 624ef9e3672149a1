"""MCP learning server - capability registry, argument validation and dispatch."""

from .handler import LearningHandler, Handler
from .registry import (
    Capability,
    CapabilityKind,
    CapabilityNotFoundError,
    DuplicateCapabilityError,
    Registry,
    RegistryFrozenError,
)
from .dispatcher import Dispatcher, Request
from .response import ErrorCodes, ErrorKind, HandlerError, Response, TextContent
from .schema import (
    ArgumentError,
    ArgumentShape,
    BooleanField,
    EnumField,
    NumberField,
    StringField,
    validate_arguments,
)
from .config import ConfigError, ServerConfig
from .state import LearningStore
from .capabilities import build_handler

__version__ = "1.0.0"

__all__ = [
    "LearningHandler",
    "Handler",
    "Capability",
    "CapabilityKind",
    "CapabilityNotFoundError",
    "DuplicateCapabilityError",
    "Registry",
    "RegistryFrozenError",
    "Dispatcher",
    "Request",
    "ErrorCodes",
    "ErrorKind",
    "HandlerError",
    "Response",
    "TextContent",
    "ArgumentError",
    "ArgumentShape",
    "BooleanField",
    "EnumField",
    "NumberField",
    "StringField",
    "validate_arguments",
    "ConfigError",
    "ServerConfig",
    "LearningStore",
    "build_handler",
]
