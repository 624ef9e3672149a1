"""Command line entry point for the learning server."""

import argparse
import json
import logging
import sys
from typing import List, Optional

import anyio

from .capabilities import build_handler
from .config import ConfigError, ServerConfig
from .dispatcher import Request
from .registry import CapabilityKind
from .server import serve

logger = logging.getLogger(__name__)

KINDS = [kind.value for kind in CapabilityKind]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-learning-server",
        description="MCP learning server: tools, resources and prompts over stdio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mcp-learning-server
  mcp-learning-server --log-level DEBUG --timeout 10
  mcp-learning-server list
  mcp-learning-server call tool calculate '{"operation": "add", "a": 15, "b": 27}'
  mcp-learning-server call resource project://info
"""
    )

    parser.add_argument(
        "--config",
        help="TOML configuration file (default: $MCP_LEARNING_CONFIG)"
    )

    parser.add_argument(
        "--log-level",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Per-request handler timeout in seconds, 0 to disable (default: 30)"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print the startup banner"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random generator tool"
    )

    commands = parser.add_subparsers(dest="command")
    commands.add_parser("serve", help="Run the server on stdio (default)")
    commands.add_parser("list", help="List registered capabilities")

    call = commands.add_parser("call", help="Dispatch one request and print the response")
    call.add_argument("kind", choices=KINDS, help="Capability kind")
    call.add_argument("identifier", help="Tool or prompt name, or resource URI")
    call.add_argument("arguments", nargs="?", help="Arguments as a JSON object")

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_config(args: argparse.Namespace) -> ServerConfig:
    config = ServerConfig.load(args.config)
    return config.merge(
        log_level=args.log_level,
        handler_timeout=args.timeout,
        banner=False if args.quiet else None,
        seed=args.seed,
    )


def list_capabilities(handler) -> None:
    for kind in CapabilityKind:
        print(f"{kind.value.capitalize()}s:")
        for record in handler.registry.list(kind):
            print(f"  {record.identifier} - {record.description}")


def call_capability(handler, config: ServerConfig, args: argparse.Namespace) -> int:
    arguments = json.loads(args.arguments) if args.arguments else None
    dispatcher = handler.dispatcher(timeout=config.handler_timeout)
    response = dispatcher.dispatch(
        Request(CapabilityKind(args.kind), args.identifier, arguments)
    )
    print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
    return 0 if response.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        parser.error(str(e))

    configure_logging(config.log_level)
    handler = build_handler(config)

    if args.command == "list":
        list_capabilities(handler)
        return 0

    if args.command == "call":
        try:
            return call_capability(handler, config, args)
        except json.JSONDecodeError as e:
            parser.error(f"Invalid JSON arguments: {e}")

    dispatcher = handler.dispatcher(timeout=config.handler_timeout)
    try:
        anyio.run(serve, handler, dispatcher, config.banner)
    except KeyboardInterrupt:
        print("Shutting down server...", file=sys.stderr)
        return 0
    except Exception:
        logger.exception("Server error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
