"""Server configuration from defaults, a TOML file and the environment."""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import toml

ENV_PREFIX = "MCP_LEARNING_"

DEFAULT_NAME = "mcp-learning-server"
DEFAULT_VERSION = "1.0.0"
DEFAULT_TIMEOUT = 30.0

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


class ConfigError(ValueError):
    pass


def get(key: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Get a configuration value by key.

    Args:
        key: Key without the ``MCP_LEARNING_`` prefix, e.g. ``"TIMEOUT"``
        environ: Mapping to read instead of ``os.environ``

    Returns:
        Configuration value or None if not set
    """
    environ = os.environ if environ is None else environ
    return environ.get(ENV_PREFIX + key.upper())


def require(key: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Get a required configuration value.

    Raises:
        ConfigError: If key not found
    """
    value = get(key, environ)
    if value is None:
        raise ConfigError(f"Required configuration key not found: {ENV_PREFIX}{key.upper()}")
    return value


def get_with_default(
    key: str,
    default: str,
    environ: Optional[Mapping[str, str]] = None
) -> str:
    value = get(key, environ)
    return value if value is not None else default


@dataclass(frozen=True)
class ServerConfig:
    """Settings for one server process.

    ``handler_timeout`` of 0 disables the per-request budget. ``seed`` makes
    the random generator reproducible.
    """

    name: str = DEFAULT_NAME
    version: str = DEFAULT_VERSION
    log_level: str = "INFO"
    handler_timeout: float = DEFAULT_TIMEOUT
    banner: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level}")
        object.__setattr__(self, "log_level", level)
        if isinstance(self.handler_timeout, bool) or not isinstance(
            self.handler_timeout, (int, float)
        ):
            raise ConfigError(f"handler_timeout must be a number, got {self.handler_timeout!r}")
        if self.handler_timeout < 0:
            raise ConfigError("handler_timeout must not be negative")

    def merge(self, **overrides: Any) -> "ServerConfig":
        """Return a copy with the non-None overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def load(
        cls,
        path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> "ServerConfig":
        """Load configuration.

        Precedence, lowest first: defaults, the ``[server]`` table of a TOML
        file (``path`` or ``MCP_LEARNING_CONFIG``), environment variables.

        Args:
            path: Optional TOML file
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing or malformed, or a value is invalid
        """
        config = cls()
        path = path or get("CONFIG", environ)
        if path:
            config = config.merge(**load_file(path))
        return config.merge(**from_environ(environ))


def load_file(path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        data = toml.load(path)
    except toml.TomlDecodeError as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e

    section = data.get("server", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[server] in {path} must be a table")
    return {key.replace("-", "_"): value for key, value in section.items()}


def from_environ(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    values: Dict[str, Any] = {}

    log_level = get("LOG_LEVEL", environ)
    if log_level:
        values["log_level"] = log_level

    timeout = get("TIMEOUT", environ)
    if timeout:
        values["handler_timeout"] = parse_float("TIMEOUT", timeout)

    quiet = get("QUIET", environ)
    if quiet is not None:
        values["banner"] = not parse_bool("QUIET", quiet)

    seed = get("SEED", environ)
    if seed:
        values["seed"] = parse_int("SEED", seed)

    return values


def parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"{ENV_PREFIX}{key} must be a boolean, got {value!r}")


def parse_float(key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{key} must be a number, got {value!r}") from None


def parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{key} must be an integer, got {value!r}") from None
