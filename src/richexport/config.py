"""Configuration management for the export service.

This module handles configuration from environment variables and CLI arguments,
with CLI arguments taking precedence over environment variables.

Classes
-------
- ServiceConfig: HTTP service configuration

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/richexport/config.py

import argparse
import logging
import os
from dataclasses import dataclass

from richexport.constants import (
    DEFAULT_FILE_NAME,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_CONTENT_BYTES,
    DEFAULT_PORT,
)
from richexport.options.base import CloneFrozenMixin

logger = logging.getLogger(__name__)

ENV_PREFIX = "RICHEXPORT_"


@dataclass(frozen=True)
class ServiceConfig(CloneFrozenMixin):
    """HTTP export service configuration.

    Attributes
    ----------
    host : str
        Interface to bind (default: 127.0.0.1)
    port : int
        Port to listen on (default: 8000)
    log_level : str
        Logging level (DEBUG|INFO|WARNING|ERROR|CRITICAL)
    max_content_bytes : int
        Largest accepted request body; larger requests get 413
    default_file_name : str
        File name stem used when a request gives none
    debug : bool
        Run Flask in debug mode

    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    max_content_bytes: int = DEFAULT_MAX_CONTENT_BYTES
    default_file_name: str = DEFAULT_FILE_NAME
    debug: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate configuration consistency.

        Raises
        ------
        ValueError
            If configuration is invalid

        """
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be between 1 and 65535")
        if self.max_content_bytes <= 0:
            raise ValueError(f"max_content_bytes must be positive, got {self.max_content_bytes}")
        if not self.host.strip():
            raise ValueError("host must not be empty")
        _validate_log_level(self.log_level)

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Load configuration from ``RICHEXPORT_*`` environment variables."""
        return load_config_from_env()


def _str_to_bool(value: str | None, default: bool = False) -> bool:
    """Convert string to boolean.

    Parameters
    ----------
    value : str | None
        String value (True iif: "true", "t", "1", "yes", "on")
    default : bool, default False
        Default value if input is None

    Returns
    -------
    bool
        Boolean value

    """
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "t", "on")


def _str_to_int(name: str, value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {value!r}") from None


def _validate_log_level(value: str | None, default: str = DEFAULT_LOG_LEVEL) -> str:
    """Validate and normalize log level string.

    Parameters
    ----------
    value : str | None
        Log level string
    default : str, default "INFO"
        Default value if input is None

    Returns
    -------
    str
        Validated and uppercase log level

    Raises
    ------
    ValueError
        If value is not a valid log level

    """
    if value is None:
        return default

    normalized = value.upper().strip()
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    if normalized not in valid_levels:
        raise ValueError(f"Invalid log level: {value!r}. " f"Must be one of: {', '.join(valid_levels)}")

    return normalized


def _env(name: str) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}")


def load_config_from_env() -> ServiceConfig:
    """Load configuration from environment variables.

    Returns
    -------
    ServiceConfig
        Configuration loaded from environment

    Raises
    ------
    ValueError
        If a variable holds an invalid value

    """
    return ServiceConfig(
        host=(_env("HOST") or DEFAULT_HOST).strip(),
        port=_str_to_int("RICHEXPORT_PORT", _env("PORT"), DEFAULT_PORT),
        log_level=_validate_log_level(_env("LOG_LEVEL")),
        max_content_bytes=_str_to_int(
            "RICHEXPORT_MAX_CONTENT_BYTES", _env("MAX_CONTENT_BYTES"), DEFAULT_MAX_CONTENT_BYTES
        ),
        default_file_name=(_env("DEFAULT_FILE_NAME") or DEFAULT_FILE_NAME).strip() or DEFAULT_FILE_NAME,
        debug=_str_to_bool(_env("DEBUG"), default=False),
    )


def load_config_from_args(args: argparse.Namespace) -> ServiceConfig:
    """Load configuration from parsed CLI arguments, using env as fallback.

    Arguments that are missing or None keep the environment value.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed CLI arguments

    Returns
    -------
    ServiceConfig
        Merged configuration (CLI overrides env)

    """
    config = load_config_from_env()

    updated_kwargs: dict[str, object] = {}
    for name in ("host", "port", "max_content_bytes", "debug"):
        value = getattr(args, name, None)
        if value is not None:
            updated_kwargs[name] = value

    log_level = getattr(args, "log_level", None)
    if log_level is not None:
        updated_kwargs["log_level"] = _validate_log_level(log_level)

    if updated_kwargs:
        config = config.create_updated(**updated_kwargs)

    logger.debug(f"Service configuration: {config}")
    return config
