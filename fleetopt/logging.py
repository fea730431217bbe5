"""Logging configuration for fleetopt.

Logging goes through loguru and is disabled by default (library behavior).
The CLI enables it; applications embedding fleetopt call ``setup_logging``.

Example:
    from fleetopt.logging import LogConfig, setup_logging, teardown_logging

    handler_ids = setup_logging(LogConfig(level="DEBUG", file="fleetopt.log"))
    ...
    teardown_logging(handler_ids)
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Literal

from loguru import logger

# Disable by default (library behavior)
logger.disable("fleetopt")

type LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} [{extra[component]}] - {message}"
)


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Logging configuration.

    Attributes:
        level: Minimum console log level.
        file: Path to a log file. If provided, everything from DEBUG up is written there.
        console: Whether to log to stderr.
        rotation: File rotation policy (e.g., "50 MB", "1 day").
        retention: Number of old log files to keep.
    """

    level: LogLevel = "WARNING"
    file: str | None = None
    console: bool = True
    rotation: str = "50 MB"
    retention: int = 10

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> LogConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown logging option(s): {', '.join(sorted(unknown))}")
        return cls(**raw)


def setup_logging(config: LogConfig) -> list[int]:
    """Enable fleetopt logging and return handler IDs for cleanup.

    Replaces every existing loguru handler, including loguru's default
    DEBUG-level stderr sink, so ``config.level`` is the effective threshold.
    """
    logger.remove()
    logger.enable("fleetopt")
    logger.configure(extra={"component": "fleetopt"})
    handler_ids: list[int] = []

    if config.console:
        handler_ids.append(logger.add(
            sys.stderr,
            level=config.level,
            format=CONSOLE_FORMAT,
            colorize=True,
            filter="fleetopt",
        ))

    if config.file:
        handler_ids.append(logger.add(
            config.file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            diagnose=False,
            filter="fleetopt",
        ))

    return handler_ids


def teardown_logging(handler_ids: list[int]) -> None:
    """Remove handlers added by ``setup_logging`` and disable logging again."""
    for hid in handler_ids:
        logger.remove(hid)
    logger.disable("fleetopt")
