"""Unified logging configuration for the Reversi service and tools.

Every module logs through ``logging.getLogger(__name__)``; entry points
(the HTTP service, the self-play CLI) call :func:`setup_logging` once to
attach handlers and pick a format.

Usage:
    from reversi.logging_config import setup_logging

    logger = setup_logging("reversi", level="DEBUG", format_style="compact")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(asctime)s %(levelname).1s %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) "
    "%(funcName)s: %(message)s"
)
STRUCTURED_FORMAT = (
    "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
    "structured": STRUCTURED_FORMAT,
}

# Packages that are chatty at INFO (uvicorn access log in particular).
NOISY_PACKAGES = (
    "uvicorn.access",
    "httpx",
    "httpcore",
    "urllib3",
    "asyncio",
    "multipart",
)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return int(level)


def setup_logging(
    name: str = "reversi",
    level: Union[int, str] = logging.INFO,
    format_style: str = "default",
    log_file: Optional[Union[str, Path]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    console: bool = True,
    propagate: bool = False,
) -> logging.Logger:
    """
    Configure and return a named logger.

    Handlers are attached only once per logger, so calling this again for
    the same name just updates the level.

    Args:
        name: Logger name
        level: Level as int or name ("DEBUG", "INFO", ...)
        format_style: One of default/compact/detailed/structured; anything
            else falls back to default
        log_file: Explicit file to log to
        log_dir: Directory for ``<name>.log`` when ``log_file`` is not given
        console: Attach a stderr handler
        propagate: Let records propagate to the root logger

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = propagate

    if getattr(logger, "_reversi_configured", False):
        return logger

    formatter = logging.Formatter(
        _FORMATS.get(format_style, DEFAULT_FORMAT), datefmt=DATE_FORMAT
    )

    if console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file is None and log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"{name.replace('.', '_')}.log"

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._reversi_configured = True  # type: ignore[attr-defined]
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` without touching its handlers."""
    return logging.getLogger(name)


def configure_third_party_loggers(
    quiet: bool = True,
    verbose_packages: Optional[Iterable[str]] = None,
) -> None:
    """Raise noisy third-party loggers to WARNING.

    Packages listed in ``verbose_packages`` are left alone.
    """
    if not quiet:
        return
    keep = set(verbose_packages or ())
    for package in NOISY_PACKAGES:
        if package in keep:
            continue
        logging.getLogger(package).setLevel(logging.WARNING)


class LogContext:
    """Temporarily change a logger's level.

    Example:
        with LogContext(logging.getLogger("reversi.ai"), logging.DEBUG):
            ai.select_move(board)
    """

    def __init__(self, logger: logging.Logger, level: Union[int, str]):
        self.logger = logger
        self.level = _resolve_level(level)
        self._previous: Optional[int] = None

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._previous is not None:
            self.logger.setLevel(self._previous)
