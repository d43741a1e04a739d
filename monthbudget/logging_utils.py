"""Mini README: Application-wide logging helpers for the month budget tracker.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - installs the stream handler once, adjusts the level
      on every call and optionally mirrors records into a log file.
    * resolve_level - accepts level names from settings (``"debug"``) or ints.

Usage:
    Modules call ``get_logger(__name__)`` at import time and keep the result in
    a module level ``LOGGER``. Entry points call ``configure_root_logger`` with
    the configured level once settings are known; handlers are never stacked
    when modules are reloaded under uvicorn.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGER_INITIALISED = False
_LOG_FILES: set = set()


def resolve_level(level: Union[int, str]) -> int:
    """Translate ``"info"``, ``"DEBUG"`` or a numeric level into an int."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level}")
    return resolved


def configure_root_logger(
    level: Union[int, str] = logging.INFO, log_file: Optional[Path] = None
) -> None:
    """Configure the root logger with a debugging friendly formatter."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    if not _LOGGER_INITIALISED:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _LOGGER_INITIALISED = True

    if log_file is not None:
        path = Path(log_file).expanduser().resolve()
        if path not in _LOG_FILES:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            _LOG_FILES.add(path)

    root_logger.setLevel(resolve_level(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
