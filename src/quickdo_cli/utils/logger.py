"""Application-wide logger writing to platformdirs user_log_dir.

Everything logs under the ``quickdo_cli`` logger; modules ask for a child
(``get_logger("parsing")`` -> ``quickdo_cli.parsing``) so the log file shows
which stage wrote each line. Nothing propagates to the terminal.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "quickdo_cli"
_LOG_FILE = "quickdo.log"
_LEVEL_ENV = "QUICKDO_LOG_LEVEL"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def _configured_level() -> int:
    name = os.environ.get(_LEVEL_ENV, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(handler, logging.handlers.RotatingFileHandler)
        and handler.baseFilename == target
        for handler in logger.handlers
    )


def _root_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / _LOG_FILE

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(_configured_level())
    # Other handlers may already be attached, e.g. log capture
    if not _has_file_handler(logger, log_path):
        handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or one of its children.

    The file handler is attached on first call.
    """
    root = _root_logger()
    if not name:
        return root
    return root.getChild(name)
