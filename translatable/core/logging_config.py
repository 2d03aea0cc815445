"""Opt-in log output for the ``translatable`` logger namespace.

Only the package's own logger is configured here. Root handlers and the
levels of other libraries stay with the embedding application.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from .config import settings

LOGGER_NAME = "translatable"

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d) - %(message)s"

# Marks handlers installed here so a later call can replace them
_OWNED = "_translatable_handler"


def resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Union[int, str, None] = None,
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
) -> logging.Logger:
    """Attach handlers to the ``translatable`` logger.

    ``level`` defaults to ``settings.LOG_LEVEL``. With handlers attached the
    logger stops propagating, so records are not printed twice; with none
    it propagates to whatever the application configured.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []
    if console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        handlers.append(stream)
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(rotating)

    for handler in handlers:
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)
    logger.propagate = not handlers

    logger.debug(
        "Logging configured (level=%s, console=%s, file=%s)",
        logging.getLevelName(logger.level), console, log_file,
    )
    return logger
