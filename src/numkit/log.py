# -----------------------------------------------------------------------------
#  log.py
#  Logging setup for the numkit logger hierarchy
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import TextIO

from colorama import Fore, Style

from numkit.runtime import CFG

ROOT_LOGGER = "numkit"

_LEVEL_COLORS = {
    logging.DEBUG: Style.DIM,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

# Library code never prints; without configure_logging() records go nowhere.
logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


class ColorFormatter(logging.Formatter):
    """Prefix each record with a colored level name."""

    def __init__(self, fmt: str | None = None, *, color: bool = True):
        super().__init__(fmt or "%(levelname)s %(name)s: %(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self.color:
            return text
        tint = _LEVEL_COLORS.get(record.levelno, "")
        return f"{tint}{text}{Style.RESET_ALL}"


def get_logger(name: str) -> logging.Logger:
    """Child of the numkit logger; pass __name__ from inside the package."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(
    level: str | int | None = None,
    *,
    color: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Install (or replace) a single stream handler on the numkit logger.
    Level and color default to LOGGING.LEVEL / LOGGING.COLOR.
    """
    if level is None:
        level = CFG("LOGGING.LEVEL", "WARNING")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        level = resolved
    if color is None:
        color = bool(CFG("LOGGING.COLOR", True))

    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        if getattr(h, "_numkit_handler", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(color=color))
    handler._numkit_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
