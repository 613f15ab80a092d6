"""Root logger configuration for the CLI and server."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weather_agent.config import Settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers added by configure_logging, replaced on the next call.
_installed: list[logging.Handler] = []


def configure_logging(settings: Settings, *, debug: bool = False) -> None:
    """
    Log to stderr and, if ``settings.log_file`` is set, append to that file.

    Safe to call more than once; handlers from a previous call are replaced
    and handlers installed by anyone else are left alone.

    Args:
        settings: Application settings (``log_file``, ``debug``).
        debug: Force DEBUG level regardless of ``settings.debug``.
    """
    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)

    root.setLevel(logging.DEBUG if debug or settings.debug else logging.INFO)
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
