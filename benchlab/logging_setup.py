from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _file_handler_for(logger: logging.Logger, path: Path) -> logging.FileHandler | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.fspath(path):
            return handler
    return None


def configure_logging(settings: Settings) -> Path | None:
    """Send DEBUG records to ``settings.log_file()``; the TUI owns the terminal.

    Returns None when debugging is off or the file cannot be opened. A second
    call for the same file reuses the handler already on the root logger.
    """
    if not settings.debug:
        return None

    path = settings.log_file()
    root = logging.getLogger()
    if _file_handler_for(root, path) is not None:
        return path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    # httpcore logs every socket event at DEBUG.
    logging.getLogger("httpcore").setLevel(logging.INFO)

    logging.getLogger(__name__).debug("Debug log for this session: %s", path)
    return path
