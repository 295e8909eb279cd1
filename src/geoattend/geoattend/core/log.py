from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .constants import LOG_BACKUP_COUNT, LOG_FORMAT, LOG_MAX_BYTES


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``geoattend`` logger tree.

    A stream handler is always installed; a rotating file handler is added
    when ``log_file`` is given. Calling this again replaces earlier handlers.
    """

    root = logging.getLogger("geoattend")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    return root
