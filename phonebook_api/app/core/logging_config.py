"""
Logging setup for the phone book service.

Service modules log through ``logging.getLogger(__name__)`` below the
``phonebook_api`` namespace.  ``setup_logging`` gives that namespace
the configured level, attaches a console handler (and optionally a
file handler) to the root logger the first time it runs, and keeps
uvicorn's per-request access lines out of the log unless the service
runs in debug mode.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVICE_LOGGER = "phonebook_api"
ACCESS_LOGGER = "uvicorn.access"


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path
        for handler in logger.handlers
    )


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, debug: bool = False) -> None:
    """Configure service logging.

    Safe to call more than once: the level is applied on every call,
    handlers are only added when missing.

    Parameters
    ----------
    level : str
        Logging level name for the service loggers (e.g. ``"DEBUG"``).
        Case insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File that receives the same lines as the console.  Missing
        parent directories are created.
    debug : bool
        Keep uvicorn's access log at INFO so every request is logged.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not root.handlers:
        root.setLevel(numeric_level)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    # Applied even when pytest or uvicorn configured the root logger first.
    logging.getLogger(SERVICE_LOGGER).setLevel(numeric_level)
    logging.getLogger(ACCESS_LOGGER).setLevel(logging.INFO if debug else logging.WARNING)

    if logfile:
        log_path = Path(logfile).resolve()
        if not _has_file_handler(root, log_path):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
