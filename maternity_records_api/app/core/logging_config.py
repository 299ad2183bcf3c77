"""
Logging setup for the service.

``setup_logging`` attaches a console handler (and, when ``LOG_FILE`` is
set, a file handler) to the root logger.  The Firestore client libraries
log every RPC retry and token refresh at INFO, so their loggers are
capped at WARNING unless the service itself runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third‑party loggers that are too chatty at INFO.
NOISY_LOGGERS = ("google", "google.auth", "urllib3", "grpc", "multipart")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (``"DEBUG"``, ``"INFO"``...).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Optional path of a log file, resolved against the current
        working directory.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (tests create several apps per session).
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
