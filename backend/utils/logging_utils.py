"""
Logging helpers for the pipeline compiler service.

``setup_universal_logging`` wires a rotating file handler and a rich console
handler onto the root logger. ``log_pipeline_action`` records one line per
compile, export or project change on the ``pipeline_actions`` logger.
"""

import logging
import os
from logging import Handler
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from typing import Optional

from rich.logging import RichHandler

pipeline_logger = logging.getLogger("pipeline_actions")

FILE_LOG_FORMAT = (
    "%(asctime)s [%(levelname)8s] %(name)s: %(message)s "
    "[%(filename)s:%(lineno)d in %(funcName)s()]"
)

# Chatty third-party loggers capped at WARNING
QUIET_LOGGERS = ("multipart", "uvicorn.access", "watchfiles")


def _level(name: Optional[str], fallback: int) -> int:
    return getattr(logging, (name or "").upper(), fallback)


def log_pipeline_action(action: str, success: bool = True, details: Optional[str] = None):
    """
    Record a compiler or project action on the ``pipeline_actions`` logger.

    Failures are logged at ERROR, everything else at INFO.
    """
    parts = [f"Action: {action}"]
    if details:
        parts.append(f"Details: {details}")
    parts.append("Status: SUCCESS" if success else "Status: FAILED")

    pipeline_logger.log(logging.INFO if success else logging.ERROR, " | ".join(parts))


def _build_file_handler(
    log_file: str,
    rotation_type: str,
    rotation_when: Optional[str],
    rotation_interval: int,
    max_bytes: int,
    backup_count: int,
) -> Handler:
    if rotation_type and rotation_type.lower() in ("time", "timed"):
        return TimedRotatingFileHandler(
            filename=log_file,
            when=rotation_when or "midnight",
            interval=rotation_interval,
            backupCount=backup_count,
            encoding="utf-8",
        )
    if os.name == "nt":
        # RotatingFileHandler trips over file locking on Windows
        return logging.FileHandler(log_file, encoding="utf-8")
    return RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


def setup_universal_logging(
    log_file: str = "logs/pipeline_compiler.log",
    log_level: str = "INFO",
    rotation_type: str = "size",
    rotation_when: str | None = None,
    rotation_interval: int = 1,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    console_log_level: str = "WARNING",
) -> None:
    """
    Configure root logging with a file handler and a rich console handler.

    Args:
        log_file: Path to log file (creates directory if needed)
        log_level: Level for the root logger and the file handler
        rotation_type: "size" or "time"
        console_log_level: Level for console output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_level(log_level, logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler: Optional[Handler]
    try:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = _build_file_handler(
            log_file, rotation_type, rotation_when, rotation_interval, max_bytes, backup_count
        )
    except OSError as e:
        file_handler = None
        root_logger.warning("Could not set up file logging to %s: %s", log_file, e)

    if file_handler is not None:
        file_handler.setLevel(_level(log_level, logging.INFO))
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root_logger.addHandler(file_handler)

    console_handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=True,
        show_path=False,
    )
    console_handler.setLevel(_level(console_log_level, logging.WARNING))
    root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
