"""Core utilities package."""

from .datetime import ensure_utc, utcnow
from .logging_utils import log_pipeline_action, setup_universal_logging

__all__ = [
    "log_pipeline_action",
    "setup_universal_logging",
    "utcnow",
    "ensure_utc",
]
