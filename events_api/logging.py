# events_api/logging.py
"""
Structured JSON logging.

Call configure_logging() once at startup (the app lifespan does this).
After that, use logging.getLogger(__name__) throughout the package.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter


def configure_logging(log_level: str = "INFO") -> None:
    """Send JSON lines to stdout from the root logger at ``log_level``."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(console_handler)

    logging.getLogger(__name__).debug("Logging configured", extra={"log_level": log_level})
