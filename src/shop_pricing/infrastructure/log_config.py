"""Logging setup for the command-line entry point.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
handler and format are installed once here.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_shop_pricing", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._shop_pricing = True  # type: ignore[attr-defined]
    root.addHandler(handler)
