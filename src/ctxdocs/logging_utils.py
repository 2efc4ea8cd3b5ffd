"""Logging configuration for ctxdocs."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union


def setup_logging(
    level: Union[int, str] = logging.INFO, *, stream: Optional[TextIO] = None
) -> None:
    """Configure root logging.

    Output goes to stdout unless ``stream`` is given. The stdio MCP transport
    owns stdout, so the server passes ``sys.stderr`` there.
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
    )

