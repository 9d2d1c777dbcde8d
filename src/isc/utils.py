"""Utility functions for isc."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger


def setup_logging(log_level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Configure loguru sinks for a run.

    Logs always go to stderr so the report on stdout stays clean.

    Args:
        log_level: Minimum level for emitted records
        log_file: Optional file that receives debug output as well
    """
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper(), colorize=True)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(str(log_file), level="DEBUG", rotation="10 MB", retention="5 days")
