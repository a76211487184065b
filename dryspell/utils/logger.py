"""Loguru sinks for the pricer: console, rotating run log and error log."""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from dryspell.utils.config import settings

RUN_LOG = "dryspell.log"
ERROR_LOG = "errors.log"


def setup_logging(log_dir: Optional[Union[str, Path]] = None) -> Path:
    """Replace loguru's default handler with the configured sinks.

    The log directory comes from ``settings.logging.log_dir`` unless one is
    passed in; a relative directory resolves against the working directory.
    Returns the directory the file sinks write to.
    """
    cfg = settings.logging
    log_dir = Path(log_dir or cfg.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, format=cfg.format, level=cfg.level, colorize=True)

    file_options = dict(
        format=cfg.format,
        rotation=cfg.rotation,
        retention=cfg.retention,
        compression="zip",
        enqueue=cfg.enqueue,
    )
    logger.add(log_dir / RUN_LOG, level=cfg.level, **file_options)
    logger.add(log_dir / ERROR_LOG, level="ERROR", backtrace=True, **file_options)

    logger.debug(f"Logging to {log_dir.resolve()} at level {cfg.level}")
    return log_dir


setup_logging()
