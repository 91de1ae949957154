from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path


def configure_logging(log_dir: Path | None = None) -> None:
    """Configure logging with a console handler and an optional rotating file handler.

    ``COINTRACK_LOG_LEVEL`` sets the root level (default INFO) and
    ``COINTRACK_AIOHTTP_LOG_LEVEL`` the aiohttp loggers (default WARNING).
    """
    level_name = os.environ.get("COINTRACK_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # 10MB per file, 5 backups
    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "cointrack.log",
            maxBytes=10*1024*1024,
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    aiohttp_level_name = os.environ.get("COINTRACK_AIOHTTP_LOG_LEVEL", "WARNING").upper()
    logging.getLogger("aiohttp").setLevel(getattr(logging, aiohttp_level_name, logging.WARNING))
