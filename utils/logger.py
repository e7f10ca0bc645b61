"""
Loguru setup shared by the API, the scoring CLI and the database CLI.

    from utils import logger, init_logging

    init_logging(app_name="scoring")
    logger.info("...")
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# Sinks are added by setup_logging; nothing is printed before that
logger.remove()

_configured = False


def setup_logging(log_dir: Optional[Path] = None, log_level: str = "INFO", app_name: str = "app"):
    """
    Add the console sink and, with a log_dir, two daily files per app:
    `<app>_<date>.log` (INFO and up) and `<app>_errors_<date>.log` (WARNING
    and up, which is where per-product scoring failures land).

    Only the first call has an effect.
    """
    global _configured

    if _configured:
        return

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_options = dict(
            format=FILE_FORMAT,
            rotation="00:00",
            retention="30 days",
            compression="gz",
            encoding="utf-8",
        )
        logger.add(log_dir / f"{app_name}_{{time:YYYY-MM-DD}}.log", level="INFO", **file_options)
        logger.add(log_dir / f"{app_name}_errors_{{time:YYYY-MM-DD}}.log", level="WARNING", **file_options)

        logger.info(f"Logging to {log_dir} as '{app_name}'")

    _configured = True


def init_logging(app_name: str = "app"):
    """setup_logging() with LOG_DIR and LOG_LEVEL from settings."""
    from config import settings, ensure_directories

    ensure_directories()
    setup_logging(log_dir=settings.LOG_DIR, log_level=settings.LOG_LEVEL, app_name=app_name)


__all__ = ["logger", "setup_logging", "init_logging"]
