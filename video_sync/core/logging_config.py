"""Structured logging configuration for the sync service."""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

console = Console()

LOGGER_NAME = "video_sync"

# Module-level logger
logger: logging.Logger | None = None


def setup_logging(
    level: str = "INFO",
    log_file: Path | str | None = None,
    rich_tracebacks: bool = True,
) -> logging.Logger:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        rich_tracebacks: Enable rich traceback formatting

    Returns:
        Configured logger instance
    """
    global logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    logger.handlers.clear()

    # Rich console handler
    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=rich_tracebacks,
        tracebacks_show_locals=(level.upper() == "DEBUG"),
        markup=False,
    )
    rich_handler.setLevel(getattr(logging, level.upper()))
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(rich_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    # Prevent logging to root logger
    logger.propagate = False

    logger.debug("Logging initialized (level=%s)", level)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get or create a logger instance.

    Args:
        name: Logger name relative to the package logger

    Returns:
        Logger instance
    """
    global logger

    if logger is None:
        # Auto-setup with defaults if not configured
        logger = setup_logging()

    if name == LOGGER_NAME:
        return logger

    # Child loggers inherit handlers from the package logger
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_sync_event(
    logger_instance: logging.Logger,
    channel_id: str,
    event: str,
    items_fetched: int | None = None,
    items_new: int | None = None,
    error: str | None = None,
) -> None:
    """
    Log channel sync events.

    Args:
        logger_instance: Logger to use
        channel_id: YouTube channel or playlist ID being synced
        event: Event type (started, completed, unchanged, skipped, failed)
        items_fetched: Number of feed entries fetched
        items_new: Number of new items merged
        error: Error message if failed
    """
    extra: dict[str, Any] = {
        "channel_id": channel_id,
        "event": event,
    }

    if items_fetched is not None:
        extra["items_fetched"] = items_fetched
    if items_new is not None:
        extra["items_new"] = items_new
    if error:
        extra["error"] = error

    if event == "failed":
        logger_instance.error("Channel sync failed: %s (%s)", channel_id, error, extra=extra)
    elif event == "skipped":
        logger_instance.warning("Channel sync skipped: %s (%s)", channel_id, error, extra=extra)
    elif event == "completed":
        logger_instance.info(
            "Channel sync complete: %s (%s fetched, %s new)",
            channel_id,
            items_fetched,
            items_new,
            extra=extra,
        )
    elif event == "unchanged":
        logger_instance.debug(
            "Channel sync: no new uploads on %s (%s fetched)", channel_id, items_fetched, extra=extra
        )
    else:
        logger_instance.debug("Channel sync %s: %s", event, channel_id, extra=extra)
