"""Logging configuration for RELNORM."""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FILE = "logs/relnorm.log"

_FORMATS = {
    "detailed": (
        "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
        "%Y-%m-%d %H:%M:%S",
    ),
    "simple": ("%(levelname)s | %(name)s | %(message)s", None),
}


def _resolve_log_path(log_file: Optional[str]) -> Path:
    """Resolve a log file path relative to the repository root."""
    relnorm_root = Path(__file__).parent.parent.parent.parent
    return relnorm_root / (log_file or DEFAULT_LOG_FILE)


def clear_log_file(log_file: Optional[str] = None) -> None:
    """
    Remove the log file if it exists.

    Args:
        log_file: Path to log file (relative to the repository root). If None, uses default.
    """
    log_path = _resolve_log_path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if log_path.exists():
        try:
            log_path.unlink()
        except PermissionError:
            # Held open by another process; keep appending to it.
            logging.getLogger(__name__).warning(
                f"Cannot clear log file {log_path} - file is locked. Continuing without clearing."
            )


def setup_logging(
    level: str = "INFO",
    format_type: str = "simple",
    log_to_file: bool = False,
    log_file: Optional[str] = None,
    clear_existing: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "simple" or "detailed"
        log_to_file: Whether to also log to a file
        log_file: Path to log file (relative to the repository root)
        clear_existing: Whether to clear the log file before attaching the handler
    """
    if clear_existing and log_to_file:
        clear_log_file(log_file)

    log_level = getattr(logging, level.upper(), logging.INFO)
    fmt, datefmt = _FORMATS.get(format_type, _FORMATS["simple"])
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_path = _resolve_log_path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def setup_logging_from_config() -> None:
    """Configure logging from the ``logging`` section of config.yaml."""
    from RELNORM.config.loader import get_config

    section = get_config("logging") or {}
    setup_logging(
        level=section.get("level", "INFO"),
        format_type=section.get("format_type", "simple"),
        log_to_file=section.get("log_to_file", False),
        log_file=section.get("log_file"),
        clear_existing=section.get("clear_existing", False),
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)
