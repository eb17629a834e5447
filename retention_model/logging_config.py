"""
Structured logging configuration for the retention model.

This module provides a centralized way to configure logging across the
package with different log levels and output files for different concerns.
Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed by applications (the CLI) through ``setup_logging``.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

# Define logger names for different concerns
ESTIMATION_LOGGER = "retention_model.estimation"
PERFORMANCE_LOGGER = "retention_model.performance"
ERROR_LOGGER = "retention_model.errors"
DEBUG_LOGGER = "retention_model.debug"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path("output/logs")
LOG_FILES = (
    "estimation_events.log",
    "performance_metrics.log",
    "warnings_errors.log",
    "debug_detail.log",
    "combined.log",
)

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

# Track if logging is already configured
_LOGGING_CONFIGURED = False


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = Path(log_dir) / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
        mode="a",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _attach(logger_name: str, handler: logging.Handler, level: int) -> None:
    named = logging.getLogger(logger_name)
    for h in named.handlers[:]:
        named.removeHandler(h)
        h.close()
    named.setLevel(level)
    named.addHandler(handler)
    named.propagate = True  # Allow to bubble up to root


def setup_logging(log_dir: Path = DEFAULT_LOG_DIR, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the application.

    Creates separate log files for different concerns:
    - estimation_events.log: Estimation workflow events (INFO+)
    - performance_metrics.log: Simulation timings (INFO+)
    - warnings_errors.log: Warnings and errors (WARNING+)
    - debug_detail.log: Detailed debug information (DEBUG, only if debug=True)
    - combined.log: Combined log of all messages (INFO+, DEBUG+ if debug=True)

    Args:
        log_dir: Directory where log files will be stored
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    # Remove all handlers from the root logger before setup
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    root_logger.addHandler(console)

    root_logger.addHandler(
        _file_handler(log_dir / "combined.log", logging.DEBUG if debug else logging.INFO, file_formatter)
    )
    root_logger.addHandler(
        _file_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter)
    )

    _attach(
        ESTIMATION_LOGGER,
        _file_handler(log_dir / "estimation_events.log", logging.INFO, file_formatter),
        logging.INFO,
    )
    _attach(
        PERFORMANCE_LOGGER,
        _file_handler(log_dir / "performance_metrics.log", logging.INFO, file_formatter),
        logging.INFO,
    )

    if debug:
        _attach(
            DEBUG_LOGGER,
            _file_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter),
            logging.DEBUG,
        )

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Detach every handler installed by ``setup_logging`` so it can run again."""
    global _LOGGING_CONFIGURED

    for name in (None, ESTIMATION_LOGGER, PERFORMANCE_LOGGER, DEBUG_LOGGER):
        named = logging.getLogger(name)
        for h in named.handlers[:]:
            named.removeHandler(h)
            h.close()
    _LOGGING_CONFIGURED = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (e.g., __name__). If None, returns root logger.
    """
    return logging.getLogger(name)
