"""
Logging configuration for the expense tracker.

Library modules only call ``get_logger(__name__)``; handlers are attached
to the ``expense_tracker`` package logger by ``setup_logging``, which the
entry point calls at startup. State changes of the transaction store are
written to a separate audit logger built by ``create_audit_logger``.
"""

import logging
import logging.handlers
import os
import sys
from typing import IO, List, Optional, Union

PACKAGE_LOGGER_NAME = "expense_tracker"

# Handlers attached by the last setup_logging call
_installed_handlers: List[logging.Handler] = []


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).strip().upper(), logging.INFO)


def setup_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure the package logger.

    Calling this again replaces the handlers installed by the previous
    call, so handlers never pile up.

    Args:
        level: Logging level as a name (DEBUG, INFO, ...) or number
        log_file: Path to a rotating log file (optional)
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep
        stream: Console stream (defaults to sys.stdout)

    Returns:
        The configured package logger
    """
    numeric_level = _parse_level(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for handler in list(package_logger.handlers):
        if isinstance(handler, logging.NullHandler) or handler in _installed_handlers:
            package_logger.removeHandler(handler)
            handler.close()
    _installed_handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    ))
    _installed_handlers.append(console_handler)

    if log_file:
        _ensure_parent_dir(log_file)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        handler.setLevel(numeric_level)
        package_logger.addHandler(handler)

    package_logger.setLevel(numeric_level)
    package_logger.propagate = False

    # Werkzeug logs every request at INFO
    logging.getLogger('werkzeug').setLevel(max(numeric_level, logging.WARNING))

    package_logger.info(
        f"Logging initialized - Level: {logging.getLevelName(numeric_level)}, "
        f"File: {log_file or 'Console only'}"
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger, staying silent until setup_logging has run.

    Args:
        name: Logger name, normally under the ``expense_tracker`` package

    Returns:
        Logger instance
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def create_audit_logger(log_file: str = "logs/audit.log", name: str = "audit") -> logging.Logger:
    """
    Create a dedicated audit logger for store state changes.

    Calling this twice with the same name returns the same logger
    without attaching a second handler.

    Args:
        log_file: Path to audit log file
        name: Logger name

    Returns:
        Audit logger instance
    """
    audit_logger = logging.getLogger(name)
    audit_logger.setLevel(logging.INFO)

    # Prevent propagation to root logger
    audit_logger.propagate = False

    if audit_logger.handlers:
        return audit_logger

    _ensure_parent_dir(log_file)

    audit_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=50 * 1024 * 1024,  # 50MB
        backupCount=10
    )

    # Structured for easy parsing
    audit_formatter = logging.Formatter(
        '%(asctime)s|%(levelname)s|%(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    audit_handler.setFormatter(audit_formatter)

    audit_logger.addHandler(audit_handler)

    return audit_logger


def _ensure_parent_dir(path: str) -> None:
    """Create the directory holding path if it doesn't exist."""
    log_dir = os.path.dirname(path)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)
