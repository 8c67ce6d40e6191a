"""Log handlers for M24 services."""

import logging
import logging.handlers
import sys
from pathlib import Path

# Unix socket locations for syslogd on Linux and macOS.
SYSLOG_SOCKETS = ('/dev/log', '/var/run/syslog')


def create_file_handler(
    log_file: Path,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
    formatter: logging.Formatter | None = None
) -> logging.Handler:
    """Create a rotating file handler, creating the log directory if needed.

    Args:
        log_file: Path to log file
        max_bytes: Maximum file size before rotation
        backup_count: Number of rotated files to keep
        formatter: Log formatter to use

    Returns:
        Configured file handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    if formatter:
        handler.setFormatter(formatter)
    return handler


def create_console_handler(
    formatter: logging.Formatter | None = None,
    stream=None
) -> logging.Handler:
    """Create a console handler writing to stderr by default."""
    handler = logging.StreamHandler(stream or sys.stderr)
    if formatter:
        handler.setFormatter(formatter)
    return handler


def create_syslog_handler(
    formatter: logging.Formatter | None = None,
    facility: int = logging.handlers.SysLogHandler.LOG_USER,
) -> logging.Handler | None:
    """Create a syslog handler bound to the local syslog socket.

    Returns:
        Configured handler, or None when no local syslog socket exists
    """
    address = next((p for p in SYSLOG_SOCKETS if Path(p).exists()), None)
    if address is None:
        return None

    try:
        handler = logging.handlers.SysLogHandler(address=address, facility=facility)
    except OSError:
        return None

    if formatter:
        handler.setFormatter(formatter)
    return handler
