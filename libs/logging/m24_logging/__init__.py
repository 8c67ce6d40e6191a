"""M24 centralized logging with logfmt format."""

from m24_logging.formatters import LogfmtFormatter
from m24_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)
from m24_logging.logger import M24Logger, configure, configure_from_config, get_logger

__all__ = [
    "M24Logger",
    "get_logger",
    "configure",
    "configure_from_config",
    "LogfmtFormatter",
    "create_file_handler",
    "create_console_handler",
    "create_syslog_handler",
]
