"""Centralized logger for M24 services."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from m24_logging.formatters import LogfmtFormatter
from m24_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)


@dataclass
class LoggingDefaults:
    """Defaults applied to loggers created without explicit settings."""

    log_dir: Path = field(default_factory=lambda: Path.home() / '.m24' / 'logs')
    level: str = 'INFO'
    enable_console: bool = False
    enable_syslog: bool = False


_defaults = LoggingDefaults()
_loggers: dict[str, 'M24Logger'] = {}


class M24Logger:
    """Logger wrapper that accepts keyword context on every call.

    Each logger writes logfmt lines to ``<log_dir>/m24.<name>.log`` and,
    when enabled, to the console and the local syslog socket.
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        level: str | None = None,
        enable_console: bool | None = None,
        enable_syslog: bool | None = None,
    ):
        self.name = f'm24.{name}'
        self.log_dir = log_dir or _defaults.log_dir
        self.formatter = LogfmtFormatter()

        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, (level or _defaults.level).upper()))
        self.logger.propagate = False
        self.logger.handlers.clear()

        self.logger.addHandler(
            create_file_handler(self.log_dir / f'{self.name}.log', formatter=self.formatter)
        )

        if _defaults.enable_console if enable_console is None else enable_console:
            self.logger.addHandler(create_console_handler(formatter=self.formatter))

        if _defaults.enable_syslog if enable_syslog is None else enable_syslog:
            handler = create_syslog_handler(formatter=self.formatter)
            if handler:
                self.logger.addHandler(handler)

    def _log(self, level: int, msg: str, **kwargs: Any):
        self.logger.log(level, msg, extra=kwargs, stacklevel=3)

    def debug(self, msg: str, **kwargs: Any):
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any):
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any):
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs: Any):
        self._log(logging.ERROR, msg, **kwargs)

    def close(self):
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)


def get_logger(name: str, **kwargs: Any) -> M24Logger:
    """Get or create a cached M24 logger.

    Args:
        name: Logger name (prefixed with 'm24.')
        **kwargs: Overrides for log_dir, level, enable_console, enable_syslog

    Returns:
        Logger instance
    """
    if name not in _loggers:
        _loggers[name] = M24Logger(name, **kwargs)
    return _loggers[name]


def configure(
    log_dir: Path | str | None = None,
    level: str | None = None,
    enable_console: bool | None = None,
    enable_syslog: bool | None = None,
):
    """Set logging defaults and drop cached loggers so they pick them up."""
    if log_dir is not None:
        _defaults.log_dir = Path(log_dir).expanduser()
    if level is not None:
        _defaults.level = level
    if enable_console is not None:
        _defaults.enable_console = enable_console
    if enable_syslog is not None:
        _defaults.enable_syslog = enable_syslog

    for logger in _loggers.values():
        logger.close()
    _loggers.clear()


def configure_from_config(config: Any):
    """Apply the ``logging`` section of a service config object, if any."""
    log_config = getattr(config, 'logging', None)
    if log_config is None:
        return

    configure(
        log_dir=log_config.log_dir,
        level=log_config.level,
        enable_console=log_config.enable_console,
        enable_syslog=log_config.enable_syslog,
    )
