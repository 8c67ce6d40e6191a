"""Log formatters for M24 services."""

import logging
from datetime import datetime

# Attributes every LogRecord carries; anything else was passed as context.
_RESERVED_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName',
})


def format_value(value) -> str:
    """Render a single logfmt value, quoting it when needed."""
    text = value if isinstance(value, str) else str(value)
    if text == '' or any(c in text for c in ' "=\n'):
        text = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
        return f'"{text}"'
    return text


class LogfmtFormatter(logging.Formatter):
    """Logfmt formatter: level=INFO ts=2025-01-01T12:00:00 component=m24.x msg="message" key=value"""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as logfmt key=value pairs.

        Args:
            record: Log record to format

        Returns:
            Formatted log line
        """
        parts = [
            f'level={record.levelname}',
            f'ts={datetime.fromtimestamp(record.created).isoformat()}',
            f'component={record.name}',
            f'msg={format_value(record.getMessage())}',
        ]

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if exc_text:
                parts.append(f'error={format_value(exc_text)}')

        for key, value in record.__dict__.items():
            if key in _RESERVED_KEYS or key.startswith('_'):
                continue
            parts.append(f'{key}={format_value(value)}')

        return ' '.join(parts)
