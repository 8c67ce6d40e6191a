"""Unit tests for the logfmt formatter and logger wrapper."""

import logging

import m24_logging
from m24_logging import LogfmtFormatter, get_logger
from m24_logging.formatters import format_value


def _record(msg, **extra):
    record = logging.LogRecord(
        name="m24.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatValue:
    """Tests for logfmt value quoting."""

    def test_plain_value_unquoted(self):
        assert format_value("loaded") == "loaded"

    def test_value_with_spaces_quoted(self):
        assert format_value("launchctl load failed") == '"launchctl load failed"'

    def test_quotes_escaped(self):
        assert format_value('say "hi"') == '"say \\"hi\\""'

    def test_non_string_values(self):
        assert format_value(127) == "127"
        assert format_value(True) == "True"

    def test_empty_string_quoted(self):
        assert format_value("") == '""'


class TestLogfmtFormatter:
    """Tests for LogfmtFormatter."""

    def test_standard_fields(self):
        """Test level, component and message are rendered."""
        line = LogfmtFormatter().format(_record("Indexer service installed"))

        assert line.startswith("level=INFO ts=")
        assert "component=m24.test" in line
        assert 'msg="Indexer service installed"' in line

    def test_extra_context_appended(self):
        """Test keyword context becomes key=value pairs."""
        line = LogfmtFormatter().format(
            _record("Restart failed", exit_code=5, error="Input/output error")
        )

        assert "exit_code=5" in line
        assert 'error="Input/output error"' in line

    def test_private_attributes_skipped(self):
        line = LogfmtFormatter().format(_record("x", _internal="hidden"))

        assert "hidden" not in line


class TestM24Logger:
    """Tests for the cached logger wrapper."""

    def test_writes_to_log_dir(self, tmp_path):
        """Test messages land in <log_dir>/m24.<name>.log."""
        m24_logging.configure(log_dir=tmp_path, level="DEBUG")
        logger = get_logger("unit")

        logger.info("Plist written", plist_path="/tmp/a b.plist")
        for handler in logger.logger.handlers:
            handler.flush()

        content = (tmp_path / "m24.unit.log").read_text()
        assert 'msg="Plist written"' in content
        assert 'plist_path="/tmp/a b.plist"' in content

    def test_get_logger_is_cached(self, tmp_path):
        m24_logging.configure(log_dir=tmp_path)

        assert get_logger("cached") is get_logger("cached")

    def test_configure_resets_cache(self, tmp_path):
        """Test configure drops loggers so new defaults apply."""
        m24_logging.configure(log_dir=tmp_path / "one")
        first = get_logger("reset")

        m24_logging.configure(log_dir=tmp_path / "two")
        second = get_logger("reset")

        assert first is not second
        assert second.log_dir == tmp_path / "two"

    def test_level_respected(self, tmp_path):
        m24_logging.configure(log_dir=tmp_path, level="WARNING")
        logger = get_logger("quiet")

        logger.info("should not appear")
        logger.warning("should appear")
        for handler in logger.logger.handlers:
            handler.flush()

        content = (tmp_path / "m24.quiet.log").read_text()
        assert "should not appear" not in content
        assert "should appear" in content
