import pytest

import m24_logging


@pytest.fixture(autouse=True, scope="session")
def _isolated_logging(tmp_path_factory):
    """Keep service manager logs out of the real home directory."""
    m24_logging.configure(
        log_dir=tmp_path_factory.mktemp("logs"),
        level="DEBUG",
        enable_console=False,
        enable_syslog=False,
    )
    yield
