"""Pytest fixtures shared by engine and CLI tests."""

import pytest

from flix_utils import conf, log


@pytest.fixture(autouse=True)
def isolated_log(tmp_path, monkeypatch):
    """Send log lines to a per-test file instead of ~/.flixrec."""
    log_file = tmp_path / "logs" / "flixrec.log"
    monkeypatch.setattr(conf, "LOG_FILE", log_file)
    monkeypatch.setattr(log, "LOG", True)
    monkeypatch.setattr(log, "LOG_TO_STDERR", False)
    monkeypatch.setattr(log, "first_line", True)
    yield log_file
