"""Tests for the entry point's logging setup."""

import logging
from pathlib import Path

import pytest

from gitid import __main__ as entry


def test_setup_logging_writes_info_to_log_file(temp_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

    entry.setup_logging()

    handlers = captured["handlers"]
    try:
        assert captured["level"] == logging.INFO
        stream, file_handler = handlers
        assert stream.level == logging.WARNING
        assert isinstance(file_handler, logging.FileHandler)
        assert Path(file_handler.baseFilename) == temp_home / ".config" / "gitid" / "gitid.log"
    finally:
        for handler in handlers:
            handler.close()
