from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from sheet_bot.logging import _resolve_log_dir, setup_bot_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def test_resolve_log_dir_absolute_and_relative(tmp_path):
    assert _resolve_log_dir(SimpleNamespace(SHEET_BOT_LOG_DIR=tmp_path)) == tmp_path
    rel = _resolve_log_dir(SimpleNamespace(SHEET_BOT_LOG_DIR="_logs"))
    assert rel.is_absolute()
    assert rel.name == "_logs"


def test_setup_bot_logging_writes_file(tmp_path, restore_root_logging):
    settings = SimpleNamespace(
        SHEET_BOT_LOG_DIR=tmp_path / "logs",
        SHEET_BOT_LOG_LEVEL="debug",
        SHEET_BOT_LOG_BACKUP_COUNT=3,
        SHEET_BOT_LOG_HTTP=False,
    )
    log_file = setup_bot_logging(settings)

    logging.getLogger("sheet_bot.test").debug("hello from test")
    for h in logging.getLogger().handlers:
        h.flush()

    assert log_file == tmp_path / "logs" / "sheet_bot.log"
    text = log_file.read_text(encoding="utf-8")
    assert "hello from test" in text
    assert "| DEBUG | sheet_bot.test |" in text
    assert logging.getLogger("httpx").level == logging.WARNING
    file_handlers = [h for h in logging.getLogger().handlers if hasattr(h, "backupCount")]
    assert [h.backupCount for h in file_handlers] == [3]


def test_setup_bot_logging_is_idempotent(tmp_path, restore_root_logging):
    settings = SimpleNamespace(SHEET_BOT_LOG_DIR=tmp_path, SHEET_BOT_LOG_LEVEL="INFO", SHEET_BOT_LOG_HTTP=True)
    setup_bot_logging(settings)
    setup_bot_logging(settings)
    assert len(logging.getLogger().handlers) == 2
    assert logging.getLogger("httpx").level == logging.INFO
