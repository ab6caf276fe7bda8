"""ロガーのテスト"""
import logging

import pytest

from s3_chunk_uploader.models.config import LoggingConfig
from s3_chunk_uploader.utils.logger import LoggerManager


def test_get_logger_before_setup():
    LoggerManager.reset()
    with pytest.raises(RuntimeError, match="Logger not initialized"):
        LoggerManager.get_logger()


def test_setup_is_idempotent():
    LoggerManager.reset()
    first = LoggerManager.setup(LoggingConfig(level="WARNING"))
    second = LoggerManager.setup(LoggingConfig(level="DEBUG"))

    assert first is second
    assert first.level == logging.WARNING
    assert LoggerManager.get_logger() is first


def test_file_handler(tmp_path):
    LoggerManager.reset()
    log_file = tmp_path / "logs" / "upload.log"
    logger = LoggerManager.setup(LoggingConfig(file=str(log_file)))

    logger.info("part uploaded")
    for handler in logger.handlers:
        handler.flush()

    assert "part uploaded" in log_file.read_text(encoding="utf-8")
