#!/usr/bin/env python3
"""ロガーのテスト"""
import logging

from s3_stream_uploader.models.config import LoggingConfig
from s3_stream_uploader.utils.logger import LOGGER_NAME, LoggerManager


def test_logger():
    """ロガーが正しく動作するか確認"""
    logger = LoggerManager.setup(LoggingConfig(level="warning"))

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert LoggerManager.get_logger() is logger


def test_setup_is_idempotent():
    first = LoggerManager.setup(LoggingConfig(level="DEBUG"))
    second = LoggerManager.setup(LoggingConfig(level="ERROR"))
    assert first is second
    assert second.level == logging.DEBUG


def test_get_logger_before_setup():
    """setup()前でも名前付きロガーが返る"""
    logger = LoggerManager.get_logger()
    assert logger.name == LOGGER_NAME


def test_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "uploader.log"
    logger = LoggerManager.setup(LoggingConfig(level="INFO", file=str(log_file)))

    logger.info("hello from the uploader")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "hello from the uploader" in log_file.read_text(encoding="utf-8")
