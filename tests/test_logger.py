# tests/test_logger.py
"""Unit tests for the shared logging setup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from logging.handlers import RotatingFileHandler
from citygrid.config import Settings, settings
from citygrid.utils.logger import DEFAULT_LOG_DIR, get_logger, log_file_path


def file_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]


class TestLogger:
    def test_file_handler_follows_settings(self):
        get_logger("citygrid.tests")
        handler = next(h for h in file_handlers() if h.baseFilename == os.path.abspath(log_file_path()))
        assert handler.maxBytes == settings.LOG_MAX_BYTES
        assert handler.backupCount == settings.LOG_BACKUP_COUNT

    def test_configured_once(self):
        get_logger("citygrid.a")
        count = len(file_handlers())
        get_logger("citygrid.b")
        assert len(file_handlers()) == count

    def test_log_path_from_settings(self):
        custom = Settings(LOG_DIR="/var/log/citygrid", LOG_FILE="engine.log")
        assert log_file_path(custom) == os.path.join("/var/log/citygrid", "engine.log")
        assert log_file_path(Settings(LOG_DIR=None)) == os.path.join(DEFAULT_LOG_DIR, settings.LOG_FILE)
