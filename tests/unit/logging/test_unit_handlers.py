# tests/unit/logging/test_unit_handlers.py — v1
"""Tests for logging/handlers.py — file rotation handler."""

from __future__ import annotations

import logging
import os

import pytest

from forkwatch.logging.handlers import (
    ForkSafeRotatingFileHandler,
    _parse_size,
    create_rotating_handler,
)


class TestParseSize:
    def test_mb(self):
        assert _parse_size("10MB") == 10 * 1024 * 1024

    def test_kb(self):
        assert _parse_size("512KB") == 512 * 1024

    def test_gb(self):
        assert _parse_size("1GB") == 1024 * 1024 * 1024

    def test_case_insensitive(self):
        assert _parse_size("10mb") == 10 * 1024 * 1024

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid size"):
            _parse_size("10bytes")


class TestCreateRotatingHandler:
    def test_creates_handler(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "test.log", rotation="1MB", retention=3)
        try:
            assert handler.maxBytes == 1024 * 1024
            assert handler.backupCount == 3
        finally:
            handler.close()

    def test_creates_parent_dirs(self, tmp_path):
        log_file = tmp_path / "a" / "b" / "test.log"
        handler = create_rotating_handler(log_file)
        try:
            assert log_file.parent.is_dir()
        finally:
            handler.close()

    def test_returns_fork_safe_handler(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "test.log")
        try:
            assert isinstance(handler, ForkSafeRotatingFileHandler)
            assert handler.owner_pid == os.getpid()
        finally:
            handler.close()


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("forkwatch.test", logging.INFO, __file__, 1, message, None, None)


class TestForkSafeRotation:
    def test_owner_rotates(self, tmp_path):
        log_file = tmp_path / "app.log"
        handler = create_rotating_handler(log_file, rotation="1KB", retention=2)
        try:
            handler.emit(_record("x" * 2000))
            handler.emit(_record("after rollover"))
        finally:
            handler.close()
        assert (tmp_path / "app.log.1").exists()
        assert "after rollover" in log_file.read_text()

    def test_other_process_never_rotates(self, tmp_path):
        log_file = tmp_path / "app.log"
        handler = create_rotating_handler(log_file, rotation="1KB", retention=2)
        handler.owner_pid = os.getpid() + 1
        try:
            handler.emit(_record("x" * 2000))
            handler.emit(_record("still here"))
        finally:
            handler.close()
        assert not (tmp_path / "app.log.1").exists()
        assert "still here" in log_file.read_text()

    def test_forked_child_appends_without_renaming(self, tmp_path):
        log_file = tmp_path / "app.log"
        handler = create_rotating_handler(log_file, rotation="1KB", retention=2)
        try:
            handler.emit(_record("parent before"))
            pid = os.fork()
            if pid == 0:
                status = 1
                try:
                    handler.emit(_record("c" * 2000))
                    handler.emit(_record("child line"))
                    handler.flush()
                    status = 0
                finally:
                    os._exit(status)
            _, wait_status = os.waitpid(pid, 0)
            handler.emit(_record("parent after"))
            handler.flush()
        finally:
            handler.close()

        assert os.WEXITSTATUS(wait_status) == 0
        # only the parent rolled over, once, after the child had exited
        assert not (tmp_path / "app.log.2").exists()
        backup = (tmp_path / "app.log.1").read_text().splitlines()
        assert backup[0] == "parent before"
        assert backup[-1] == "child line"
        assert log_file.read_text().splitlines() == ["parent after"]
