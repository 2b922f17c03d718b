"""Shared fixtures for the chat log tests."""

from __future__ import annotations

import logging

import pytest

import devchat.core.logger as logger_module

_CONFIG_KEYS = (
    "DEVCHAT_DEVICE_NAME",
    "DEVCHAT_MAX_MESSAGE_LEN",
    "DEVCHAT_MAX_ENTRIES",
    "LOG_LEVEL",
    "LOG_DIR",
)


@pytest.fixture(name="clean_env")
def fixture_clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with none of the config variables set."""
    for key in _CONFIG_KEYS:
        # setenv first so teardown also undoes values written by load_dotenv
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture(name="isolated_logging")
def fixture_isolated_logging(monkeypatch):
    """Let a test call ``setup_logging`` without leaking handlers."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    monkeypatch.setattr(logger_module, "_CONFIGURED", False)
    monkeypatch.setattr(logger_module, "_SESSION_LOG_PATH", None)
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
