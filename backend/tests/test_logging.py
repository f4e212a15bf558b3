"""Tests for structlog configuration."""

import logging

import pytest
import structlog

from connection_cache.core import logging as log_config


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_console_renderer_by_default(monkeypatch):
    monkeypatch.setattr(log_config.settings, "LOG_JSON", False)

    log_config.configure_logging()

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_json_renderer_when_enabled(monkeypatch):
    monkeypatch.setattr(log_config.settings, "LOG_JSON", True)

    log_config.configure_logging()

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_level_from_settings(monkeypatch):
    monkeypatch.setattr(log_config.settings, "LOG_LEVEL", "warning")

    log_config.configure_logging()

    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(logging.WARNING)
