"""Tests for structlog/stdlib logging configuration."""

from __future__ import annotations

import logging

import structlog

from torrplay.infrastructure.config import AppConfig
from torrplay.infrastructure.logging.setup import (
    _add_record_created_timestamp_utc,
    _drop_color_message,
    build_logging_config,
)


class TestBuildLoggingConfig:
    def test_uses_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())
        formatter = cfg["formatters"]["structlog"]
        assert formatter["()"] is structlog.stdlib.ProcessorFormatter
        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"

    def test_applies_level_everywhere(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))
        assert cfg["root"]["level"] == "DEBUG"
        assert all(lg["level"] == "DEBUG" for lg in cfg["loggers"].values())

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(AppConfig())
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_does_not_mutate_base(self) -> None:
        build_logging_config(AppConfig(log_level="ERROR"))
        cfg = build_logging_config(AppConfig())
        assert cfg["root"]["level"] == "INFO"


class TestProcessors:
    def test_drop_color_message(self) -> None:
        out = _drop_color_message(None, None, {"event": "x", "color_message": "y"})
        assert out == {"event": "x"}

    def test_record_timestamp(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        record.created = 0.0
        out = _add_record_created_timestamp_utc(None, None, {"_record": record})
        assert out["timestamp"] == "1970-01-01T00:00:00Z"
