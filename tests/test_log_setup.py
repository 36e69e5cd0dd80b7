"""Tests for log_setup.py: structlog renderer selection."""

from __future__ import annotations

from unittest.mock import patch

import structlog

from registry_kube_client.log_setup import configure_logging


class TestConfigureLogging:
    def teardown_method(self) -> None:
        structlog.reset_defaults()

    def test_json_renderer_when_not_a_tty(self) -> None:
        with patch("registry_kube_client.log_setup.sys.stderr") as mock_stderr:
            mock_stderr.isatty.return_value = False
            configure_logging()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_on_tty(self) -> None:
        with patch("registry_kube_client.log_setup.sys.stderr") as mock_stderr:
            mock_stderr.isatty.return_value = True
            configure_logging()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_includes_level_and_timestamp(self) -> None:
        configure_logging()
        processors = structlog.get_config()["processors"]
        assert structlog.processors.add_log_level in processors
        assert any(isinstance(p, structlog.processors.TimeStamper) for p in processors)
