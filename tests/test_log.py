"""Tests for log.py"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from stackeye_analytics.config import LoggingConfig
from stackeye_analytics.log import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging"""

    def test_json_output_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging()

        structlog.get_logger().info("stats summarized", total_checks=200)

        event = json.loads(capsys.readouterr().out.strip())
        assert event["event"] == "stats summarized"
        assert event["total_checks"] == 200
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_component_is_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Module loggers carry their component into every event"""
        configure_logging()

        structlog.get_logger(component="tree.builder").warning("root not in graph")

        event = json.loads(capsys.readouterr().out.strip())
        assert event["component"] == "tree.builder"

    def test_debug_suppressed_unless_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False)

        structlog.get_logger().debug("probe already visited")

        assert capsys.readouterr().out == ""

    def test_verbose_emits_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True)

        structlog.get_logger().debug("probe already visited", probe_id="abc")

        out = capsys.readouterr().out
        assert "probe already visited" in out
        assert "abc" in out

    def test_level_from_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(config=LoggingConfig(level=logging.WARNING))

        log = structlog.get_logger()
        log.info("dependency tree built")
        log.warning("root not in graph")

        out = capsys.readouterr().out
        assert "dependency tree built" not in out
        assert "root not in graph" in out

    def test_settings_from_env(self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACKEYE_LOG_LEVEL", "debug")
        monkeypatch.setenv("STACKEYE_LOG_FORMAT", "console")
        configure_logging()

        structlog.get_logger().debug("dangling edge dropped")

        out = capsys.readouterr().out
        assert "dangling edge dropped" in out
        with pytest.raises(json.JSONDecodeError):
            json.loads(out)
