"""Unit tests for logging setup."""

import io
import json
from collections.abc import Iterator

import pytest
import structlog

from hupconfig.observability.logging import configure_logging, reload_context
from hupconfig.settings import EngineSettings


@pytest.fixture(autouse=True)
def restore_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.unit
    def test_json_output_includes_reload_context(self) -> None:
        """Test that JSON lines carry bound reload identifiers."""
        output = io.StringIO()
        configure_logging(EngineSettings(log_level="DEBUG", json_logs=True), output)

        with reload_context("/etc/app.yaml", 3):
            structlog.get_logger().info("config_reloaded", component="reload")
        structlog.get_logger().info("after_reload")

        first, second = (json.loads(line) for line in output.getvalue().splitlines())
        assert first["event"] == "config_reloaded"
        assert first["source_location"] == "/etc/app.yaml"
        assert first["reload_number"] == 3
        assert first["level"] == "info"
        assert "reload_number" not in second

    @pytest.mark.unit
    def test_level_filtering(self) -> None:
        """Test that events below the configured level are dropped."""
        output = io.StringIO()
        configure_logging(EngineSettings(log_level="WARNING"), output)

        log = structlog.get_logger()
        log.info("config_ready")
        log.warning("config_file_skipped")

        lines = output.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "config_file_skipped"
