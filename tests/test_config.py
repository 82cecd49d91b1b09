"""Tests for settings and logging setup."""

import pytest
import structlog
from pydantic import ValidationError

from py_voronoi.config import Settings, configure_logging


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        """Tolerances default to exact comparisons."""
        settings = Settings()
        assert settings.legality_epsilon == 0.0
        assert settings.degeneracy_epsilon == pytest.approx(1e-12)

    def test_environment_override(self, monkeypatch):
        """Prefixed environment variables override defaults."""
        monkeypatch.setenv("VORONOI_LEGALITY_EPSILON", "0.5")
        monkeypatch.setenv("VORONOI_FIELD_WIDTH", "8")

        settings = Settings()
        assert settings.legality_epsilon == 0.5
        assert settings.field_width == 8

    def test_invalid_value(self, monkeypatch):
        """Out-of-range values are rejected."""
        monkeypatch.setenv("VORONOI_GAP", "0.9")
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize("name", ["VORONOI_FIELD_WIDTH", "VORONOI_FIELD_HEIGHT"])
    def test_single_cell_field_rejected(self, monkeypatch, name):
        """Fields need at least two cells along each axis."""
        monkeypatch.setenv(name, "1")
        with pytest.raises(ValidationError):
            Settings()


class TestConfigureLogging:
    """Test structlog configuration."""

    @pytest.mark.parametrize("fmt", ["json", "console"])
    def test_configures_structlog(self, fmt, reset_structlog):
        """Both renderers can be selected."""
        configure_logging(level="debug", fmt=fmt)

        processors = structlog.get_config()["processors"]
        renderer = (structlog.dev.ConsoleRenderer if fmt == "console"
                    else structlog.processors.JSONRenderer)
        assert isinstance(processors[-1], renderer)

        structlog.get_logger("test").info("configured", fmt=fmt)
