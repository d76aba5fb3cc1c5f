"""Tests for environment-based settings and logging setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from campus_tour.config import DEFAULT_DATA_PATH, TourSettings, load_settings
from campus_tour.logging_config import FILE_LOGGERS, setup_logging

ENV_VARS = (
    "CAMPUS_TOUR_DATA",
    "CAMPUS_TOUR_ENTRY",
    "CAMPUS_TOUR_ASSET_ROOT",
    "CAMPUS_TOUR_SECONDS_PER_HOP",
    "CAMPUS_TOUR_LOG_DIR",
    "CAMPUS_TOUR_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """
    Remove CAMPUS_TOUR_* variables for the test and restore them afterwards.

    Setting before deleting registers each variable with monkeypatch, so
    values loaded from a .env file during the test are removed again.
    """
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path / ".env"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self, clean_env):
        """Unset variables fall back to defaults."""
        settings = load_settings(str(clean_env))
        assert settings == TourSettings()
        assert settings.data_path == DEFAULT_DATA_PATH
        assert settings.seconds_per_hop == 0.8

    def test_environment_values(self, clean_env, monkeypatch):
        """Environment variables are parsed into typed fields."""
        monkeypatch.setenv("CAMPUS_TOUR_DATA", "/srv/tour.json")
        monkeypatch.setenv("CAMPUS_TOUR_ENTRY", "a-f1-north-1")
        monkeypatch.setenv("CAMPUS_TOUR_ASSET_ROOT", "/srv/images")
        monkeypatch.setenv("CAMPUS_TOUR_SECONDS_PER_HOP", "1.5")
        monkeypatch.setenv("CAMPUS_TOUR_LOG_LEVEL", "debug")

        settings = load_settings(str(clean_env))

        assert settings.data_path == Path("/srv/tour.json")
        assert settings.entry_location_id == "a-f1-north-1"
        assert settings.asset_root == Path("/srv/images")
        assert settings.seconds_per_hop == 1.5
        assert settings.log_level == logging.DEBUG

    def test_dotenv_file(self, clean_env):
        """Values are read from a .env file."""
        clean_env.write_text("CAMPUS_TOUR_ENTRY=library-f1-desk\n", encoding="utf-8")
        assert load_settings(str(clean_env)).entry_location_id == "library-f1-desk"

    def test_environment_beats_dotenv(self, clean_env, monkeypatch):
        """Already-set variables are not overridden by the .env file."""
        clean_env.write_text("CAMPUS_TOUR_ENTRY=from-file\n", encoding="utf-8")
        monkeypatch.setenv("CAMPUS_TOUR_ENTRY", "from-env")
        assert load_settings(str(clean_env)).entry_location_id == "from-env"

    @pytest.mark.parametrize("value", ["fast", "0", "-2"])
    def test_invalid_seconds(self, clean_env, monkeypatch, value):
        """Non-numeric or non-positive pace is rejected."""
        monkeypatch.setenv("CAMPUS_TOUR_SECONDS_PER_HOP", value)
        with pytest.raises(ValueError, match="SECONDS_PER_HOP"):
            load_settings(str(clean_env))

    def test_invalid_log_level(self, clean_env, monkeypatch):
        """Unknown level names are rejected."""
        monkeypatch.setenv("CAMPUS_TOUR_LOG_LEVEL", "chatty")
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            load_settings(str(clean_env))


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        """Put root and package handlers back after each test."""
        root = logging.getLogger()
        saved_root = list(root.handlers)
        saved_level = root.level
        yield
        for name in FILE_LOGGERS:
            target = logging.getLogger(name)
            for handler in list(target.handlers):
                target.removeHandler(handler)
                handler.close()
        root.handlers[:] = saved_root
        root.setLevel(saved_level)

    def test_creates_rotating_files(self, tmp_path):
        """Navigation and graph loggers get rotating file handlers."""
        setup_logging(log_dir=tmp_path)

        for name, file_name in FILE_LOGGERS.items():
            handlers = logging.getLogger(name).handlers
            assert any(isinstance(h, RotatingFileHandler) for h in handlers)
            assert (tmp_path / file_name).exists()

    def test_repeat_calls_do_not_duplicate(self, tmp_path):
        """Calling setup twice keeps one file handler per logger."""
        setup_logging(log_dir=tmp_path)
        setup_logging(log_dir=tmp_path)

        handlers = logging.getLogger("campus_tour.navigation").handlers
        assert sum(isinstance(h, RotatingFileHandler) for h in handlers) == 1

    def test_subsystem_messages_reach_their_file(self, tmp_path):
        """Navigation records land in navigation.log, not graph.log."""
        setup_logging(log_dir=tmp_path)
        logging.getLogger("campus_tour.navigation.controller").debug("hop a -> b")
        for handler in logging.getLogger("campus_tour.navigation").handlers:
            handler.flush()

        assert "hop a -> b" in (tmp_path / "navigation.log").read_text(encoding="utf-8")
        assert "hop a -> b" not in (tmp_path / "graph.log").read_text(encoding="utf-8")

    def test_console_level(self, tmp_path):
        """The console handler uses the requested level."""
        setup_logging(console_level=logging.WARNING, log_dir=tmp_path)
        assert logging.getLogger().handlers[0].level == logging.WARNING
