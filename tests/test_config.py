import logging

import pytest

from directory.config import DATA_DIR, DEFAULT_MAX_RESULTS, ROOT, Settings
from directory.log_utils import setup_logging

ENV_VARS = ("DOCTORS_DATA_PATH", "CLUBS_DATA_PATH", "NAME_SYSTEM_PATH", "MAX_RESULTS", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.doctors_path == DATA_DIR / "doctors.json"
    assert settings.clubs_path == DATA_DIR / "htuClubs.json"
    assert settings.name_system_path == DATA_DIR / "htuNameSystem.json"
    assert settings.max_results == DEFAULT_MAX_RESULTS
    assert settings.log_level == "INFO"


def test_env_overrides(clean_env, tmp_path):
    clean_env.setenv("DOCTORS_DATA_PATH", str(tmp_path / "staff.json"))
    clean_env.setenv("CLUBS_DATA_PATH", "fixtures/clubs.json")
    clean_env.setenv("MAX_RESULTS", "5")
    clean_env.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.doctors_path == tmp_path / "staff.json"
    assert settings.clubs_path == ROOT / "fixtures" / "clubs.json"
    assert settings.max_results == 5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["0", "-3", "ten", " "])
def test_invalid_max_results_falls_back(clean_env, raw):
    clean_env.setenv("MAX_RESULTS", raw)
    assert Settings.from_env().max_results == DEFAULT_MAX_RESULTS


def test_setup_logging_is_idempotent():
    logger = setup_logging("debug", logger_name="directory.tests")
    setup_logging("debug", logger_name="directory.tests")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
