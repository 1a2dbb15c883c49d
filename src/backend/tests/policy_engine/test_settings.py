from pathlib import Path

import pytest

from policy_engine.settings import get_engine_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("POLICY_CONFIG_PATH", "POLICY_UNCONFIGURED_RULES", "POLICY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_engine_settings()
    assert settings.config_path is None
    assert settings.unconfigured_rules == "skip"
    assert settings.log_level == "WARNING"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("POLICY_CONFIG_PATH", "/etc/policies.yaml")
    monkeypatch.setenv("POLICY_UNCONFIGURED_RULES", " Error ")
    monkeypatch.setenv("POLICY_LOG_LEVEL", "debug")
    settings = get_engine_settings()
    assert settings.config_path == Path("/etc/policies.yaml")
    assert settings.unconfigured_rules == "error"
    assert settings.log_level == "DEBUG"


def test_rejects_unknown_unconfigured_mode(monkeypatch):
    monkeypatch.setenv("POLICY_UNCONFIGURED_RULES", "ignore")
    with pytest.raises(ValueError, match="POLICY_UNCONFIGURED_RULES"):
        get_engine_settings()


def test_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setenv("POLICY_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="POLICY_LOG_LEVEL"):
        get_engine_settings()
