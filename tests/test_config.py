import importlib

import pytest

import shidu_web_tracker.config as config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(reload_config, monkeypatch):
    for name in ("SHIDU_BACKEND_PORT", "SHIDU_START_PORT", "SHIDU_END_PORT", "SHIDU_POLL_INTERVAL_MS"):
        monkeypatch.delenv(name, raising=False)
    cfg = reload_config()

    assert cfg.DEFAULT_BACKEND_PORT == 1893
    assert (cfg.DISCOVERY_START_PORT, cfg.DISCOVERY_END_PORT) == (1893, 1949)
    assert (cfg.SERVICE_NAME, cfg.SERVICE_STATUS) == ("ShiduWatcher", "running")
    assert cfg.POLL_INTERVAL_MS == 1000
    assert cfg.STATUS_PATH == "/control/status"
    assert cfg.USAGE_REPORT_PATH == "/usagereport/webpage-usage-report"


def test_env_overrides(reload_config, monkeypatch):
    monkeypatch.setenv("SHIDU_START_PORT", "2000")
    monkeypatch.setenv("SHIDU_PROBE_TIMEOUT", "0.5")
    cfg = reload_config()

    assert cfg.DISCOVERY_START_PORT == 2000
    assert cfg.PROBE_TIMEOUT_SECONDS == 0.5


def test_invalid_env_value_falls_back(reload_config, monkeypatch):
    monkeypatch.setenv("SHIDU_POLL_INTERVAL_MS", "fast")
    cfg = reload_config()

    assert cfg.POLL_INTERVAL_MS == 1000
