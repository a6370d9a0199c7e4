from pathlib import Path

from ipwatch.config import Config, load_config, validate_config


def test_defaults(monkeypatch):
    for name in ("IPWATCH_LOG_DIR", "IPWATCH_MAX_ENTRIES", "WEBHOOK_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.max_entries == 100
    assert config.log_filename == "ip_history.json"
    assert config.webhook_url is None
    assert config.interface_priorities["WLAN"] == 1
    assert validate_config(config)


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("IPWATCH_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("IPWATCH_MAX_ENTRIES", "25")
    monkeypatch.setenv("IPWATCH_ETHERNET_NAME", "eth0")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.history_path == tmp_path / "ip_history.json"
    assert config.max_entries == 25
    assert config.interface_priorities["eth0"] == 2
    assert config.log_level == "DEBUG"


def test_validate_rejects_bad_values(capsys):
    config = Config(log_dir=Path("/tmp"), max_entries=0, watch_interval_minutes=0, log_level="LOUD")

    assert not validate_config(config)
    err = capsys.readouterr().err
    assert "IPWATCH_MAX_ENTRIES" in err
    assert "WATCH_INTERVAL_MINUTES" in err
    assert "LOG_LEVEL" in err
