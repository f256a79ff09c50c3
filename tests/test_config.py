from pathlib import Path

import toml

from taskrecap.config.loader import ConfigLoader


def test_env_placeholders_are_substituted(tmp_path: Path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        '[todoist]\napi_token = "${MY_TOKEN}"\n'
        '[analytics]\ntimezone = "${MY_TZ:Europe/Berlin}"\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("MY_TOKEN", "abc")
    monkeypatch.delenv("MY_TZ", raising=False)

    loader = ConfigLoader(str(config_path))
    loader.load()

    assert loader.get("todoist.api_token") == "abc"
    assert loader.get("analytics.timezone") == "Europe/Berlin"


def test_get_returns_default_for_missing_keys(tmp_path: Path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("[server]\nport = 9000\n", encoding="utf-8")

    loader = ConfigLoader(str(config_path))
    loader.load()

    assert loader.get("server.port") == 9000
    assert loader.get("server.host", "127.0.0.1") == "127.0.0.1"
    assert loader.get("server.port.nested", "x") == "x"


def test_set_persists_nested_value(tmp_path: Path):
    config_path = tmp_path / "config.toml"
    config_path.write_text("", encoding="utf-8")

    loader = ConfigLoader(str(config_path))
    loader.load()
    assert loader.set("analytics.default_range_days", 90)

    assert toml.loads(config_path.read_text(encoding="utf-8")) == {
        "analytics": {"default_range_days": 90}
    }


def test_yaml_configuration(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("analytics:\n  project_min_threshold_count: 3\n", encoding="utf-8")

    loader = ConfigLoader(str(config_path))
    loader.load()

    assert loader.get("analytics.project_min_threshold_count") == 3


def test_default_file_is_created(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TODOIST_API_TOKEN", raising=False)
    config_path = tmp_path / "nested" / "config.toml"

    loader = ConfigLoader(str(config_path))
    config = loader.load()

    assert config_path.exists()
    assert config["analytics"]["project_threshold_percent"] == 0.02
    assert config["todoist"]["api_token"] == ""
    assert config["todoist"]["page_size"] == 200


def test_config_path_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TASKRECAP_CONFIG", str(tmp_path / "other.toml"))
    assert ConfigLoader().config_file == str(tmp_path / "other.toml")
