"""Tests for the layered config store."""
import json

import pytest

from ecogrow.config_store import ConfigStore
from ecogrow.settings import Settings


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("app_name: EcoGrow From File\naccess_token_expire_minutes: 30\n")
    return path


class TestConfigStore:
    def test_file_is_master_over_env(self, monkeypatch, config_file):
        monkeypatch.setenv("APP_NAME", "EcoGrow From Env")
        monkeypatch.setenv("DEBUG", "true")
        store = ConfigStore(Settings, str(config_file))
        store.load_initial()

        s = store.get_settings()
        assert s.app_name == "EcoGrow From File"
        assert s.debug is True
        assert s.access_token_expire_minutes == 30

    def test_push_overrides_win(self, config_file):
        store = ConfigStore(Settings, str(config_file))

        assert store.update({"app_name": "Pushed", "scan_seed": 7}) is True
        assert store.get_settings().app_name == "Pushed"
        assert store.get_settings().scan_seed == 7

    def test_invalid_push_keeps_previous(self, config_file):
        store = ConfigStore(Settings, str(config_file))

        assert store.update({"access_token_expire_minutes": "not-a-number"}) is False
        assert store.get_settings().access_token_expire_minutes == 30

    def test_reload_and_clear(self, config_file):
        store = ConfigStore(Settings, str(config_file))
        store.update({"log_level": "DEBUG"})
        config_file.write_text("app_name: Reloaded\n")

        assert store.reload_from_file() is True
        assert store.get_settings().app_name == "Reloaded"
        assert store.get_settings().log_level == "DEBUG"

        store.clear_overrides()
        assert store.get_settings().log_level == "INFO"

    def test_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"api_v1_prefix": "/api"}))
        store = ConfigStore(Settings, str(path))
        assert store.get_settings().api_v1_prefix == "/api"

    def test_missing_file_uses_defaults(self, tmp_path):
        store = ConfigStore(Settings, str(tmp_path / "absent.yaml"))
        assert store.get_settings().jwt_audience == "authenticated"

    def test_settings_are_normalized(self, config_file):
        store = ConfigStore(Settings, str(config_file))

        assert store.update({"log_level": "debug", "api_v1_prefix": "api/"}) is True
        assert store.get_settings().log_level == "DEBUG"
        assert store.get_settings().api_v1_prefix == "/api"

    def test_unknown_log_level_is_rejected(self, config_file):
        store = ConfigStore(Settings, str(config_file))

        assert store.update({"log_level": "chatty"}) is False
        assert store.update({"access_token_expire_minutes": 0}) is False
        assert store.get_settings().log_level == "INFO"

    def test_snapshot_masks_secrets(self, config_file):
        store = ConfigStore(Settings, str(config_file))
        store.update({"jwt_secret": "super-secret"})

        snapshot = store.snapshot()

        assert snapshot["jwt_secret"] == "***"
        assert snapshot["database_url"] == "***"
        assert snapshot["app_name"] == "EcoGrow From File"
        assert store.overrides == {"jwt_secret": "super-secret"}
