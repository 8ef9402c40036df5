"""Tests for the configuration manager."""
import json

import pytest

from behavioral_patterns.config import AppConfig, ConfigurationManager, get_config_manager
from behavioral_patterns.config.schemas import ServerConfig
from behavioral_patterns.domain.core.exceptions import ConfigurationError


@pytest.fixture
def yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "environment: testing\n"
        "logging:\n"
        "  level: debug\n"
        "catalog:\n"
        "  readme_title: From File\n"
        "server:\n"
        "  port: 9000\n"
    )
    return path


class TestDefaults:
    def test_defaults_without_file(self):
        manager = ConfigurationManager()

        config = manager.app_config

        assert isinstance(config, AppConfig)
        assert manager.config_file is None
        assert config.environment == "development"
        assert config.logging.level == "INFO"
        assert config.catalog.source_path is None
        assert config.catalog.include_snippets is True
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8000

    def test_config_is_cached(self):
        manager = ConfigurationManager()
        assert manager.app_config is manager.app_config


class TestFileSources:
    def test_yaml_file(self, yaml_config):
        config = ConfigurationManager(str(yaml_config)).app_config

        assert config.environment == "testing"
        assert config.logging.level == "DEBUG"
        assert config.catalog.readme_title == "From File"
        assert config.server.port == 9000

    def test_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"server": {"host": "0.0.0.0"}, "debug": True}))

        config = ConfigurationManager(str(path)).app_config

        assert config.server.host == "0.0.0.0"
        assert config.debug is True

    def test_file_from_environment(self, yaml_config, monkeypatch):
        monkeypatch.setenv("BP_CONFIG_FILE", str(yaml_config))

        manager = ConfigurationManager()

        assert manager.config_file == str(yaml_config)
        assert manager.app_config.environment == "testing"

    def test_argument_wins_over_environment(self, yaml_config, tmp_path, monkeypatch):
        other = tmp_path / "other.yaml"
        other.write_text("environment: staging\n")
        monkeypatch.setenv("BP_CONFIG_FILE", str(other))

        assert ConfigurationManager(str(yaml_config)).app_config.environment == "testing"

    def test_empty_file_means_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ConfigurationManager(str(path)).app_config.environment == "development"

    def test_null_section_accepts_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n")
        monkeypatch.setenv("BP_LOG_LEVEL", "warning")

        config = ConfigurationManager(str(path)).app_config

        assert config.logging.level == "WARNING"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigurationManager(str(tmp_path / "missing.yaml")).app_config

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Failed to parse"):
            ConfigurationManager(str(path)).app_config

    def test_file_must_hold_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigurationManager(str(path)).app_config

    @pytest.mark.parametrize("content", [
        "server:\n  port: 0\n",
        "environment: moon\n",
        "logging:\n  destination: syslog\n",
        "server:\n  unknown_option: 1\n",
    ])
    def test_invalid_values(self, tmp_path, content):
        path = tmp_path / "config.yaml"
        path.write_text(content)

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigurationManager(str(path)).app_config


class TestEnvironment:
    def test_overrides_beat_file(self, yaml_config, monkeypatch):
        monkeypatch.setenv("BP_SERVER_PORT", "9100")
        monkeypatch.setenv("BP_LOG_FORMAT", "json")
        monkeypatch.setenv("BP_ENVIRONMENT", "production")
        monkeypatch.setenv("BP_CATALOG_PATH", "/srv/catalog.yaml")

        config = ConfigurationManager(str(yaml_config)).app_config

        assert config.server.port == 9100
        assert config.logging.format == "json"
        assert config.environment == "production"
        assert config.catalog.source_path == "/srv/catalog.yaml"

    def test_empty_override_is_ignored(self, monkeypatch):
        monkeypatch.setenv("BP_SERVER_HOST", "")
        assert ConfigurationManager().app_config.server.host == "127.0.0.1"

    def test_values_are_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CATALOG_HOME", "/data")
        path = tmp_path / "config.yaml"
        path.write_text("catalog:\n  source_path: ${CATALOG_HOME}/catalog.yaml\n")

        config = ConfigurationManager(str(path)).app_config

        assert config.catalog.source_path == "/data/catalog.yaml"

    def test_apply_overrides_returns_copy(self, monkeypatch):
        monkeypatch.setenv("BP_SERVER_PORT", "9100")
        original = {"server": {"port": 8000}}

        result = ConfigurationManager.apply_environment_overrides(original)

        assert result == {"server": {"port": "9100"}}
        assert original == {"server": {"port": 8000}}

    def test_non_mapping_section_rejected(self, monkeypatch):
        monkeypatch.setenv("BP_SERVER_PORT", "9100")
        with pytest.raises(ConfigurationError, match="'server' must be a mapping"):
            ConfigurationManager.apply_environment_overrides({"server": "localhost"})


class TestAccessors:
    def test_get_dotted_key(self, yaml_config):
        manager = ConfigurationManager(str(yaml_config))

        assert manager.get("server.port") == 9000
        assert manager.get("server.cors.enabled") is True
        assert manager.get("server.missing", "fallback") == "fallback"
        assert manager.get("nothing.here") is None

    def test_raw_config(self, yaml_config, monkeypatch):
        monkeypatch.setenv("BP_SERVER_HOST", "0.0.0.0")
        raw = ConfigurationManager(str(yaml_config)).get_raw_config()

        assert raw["server"] == {"port": 9000, "host": "0.0.0.0"}
        assert "cors" not in raw["server"]

    def test_reload_picks_up_changes(self, yaml_config, monkeypatch):
        manager = ConfigurationManager(str(yaml_config))
        assert manager.app_config.server.port == 9000

        monkeypatch.setenv("BP_SERVER_PORT", "9200")
        assert manager.app_config.server.port == 9000

        manager.reload()
        assert manager.app_config.server.port == 9200

    def test_shared_manager(self, yaml_config):
        first = get_config_manager(str(yaml_config))

        assert get_config_manager() is first
        assert get_config_manager(str(yaml_config)) is first


class TestServerConfig:
    def test_log_level_normalised(self):
        assert ServerConfig(log_level="DEBUG").log_level == "debug"

    def test_cors_defaults(self):
        cors = ServerConfig().cors
        assert cors.enabled is True
        assert cors.origins == ["*"]
