"""Tests for the configuration manager."""

import json
import os
from unittest.mock import patch

import pytest

from iaas_provisioner.config.defaults import CONFIG_FILE_ENV_VAR, ConfigurationManager
from iaas_provisioner.config.node import NodeKind
from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError, ConfigurationError


@pytest.mark.unit
class TestConfigurationManager:
    """Test loading, merging and key lookups."""

    def test_defaults(self):
        manager = ConfigurationManager()

        assert manager.get("iaas").kind == NodeKind.MAPPING
        assert manager.get_app_config().docker_machine.binary == "docker-machine"

    def test_load_yaml_file(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            "iaas:\n"
            "  dockermachine:\n"
            "    driver:\n"
            "      name: virtualbox\n"
            "      options:\n"
            "        virtualbox-memory: 2048\n"
        )

        manager = ConfigurationManager(str(config_file))

        assert manager.get_string("iaas:dockermachine:driver:name") == "virtualbox"
        assert manager.get("iaas:dockermachine:driver:options:virtualbox-memory").as_int() == 2048

    def test_load_json_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"iaas": {"default": "dockermachine"}}))

        manager = ConfigurationManager(str(config_file))

        assert manager.get_string("iaas:default") == "dockermachine"

    def test_config_file_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yml"
        config_file.write_text("iaas:\n  default: from-env\n")
        monkeypatch.setenv(CONFIG_FILE_ENV_VAR, str(config_file))

        assert ConfigurationManager().get_string("iaas:default") == "from-env"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Failed to load configuration"):
            ConfigurationManager(str(tmp_path / "missing.yml"))

    def test_top_level_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigurationManager(str(config_file))

    def test_dict_overrides_file(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("iaas:\n  default: from-file\n  dockermachine: {}\n")

        manager = ConfigurationManager(str(config_file), {"iaas": {"default": "override"}})

        assert manager.get_string("iaas:default") == "override"
        assert manager.has("iaas:dockermachine")

    def test_missing_key(self):
        manager = ConfigurationManager()

        with pytest.raises(ConfigKeyNotFoundError, match="iaas:dockermachine:driver:name"):
            manager.get("iaas:dockermachine:driver:name")
        assert not manager.has("iaas:dockermachine")

    def test_lookup_through_scalar_fails(self):
        manager = ConfigurationManager(config={"iaas": {"default": "dockermachine"}})

        with pytest.raises(ConfigKeyNotFoundError):
            manager.get("iaas:default:name")

    def test_interpolation(self):
        manager = ConfigurationManager(
            config={"iaas": {"dockermachine": {"ca-path": "${CERTS_DIR}/ca", "user-data": "${UD:none}"}}}
        )

        with patch.dict(os.environ, {"CERTS_DIR": "/etc/certs"}):
            assert manager.get_string("iaas:dockermachine:ca-path") == "/etc/certs/ca"
        assert manager.get_string("iaas:dockermachine:user-data") == "none"

    def test_unset_variable_without_default_is_kept(self):
        manager = ConfigurationManager(config={"iaas": {"default": "${SURELY_UNSET_VARIABLE}"}})

        with patch.dict(os.environ, {}, clear=True):
            assert manager.get_string("iaas:default") == "${SURELY_UNSET_VARIABLE}"

    def test_invalid_logging_section(self):
        manager = ConfigurationManager(config={"logging": {"level": "chatty"}})

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            manager.get_app_config()

    def test_log_level_is_normalized(self):
        manager = ConfigurationManager(config={"logging": {"level": "debug"}})

        assert manager.get_app_config().logging.level == "DEBUG"
