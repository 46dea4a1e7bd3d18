"""Tests for driver option merging."""

from unittest.mock import patch

import pytest

from iaas_provisioner.config.node import ConfigNode
from iaas_provisioner.domain.base.exceptions import ConfigTypeError
from iaas_provisioner.providers.dockermachine.driver_options import (
    DRIVER_DEFAULTS,
    build_driver_options,
    default_params_for_driver,
)

OPTIONS_KEY = "iaas:dockermachine:driver:options"


@pytest.mark.unit
class TestBuildDriverOptions:
    """Test the three option layers and their precedence."""

    def test_params_override_config_override_defaults(self):
        with patch.dict(DRIVER_DEFAULTS, {"test": {"a": "1"}}):
            options = build_driver_options(
                "test", {"b": "4"}, ConfigNode(OPTIONS_KEY, {"a": "2", "b": "3"})
            )

        assert dict(options) == {"a": "2", "b": "4"}

    def test_params_override_defaults_with_empty_config(self):
        with patch.dict(DRIVER_DEFAULTS, {"test": {"cpu": "1"}}):
            options = build_driver_options(
                "test", {"cpu": "2", "mem": "512"}, ConfigNode(OPTIONS_KEY, {})
            )

        assert dict(options) == {"cpu": "2", "mem": "512"}

    def test_defaults_only(self):
        options = build_driver_options("virtualbox", {})

        assert dict(options) == DRIVER_DEFAULTS["virtualbox"]

    def test_unknown_driver_has_no_defaults(self):
        assert dict(build_driver_options("unknown", {"x": "y"})) == {"x": "y"}

    def test_null_config_block_is_ignored(self):
        options = build_driver_options("generic", {}, ConfigNode(OPTIONS_KEY, None))

        assert dict(options) == DRIVER_DEFAULTS["generic"]

    def test_config_values_keep_their_type(self):
        options = build_driver_options(
            "virtualbox", {}, ConfigNode(OPTIONS_KEY, {"virtualbox-memory": 4096, "virtualbox-no-share": True})
        )

        assert options["virtualbox-memory"] == 4096
        assert options["virtualbox-no-share"] is True

    def test_non_string_keys_are_skipped(self):
        options = build_driver_options("unknown", {}, ConfigNode(OPTIONS_KEY, {1: "x", "k": "v"}))

        assert dict(options) == {"k": "v"}

    def test_nested_config_value(self):
        with pytest.raises(ConfigTypeError, match="virtualbox-memory"):
            build_driver_options(
                "virtualbox", {}, ConfigNode(OPTIONS_KEY, {"virtualbox-memory": {"size": 1}})
            )

    def test_config_block_must_be_mapping(self):
        with pytest.raises(ConfigTypeError):
            build_driver_options("virtualbox", {}, ConfigNode(OPTIONS_KEY, ["a"]))

    def test_result_is_read_only(self):
        options = build_driver_options("virtualbox", {})

        with pytest.raises(TypeError):
            options["virtualbox-memory"] = 1

    def test_defaults_are_copied(self):
        params = default_params_for_driver("virtualbox")
        params["virtualbox-memory"] = 1

        assert DRIVER_DEFAULTS["virtualbox"]["virtualbox-memory"] == 1024
