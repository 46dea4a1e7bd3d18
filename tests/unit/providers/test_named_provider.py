"""Tests for configuration scoping of named providers."""

import pytest

from iaas_provisioner.domain.base.exceptions import ConfigKeyNotFoundError, ConfigurationError
from iaas_provisioner.providers.base import NamedProvider


class StubProvider(NamedProvider):
    base_name = "stub"

    def create_machine(self, params):
        raise NotImplementedError

    def delete_machine(self, machine):
        raise NotImplementedError

    def describe(self):
        return "stub"


@pytest.mark.unit
class TestNamedProvider:
    """Test lookups across custom and base configuration."""

    @pytest.fixture(autouse=True)
    def config(self, make_config):
        self.config = make_config(
            iaas={
                "stub": {"region": "base-region", "zone": "base-zone"},
                "custom": {"my-cloud": {"provider": "stub", "region": "custom-region"}},
            }
        )

    def test_custom_setting_wins(self):
        provider = StubProvider("my-cloud", self.config)

        assert provider.name == "my-cloud"
        assert provider.get_config_string("region") == "custom-region"

    def test_falls_back_to_base_setting(self):
        assert StubProvider("my-cloud", self.config).get_config_string("zone") == "base-zone"

    def test_base_instance_reads_base_settings(self):
        assert StubProvider("stub", self.config).get_config_string("region") == "base-region"

    def test_missing_setting(self):
        with pytest.raises(ConfigKeyNotFoundError, match="'flavor'"):
            StubProvider("my-cloud", self.config).get_config("flavor")

    def test_resolve_prefers_params(self):
        provider = StubProvider("my-cloud", self.config)

        assert provider.resolve("region", {"region": "param-region"}) == ("param-region", True)
        assert provider.resolve("region", {}) == ("custom-region", True)

    def test_resolve_optional_absent(self):
        assert StubProvider("my-cloud", self.config).resolve("flavor", {}) == ("", False)

    def test_resolve_mandatory_absent(self):
        with pytest.raises(ConfigurationError, match="flavor is mandatory") as exc_info:
            StubProvider("my-cloud", self.config).resolve("flavor", {}, mandatory=True)
        assert exc_info.value.key == "flavor"
