"""Tests for application bootstrap."""

from unittest.mock import patch

import pytest

from iaas_provisioner.bootstrap import Application
from iaas_provisioner.domain.base.exceptions import ConfigurationError
from iaas_provisioner.infrastructure.registry import ProviderRegistry
from iaas_provisioner.providers.dockermachine import PROVIDER_TYPE


@pytest.mark.unit
class TestApplication:
    """Test application initialization."""

    def test_initialize_registers_providers(self):
        registry = ProviderRegistry()
        app = Application(config={"logging": {"level": "warning"}}, registry=registry)

        with patch("iaas_provisioner.bootstrap.setup_logging") as setup_logging:
            assert app.initialize() is app

        assert registry.get_registered_providers() == [PROVIDER_TYPE]
        assert app.machine_service is not None
        assert setup_logging.call_args.args[0].level == "WARNING"

    def test_initialize_is_idempotent(self):
        registry = ProviderRegistry()
        app = Application(registry=registry)

        with patch("iaas_provisioner.bootstrap.setup_logging") as setup_logging:
            app.initialize()
            app.initialize()

        setup_logging.assert_called_once()

    def test_shared_registry_registration_is_skipped(self):
        registry = ProviderRegistry()

        with patch("iaas_provisioner.bootstrap.setup_logging"):
            Application(registry=registry).initialize()
            Application(registry=registry).initialize()

        assert registry.get_registered_providers() == [PROVIDER_TYPE]

    def test_invalid_configuration(self):
        app = Application(config={"logging": {"destination": "syslog"}}, registry=ProviderRegistry())

        with pytest.raises(ConfigurationError):
            app.initialize()
