import pytest

from iaas_provisioner.config.defaults import CONFIG_FILE_ENV_VAR, ConfigurationManager
from iaas_provisioner.domain.machine.machine_aggregate import Machine


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch):
    """Keep a developer's config file out of the tests."""
    monkeypatch.delenv(CONFIG_FILE_ENV_VAR, raising=False)


@pytest.fixture
def make_config():
    """Build a configuration manager from an ``iaas`` section."""
    def factory(iaas=None, **sections):
        config = dict(sections)
        if iaas is not None:
            config["iaas"] = iaas
        return ConfigurationManager(config=config)
    return factory


@pytest.fixture
def sample_machine():
    return Machine(
        id="web-0123456789abcdef0123456789abcdef",
        name="web-0123456789abcdef0123456789abcdef",
        address="192.168.99.100",
        port=2376,
        custom_data={"Name": "web-0123456789abcdef0123456789abcdef", "DriverName": "virtualbox"},
    )
