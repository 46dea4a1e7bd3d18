"""Tests for the machine entity."""

import pytest

from iaas_provisioner.domain.machine import Machine, MachineValidationError


@pytest.mark.unit
class TestMachine:
    """Test machine entity behaviour."""

    def test_requires_id_and_name(self):
        with pytest.raises(MachineValidationError, match="id"):
            Machine(id="", name="m1")
        with pytest.raises(MachineValidationError, match="name"):
            Machine(id="m1", name="")

    def test_defaults(self):
        machine = Machine(id="m1", name="m1")

        assert machine.protocol == "https"
        assert machine.port == 0
        assert machine.custom_data == {}
        assert machine.creation_params == {}

    def test_format_node_address(self):
        assert Machine(id="m1", name="m1", address="10.0.0.1", port=2376).format_node_address() == (
            "https://10.0.0.1:2376"
        )
        assert Machine(id="m1", name="m1", address="10.0.0.1", protocol="http").format_node_address() == (
            "http://10.0.0.1"
        )

    def test_to_dict_leaves_out_tls_material(self, sample_machine):
        sample_machine.client_key = b"secret"

        data = sample_machine.to_dict()

        assert "client_key" not in data
        assert "ca_cert" not in data
        assert data["address"] == "192.168.99.100"
        assert data["custom_data"]["DriverName"] == "virtualbox"

    def test_from_dict_ignores_unknown_keys(self, sample_machine):
        data = {**sample_machine.to_dict(), "unknown": "value"}

        machine = Machine.from_dict(data)

        assert machine == sample_machine
