"""Tests for the command line interface."""

import json
from unittest.mock import Mock, patch

import pytest
import yaml

from iaas_provisioner.cli.formatters import format_output
from iaas_provisioner.cli.main import main, parse_args
from iaas_provisioner.domain.machine import Machine, MachineCreationError
from iaas_provisioner.domain.machine.machine_service import MachineProvisioningService


@pytest.mark.unit
class TestParseArgs:
    """Test argument parsing."""

    def test_create_params(self):
        args = parse_args(["machines", "create", "--iaas", "my-cloud", "driver=virtualbox", "label=a=b"])

        assert args.iaas == "my-cloud"
        assert args.params == {"driver": "virtualbox", "label": "a=b"}

    def test_invalid_param(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["machines", "create", "driver"])
        assert exc_info.value.code == 2

    def test_delete(self):
        args = parse_args(["--format", "yaml", "machines", "delete", "dockermachine", "m1"])

        assert (args.iaas, args.machine_id, args.file, args.format) == ("dockermachine", "m1", None, "yaml")


@pytest.mark.unit
class TestMain:
    """Test command execution."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = Mock(spec=MachineProvisioningService)
        app = Mock()
        app.machine_service = self.service
        self.application = Mock()
        self.application.return_value.initialize.return_value = app
        self.patcher = patch("iaas_provisioner.cli.main.Application", self.application)
        self.patcher.start()

    def teardown_method(self):
        self.patcher.stop()

    def test_providers_list(self, capsys):
        self.service.list_providers.return_value = [{"name": "dockermachine", "type": "dockermachine"}]

        main(["providers", "list"])

        assert json.loads(capsys.readouterr().out) == {
            "providers": [{"name": "dockermachine", "type": "dockermachine"}]
        }

    def test_log_level_override(self):
        self.service.list_providers.return_value = []

        main(["--config", "conf.yml", "--log-level", "DEBUG", "providers", "list"])

        self.application.assert_called_once_with("conf.yml", {"logging": {"level": "DEBUG"}})

    def test_providers_describe(self, capsys):
        self.service.describe.return_value = "DockerMachine IaaS required params"

        main(["--format", "table", "providers", "describe", "dockermachine"])

        self.service.describe.assert_called_once_with("dockermachine")
        assert "DockerMachine IaaS required params" in capsys.readouterr().out

    def test_machines_create(self, capsys):
        self.service.create_machine.return_value = Machine(
            id="web-1", name="web-1", iaas="my-cloud", address="10.0.0.5", port=2376
        )

        main(["machines", "create", "--iaas", "my-cloud", "driver=virtualbox", "pool=web"])

        self.service.create_machine.assert_called_once_with(
            {"driver": "virtualbox", "pool": "web", "iaas": "my-cloud"}
        )
        output = json.loads(capsys.readouterr().out)
        assert output["machines"][0]["address"] == "10.0.0.5"
        assert "client_key" not in output["machines"][0]

    def test_machines_create_failure(self, capsys):
        self.service.create_machine.side_effect = MachineCreationError("quota exceeded")

        with pytest.raises(SystemExit) as exc_info:
            main(["machines", "create", "driver=virtualbox"])

        assert exc_info.value.code == 1
        assert "Error: quota exceeded" in capsys.readouterr().out

    def test_machines_delete_from_file(self, tmp_path, sample_machine):
        machine_file = tmp_path / "machine.json"
        machine_file.write_text(json.dumps({"machines": [sample_machine.to_dict()]}))

        main(["machines", "delete", "my-cloud", sample_machine.id, "--file", str(machine_file)])

        deleted = self.service.delete_machine.call_args.args[0]
        assert deleted.id == sample_machine.id
        assert deleted.iaas == "my-cloud"
        assert deleted.custom_data == sample_machine.custom_data

    def test_machines_delete_by_id(self):
        main(["machines", "delete", "dockermachine", "m1"])

        self.service.delete_machine.assert_called_once_with(Machine(id="m1", name="m1", iaas="dockermachine"))

    def test_output_file(self, tmp_path, capsys):
        self.service.list_providers.return_value = []
        output = tmp_path / "out.yml"

        main(["--format", "yaml", "--output", str(output), "providers", "list"])

        assert yaml.safe_load(output.read_text()) == {"providers": []}
        assert "Output written to" in capsys.readouterr().out

    def test_missing_action(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["machines"])

        assert exc_info.value.code == 1
        assert "No action specified for machines" in capsys.readouterr().out


@pytest.mark.unit
class TestFormatOutput:
    """Test output formats."""

    def test_yaml(self):
        assert yaml.safe_load(format_output({"providers": [{"name": "a"}]}, "yaml")) == {
            "providers": [{"name": "a"}]
        }

    def test_machines_table(self):
        table = format_output({"machines": [{"id": "web-1", "iaas": "my-cloud", "address": "10.0.0.5"}]}, "table")

        assert "web-1" in table
        assert "10.0.0.5" in table

    def test_empty_providers_table(self):
        assert format_output({"providers": []}, "table") == "No providers found."
