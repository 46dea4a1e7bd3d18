"""Machine entity returned by IaaS providers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict

from iaas_provisioner.domain.machine.exceptions import MachineValidationError


@dataclass
class Machine:
    """A provisioned compute instance.

    Created only by a successful ``create_machine`` call; the provisioning
    layer never stores it. ``creation_params`` keeps the parameters the
    machine was created with, for audit purposes.
    """

    id: str
    name: str
    iaas: str = ""
    address: str = ""
    status: str = ""
    protocol: str = "https"
    port: int = 0
    custom_data: Dict[str, Any] = field(default_factory=dict)
    ca_cert: bytes = b""
    client_cert: bytes = b""
    client_key: bytes = b""
    creation_params: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise MachineValidationError("machine id cannot be empty")
        if not self.name:
            raise MachineValidationError("machine name cannot be empty")

    def format_node_address(self) -> str:
        """Address of the docker engine running on this machine."""
        address = f"{self.protocol}://{self.address}"
        if self.port:
            address = f"{address}:{self.port}"
        return address

    def to_dict(self) -> Dict[str, Any]:
        """Convert machine to a dictionary, leaving out TLS material."""
        data = asdict(self)
        for key in ("ca_cert", "client_cert", "client_key"):
            data.pop(key)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Machine:
        """Rebuild a machine from ``to_dict`` output; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
