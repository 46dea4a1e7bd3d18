"""Driver options for docker-machine drivers.

Options reach a driver as one flat mapping built from three layers, later
layers overriding earlier ones key by key:

1. the built-in defaults of the driver (``DRIVER_DEFAULTS``),
2. the ``driver:options`` block of the provider configuration,
3. the parameters of the call.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from iaas_provisioner.config.node import ConfigNode, NodeKind
from iaas_provisioner.domain.base.ports.machine_driver_port import OptionValue
from iaas_provisioner.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

DriverOptions = Mapping[str, OptionValue]

DRIVER_DEFAULTS: Dict[str, Dict[str, OptionValue]] = {
    "amazonec2": {
        "amazonec2-ami": "",
        "amazonec2-device-name": "/dev/sda1",
        "amazonec2-instance-type": "t2.micro",
        "amazonec2-monitoring": False,
        "amazonec2-private-address-only": False,
        "amazonec2-region": "us-east-1",
        "amazonec2-request-spot-instance": False,
        "amazonec2-root-size": 16,
        "amazonec2-security-group": "docker-machine",
        "amazonec2-spot-price": "0.50",
        "amazonec2-ssh-user": "ubuntu",
        "amazonec2-use-ebs-optimized-instance": False,
        "amazonec2-use-private-address": False,
        "amazonec2-userdata": "",
        "amazonec2-volume-type": "gp2",
        "amazonec2-zone": "a",
    },
    "azure": {
        "azure-availability-set": "docker-machine",
        "azure-custom-data": "",
        "azure-docker-port": 2376,
        "azure-environment": "AzurePublicCloud",
        "azure-image": "canonical:UbuntuServer:16.04.0-LTS:latest",
        "azure-location": "westus",
        "azure-resource-group": "docker-machine",
        "azure-size": "Standard_A2",
        "azure-ssh-user": "docker-user",
        "azure-storage-type": "Standard_LRS",
        "azure-subnet": "docker-machine",
        "azure-subnet-prefix": "192.168.0.0/16",
        "azure-vnet": "docker-machine-vnet",
    },
    "digitalocean": {
        "digitalocean-backups": False,
        "digitalocean-image": "ubuntu-16-04-x64",
        "digitalocean-ipv6": False,
        "digitalocean-monitoring": False,
        "digitalocean-private-networking": False,
        "digitalocean-region": "nyc3",
        "digitalocean-size": "s-1vcpu-1gb",
        "digitalocean-ssh-port": 22,
        "digitalocean-ssh-user": "root",
        "digitalocean-tags": "",
        "digitalocean-userdata": "",
    },
    "exoscale": {
        "exoscale-availability-zone": "ch-dk-2",
        "exoscale-disk-size": 50,
        "exoscale-image": "Linux Ubuntu 16.04 LTS 64-bit",
        "exoscale-instance-profile": "small",
        "exoscale-security-group": "docker-machine",
        "exoscale-ssh-user": "ubuntu",
        "exoscale-url": "https://api.exoscale.ch/compute",
        "exoscale-userdata": "",
    },
    "generic": {
        "generic-engine-port": 2376,
        "generic-ip-address": "",
        "generic-ssh-key": "",
        "generic-ssh-port": 22,
        "generic-ssh-user": "root",
    },
    "google": {
        "google-address": "",
        "google-disk-size": 10,
        "google-disk-type": "pd-standard",
        "google-machine-image": "ubuntu-os-cloud/global/images/ubuntu-1604-xenial-v20170721",
        "google-machine-type": "n1-standard-1",
        "google-network": "default",
        "google-preemptible": False,
        "google-scopes": "https://www.googleapis.com/auth/devstorage.read_only,"
                         "https://www.googleapis.com/auth/logging.write",
        "google-tags": "",
        "google-use-internal-ip": False,
        "google-username": "docker-user",
        "google-zone": "us-central1-a",
    },
    "openstack": {
        "openstack-active-timeout": 200,
        "openstack-config-drive": False,
        "openstack-endpoint-type": "publicURL",
        "openstack-insecure": False,
        "openstack-ip-version": 4,
        "openstack-ssh-port": 22,
        "openstack-ssh-user": "root",
        "openstack-user-data-file": "",
    },
    "virtualbox": {
        "virtualbox-boot2docker-url": "",
        "virtualbox-cpu-count": 1,
        "virtualbox-disk-size": 20000,
        "virtualbox-host-dns-resolver": False,
        "virtualbox-hostonly-cidr": "192.168.99.1/24",
        "virtualbox-hostonly-nicpromisc": "deny",
        "virtualbox-hostonly-nictype": "82540EM",
        "virtualbox-import-boot2docker-vm": "",
        "virtualbox-memory": 1024,
        "virtualbox-nat-nictype": "82540EM",
        "virtualbox-no-dns-proxy": False,
        "virtualbox-no-share": False,
        "virtualbox-no-vtx-check": False,
        "virtualbox-share-folder": "",
        "virtualbox-ui-type": "headless",
    },
}


def default_params_for_driver(driver_name: str) -> Dict[str, OptionValue]:
    """Return a fresh copy of the defaults of a driver; unknown drivers have none."""
    return dict(DRIVER_DEFAULTS.get(driver_name, {}))


def build_driver_options(
    driver_name: str,
    params: Mapping[str, str],
    custom_options: Optional[ConfigNode] = None,
) -> DriverOptions:
    """
    Merge driver defaults, configured options and call parameters.

    Args:
        driver_name: docker-machine driver name, e.g. ``virtualbox``
        params: Call parameters, applied last
        custom_options: The ``driver:options`` configuration block, if any

    Returns:
        Read-only mapping of the merged options, in insertion order

    Raises:
        ConfigTypeError: If the configuration block is not a mapping or
            holds a non-scalar value
    """
    options = default_params_for_driver(driver_name)
    if custom_options is not None and custom_options.kind != NodeKind.NULL:
        skipped = custom_options.non_string_keys()
        if skipped:
            logger.warning(
                f"Ignoring driver options with non-string keys: {skipped}",
                config_key=custom_options.key,
            )
        for key, node in custom_options.string_items():
            options[key] = node.as_scalar()
    options.update(params)
    return MappingProxyType(options)
