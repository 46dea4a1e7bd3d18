"""IaaS Provisioner - Root Package.

This package provides the machine-provisioning layer of a PaaS control plane:
pluggable IaaS providers that create and destroy the compute instances later
used as container hosts.

Key Components:
    - domain: Machine model, exceptions and provider/driver ports
    - config: Configuration loading and typed configuration nodes
    - infrastructure: Logging, error aggregation and the provider registry
    - providers: IaaS provider implementations (docker-machine)
    - cli: Command line interface
"""

from ._version import __version__

__author__ = "IaaS Provisioner Developers"
__package_name__ = "iaas-provisioner"
