"""IaaS provider implementations."""
