"""
CLI-specific formatting functions for human-readable output.

This module handles presentation formatting for the CLI, including:
- JSON and YAML dumps
- Rich tables for providers and machines
"""

from typing import Any, Dict, List
import json

import yaml
from rich.console import Console
from rich.table import Table


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    else:
        # Default to JSON
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "providers" in data:
        return format_providers_table(data["providers"])
    elif isinstance(data, dict) and "machines" in data:
        return format_machines_table(data["machines"])
    elif isinstance(data, dict) and "description" in data:
        return data["description"]
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def _render(table: Table) -> str:
    console = Console(width=120, legacy_windows=False, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def format_providers_table(providers: List[Dict]) -> str:
    """Format providers as a table using Rich."""
    if not providers:
        return "No providers found."

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    for provider in providers:
        table.add_row(str(provider.get("name", "N/A")), str(provider.get("type", "N/A")))
    return _render(table)


def format_machines_table(machines: List[Dict]) -> str:
    """Format machines as a table using Rich."""
    if not machines:
        return "No machines found."

    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("ID", style="cyan")
    table.add_column("IaaS", style="blue", width=15)
    table.add_column("Address", style="green")
    table.add_column("Port", style="yellow", justify="right", width=6)
    table.add_column("Status", style="red", width=10)

    for machine in machines:
        table.add_row(
            str(machine.get("id", "N/A")),
            str(machine.get("iaas") or "N/A"),
            str(machine.get("address") or "N/A"),
            str(machine.get("port") or ""),
            str(machine.get("status") or ""),
        )
    return _render(table)
