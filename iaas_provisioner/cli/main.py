"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing and execution
- Integration with the machine provisioning service
"""
import os
import sys
import argparse
from typing import Any, Dict, List, Optional

import yaml

from iaas_provisioner import __version__
from iaas_provisioner.bootstrap import Application
from iaas_provisioner.cli.formatters import format_output
from iaas_provisioner.domain.base.exceptions import DomainException
from iaas_provisioner.domain.machine.machine_aggregate import Machine
from iaas_provisioner.infrastructure.exceptions import InfrastructureError
from iaas_provisioner.infrastructure.logging.logger import get_logger

FORMATS = ["json", "yaml", "table"]


def parse_params(values: List[str]) -> Dict[str, str]:
    """Turn ``key=value`` arguments into a parameter mapping."""
    params = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"invalid parameter {value!r}, expected key=value")
        params[key] = item
    return params


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with the resource-action structure."""

    # Main parser with global options
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]),
        description="IaaS provisioner - create and destroy docker hosts on IaaS providers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s providers list                                # List providers
  %(prog)s providers describe dockermachine              # Show provider parameters
  %(prog)s machines create driver=virtualbox pool=web    # Create a machine
  %(prog)s machines create --iaas my-cloud pool=web      # Create on a custom provider
  %(prog)s machines delete dockermachine web-1f3e... --file machine.json
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Override the configured logging level')
    parser.add_argument('--format', choices=FORMATS, default='json', help='Output format')
    parser.add_argument('--output', help='Output file (default: stdout)')
    parser.add_argument('--quiet', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Resource subparsers
    subparsers = parser.add_subparsers(dest='resource', help='Available resources')

    # Providers resource
    providers_parser = subparsers.add_parser('providers', help='Inspect IaaS providers')
    providers_subparsers = providers_parser.add_subparsers(dest='action', help='Provider actions')
    providers_subparsers.add_parser('list', help='List registered and configured providers')
    providers_describe = providers_subparsers.add_parser('describe', help='Show provider usage')
    providers_describe.add_argument('name', nargs='?', help='Provider name (default: configured default)')

    # Machines resource
    machines_parser = subparsers.add_parser('machines', help='Manage machines')
    machines_subparsers = machines_parser.add_subparsers(dest='action', help='Machine actions')

    machines_create = machines_subparsers.add_parser('create', help='Create a machine')
    machines_create.add_argument('--iaas', help='Provider name (default: configured default)')
    machines_create.add_argument('params', nargs='*', metavar='key=value', help='Creation parameters')

    machines_delete = machines_subparsers.add_parser('delete', help='Destroy a machine')
    machines_delete.add_argument('iaas', help='Provider the machine was created with')
    machines_delete.add_argument('machine_id', help='Machine ID to destroy')
    machines_delete.add_argument('--file', help='Machine description printed by "machines create"')

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, 'params', None) is not None:
        try:
            args.params = parse_params(args.params)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
    return args


def load_machine(args) -> Machine:
    """Machine to delete: from a saved description when given, else by ID alone."""
    if not args.file:
        return Machine(id=args.machine_id, name=args.machine_id, iaas=args.iaas)
    with open(args.file, 'r') as f:
        data = yaml.safe_load(f) or {}
    if isinstance(data, dict) and "machines" in data:
        data = next((m for m in data["machines"] if m.get("id") == args.machine_id), {})
    data = {**data, "id": args.machine_id, "iaas": args.iaas}
    data.setdefault("name", args.machine_id)
    return Machine.from_dict(data)


def execute_command(args, app: Application) -> Dict[str, Any]:
    """Execute the appropriate command handler."""
    service = app.machine_service
    handler_key = (args.resource, args.action)

    if handler_key == ('providers', 'list'):
        return {"providers": service.list_providers()}
    if handler_key == ('providers', 'describe'):
        return {"name": args.name, "description": service.describe(args.name)}
    if handler_key == ('machines', 'create'):
        params = dict(args.params)
        if args.iaas:
            params["iaas"] = args.iaas
        machine = service.create_machine(params)
        return {"machines": [machine.to_dict()]}
    if handler_key == ('machines', 'delete'):
        machine = load_machine(args)
        service.delete_machine(machine)
        return {"deleted": machine.id, "iaas": machine.iaas}
    raise ValueError(f"Unknown command: {args.resource} {args.action}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    try:
        args = parse_args(argv)

        logger = get_logger(__name__)

        # Validate required arguments
        if not args.resource:
            print("Error: No resource specified. Use --help for usage information.")
            sys.exit(1)

        if not args.action:
            print(f"Error: No action specified for {args.resource}. Use --help for usage information.")
            sys.exit(1)

        # Initialize application
        overrides = {"logging": {"level": args.log_level}} if args.log_level else None
        try:
            app = Application(args.config, overrides).initialize()
        except DomainException as e:
            print(f"Error: {e}")
            sys.exit(1)

        # Execute command
        try:
            result = execute_command(args, app)

            formatted_output = format_output(result, args.format)

            if args.output:
                with open(args.output, 'w') as f:
                    f.write(formatted_output)
                if not args.quiet:
                    print(f"Output written to {args.output}")
            else:
                print(formatted_output)

        except (DomainException, InfrastructureError) as e:
            logger.error(f"Command failed: {e}")
            if not args.quiet:
                print(f"Error: {e}")
            sys.exit(1)
        except Exception as e:
            logger.error(f"Unexpected error: {e}")
            if args.verbose:
                import traceback
                traceback.print_exc()
            if not args.quiet:
                print(f"Unexpected error: {e}")
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
