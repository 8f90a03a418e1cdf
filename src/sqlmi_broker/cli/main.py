"""CLI entry point with resource-action structure."""

import argparse
import asyncio
import sys
from typing import Optional

from sqlmi_broker import __version__
from sqlmi_broker.bootstrap import Application
from sqlmi_broker.cli.console import print_error, print_json, print_success
from sqlmi_broker.config.manager import ConfigurationManager
from sqlmi_broker.domain.base.exceptions import DomainException
from sqlmi_broker.domain.managed_instance.value_objects import LicenseType, SkuName
from sqlmi_broker.interface.managed_instance_command_handlers import (
    handle_create_managed_instance,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlmi", description="Provision Azure SQL managed instances"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a YAML or JSON configuration file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )

    resources = parser.add_subparsers(dest="resource", required=True)
    mi = resources.add_parser("managed-instance", aliases=["mi"], help="Managed instances")
    actions = mi.add_subparsers(dest="action", required=True)

    create = actions.add_parser("create", help="Create a managed instance")
    create.add_argument("-g", "--resource-group", required=True)
    create.add_argument("-n", "--name", "--managed-instance-name", dest="name", required=True)
    create.add_argument("-l", "--location", help="Defaults to azure.default_location")
    create.add_argument("--subnet-id", required=True)
    create.add_argument(
        "--license-type", required=True, choices=[t.value for t in LicenseType]
    )
    create.add_argument("--storage-size-gb", type=int, required=True)
    create.add_argument("--vcores", type=int, required=True)
    create.add_argument(
        "--sku",
        required=True,
        help=f"One of {', '.join(s.value for s in SkuName)} (e.g. GP_Gen5 or GeneralPurpose-Gen5)",
    )
    create.add_argument("--admin-login", required=True)
    create.add_argument(
        "--admin-password",
        help="Prefer the SQLMI_ADMIN_PASSWORD environment variable or the prompt",
    )
    create.add_argument(
        "--tag", dest="tags", action="append", metavar="KEY=VALUE", help="Repeatable"
    )
    create.add_argument(
        "--no-assign-identity",
        action="store_true",
        help="Do not assign a system-assigned identity",
    )
    create.add_argument(
        "--as-job",
        action="store_true",
        help=(
            "Run provisioning on a background worker job. The command still "
            "waits for the job to finish and reports its job_id with the result"
        ),
    )
    create.add_argument(
        "--what-if",
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Check and build the request without creating anything",
    )
    create.set_defaults(handler=handle_create_managed_instance)
    return parser


async def main(argv: Optional[list[str]] = None) -> int:
    """Parse arguments, run the selected handler and print its result."""
    args = build_parser().parse_args(argv)

    try:
        config = ConfigurationManager(args.config).load()
    except DomainException as e:
        print_error(e.message)
        return 1
    if args.log_level:
        config.logging.level = args.log_level

    app = Application(config)
    result = await args.handler(args, app)

    print_json(result)
    if result.get("success"):
        print_success(result.get("message", "Done"))
        return 0
    print_error(result.get("message", "Failed"))
    return 1


def cli_main() -> None:
    """Entry point function for console scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli_main()
