"""Managed instance command handlers for the interface layer."""

import asyncio
import getpass
import os
from typing import TYPE_CHECKING, Any, Optional

from sqlmi_broker.application.dto.commands import CreateManagedInstanceCommand
from sqlmi_broker.domain.base.exceptions import ValidationError
from sqlmi_broker.domain.managed_instance.exceptions import InvalidTagError
from sqlmi_broker.domain.managed_instance.provisioning import ProvisioningOutcome
from sqlmi_broker.infrastructure.error.decorators import handle_interface_exceptions

if TYPE_CHECKING:
    import argparse

    from sqlmi_broker.bootstrap import Application

ADMIN_PASSWORD_ENV = "SQLMI_ADMIN_PASSWORD"


def parse_tag_pairs(pairs: Optional[list[str]]) -> Optional[dict[str, str]]:
    """Parse repeated ``key=value`` arguments into a raw tag mapping."""
    if not pairs:
        return None

    tags: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise InvalidTagError(f"Tag '{pair}' must be in key=value form", key)
        if key in tags:
            raise InvalidTagError(f"Duplicate tag key '{key}'", key)
        tags[key] = value
    return tags


def resolve_admin_password(args: "argparse.Namespace") -> str:
    """Password from the flag, then the environment, then an interactive prompt."""
    password = getattr(args, "admin_password", None) or os.environ.get(ADMIN_PASSWORD_ENV)
    if not password:
        password = getpass.getpass("Administrator password: ")
    if not password:
        raise ValidationError("An administrator password is required")
    return password


def build_create_command(
    args: "argparse.Namespace", app: "Application"
) -> CreateManagedInstanceCommand:
    """Map parsed arguments onto a CreateManagedInstanceCommand."""
    location = args.location or app.config.azure.default_location
    if not location:
        raise ValidationError(
            "A location is required (--location or azure.default_location)"
        )

    return CreateManagedInstanceCommand(
        resource_group=args.resource_group,
        name=args.name,
        location=location,
        subnet_id=args.subnet_id,
        license_type=args.license_type,
        storage_size_gb=args.storage_size_gb,
        vcores=args.vcores,
        sku_name=args.sku,
        administrator_login=args.admin_login,
        administrator_password=resolve_admin_password(args),
        tags=parse_tag_pairs(getattr(args, "tags", None)),
        assign_identity=not getattr(args, "no_assign_identity", False),
        dry_run=getattr(args, "dry_run", False),
    )


def format_outcome(outcome: ProvisioningOutcome) -> dict[str, Any]:
    """Render a successful outcome for output."""
    response: dict[str, Any] = {
        "success": True,
        "state": outcome.state.value,
        "dry_run": outcome.dry_run,
    }
    if outcome.instance is not None:
        response["managed_instance"] = outcome.instance.to_dict()
        response["message"] = f"Managed instance '{outcome.identity.name}' created"
    else:
        response["desired_state"] = outcome.desired_state.to_log_dict()
        response["message"] = f"What if: managed instance '{outcome.identity.name}' would be created"
    return response


@handle_interface_exceptions(context="create_managed_instance", interface_type="cli")
async def handle_create_managed_instance(
    args: "argparse.Namespace", app: "Application"
) -> dict[str, Any]:
    """
    Handle managed instance creation.

    With ``--as-job`` the run is submitted to a background worker and this
    handler waits on the returned job handle.
    """
    command = build_create_command(args, app)

    if not getattr(args, "as_job", False):
        outcome = await asyncio.to_thread(app.orchestrator.provision, command)
        return format_outcome(outcome)

    runner = app.create_detached_runner()
    try:
        job = runner.submit(command)
        job_logger = app.logger.with_context(job=job.job_id)
        job_logger.info("Waiting for provisioning of %s", job.identity)
        try:
            outcome = await asyncio.to_thread(job.result)
        finally:
            job_logger.info("Job finished in state %s", job.status.value)
    finally:
        runner.shutdown(wait=False)

    response = format_outcome(outcome)
    response["job_id"] = job.job_id
    return response
