"""Command DTOs for application layer."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, SecretStr

from sqlmi_broker.application.dto.base import BaseCommand
from sqlmi_broker.domain.managed_instance.value_objects import LicenseType, ResourceIdentity


class CreateManagedInstanceCommand(BaseCommand):
    """Command to create a new managed instance."""

    resource_group: str
    name: str
    location: str
    subnet_id: str
    license_type: LicenseType
    storage_size_gb: int = Field(gt=0)
    vcores: int = Field(gt=0)
    sku_name: str
    administrator_login: str
    administrator_password: SecretStr
    tags: Optional[dict[str, Any]] = None
    assign_identity: bool = True
    dry_run: bool = False

    @property
    def identity(self) -> ResourceIdentity:
        return ResourceIdentity(resource_group=self.resource_group, name=self.name)
