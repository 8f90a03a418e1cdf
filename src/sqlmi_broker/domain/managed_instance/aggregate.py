"""Managed instance desired state and realized model."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from sqlmi_broker.domain.managed_instance.value_objects import (
    LicenseType,
    ManagedIdentity,
    ResourceIdentity,
    Sku,
)


class ManagedInstanceDesiredState(BaseModel):
    """
    Desired state of a managed instance, built once per provisioning run.

    The model is frozen and the administrator password is a ``SecretStr``, so
    ``model_dump``, ``str`` and ``repr`` never expose it.
    """

    model_config = ConfigDict(frozen=True)

    identity: ResourceIdentity
    location: str = Field(min_length=1)
    subnet_id: str = Field(min_length=1)
    license_type: LicenseType
    storage_size_gb: int = Field(gt=0)
    vcores: int = Field(gt=0)
    sku: Sku
    administrator_login: str
    administrator_password: SecretStr
    tags: dict[str, str] = Field(default_factory=dict)
    managed_identity: Optional[ManagedIdentity] = None

    def to_log_dict(self) -> dict[str, Any]:
        """Render the desired state for logs."""
        return self.model_dump(mode="json")


class ManagedInstance(BaseModel):
    """Managed instance as realized by the control plane."""

    model_config = ConfigDict(frozen=True)

    identity: ResourceIdentity
    location: str
    resource_id: Optional[str] = None
    subnet_id: Optional[str] = None
    license_type: Optional[str] = None
    storage_size_gb: Optional[int] = None
    vcores: Optional[int] = None
    sku_name: Optional[str] = None
    administrator_login: Optional[str] = None
    fully_qualified_domain_name: Optional[str] = None
    state: Optional[str] = None
    tags: dict[str, str] = Field(default_factory=dict)
    managed_identity: Optional[ManagedIdentity] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the realized model for output."""
        return self.model_dump(mode="json")
