"""Managed instance domain."""

from sqlmi_broker.domain.managed_instance.aggregate import (
    ManagedInstance,
    ManagedInstanceDesiredState,
)
from sqlmi_broker.domain.managed_instance.exceptions import (
    GatewayError,
    InvalidSkuError,
    InvalidTagError,
    ProvisioningCancelledError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError,
)
from sqlmi_broker.domain.managed_instance.probe import ProbeOutcome, ProbeResult
from sqlmi_broker.domain.managed_instance.provisioning import (
    ProvisioningOutcome,
    ProvisioningState,
)
from sqlmi_broker.domain.managed_instance.value_objects import (
    LicenseType,
    ManagedIdentity,
    ResourceIdentity,
    Sku,
    SkuName,
    SkuTier,
)

__all__: list[str] = [
    "GatewayError",
    "InvalidSkuError",
    "InvalidTagError",
    "LicenseType",
    "ManagedIdentity",
    "ManagedInstance",
    "ManagedInstanceDesiredState",
    "ProbeOutcome",
    "ProbeResult",
    "ProvisioningCancelledError",
    "ProvisioningOutcome",
    "ProvisioningState",
    "ResourceAlreadyExistsError",
    "ResourceIdentity",
    "ResourceNotFoundError",
    "Sku",
    "SkuName",
    "SkuTier",
]
