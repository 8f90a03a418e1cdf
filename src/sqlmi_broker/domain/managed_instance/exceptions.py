"""Managed instance domain exceptions."""

from typing import TYPE_CHECKING, Any, Optional

from sqlmi_broker.domain.base.exceptions import (
    DomainException,
    InfrastructureError,
    ValidationError,
)

if TYPE_CHECKING:
    from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity


class InvalidTagError(ValidationError):
    """Raised when a tag key or value is rejected."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message, {"tag_key": key} if key is not None else None)
        self.error_code = "INVALID_TAG"
        self.key = key


class InvalidSkuError(ValidationError):
    """Raised when the requested SKU is not a supported managed instance SKU."""

    def __init__(self, value: Any, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid SKU '{value}'. Supported values: {', '.join(allowed)}",
            {"requested_sku": value, "allowed": allowed},
        )
        self.error_code = "INVALID_SKU"


class ResourceAlreadyExistsError(DomainException):
    """Raised when a managed instance with the requested name already exists."""

    def __init__(self, identity: "ResourceIdentity") -> None:
        super().__init__(
            f"Managed instance with name '{identity.name}' already exists "
            f"in resource group '{identity.resource_group}'.",
            "RESOURCE_ALREADY_EXISTS",
            {"resource_group": identity.resource_group, "name": identity.name},
        )
        self.identity = identity


class GatewayError(InfrastructureError):
    """
    Failure reported by the control plane.

    ``message`` is the service's own message, kept verbatim.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        operation: Optional[str] = None,
        service_error_code: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            "GATEWAY_ERROR",
            {
                "status_code": status_code,
                "operation": operation,
                "service_error_code": service_error_code,
            },
        )
        self.status_code = status_code
        self.operation = operation
        self.service_error_code = service_error_code


class ResourceNotFoundError(GatewayError):
    """The control plane answered "not found"."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        service_error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message, 404, operation, service_error_code)
        self.error_code = "RESOURCE_NOT_FOUND"


class ProvisioningCancelledError(DomainException):
    """Raised when a run was cancelled before the create call was submitted."""

    def __init__(self, identity: "ResourceIdentity", phase: str) -> None:
        super().__init__(
            f"Provisioning of '{identity}' was cancelled before {phase}",
            "PROVISIONING_CANCELLED",
            {"resource_group": identity.resource_group, "name": identity.name, "phase": phase},
        )
