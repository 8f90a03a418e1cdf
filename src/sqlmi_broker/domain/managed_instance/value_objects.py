"""Managed instance value objects."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from sqlmi_broker.domain.managed_instance.exceptions import InvalidSkuError


class ResourceIdentity(BaseModel):
    """Addresses a managed instance within a resource group."""

    model_config = ConfigDict(frozen=True)

    resource_group: str
    name: str

    @field_validator("resource_group", "name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject empty or whitespace-only identity parts."""
        v = v.strip()
        if not v:
            raise ValueError("identity fields must not be empty")
        return v

    def __str__(self) -> str:
        return f"{self.resource_group}/{self.name}"


class LicenseType(str, Enum):
    """SQL Server license model of the instance."""

    BASE_PRICE = "BasePrice"
    LICENSE_INCLUDED = "LicenseIncluded"


class SkuTier(str, Enum):
    """Service tier part of a managed instance SKU."""

    GENERAL_PURPOSE = "GeneralPurpose"
    BUSINESS_CRITICAL = "BusinessCritical"


class SkuName(str, Enum):
    """The fixed set of managed instance SKUs."""

    GP_GEN4 = "GP_Gen4"
    GP_GEN5 = "GP_Gen5"
    BC_GEN4 = "BC_Gen4"
    BC_GEN5 = "BC_Gen5"


_TIER_PREFIXES = {
    "gp": "GP",
    "generalpurpose": "GP",
    "bc": "BC",
    "businesscritical": "BC",
}

_TIER_BY_PREFIX = {
    "GP": SkuTier.GENERAL_PURPOSE,
    "BC": SkuTier.BUSINESS_CRITICAL,
}

_SKU_PATTERN = re.compile(r"^\s*([A-Za-z]+)[\s_\-]+(gen\d+)\s*$", re.IGNORECASE)


class Sku(BaseModel):
    """Structured SKU: short name plus the tier and hardware generation it implies."""

    model_config = ConfigDict(frozen=True)

    name: SkuName
    tier: SkuTier
    family: str

    @classmethod
    def from_name(cls, value: str) -> "Sku":
        """
        Normalise a SKU selection into a structured SKU.

        Accepts the short form (``GP_Gen5``) as well as the long form
        (``GeneralPurpose-Gen5``, ``BusinessCritical_Gen4``).

        Raises:
            InvalidSkuError: If the value is not one of the supported SKUs
        """
        match = _SKU_PATTERN.match(value or "")
        prefix = _TIER_PREFIXES.get(match.group(1).lower()) if match else None
        if prefix is None:
            raise InvalidSkuError(value, [s.value for s in SkuName])

        family = match.group(2).capitalize()
        try:
            name = SkuName(f"{prefix}_{family}")
        except ValueError:
            raise InvalidSkuError(value, [s.value for s in SkuName]) from None

        return cls(name=name, tier=_TIER_BY_PREFIX[prefix], family=family)


class ManagedIdentity(BaseModel):
    """Identity descriptor attached to an instance."""

    model_config = ConfigDict(frozen=True)

    type: str = "SystemAssigned"
    principal_id: Optional[str] = None
    tenant_id: Optional[str] = None
