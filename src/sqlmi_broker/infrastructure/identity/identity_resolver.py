"""Resolves the identity descriptor attached to a new instance."""

from typing import Optional

from sqlmi_broker.domain.base.ports.identity_resolver_port import IdentityResolverPort
from sqlmi_broker.domain.managed_instance.value_objects import ManagedIdentity

SYSTEM_ASSIGNED = "SystemAssigned"


class SystemAssignedIdentityResolver(IdentityResolverPort):
    """Returns a system-assigned identity when assignment is requested."""

    def resolve(self, assign: bool) -> Optional[ManagedIdentity]:
        return ManagedIdentity(type=SYSTEM_ASSIGNED) if assign else None
