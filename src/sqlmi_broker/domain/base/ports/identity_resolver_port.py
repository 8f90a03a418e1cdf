"""Domain port for managed identity assignment."""

from abc import ABC, abstractmethod
from typing import Optional

from sqlmi_broker.domain.managed_instance.value_objects import ManagedIdentity


class IdentityResolverPort(ABC):
    """Maps the "assign identity" flag to an identity descriptor."""

    @abstractmethod
    def resolve(self, assign: bool) -> Optional[ManagedIdentity]:
        """Return a system-assigned identity descriptor, or None."""
