"""Domain port for the managed instance control plane."""

from abc import ABC, abstractmethod

from sqlmi_broker.domain.managed_instance.aggregate import (
    ManagedInstance,
    ManagedInstanceDesiredState,
)
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity


class ResourceGatewayPort(ABC):
    """Get and create managed instances against a remote control plane."""

    @abstractmethod
    def get(self, identity: ResourceIdentity) -> ManagedInstance:
        """
        Fetch an existing instance.

        Raises:
            ResourceNotFoundError: If the control plane reports "not found"
            GatewayError: For any other failure, with status and message intact
        """

    @abstractmethod
    def create(
        self, identity: ResourceIdentity, desired_state: ManagedInstanceDesiredState
    ) -> ManagedInstance:
        """
        Create (upsert) the instance and return the realized model.

        Raises:
            GatewayError: If the control plane rejects or fails the request
        """
