"""Builds the desired state of a managed instance from user input."""

from sqlmi_broker.application.dto.commands import CreateManagedInstanceCommand
from sqlmi_broker.domain.base.ports import IdentityResolverPort, TagValidationPort
from sqlmi_broker.domain.managed_instance.aggregate import ManagedInstanceDesiredState
from sqlmi_broker.domain.managed_instance.value_objects import Sku


class DesiredStateBuilder:
    """Pure mapping from a create command to a frozen desired state. Performs no I/O."""

    def __init__(
        self, tag_validator: TagValidationPort, identity_resolver: IdentityResolverPort
    ) -> None:
        self._tag_validator = tag_validator
        self._identity_resolver = identity_resolver

    def validate(self, command: CreateManagedInstanceCommand) -> None:
        """
        Run the input checks of ``build`` without producing a desired state.

        Raises:
            InvalidTagError: If the tags are rejected
            InvalidSkuError: If the SKU is not supported
        """
        self._tag_validator.validate(command.tags)
        Sku.from_name(command.sku_name)

    def build(self, command: CreateManagedInstanceCommand) -> ManagedInstanceDesiredState:
        """
        Map the command onto a desired state.

        Raises:
            InvalidTagError: If the tags are rejected
            InvalidSkuError: If the SKU is not supported
        """
        return ManagedInstanceDesiredState(
            identity=command.identity,
            location=command.location,
            subnet_id=command.subnet_id,
            license_type=command.license_type,
            storage_size_gb=command.storage_size_gb,
            vcores=command.vcores,
            sku=Sku.from_name(command.sku_name),
            administrator_login=command.administrator_login,
            administrator_password=command.administrator_password,
            tags=self._tag_validator.validate(command.tags),
            managed_identity=self._identity_resolver.resolve(command.assign_identity),
        )
