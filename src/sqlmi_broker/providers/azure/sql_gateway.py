"""Managed instance gateway backed by the Azure SQL management SDK."""

from typing import Any, Optional

from azure.core.exceptions import AzureError
from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError
from azure.identity import DefaultAzureCredential
from azure.mgmt.sql import SqlManagementClient
from azure.mgmt.sql.models import ManagedInstance as SdkManagedInstance
from azure.mgmt.sql.models import ResourceIdentity as SdkResourceIdentity
from azure.mgmt.sql.models import Sku as SdkSku

from sqlmi_broker.config.schemas.app_schema import AzureConfig
from sqlmi_broker.domain.base.exceptions import ConfigurationError
from sqlmi_broker.domain.base.ports import LoggingPort, ResourceGatewayPort
from sqlmi_broker.domain.managed_instance.aggregate import (
    ManagedInstance,
    ManagedInstanceDesiredState,
)
from sqlmi_broker.domain.managed_instance.exceptions import (
    GatewayError,
    ResourceNotFoundError,
)
from sqlmi_broker.domain.managed_instance.value_objects import (
    ManagedIdentity,
    ResourceIdentity,
)


def _enum_value(value: Any) -> Optional[str]:
    """SDK models may hold either plain strings or str enums."""
    if value is None:
        return None
    return getattr(value, "value", value)


class AzureSqlManagedInstanceGateway(ResourceGatewayPort):
    """
    ResourceGatewayPort over ``SqlManagementClient.managed_instances``.

    SDK errors are translated, never retried here: a 404 becomes
    ResourceNotFoundError, everything else a GatewayError carrying the
    service's status code and message unchanged. Transport level retries
    stay with the SDK pipeline.
    """

    def __init__(
        self,
        config: AzureConfig,
        logger: LoggingPort,
        client: Optional[SqlManagementClient] = None,
        credential: Optional[Any] = None,
    ) -> None:
        self._config = config
        self._logger = logger
        self._client = client
        self._credential = credential

    @property
    def client(self) -> SqlManagementClient:
        """Lazy-load the SQL management client."""
        if self._client is None:
            if not self._config.subscription_id:
                raise ConfigurationError(
                    "Azure subscription id is not configured "
                    "(set azure.subscription_id or AZURE_SUBSCRIPTION_ID)"
                )
            self._client = SqlManagementClient(
                self._credential or DefaultAzureCredential(),
                self._config.subscription_id,
            )
        return self._client

    def get(self, identity: ResourceIdentity) -> ManagedInstance:
        self._logger.debug("GET managed instance %s", identity)
        try:
            sdk_instance = self.client.managed_instances.get(
                resource_group_name=identity.resource_group,
                managed_instance_name=identity.name,
            )
        except AzureError as e:
            raise self._translate_error(e, "get") from e
        return self._to_domain(identity, sdk_instance)

    def create(
        self, identity: ResourceIdentity, desired_state: ManagedInstanceDesiredState
    ) -> ManagedInstance:
        self._logger.info(
            "Submitting create for managed instance %s in %s", identity, desired_state.location
        )
        parameters = self._to_sdk(desired_state)
        try:
            poller = self.client.managed_instances.begin_create_or_update(
                resource_group_name=identity.resource_group,
                managed_instance_name=identity.name,
                parameters=parameters,
                polling_interval=self._config.polling_interval_seconds,
            )
            sdk_instance = poller.result(timeout=self._config.operation_timeout_seconds)
            completed = poller.done()
        except AzureError as e:
            raise self._translate_error(e, "create") from e

        # result() returns without raising when the timeout elapses first
        if not completed:
            raise GatewayError(
                f"Create of managed instance '{identity}' did not complete within "
                f"{self._config.operation_timeout_seconds} seconds; it may still be "
                "running in Azure",
                None,
                "create",
            )
        return self._to_domain(identity, sdk_instance)

    @staticmethod
    def _to_sdk(desired_state: ManagedInstanceDesiredState) -> SdkManagedInstance:
        identity = None
        if desired_state.managed_identity is not None:
            identity = SdkResourceIdentity(type=desired_state.managed_identity.type)

        return SdkManagedInstance(
            location=desired_state.location,
            tags=dict(desired_state.tags),
            identity=identity,
            sku=SdkSku(
                name=desired_state.sku.name.value,
                tier=desired_state.sku.tier.value,
                family=desired_state.sku.family,
            ),
            administrator_login=desired_state.administrator_login,
            administrator_login_password=desired_state.administrator_password.get_secret_value(),
            subnet_id=desired_state.subnet_id,
            license_type=desired_state.license_type.value,
            v_cores=desired_state.vcores,
            storage_size_in_gb=desired_state.storage_size_gb,
        )

    @staticmethod
    def _to_domain(identity: ResourceIdentity, sdk_instance: Any) -> ManagedInstance:
        sdk_identity = getattr(sdk_instance, "identity", None)
        managed_identity = None
        if sdk_identity is not None and sdk_identity.type:
            managed_identity = ManagedIdentity(
                type=_enum_value(sdk_identity.type),
                principal_id=str(sdk_identity.principal_id) if sdk_identity.principal_id else None,
                tenant_id=str(sdk_identity.tenant_id) if sdk_identity.tenant_id else None,
            )

        sku = getattr(sdk_instance, "sku", None)
        return ManagedInstance(
            identity=identity,
            location=sdk_instance.location,
            resource_id=sdk_instance.id,
            subnet_id=sdk_instance.subnet_id,
            license_type=_enum_value(sdk_instance.license_type),
            storage_size_gb=sdk_instance.storage_size_in_gb,
            vcores=sdk_instance.v_cores,
            sku_name=_enum_value(sku.name) if sku is not None else None,
            administrator_login=sdk_instance.administrator_login,
            fully_qualified_domain_name=sdk_instance.fully_qualified_domain_name,
            state=sdk_instance.state,
            tags=dict(sdk_instance.tags or {}),
            managed_identity=managed_identity,
        )

    def _translate_error(self, error: AzureError, operation: str) -> GatewayError:
        status_code = getattr(error, "status_code", None)
        service_error = getattr(error, "error", None)
        service_error_code = getattr(service_error, "code", None)
        message = error.message or str(error)

        if isinstance(error, AzureResourceNotFoundError) or status_code == 404:
            return ResourceNotFoundError(message, operation, service_error_code)

        self._logger.debug(
            "Azure %s failed with status %s (%s)", operation, status_code, service_error_code
        )
        return GatewayError(message, status_code, operation, service_error_code)
