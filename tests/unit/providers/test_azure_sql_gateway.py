"""Unit tests for the Azure SQL managed instance gateway."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from azure.core.exceptions import HttpResponseError, ServiceRequestError
from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError

from sqlmi_broker.config.schemas.app_schema import AzureConfig
from sqlmi_broker.domain.base.exceptions import ConfigurationError
from sqlmi_broker.domain.managed_instance.exceptions import (
    GatewayError,
    ResourceNotFoundError,
)
from sqlmi_broker.providers.azure.sql_gateway import AzureSqlManagedInstanceGateway
from tests.fixtures.commands import make_command


def _sdk_instance(**overrides):
    fields = {
        "id": "/subscriptions/0000/resourceGroups/rg1/providers/Microsoft.Sql/managedInstances/sqlmi1",
        "location": "westeurope",
        "subnet_id": "/subscriptions/0000/subnets/mi",
        "license_type": "LicenseIncluded",
        "storage_size_in_gb": 32,
        "v_cores": 4,
        "sku": SimpleNamespace(name="GP_Gen5", tier="GeneralPurpose", family="Gen5"),
        "administrator_login": "sqladmin",
        "fully_qualified_domain_name": "sqlmi1.abc123.database.windows.net",
        "state": "Ready",
        "tags": {"env": "prod"},
        "identity": SimpleNamespace(
            type="SystemAssigned", principal_id="p-1", tenant_id="t-1"
        ),
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _http_error(message: str, status_code: int) -> HttpResponseError:
    error = HttpResponseError(message=message)
    error.status_code = status_code
    return error


@pytest.fixture
def client():
    return Mock()


@pytest.fixture
def gateway(client, mock_logger):
    return AzureSqlManagedInstanceGateway(
        AzureConfig(subscription_id="0000", polling_interval_seconds=5),
        mock_logger,
        client=client,
    )


@pytest.mark.unit
class TestAzureSqlManagedInstanceGateway:
    def test_get_maps_sdk_model(self, gateway, client, identity):
        client.managed_instances.get.return_value = _sdk_instance()

        instance = gateway.get(identity)

        client.managed_instances.get.assert_called_once_with(
            resource_group_name="rg1", managed_instance_name="sqlmi1"
        )
        assert instance.identity == identity
        assert instance.vcores == 4
        assert instance.storage_size_gb == 32
        assert instance.sku_name == "GP_Gen5"
        assert instance.managed_identity.principal_id == "p-1"
        assert instance.fully_qualified_domain_name.startswith("sqlmi1.")

    def test_get_not_found_is_translated(self, gateway, client, identity):
        client.managed_instances.get.side_effect = AzureResourceNotFoundError(
            message="ResourceNotFound: sqlmi1 was not found"
        )

        with pytest.raises(ResourceNotFoundError) as exc_info:
            gateway.get(identity)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "ResourceNotFound: sqlmi1 was not found"

    def test_get_plain_404_is_not_found(self, gateway, client, identity):
        client.managed_instances.get.side_effect = _http_error("ResourceGroupNotFound", 404)

        with pytest.raises(ResourceNotFoundError):
            gateway.get(identity)

    @pytest.mark.parametrize(
        "error,status",
        [
            (_http_error("AuthorizationFailed: no access", 403), 403),
            (_http_error("InternalServerError", 500), 500),
            (ServiceRequestError(message="Connection refused"), None),
        ],
    )
    def test_other_errors_keep_status_and_message(self, gateway, client, identity, error, status):
        client.managed_instances.get.side_effect = error

        with pytest.raises(GatewayError) as exc_info:
            gateway.get(identity)

        assert not isinstance(exc_info.value, ResourceNotFoundError)
        assert exc_info.value.status_code == status
        assert exc_info.value.message == error.message
        assert exc_info.value.operation == "get"
        assert exc_info.value.__cause__ is error

    def test_create_submits_parameters(self, gateway, client, identity, builder, command):
        poller = Mock()
        poller.result.return_value = _sdk_instance()
        client.managed_instances.begin_create_or_update.return_value = poller

        instance = gateway.create(identity, builder.build(command))

        kwargs = client.managed_instances.begin_create_or_update.call_args.kwargs
        parameters = kwargs["parameters"]
        assert kwargs["resource_group_name"] == "rg1"
        assert kwargs["managed_instance_name"] == "sqlmi1"
        assert kwargs["polling_interval"] == 5
        assert parameters.sku.name == "GP_Gen5"
        assert parameters.sku.tier == "GeneralPurpose"
        assert parameters.v_cores == 4
        assert parameters.storage_size_in_gb == 32
        assert parameters.license_type == "LicenseIncluded"
        assert parameters.administrator_login_password == "S3cret-Passw0rd!"
        assert parameters.identity.type == "SystemAssigned"
        assert parameters.tags == {"env": "prod"}
        poller.result.assert_called_once_with(timeout=None)
        assert instance.state == "Ready"

    def test_create_without_identity(self, gateway, client, identity, builder):
        client.managed_instances.begin_create_or_update.return_value.result.return_value = (
            _sdk_instance(identity=None)
        )

        instance = gateway.create(identity, builder.build(make_command(assign_identity=False)))

        parameters = client.managed_instances.begin_create_or_update.call_args.kwargs[
            "parameters"
        ]
        assert parameters.identity is None
        assert instance.managed_identity is None

    def test_create_failure_is_translated(self, gateway, client, identity, builder, command):
        poller = Mock()
        poller.result.side_effect = _http_error("SubnetIsNotDelegated", 400)
        client.managed_instances.begin_create_or_update.return_value = poller

        with pytest.raises(GatewayError) as exc_info:
            gateway.create(identity, builder.build(command))

        assert exc_info.value.status_code == 400
        assert exc_info.value.operation == "create"
        assert exc_info.value.message == "SubnetIsNotDelegated"

    def test_create_timeout_is_gateway_error(
        self, client, mock_logger, identity, builder, command
    ):
        gateway = AzureSqlManagedInstanceGateway(
            AzureConfig(subscription_id="0000", operation_timeout_seconds=1),
            mock_logger,
            client=client,
        )
        poller = Mock()
        poller.result.return_value = None
        poller.done.return_value = False
        client.managed_instances.begin_create_or_update.return_value = poller

        with pytest.raises(GatewayError) as exc_info:
            gateway.create(identity, builder.build(command))

        poller.result.assert_called_once_with(timeout=1)
        assert exc_info.value.status_code is None
        assert exc_info.value.operation == "create"
        assert "did not complete within 1 seconds" in exc_info.value.message

    def test_missing_subscription_is_configuration_error(self, mock_logger, identity):
        gateway = AzureSqlManagedInstanceGateway(AzureConfig(), mock_logger)

        with pytest.raises(ConfigurationError):
            gateway.get(identity)
