"""Application composition root."""

from typing import Optional

from sqlmi_broker.application.services.desired_state_builder import DesiredStateBuilder
from sqlmi_broker.application.services.detached_runner import DetachedProvisioningRunner
from sqlmi_broker.application.services.existence_checker import ExistenceChecker
from sqlmi_broker.application.services.provisioning_orchestrator import (
    ProvisioningOrchestrator,
)
from sqlmi_broker.config.schemas.app_schema import AppConfig
from sqlmi_broker.domain.base.ports import ResourceGatewayPort
from sqlmi_broker.infrastructure.adapters.logging_adapter import LoggingAdapter
from sqlmi_broker.infrastructure.identity.identity_resolver import (
    SystemAssignedIdentityResolver,
)
from sqlmi_broker.infrastructure.logging.logger import setup_logging
from sqlmi_broker.infrastructure.tags.tag_validator import AzureTagValidator


class Application:
    """Wires configuration, logging, the gateway and the provisioning services."""

    def __init__(self, config: AppConfig, gateway: Optional[ResourceGatewayPort] = None) -> None:
        setup_logging(config.logging)
        self.config = config
        self.logger = LoggingAdapter("application")

        if gateway is None:
            from sqlmi_broker.providers.azure.sql_gateway import AzureSqlManagedInstanceGateway

            gateway = AzureSqlManagedInstanceGateway(
                config.azure, LoggingAdapter("providers.azure")
            )
        self.gateway = gateway

        service_logger = LoggingAdapter("provisioning")
        self.orchestrator = ProvisioningOrchestrator(
            existence_checker=ExistenceChecker(self.gateway, service_logger),
            builder=DesiredStateBuilder(AzureTagValidator(), SystemAssignedIdentityResolver()),
            gateway=self.gateway,
            logger=service_logger,
        )

    def create_detached_runner(self) -> DetachedProvisioningRunner:
        return DetachedProvisioningRunner(
            self.orchestrator,
            LoggingAdapter("provisioning.jobs"),
            max_workers=self.config.provisioning.max_detached_workers,
        )
