"""Global test configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlmi_broker.application.services.desired_state_builder import (  # noqa: E402
    DesiredStateBuilder,
)
from sqlmi_broker.application.services.existence_checker import ExistenceChecker  # noqa: E402
from sqlmi_broker.application.services.provisioning_orchestrator import (  # noqa: E402
    ProvisioningOrchestrator,
)
from sqlmi_broker.domain.base.ports import LoggingPort, ResourceGatewayPort  # noqa: E402
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity  # noqa: E402
from sqlmi_broker.infrastructure.identity.identity_resolver import (  # noqa: E402
    SystemAssignedIdentityResolver,
)
from sqlmi_broker.infrastructure.tags.tag_validator import AzureTagValidator  # noqa: E402
from tests.fixtures.commands import make_command  # noqa: E402
from tests.fixtures.fake_gateway import InMemoryGateway  # noqa: E402


@pytest.fixture
def identity() -> ResourceIdentity:
    return ResourceIdentity(resource_group="rg1", name="sqlmi1")


@pytest.fixture
def command():
    return make_command()


@pytest.fixture
def mock_logger() -> Mock:
    return Mock(spec=LoggingPort)


@pytest.fixture
def mock_gateway() -> Mock:
    return Mock(spec=ResourceGatewayPort)


@pytest.fixture
def fake_gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def builder() -> DesiredStateBuilder:
    return DesiredStateBuilder(AzureTagValidator(), SystemAssignedIdentityResolver())


@pytest.fixture
def orchestrator_factory(builder, mock_logger):
    """Build an orchestrator around any gateway."""

    def factory(gateway) -> ProvisioningOrchestrator:
        return ProvisioningOrchestrator(
            existence_checker=ExistenceChecker(gateway, mock_logger),
            builder=builder,
            gateway=gateway,
            logger=mock_logger,
        )

    return factory
