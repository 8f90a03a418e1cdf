"""Domain ports."""

from sqlmi_broker.domain.base.ports.identity_resolver_port import IdentityResolverPort
from sqlmi_broker.domain.base.ports.logging_port import LoggingPort
from sqlmi_broker.domain.base.ports.resource_gateway_port import ResourceGatewayPort
from sqlmi_broker.domain.base.ports.tag_validation_port import TagValidationPort

__all__: list[str] = [
    "IdentityResolverPort",
    "LoggingPort",
    "ResourceGatewayPort",
    "TagValidationPort",
]
