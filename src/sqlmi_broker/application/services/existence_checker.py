"""Checks whether a managed instance already exists."""

from sqlmi_broker.domain.base.ports import LoggingPort, ResourceGatewayPort
from sqlmi_broker.domain.managed_instance.exceptions import ResourceNotFoundError
from sqlmi_broker.domain.managed_instance.probe import ProbeResult
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity


class ExistenceChecker:
    """
    Classifies a "get by name" call into Absent, Present or TransientError.

    Only an explicit "not found" means absent. Any other failure is reported
    as an error and never read as absence, so an instance that could not be
    looked up is never overwritten.
    """

    def __init__(self, gateway: ResourceGatewayPort, logger: LoggingPort) -> None:
        self._gateway = gateway
        self._logger = logger

    def probe(self, identity: ResourceIdentity) -> ProbeResult:
        """Ask the gateway for the instance and classify the answer."""
        self._logger.debug("Checking whether managed instance %s exists", identity)
        try:
            instance = self._gateway.get(identity)
        except ResourceNotFoundError:
            self._logger.debug("Managed instance %s not found", identity)
            return ProbeResult.absent()
        except Exception as e:
            self._logger.warning("Existence check for %s failed: %s", identity, e)
            return ProbeResult.transient_error(e)

        self._logger.debug("Managed instance %s already exists", identity)
        return ProbeResult.present(instance)
