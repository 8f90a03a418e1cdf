"""Provisioning run states and outcome."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from sqlmi_broker.domain.managed_instance.aggregate import (
    ManagedInstance,
    ManagedInstanceDesiredState,
)
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity


class ProvisioningState(str, Enum):
    """States of a single provisioning run."""

    START = "start"
    CHECKING = "checking"
    BUILDING = "building"
    PERSISTING = "persisting"
    DONE = "done"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        ProvisioningState.DONE,
        ProvisioningState.ALREADY_EXISTS,
        ProvisioningState.FAILED,
        ProvisioningState.CANCELLED,
    }
)

# Allowed forward transitions; there are no cycles.
ALLOWED_TRANSITIONS: dict[ProvisioningState, frozenset[ProvisioningState]] = {
    ProvisioningState.START: frozenset(
        {ProvisioningState.CHECKING, ProvisioningState.FAILED, ProvisioningState.CANCELLED}
    ),
    ProvisioningState.CHECKING: frozenset(
        {
            ProvisioningState.BUILDING,
            ProvisioningState.ALREADY_EXISTS,
            ProvisioningState.FAILED,
            ProvisioningState.CANCELLED,
        }
    ),
    ProvisioningState.BUILDING: frozenset(
        {
            ProvisioningState.PERSISTING,
            ProvisioningState.DONE,
            ProvisioningState.FAILED,
            ProvisioningState.CANCELLED,
        }
    ),
    ProvisioningState.PERSISTING: frozenset({ProvisioningState.DONE, ProvisioningState.FAILED}),
}


@dataclass(frozen=True)
class ProvisioningOutcome:
    """Successful result of a run: the realized instance, or the desired state on a dry run."""

    state: ProvisioningState
    identity: ResourceIdentity
    instance: Optional[ManagedInstance] = None
    desired_state: Optional[ManagedInstanceDesiredState] = None
    transitions: tuple[ProvisioningState, ...] = field(default_factory=tuple)

    @property
    def dry_run(self) -> bool:
        return self.instance is None
