"""
Create-exactly-once provisioning of a managed instance.

The orchestrator runs a linear state machine::

    START -> CHECKING -> BUILDING -> PERSISTING -> DONE
                      -> ALREADY_EXISTS
                      -> FAILED

Input checks run before CHECKING so invalid tags or SKUs never reach the
control plane. Every failure is propagated unchanged; nothing is retried
here and there is no rollback, a failed run is simply invoked again.
"""

import threading
from collections.abc import Callable
from typing import Optional

from sqlmi_broker.application.dto.commands import CreateManagedInstanceCommand
from sqlmi_broker.application.services.desired_state_builder import DesiredStateBuilder
from sqlmi_broker.application.services.existence_checker import ExistenceChecker
from sqlmi_broker.domain.base.ports import LoggingPort, ResourceGatewayPort
from sqlmi_broker.domain.managed_instance.exceptions import (
    ProvisioningCancelledError,
    ResourceAlreadyExistsError,
)
from sqlmi_broker.domain.managed_instance.probe import ProbeOutcome
from sqlmi_broker.domain.managed_instance.provisioning import (
    ALLOWED_TRANSITIONS,
    ProvisioningOutcome,
    ProvisioningState,
)
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity

TransitionListener = Callable[[ProvisioningState], None]
# Returns False when the run must stop instead of entering the given phase.
PhaseCheckpoint = Callable[[ProvisioningState], bool]


class _ProvisioningRun:
    """Per-invocation state; never shared between runs."""

    def __init__(
        self,
        identity: ResourceIdentity,
        cancel_event: Optional[threading.Event],
        listener: Optional[TransitionListener],
        checkpoint: Optional[PhaseCheckpoint] = None,
    ) -> None:
        self.identity = identity
        self.state = ProvisioningState.START
        self.transitions: list[ProvisioningState] = [ProvisioningState.START]
        self._cancel_event = cancel_event
        self._listener = listener
        self._checkpoint = checkpoint

    def move_to(self, new_state: ProvisioningState) -> None:
        if new_state not in ALLOWED_TRANSITIONS.get(self.state, frozenset()):
            raise RuntimeError(f"Illegal provisioning transition {self.state} -> {new_state}")
        self.state = new_state
        self.transitions.append(new_state)
        if self._listener is not None:
            self._listener(new_state)

    def advance(self, next_phase: ProvisioningState) -> None:
        """Enter the next phase unless cancellation was requested first."""
        if self._checkpoint is not None:
            proceed = self._checkpoint(next_phase)
        else:
            proceed = self._cancel_event is None or not self._cancel_event.is_set()

        if not proceed:
            self.move_to(ProvisioningState.CANCELLED)
            raise ProvisioningCancelledError(self.identity, next_phase.value)
        self.move_to(next_phase)


class ProvisioningOrchestrator:
    """Sequences existence check, desired-state construction and the create call."""

    def __init__(
        self,
        existence_checker: ExistenceChecker,
        builder: DesiredStateBuilder,
        gateway: ResourceGatewayPort,
        logger: LoggingPort,
    ) -> None:
        self._existence_checker = existence_checker
        self._builder = builder
        self._gateway = gateway
        self._logger = logger

    def provision(
        self,
        command: CreateManagedInstanceCommand,
        cancel_event: Optional[threading.Event] = None,
        on_transition: Optional[TransitionListener] = None,
        checkpoint: Optional[PhaseCheckpoint] = None,
    ) -> ProvisioningOutcome:
        """
        Provision the managed instance described by ``command``.

        Args:
            command: Validated user input
            cancel_event: Checked between phases only; once the create call has
                been submitted the run completes or fails normally
            on_transition: Called with every state entered after START
            checkpoint: Replaces the ``cancel_event`` test when given; called
                before each phase and returns False to cancel the run. Lets a
                caller make the test and the phase change atomic

        Returns:
            ProvisioningOutcome in state DONE

        Raises:
            InvalidTagError, InvalidSkuError: Input rejected, no gateway call made
            ResourceAlreadyExistsError: The instance exists, nothing was changed
            ProvisioningCancelledError: Cancelled before the create call
            GatewayError: Any probe or create failure other than "not found",
                exactly as raised by the gateway
        """
        run = _ProvisioningRun(command.identity, cancel_event, on_transition, checkpoint)
        self._logger.info("Provisioning managed instance %s", run.identity)

        try:
            self._builder.validate(command)
        except Exception:
            run.move_to(ProvisioningState.FAILED)
            raise

        run.advance(ProvisioningState.CHECKING)
        probe = self._existence_checker.probe(run.identity)

        if probe.outcome is ProbeOutcome.PRESENT:
            run.move_to(ProvisioningState.ALREADY_EXISTS)
            self._logger.error("Managed instance %s already exists", run.identity)
            raise ResourceAlreadyExistsError(run.identity)

        if probe.outcome is ProbeOutcome.TRANSIENT_ERROR:
            run.move_to(ProvisioningState.FAILED)
            raise probe.error

        run.advance(ProvisioningState.BUILDING)
        try:
            desired_state = self._builder.build(command)
        except Exception:
            run.move_to(ProvisioningState.FAILED)
            raise
        self._logger.debug("Desired state for %s: %s", run.identity, desired_state.to_log_dict())

        if command.dry_run:
            self._logger.info("Dry run: skipping creation of managed instance %s", run.identity)
            run.move_to(ProvisioningState.DONE)
            return ProvisioningOutcome(
                state=run.state,
                identity=run.identity,
                desired_state=desired_state,
                transitions=tuple(run.transitions),
            )

        run.advance(ProvisioningState.PERSISTING)
        try:
            instance = self._gateway.create(run.identity, desired_state)
        except Exception as e:
            run.move_to(ProvisioningState.FAILED)
            self._logger.error("Creating managed instance %s failed: %s", run.identity, e)
            raise

        run.move_to(ProvisioningState.DONE)
        self._logger.info("Managed instance %s created", run.identity)
        return ProvisioningOutcome(
            state=run.state,
            identity=run.identity,
            instance=instance,
            desired_state=desired_state,
            transitions=tuple(run.transitions),
        )
