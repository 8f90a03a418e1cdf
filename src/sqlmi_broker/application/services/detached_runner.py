"""Background execution of provisioning runs."""

import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from sqlmi_broker.application.dto.commands import CreateManagedInstanceCommand
from sqlmi_broker.application.services.provisioning_orchestrator import (
    ProvisioningOrchestrator,
)
from sqlmi_broker.domain.base.ports import LoggingPort
from sqlmi_broker.domain.managed_instance.provisioning import (
    ProvisioningOutcome,
    ProvisioningState,
)
from sqlmi_broker.domain.managed_instance.value_objects import ResourceIdentity


class ProvisioningJob:
    """Handle to a provisioning run executing on a worker thread."""

    def __init__(self, identity: ResourceIdentity) -> None:
        self.job_id = f"job-{uuid.uuid4()}"
        self.identity = identity
        self._cancel_event = threading.Event()
        self._state = ProvisioningState.START
        self._lock = threading.Lock()
        self._future: Optional[Future] = None

    @property
    def status(self) -> ProvisioningState:
        with self._lock:
            return self._state

    def _record_transition(self, state: ProvisioningState) -> None:
        with self._lock:
            self._state = state

    def _enter_phase(self, next_phase: ProvisioningState) -> bool:
        """Test for cancellation and record the next phase under one lock."""
        with self._lock:
            if self._cancel_event.is_set():
                return False
            self._state = next_phase
            return True

    def _attach(self, future: Future) -> None:
        self._future = future

    def cancel(self) -> bool:
        """
        Request cancellation.

        Returns False when the create call has already been submitted or the
        run is finished; the request is then ignored.
        """
        with self._lock:
            if self._state is ProvisioningState.PERSISTING or self._state.is_terminal:
                return False
            self._cancel_event.set()
            return True

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def result(self, timeout: Optional[float] = None) -> ProvisioningOutcome:
        """Wait for the run and return its outcome, re-raising its error."""
        if self._future is None:
            raise RuntimeError(f"Job {self.job_id} was never started")
        return self._future.result(timeout=timeout)

    def exception(self, timeout: Optional[float] = None) -> Optional[BaseException]:
        if self._future is None:
            raise RuntimeError(f"Job {self.job_id} was never started")
        return self._future.exception(timeout=timeout)


class DetachedProvisioningRunner:
    """Runs orchestrator invocations on a thread pool and hands back job handles."""

    def __init__(
        self,
        orchestrator: ProvisioningOrchestrator,
        logger: LoggingPort,
        max_workers: int = 4,
    ) -> None:
        self._orchestrator = orchestrator
        self._logger = logger
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="sqlmi-provision"
        )

    def submit(self, command: CreateManagedInstanceCommand) -> ProvisioningJob:
        """Start provisioning in the background and return immediately."""
        job = ProvisioningJob(command.identity)
        future = self._executor.submit(
            self._orchestrator.provision,
            command,
            on_transition=job._record_transition,
            checkpoint=job._enter_phase,
        )
        job._attach(future)
        self._logger.info("Started job %s for managed instance %s", job.job_id, job.identity)
        return job

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "DetachedProvisioningRunner":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)
