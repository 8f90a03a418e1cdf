"""Result of asking the control plane whether an instance already exists."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlmi_broker.domain.managed_instance.aggregate import ManagedInstance


class ProbeOutcome(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"
    TRANSIENT_ERROR = "transient_error"


@dataclass(frozen=True)
class ProbeResult:
    """One of Absent, Present(instance) or TransientError(error)."""

    outcome: ProbeOutcome
    instance: Optional[ManagedInstance] = None
    error: Optional[Exception] = None

    @classmethod
    def absent(cls) -> "ProbeResult":
        return cls(ProbeOutcome.ABSENT)

    @classmethod
    def present(cls, instance: ManagedInstance) -> "ProbeResult":
        return cls(ProbeOutcome.PRESENT, instance=instance)

    @classmethod
    def transient_error(cls, error: Exception) -> "ProbeResult":
        return cls(ProbeOutcome.TRANSIENT_ERROR, error=error)
