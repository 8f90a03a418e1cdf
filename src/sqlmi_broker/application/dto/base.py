"""Base DTO classes for application layer."""

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BaseCommand(BaseModel):
    """Base class for commands."""

    model_config = ConfigDict(frozen=True)

    command_id: str = Field(default_factory=lambda: f"cmd-{uuid.uuid4()}")
    metadata: dict[str, Any] = Field(default_factory=dict)
