"""Domain port for tag validation."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional


class TagValidationPort(ABC):
    """Turns a raw tag mapping into a validated one."""

    @abstractmethod
    def validate(self, raw_tags: Optional[Mapping[Any, Any]]) -> dict[str, str]:
        """
        Validate raw tags.

        Raises:
            InvalidTagError: On duplicate or forbidden keys, oversized values, etc.
        """
