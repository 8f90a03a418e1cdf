"""Azure resource tag validation."""

from collections.abc import Mapping
from typing import Any, Optional

from sqlmi_broker.domain.base.ports.tag_validation_port import TagValidationPort
from sqlmi_broker.domain.managed_instance.exceptions import InvalidTagError

MAX_TAG_COUNT = 50
MAX_KEY_LENGTH = 512
MAX_VALUE_LENGTH = 256
FORBIDDEN_KEY_CHARACTERS = frozenset("<>%&\\?/")
RESERVED_KEY_PREFIXES = ("microsoft", "azure", "windows")


class AzureTagValidator(TagValidationPort):
    """Validates tags against Azure Resource Manager tag rules."""

    def validate(self, raw_tags: Optional[Mapping[Any, Any]]) -> dict[str, str]:
        if not raw_tags:
            return {}

        if len(raw_tags) > MAX_TAG_COUNT:
            raise InvalidTagError(
                f"At most {MAX_TAG_COUNT} tags are allowed, got {len(raw_tags)}"
            )

        tags: dict[str, str] = {}
        seen: dict[str, str] = {}
        for raw_key, raw_value in raw_tags.items():
            key = self._validate_key(raw_key)
            folded = key.casefold()
            if folded in seen:
                # ARM tag names are case-insensitive
                raise InvalidTagError(
                    f"Duplicate tag key '{key}' (conflicts with '{seen[folded]}')", key
                )
            seen[folded] = key
            tags[key] = self._validate_value(key, raw_value)
        return tags

    @staticmethod
    def _validate_key(raw_key: Any) -> str:
        key = "" if raw_key is None else str(raw_key).strip()
        if not key:
            raise InvalidTagError("Tag key must not be empty", key)
        if len(key) > MAX_KEY_LENGTH:
            raise InvalidTagError(
                f"Tag key '{key[:32]}...' exceeds {MAX_KEY_LENGTH} characters", key
            )
        bad = sorted(FORBIDDEN_KEY_CHARACTERS.intersection(key))
        if bad:
            raise InvalidTagError(
                f"Tag key '{key}' contains forbidden characters: {' '.join(bad)}", key
            )
        if key.lower().startswith(RESERVED_KEY_PREFIXES):
            raise InvalidTagError(f"Tag key '{key}' uses a reserved prefix", key)
        return key

    @staticmethod
    def _validate_value(key: str, raw_value: Any) -> str:
        value = "" if raw_value is None else str(raw_value)
        if len(value) > MAX_VALUE_LENGTH:
            raise InvalidTagError(
                f"Value of tag '{key}' exceeds {MAX_VALUE_LENGTH} characters", key
            )
        return value
