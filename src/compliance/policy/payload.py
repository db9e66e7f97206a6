"""
Policy payload parsing.

Payloads arrive from the management server as untrusted, kind-specific
structured data. PayloadParser normalizes them into a string-keyed mapping
and exposes typed accessors that fail with InvalidPayloadFormat.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from compliance.exceptions import InvalidPayloadFormat


class PayloadParser:
    """Typed, fallible access to the fields of a policy payload."""

    def __init__(self, raw: Any) -> None:
        """
        Parse the raw payload.

        Args:
            raw: Mapping, JSON text (str or bytes), or None

        Raises:
            InvalidPayloadFormat: If the payload is not a structured object
        """
        self._data = self._normalize(raw)

    @staticmethod
    def _normalize(raw: Any) -> dict[str, Any]:
        if raw is None:
            return {}

        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidPayloadFormat("Payload is not valid UTF-8") from e

        if isinstance(raw, str):
            if not raw.strip():
                return {}
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise InvalidPayloadFormat(f"Invalid JSON format: {e.msg}") from e

        if not isinstance(raw, Mapping):
            raise InvalidPayloadFormat(
                f"Payload must be an object, got {type(raw).__name__}"
            )

        return dict(raw)

    def has(self, field: str) -> bool:
        """Check if a field is present and not null."""
        return self._data.get(field) is not None

    def get_optional_string(self, field: str) -> str | None:
        """
        Get a string field that may be absent.

        Returns:
            The value, or None if the field is absent or null

        Raises:
            InvalidPayloadFormat: If the field holds a non-string value
        """
        value = self._data.get(field)
        if value is None:
            return None
        if not isinstance(value, str):
            raise InvalidPayloadFormat(
                f"Field '{field}' must be a string, got {type(value).__name__}"
            )
        return value

    def get_string(self, field: str) -> str:
        """
        Get a required string field.

        Raises:
            InvalidPayloadFormat: If the field is absent, null or not a string
        """
        value = self.get_optional_string(field)
        if value is None:
            raise InvalidPayloadFormat(f"Missing required field '{field}'")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the parsed payload."""
        return dict(self._data)

    def __repr__(self) -> str:
        return f"PayloadParser({self._data!r})"
