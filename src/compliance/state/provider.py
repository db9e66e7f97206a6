"""
Device state provider interface.

The evaluation core reads endpoint state only through this protocol, so
platform backends and test fakes can be swapped freely.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class EncryptionStatus(Enum):
    """Storage encryption status as reported by the platform."""

    UNSUPPORTED = 0
    INACTIVE = 1
    ACTIVATING = 2
    ACTIVE = 3
    ACTIVE_DEFAULT_KEY = 4
    ACTIVE_PER_USER = 5

    @property
    def is_active(self) -> bool:
        """Any status other than unsupported or inactive counts as active."""
        return self not in (EncryptionStatus.UNSUPPORTED, EncryptionStatus.INACTIVE)

    @classmethod
    def from_value(cls, value: int | str) -> EncryptionStatus:
        """Look up a status by integer code or (case insensitive) name."""
        if isinstance(value, EncryptionStatus):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid encryption status: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls[value.strip().upper().replace("-", "_")]
            except KeyError:
                raise ValueError(f"Unknown encryption status: {value}") from None
        raise ValueError(f"Invalid encryption status: {value!r}")

    def __str__(self) -> str:
        return self.name.lower()


class DeviceStateProvider(Protocol):
    """Read-only accessors for current endpoint state."""

    def is_camera_disabled(self) -> bool:
        """Return the currently enforced camera-disabled flag."""
        ...

    def get_encryption_status(self) -> EncryptionStatus:
        """Return the storage encryption status."""
        ...

    def is_password_sufficient(self) -> bool:
        """Return whether the current passcode meets the policy."""
        ...

    def list_installed_apps(self) -> set[str]:
        """Return installed application package identifiers."""
        ...

    def find_wifi_configuration_by_ssid(self, ssid: str) -> bool:
        """Return whether a Wi-Fi configuration exists for the SSID."""
        ...
