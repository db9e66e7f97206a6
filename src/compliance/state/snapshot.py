"""
Snapshot-backed device state provider.

Serves endpoint state from a static snapshot, either built in code or
loaded from a YAML file exported by the device agent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from compliance.state.provider import EncryptionStatus


logger = logging.getLogger(__name__)


@dataclass
class DeviceSnapshot:
    """Point-in-time view of the device state."""

    camera_disabled: bool = False
    encryption_status: EncryptionStatus = EncryptionStatus.UNSUPPORTED
    password_sufficient: bool = False
    installed_apps: set[str] = field(default_factory=set)
    wifi_ssids: set[str] = field(default_factory=set)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "camera_disabled": self.camera_disabled,
            "encryption_status": str(self.encryption_status),
            "password_sufficient": self.password_sufficient,
            "installed_apps": sorted(self.installed_apps),
            "wifi_ssids": sorted(self.wifi_ssids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceSnapshot:
        """
        Create from dictionary.

        Args:
            data: Snapshot fields; missing keys take their defaults

        Raises:
            ValueError: If a field has an unusable value
        """
        if not isinstance(data, dict):
            raise ValueError("Device snapshot must be a dictionary")

        status = data.get("encryption_status", EncryptionStatus.UNSUPPORTED)

        return cls(
            camera_disabled=_bool_field(data, "camera_disabled"),
            encryption_status=EncryptionStatus.from_value(status),
            password_sufficient=_bool_field(data, "password_sufficient"),
            installed_apps=_string_set(data.get("installed_apps"), "installed_apps"),
            wifi_ssids=_string_set(data.get("wifi_ssids"), "wifi_ssids"),
        )


def _bool_field(data: dict[str, Any], name: str) -> bool:
    """Read an optional boolean flag, rejecting strings and numbers."""
    value = data.get(name, False)
    if not isinstance(value, bool):
        raise ValueError(f"'{name}' must be a boolean, got {value!r}")
    return value


def _string_set(value: Any, name: str) -> set[str]:
    """Normalize a list of strings from the snapshot into a set."""
    if value is None:
        return set()
    if not isinstance(value, (list, tuple, set)):
        raise ValueError(f"'{name}' must be a list")
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"'{name}' entries must be strings, got {item!r}")
    return set(value)


class SnapshotStateProvider:
    """
    DeviceStateProvider implementation serving a DeviceSnapshot.

    The snapshot is never modified, so concurrent reads are safe.
    """

    def __init__(self, snapshot: DeviceSnapshot | None = None) -> None:
        self.snapshot = snapshot or DeviceSnapshot()

    @classmethod
    def from_file(cls, path: str | Path) -> SnapshotStateProvider:
        """Create a provider from a YAML snapshot file."""
        return cls(load_snapshot(path))

    def is_camera_disabled(self) -> bool:
        return self.snapshot.camera_disabled

    def get_encryption_status(self) -> EncryptionStatus:
        return self.snapshot.encryption_status

    def is_password_sufficient(self) -> bool:
        return self.snapshot.password_sufficient

    def list_installed_apps(self) -> set[str]:
        return set(self.snapshot.installed_apps)

    def find_wifi_configuration_by_ssid(self, ssid: str) -> bool:
        """
        Check for a configured network.

        Platforms store SSIDs wrapped in double quotes, so both the quoted
        and bare forms are accepted.
        """
        quoted = f'"{ssid}"'
        for configured in self.snapshot.wifi_ssids:
            if configured == ssid or configured == quoted:
                return True
        return False


def load_snapshot(path: str | Path) -> DeviceSnapshot:
    """
    Load a device snapshot from YAML file.

    Args:
        path: Path to snapshot YAML file

    Returns:
        DeviceSnapshot with parsed state

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the snapshot contains invalid values
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Snapshot file %s is empty, using defaults", path)
        return DeviceSnapshot()

    return DeviceSnapshot.from_dict(data)
