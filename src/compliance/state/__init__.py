"""
Device state access.

Defines the read-only provider protocol the evaluation core depends on and
a snapshot-backed implementation.
"""

from compliance.state.provider import DeviceStateProvider, EncryptionStatus
from compliance.state.snapshot import DeviceSnapshot, SnapshotStateProvider, load_snapshot

__all__ = [
    "DeviceStateProvider",
    "EncryptionStatus",
    "DeviceSnapshot",
    "SnapshotStateProvider",
    "load_snapshot",
]
