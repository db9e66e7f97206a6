"""
Pytest configuration and shared fixtures for Device Compliance tests.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import yaml

from compliance.state.provider import EncryptionStatus
from compliance.state.snapshot import DeviceSnapshot, SnapshotStateProvider


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clear_log_level_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the environment log level override out of tests."""
    monkeypatch.delenv("COMPLIANCE_LOG_LEVEL", raising=False)


@pytest.fixture
def snapshot() -> DeviceSnapshot:
    """A device with an encrypted disk, one app and one Wi-Fi network."""
    return DeviceSnapshot(
        camera_disabled=False,
        encryption_status=EncryptionStatus.ACTIVE,
        password_sufficient=True,
        installed_apps={"com.example.app", "org.mail.client"},
        wifi_ssids={'"OfficeNet"'},
    )


@pytest.fixture
def provider(snapshot: DeviceSnapshot) -> SnapshotStateProvider:
    """Provider serving the sample snapshot."""
    return SnapshotStateProvider(snapshot)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample configuration file."""
    config_path = temp_dir / "compliance.yaml"
    config_data = {
        "logging": {
            "level": "debug",
        },
        "engine": {
            "disabled_kinds": ["WIFI"],
        },
        "state": {
            "snapshot_file": str(temp_dir / "state.yaml"),
        },
    }
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def sample_snapshot(temp_dir: Path) -> Path:
    """Create a sample device snapshot file."""
    snapshot_path = temp_dir / "state.yaml"
    snapshot_data = {
        "camera_disabled": True,
        "encryption_status": "active",
        "password_sufficient": False,
        "installed_apps": ["com.example.app"],
        "wifi_ssids": ['"OfficeNet"'],
    }
    with open(snapshot_path, "w") as f:
        yaml.dump(snapshot_data, f)
    return snapshot_path


@pytest.fixture
def sample_operations(temp_dir: Path) -> Path:
    """Create a sample operations file, all compliant with sample_snapshot."""
    operations_path = temp_dir / "operations.yaml"
    operations_data = {
        "operations": [
            {"code": "CAMERA", "enabled": False},
            {"code": "ENCRYPT_STORAGE", "enabled": True},
            {
                "code": "INSTALL_APPLICATION",
                "enabled": True,
                "payload": {"identifier": "com.example.app", "name": "Example"},
            },
            {
                "code": "WIFI",
                "enabled": True,
                "payload": '{"ssid": "OfficeNet"}',
            },
        ]
    }
    with open(operations_path, "w") as f:
        yaml.dump(operations_data, f)
    return operations_path
