"""
Policy checkers.

One checker per policy kind. Each is a plain function of
(desired_enabled, raw payload, state provider) returning a Verdict, and is
registered under its kind with the @checker decorator.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping

from compliance.exceptions import InvalidPayloadFormat
from compliance.policy.models import PolicyKind, Verdict
from compliance.policy.payload import PayloadParser
from compliance.state.provider import DeviceStateProvider


logger = logging.getLogger(__name__)

Checker = Callable[[bool, Any, DeviceStateProvider], Verdict]

# Payload field names
APP_IDENTIFIER = "identifier"
APP_NAME = "name"
WIFI_SSID = "ssid"

# Diagnostic messages
APP_INSTALL_MESSAGE = "Required application is not installed: "
APP_UNINSTALL_MESSAGE = "Prohibited application is installed: "
ENCRYPT_MESSAGE = "Device storage encryption does not match the policy"
WIFI_MESSAGE = "Required Wi-Fi configuration is not present on the device"

_registry: dict[str, Checker] = {}

DEFAULT_CHECKERS: Mapping[str, Checker] = MappingProxyType(_registry)


def checker(kind: str) -> Callable[[Checker], Checker]:
    """Register a function as the built-in checker for a policy kind."""

    def decorator(func: Checker) -> Checker:
        if kind in _registry:
            raise ValueError(f"Checker already registered for {kind}")
        _registry[kind] = func
        return func

    return decorator


@checker(PolicyKind.CAMERA)
def check_camera(
    desired_enabled: bool,
    payload: Any,
    provider: DeviceStateProvider,
) -> Verdict:
    """Camera must be allowed when enabled, and disabled otherwise."""
    camera_disabled = provider.is_camera_disabled()
    return Verdict(desired_enabled != camera_disabled)


def _parse_app_payload(payload: Any) -> tuple[str, str]:
    """
    Extract (identifier, display name) from an application payload.

    The name is looked up only after the identifier passed its presence
    check, so a payload without an identifier never has its name inspected.
    """
    parser = PayloadParser(payload)

    identifier = parser.get_optional_string(APP_IDENTIFIER)
    if identifier is None:
        raise InvalidPayloadFormat(f"Missing required field '{APP_IDENTIFIER}'")

    name = parser.get_string(APP_NAME)
    return identifier, name


def _is_app_installed(identifier: str, provider: DeviceStateProvider) -> bool:
    return identifier.strip() in provider.list_installed_apps()


@checker(PolicyKind.INSTALL_APPLICATION)
def check_install_application(
    desired_enabled: bool,
    payload: Any,
    provider: DeviceStateProvider,
) -> Verdict:
    """The application named in the payload must be installed."""
    identifier, name = _parse_app_payload(payload)

    if _is_app_installed(identifier, provider):
        return Verdict(True)
    return Verdict(False, APP_INSTALL_MESSAGE + name)


@checker(PolicyKind.UNINSTALL_APPLICATION)
def check_uninstall_application(
    desired_enabled: bool,
    payload: Any,
    provider: DeviceStateProvider,
) -> Verdict:
    """The application named in the payload must not be installed."""
    identifier, name = _parse_app_payload(payload)

    if not _is_app_installed(identifier, provider):
        return Verdict(True)
    return Verdict(False, APP_UNINSTALL_MESSAGE + name)


@checker(PolicyKind.ENCRYPT_STORAGE)
def check_encrypt_storage(
    desired_enabled: bool,
    payload: Any,
    provider: DeviceStateProvider,
) -> Verdict:
    """Storage encryption must be active exactly when the policy is enabled."""
    status = provider.get_encryption_status()
    logger.debug("Encryption status: %s", status)

    if desired_enabled == status.is_active:
        return Verdict(True)
    return Verdict(False, ENCRYPT_MESSAGE)


@checker(PolicyKind.PASSCODE_POLICY)
def check_passcode_policy(
    desired_enabled: bool,
    payload: Any,
    provider: DeviceStateProvider,
) -> Verdict:
    """Active passcode must satisfy the policy, whatever the enabled flag."""
    return Verdict(provider.is_password_sufficient())


@checker(PolicyKind.WIFI)
def check_wifi(
    desired_enabled: bool,
    payload: Any,
    provider: DeviceStateProvider,
) -> Verdict:
    """A Wi-Fi configuration for the payload's SSID must exist."""
    ssid = PayloadParser(payload).get_string(WIFI_SSID)

    if provider.find_wifi_configuration_by_ssid(ssid):
        return Verdict(True)
    return Verdict(False, WIFI_MESSAGE)
