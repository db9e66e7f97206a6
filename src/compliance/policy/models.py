"""
Policy evaluation data models.

Defines the request a caller submits for evaluation and the compliance
result the engine hands back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple


class PolicyKind:
    """Built-in policy operation codes."""

    CAMERA = "CAMERA"
    INSTALL_APPLICATION = "INSTALL_APPLICATION"
    UNINSTALL_APPLICATION = "UNINSTALL_APPLICATION"
    ENCRYPT_STORAGE = "ENCRYPT_STORAGE"
    PASSCODE_POLICY = "PASSCODE_POLICY"
    WIFI = "WIFI"

    @classmethod
    def all(cls) -> list[str]:
        """Return every built-in kind."""
        return [
            cls.CAMERA,
            cls.INSTALL_APPLICATION,
            cls.UNINSTALL_APPLICATION,
            cls.ENCRYPT_STORAGE,
            cls.PASSCODE_POLICY,
            cls.WIFI,
        ]


@dataclass(frozen=True)
class EvaluationRequest:
    """
    A single policy to evaluate against the device.

    The payload is kept opaque here: it may be a mapping, the JSON text the
    management server sent, or None. Checkers parse it on demand.
    """

    kind: str
    desired_enabled: bool = False
    payload: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the operation wire shape."""
        return {
            "code": self.kind,
            "enabled": self.desired_enabled,
            "payload": self.payload,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvaluationRequest:
        """Create from the operation wire shape."""
        return cls(
            kind=data["code"],
            desired_enabled=bool(data.get("enabled", False)),
            payload=data.get("payload"),
        )


class Verdict(NamedTuple):
    """Outcome a checker reports before the engine wraps it."""

    compliant: bool
    message: str | None = None


@dataclass(frozen=True)
class ComplianceResult:
    """
    Result of evaluating one policy.

    A compliant result never carries a message.
    """

    feature_code: str
    compliant: bool
    message: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.compliant and self.message is not None:
            raise ValueError("Compliant result must not carry a message")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting an unset message."""
        result: dict[str, Any] = {
            "featureCode": self.feature_code,
            "compliant": self.compliant,
        }
        if self.message is not None:
            result["message"] = self.message
        return result
