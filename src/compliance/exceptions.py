"""
Exception hierarchy for compliance evaluation.
"""

from __future__ import annotations


class ComplianceError(Exception):
    """Base class for errors raised while evaluating compliance."""

    pass


class UnsupportedPolicyKind(ComplianceError):
    """No checker is registered for the requested policy kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unsupported policy kind: {kind}")
        self.kind = kind


class InvalidPayloadFormat(ComplianceError):
    """Policy payload is malformed or a required field is missing."""

    pass


class OperationParseError(ComplianceError):
    """Error parsing an operations file."""

    pass
