"""
Policy evaluation.

Dispatches policy operations to per-kind checkers and reports whether the
device complies with each one.
"""

from compliance.policy.checkers import DEFAULT_CHECKERS, Checker, checker
from compliance.policy.engine import ComplianceEngine
from compliance.policy.models import ComplianceResult, EvaluationRequest, PolicyKind, Verdict
from compliance.policy.parser import load_requests, parse_operation, parse_requests
from compliance.policy.payload import PayloadParser

__all__ = [
    # Checkers
    "DEFAULT_CHECKERS",
    "Checker",
    "checker",
    # Engine
    "ComplianceEngine",
    # Models
    "ComplianceResult",
    "EvaluationRequest",
    "PolicyKind",
    "Verdict",
    # Parser
    "load_requests",
    "parse_operation",
    "parse_requests",
    "PayloadParser",
]
