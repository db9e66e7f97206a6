"""
Compliance Engine.

Dispatches evaluation requests to the checker registered for their policy
kind and wraps the verdict into a ComplianceResult.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

from compliance.exceptions import UnsupportedPolicyKind
from compliance.policy.checkers import DEFAULT_CHECKERS, Checker
from compliance.policy.models import ComplianceResult, EvaluationRequest

if TYPE_CHECKING:
    from compliance.config import ComplianceConfig
    from compliance.state.provider import DeviceStateProvider


logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Main compliance evaluation engine.

    The kind-to-checker mapping is fixed at construction and read-only
    afterwards; the engine keeps no other state, so evaluate() may be called
    from several threads when the provider allows concurrent reads.
    """

    def __init__(
        self,
        provider: DeviceStateProvider,
        checkers: Mapping[str, Checker] | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            provider: Source of current device state
            checkers: Kind-to-checker mapping, defaults to the built-in set
        """
        self.provider = provider
        self._checkers: Mapping[str, Checker] = MappingProxyType(
            dict(DEFAULT_CHECKERS if checkers is None else checkers)
        )

    @classmethod
    def from_config(
        cls,
        config: ComplianceConfig,
        provider: DeviceStateProvider,
    ) -> ComplianceEngine:
        """
        Create an engine honoring the configured disabled kinds.

        Args:
            config: Loaded configuration
            provider: Source of current device state

        Returns:
            Configured ComplianceEngine
        """
        disabled = set(config.engine.disabled_kinds)
        checkers = {
            kind: func for kind, func in DEFAULT_CHECKERS.items()
            if kind not in disabled
        }
        if disabled:
            logger.info("Disabled policy kinds: %s", ", ".join(sorted(disabled)))
        return cls(provider, checkers)

    @property
    def checkers(self) -> Mapping[str, Checker]:
        """Read-only view of the registered checkers."""
        return self._checkers

    def extend(self, checkers: Mapping[str, Checker]) -> ComplianceEngine:
        """
        Return a new engine with additional or replacement checkers.

        Args:
            checkers: Kind-to-checker mapping layered over the current one
        """
        merged = dict(self._checkers)
        merged.update(checkers)
        return ComplianceEngine(self.provider, merged)

    def supported_kinds(self) -> list[str]:
        """List registered policy kinds."""
        return sorted(self._checkers)

    def evaluate(self, request: EvaluationRequest) -> ComplianceResult:
        """
        Evaluate a single policy against the device.

        Args:
            request: Policy to evaluate

        Returns:
            ComplianceResult echoing the request kind

        Raises:
            UnsupportedPolicyKind: If no checker is registered for the kind
            InvalidPayloadFormat: If the checker cannot parse the payload
        """
        func = self._checkers.get(request.kind)
        if func is None:
            logger.warning("No checker registered for policy kind %s", request.kind)
            raise UnsupportedPolicyKind(request.kind)

        verdict = func(request.desired_enabled, request.payload, self.provider)

        result = ComplianceResult(
            feature_code=request.kind,
            compliant=verdict.compliant,
            message=None if verdict.compliant else verdict.message,
        )

        logger.debug(
            "Policy %s: %s%s",
            request.kind,
            "compliant" if result.compliant else "non-compliant",
            f" ({result.message})" if result.message else "",
        )
        return result

    def evaluate_all(
        self,
        requests: Iterable[EvaluationRequest],
    ) -> list[ComplianceResult]:
        """
        Evaluate each request independently, in order.

        The first error stops evaluation and propagates.
        """
        return [self.evaluate(request) for request in requests]
