"""
Device Compliance - policy compliance evaluation for managed endpoints.

Decides whether a device satisfies a desired policy state by comparing the
policy payload against the current endpoint state reported by a read-only
state provider.
"""

__version__ = "0.1.0"
__author__ = "Device Compliance Contributors"

from compliance.config import ComplianceConfig, load_config

__all__ = ["ComplianceConfig", "load_config", "__version__"]
