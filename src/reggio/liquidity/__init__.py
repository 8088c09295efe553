"""Liquidity risk calculations for the Reggio stress-testing engine."""

from .hqla import HQLACalculator, HQLABreakdown
from .outflows import OutflowCalculator, OutflowBreakdown
from .lcr import LCRCalculator, LCRResult, ComplianceStatus

__all__ = [
    "HQLACalculator",
    "HQLABreakdown",
    "OutflowCalculator",
    "OutflowBreakdown",
    "LCRCalculator",
    "LCRResult",
    "ComplianceStatus",
]
