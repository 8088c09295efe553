"""Capital adequacy metrics and stressed credit losses."""

from .ratios import CapitalAdequacyCalculator, CapitalResult, CapitalCompliance
from .losses import CreditLossModel

__all__ = ["CapitalAdequacyCalculator", "CapitalResult", "CapitalCompliance", "CreditLossModel"]
