"""Regulatory parameters supplied per calculation run."""

from typing import Optional, Dict
from pydantic import BaseModel, ConfigDict, Field


class RegulatoryParameters(BaseModel):
    """Applicable regulatory minimums for a jurisdiction and date."""

    model_config = ConfigDict(frozen=True)

    jurisdiction: Optional[str] = None
    effective_date: Optional[str] = None

    lcr_requirement: float = Field(default=1.00, ge=0, description="Minimum LCR as a fraction")
    tier1_minimum: float = Field(default=0.06, ge=0)
    total_capital_minimum: float = Field(default=0.08, ge=0)
    leverage_minimum: float = Field(default=0.03, ge=0)
    large_exposure_limit: float = Field(default=0.25, ge=0, description="Fraction of Tier 1 capital")

    def get_minimums(self) -> Dict[str, float]:
        return {
            "lcr": self.lcr_requirement,
            "tier1": self.tier1_minimum,
            "total_capital": self.total_capital_minimum,
            "leverage": self.leverage_minimum,
        }
