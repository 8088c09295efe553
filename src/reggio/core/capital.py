"""Capital base definition for the Reggio stress-testing engine."""

from typing import Dict
from pydantic import BaseModel, ConfigDict, Field


class CapitalBase(BaseModel):
    """Pre-stress regulatory capital stock."""

    model_config = ConfigDict(frozen=True)

    tier1_capital: float = Field(default=0, ge=0, description="Tier 1 capital in base currency")
    tier2_capital: float = Field(default=0, ge=0, description="Tier 2 capital in base currency")

    def get_total_capital(self) -> float:
        """Calculate total regulatory capital (Tier 1 + Tier 2)."""
        return self.tier1_capital + self.tier2_capital

    def after_losses(self, credit_losses: float) -> "CapitalBase":
        """Return the capital base with ``credit_losses`` absorbed by Tier 1.

        Tier 1 never goes below zero; Tier 2 is left untouched.
        """
        return self.model_copy(update={
            "tier1_capital": max(0.0, self.tier1_capital - credit_losses)
        })

    def get_capital_summary(self) -> Dict[str, float]:
        return {
            "tier1_capital": self.tier1_capital,
            "tier2_capital": self.tier2_capital,
            "total_capital": self.get_total_capital(),
        }
