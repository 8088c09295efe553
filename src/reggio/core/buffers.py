"""Regulatory capital buffers reported alongside capital adequacy results."""

from enum import Enum
from typing import Dict
from pydantic import BaseModel, ConfigDict, Field

from .config import ReggioConfig


class BufferType(str, Enum):
    """Types of regulatory capital buffers."""

    CONSERVATION = "conservation"           # Capital Conservation Buffer (2.5%)
    COUNTERCYCLICAL = "countercyclical"    # Countercyclical Buffer
    SYSTEMIC_RISK = "systemic_risk"        # Systemic Risk Buffer


class RegulatoryBuffers(BaseModel):
    """Buffer rates applied on top of the capital minimums."""

    model_config = ConfigDict(frozen=True)

    conservation_buffer: float = Field(default=0.025, ge=0, le=0.1, description="Conservation buffer (typically 2.5%)")
    countercyclical_buffer: float = Field(default=0.01, ge=0, le=0.025, description="CCyB (0-2.5%)")
    systemic_risk_buffer: float = Field(default=0.005, ge=0, le=0.05, description="SRB (up to 5%)")

    @classmethod
    def from_config(cls, config: ReggioConfig) -> "RegulatoryBuffers":
        return cls(
            conservation_buffer=config.get_buffer_rate(BufferType.CONSERVATION.value),
            countercyclical_buffer=config.get_buffer_rate(BufferType.COUNTERCYCLICAL.value),
            systemic_risk_buffer=config.get_buffer_rate(BufferType.SYSTEMIC_RISK.value),
        )

    def get_total_buffer_requirement(self) -> float:
        """Calculate total buffer requirement as a fraction of RWA."""
        return (
            self.conservation_buffer +
            self.countercyclical_buffer +
            self.systemic_risk_buffer
        )

    def get_buffer_amounts(self, total_rwa: float) -> Dict[str, float]:
        """Buffer requirements in currency for a given RWA."""
        return {
            "capital_conservation_buffer": total_rwa * self.conservation_buffer,
            "countercyclical_buffer": total_rwa * self.countercyclical_buffer,
            "systemic_risk_buffer": total_rwa * self.systemic_risk_buffer,
            "total_buffer_requirement": total_rwa * self.get_total_buffer_requirement(),
        }
