"""Capital adequacy ratios and leverage calculations for the Reggio engine."""

from typing import Dict, List, Optional, Sequence
from pydantic import BaseModel, ConfigDict, Field
import logging

from ..core.buffers import RegulatoryBuffers
from ..core.capital import CapitalBase
from ..core.config import ReggioConfig
from ..core.parameters import RegulatoryParameters
from ..core.portfolio import Asset, AssetClass
from .losses import CreditLossModel

logger = logging.getLogger(__name__)


class CapitalCompliance(BaseModel):
    """Compliance of each capital ratio against its minimum."""

    model_config = ConfigDict(frozen=True)

    tier1_compliant: bool
    total_capital_compliant: bool
    leverage_compliant: bool

    def all_compliant(self) -> bool:
        return self.tier1_compliant and self.total_capital_compliant and self.leverage_compliant


class CapitalResult(BaseModel):
    """Results from capital adequacy calculations."""

    model_config = ConfigDict(frozen=True)

    risk_weighted_assets: float = Field(ge=0)
    total_exposure: float = Field(ge=0)

    # Capital after stress
    credit_losses: float = Field(ge=0)
    tier1_capital: float = Field(ge=0)
    tier2_capital: float = Field(ge=0)
    total_capital: float = Field(ge=0)

    # Ratios
    tier1_ratio: float = Field(ge=0, description="Tier 1 ratio")
    total_capital_ratio: float = Field(ge=0, description="Total capital ratio")
    leverage_ratio: float = Field(ge=0, description="Leverage ratio")

    # Minimum requirements
    tier1_minimum: float
    total_capital_minimum: float
    leverage_minimum: float

    compliance_status: CapitalCompliance

    # Audit breakdowns
    capital_requirements: Dict[str, float]
    buffers_and_surcharges: Dict[str, float]
    loss_breakdown: Dict[str, float] = Field(default_factory=dict)
    large_exposures: List[str] = Field(default_factory=list)

    def meets_minimum_requirements(self) -> bool:
        """Check if all ratios meet minimum requirements."""
        return self.compliance_status.all_compliant()

    def get_tier1_shortfall(self) -> float:
        """Tier 1 capital needed to reach the minimum (zero when compliant)."""
        return max(0.0, (self.tier1_minimum - self.tier1_ratio) * self.risk_weighted_assets)

    def get_binding_constraint(self) -> str:
        """Identify the binding constraint (lowest ratio relative to requirement)."""
        margins = {
            "Tier 1": self.tier1_ratio - self.tier1_minimum,
            "Total Capital": self.total_capital_ratio - self.total_capital_minimum,
            "Leverage": self.leverage_ratio - self.leverage_minimum,
        }

        return min(margins.items(), key=lambda x: x[1])[0]


class CapitalAdequacyCalculator:
    """
    Calculator for capital adequacy ratios.

    RWA is the sum of market value times Basel risk weight. Under stress,
    rating- and sector-based credit losses are deducted from Tier 1 before
    the ratios are taken. Every denominator is floored so the calculator
    always returns a result.
    """

    def __init__(self, config: Optional[ReggioConfig] = None,
                 loss_model: Optional[CreditLossModel] = None):
        self.config = config or ReggioConfig.load_default()
        self.loss_model = loss_model or CreditLossModel(self.config)
        self.buffers = RegulatoryBuffers.from_config(self.config)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def calculate_rwa(self, assets: Sequence[Asset]) -> float:
        """Risk-weighted assets, floored to avoid division by zero."""
        rwa = sum(asset.get_risk_weighted_amount() for asset in assets)
        return max(rwa, self.config.capital_floor)

    def calculate(self, assets: Sequence[Asset], capital_base: CapitalBase,
                  params: RegulatoryParameters,
                  apply_credit_losses: bool = False) -> CapitalResult:
        """Calculate all capital ratios."""
        rwa = self.calculate_rwa(assets)
        total_exposure = sum(asset.market_value for asset in assets)
        exposure_measure = max(total_exposure, self.config.capital_floor)

        loss_breakdown: Dict[str, float] = {}
        if apply_credit_losses:
            loss_breakdown = self.loss_model.calculate_losses(assets)
        credit_losses = sum(loss_breakdown.values())

        stressed_capital = capital_base.after_losses(credit_losses)
        tier1 = stressed_capital.tier1_capital
        tier2 = stressed_capital.tier2_capital

        tier1_ratio = tier1 / rwa
        total_capital_ratio = (tier1 + tier2) / rwa
        leverage_ratio = tier1 / exposure_measure

        compliance = CapitalCompliance(
            tier1_compliant=tier1_ratio >= params.tier1_minimum,
            total_capital_compliant=total_capital_ratio >= params.total_capital_minimum,
            leverage_compliant=leverage_ratio >= params.leverage_minimum,
        )

        result = CapitalResult(
            risk_weighted_assets=rwa,
            total_exposure=total_exposure,
            credit_losses=credit_losses,
            tier1_capital=tier1,
            tier2_capital=tier2,
            total_capital=tier1 + tier2,
            tier1_ratio=tier1_ratio,
            total_capital_ratio=total_capital_ratio,
            leverage_ratio=leverage_ratio,
            tier1_minimum=params.tier1_minimum,
            total_capital_minimum=params.total_capital_minimum,
            leverage_minimum=params.leverage_minimum,
            compliance_status=compliance,
            capital_requirements={
                "tier1_minimum": rwa * params.tier1_minimum,
                "total_capital_minimum": rwa * params.total_capital_minimum,
                "leverage_minimum": total_exposure * params.leverage_minimum,
            },
            buffers_and_surcharges=self.buffers.get_buffer_amounts(rwa),
            loss_breakdown=loss_breakdown,
            large_exposures=self._find_large_exposures(assets, tier1, params),
        )

        self.logger.debug(
            f"Capital ratios: Tier 1 {tier1_ratio:.2%}, total {total_capital_ratio:.2%}, "
            f"leverage {leverage_ratio:.2%} (RWA {rwa:,.0f}, losses {credit_losses:,.0f})"
        )
        return result

    def _find_large_exposures(self, assets: Sequence[Asset], tier1_capital: float,
                              params: RegulatoryParameters) -> List[str]:
        """Assets whose value exceeds the large-exposure limit of Tier 1 capital.

        Sovereign holdings are exempt from the large-exposure framework.
        """
        if params.large_exposure_limit <= 0:
            return []

        limit = params.large_exposure_limit * tier1_capital
        return [
            asset.asset_id for asset in assets
            if asset.asset_class != AssetClass.SOVEREIGN and asset.market_value > limit
        ]
