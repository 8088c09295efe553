"""Financial impact of regulatory thresholds against the current position."""

from enum import Enum
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
import logging

from ..core.config import ReggioConfig
from ..liquidity.lcr import ComplianceStatus, LCRResult
from ..metrics.ratios import CapitalResult
from ..reporting.formatters import format_currency

logger = logging.getLogger(__name__)


class ImpactMetric(str, Enum):
    """Quantitative metric a regulatory requirement constrains."""

    LCR_MINIMUM = "LCR_MINIMUM"
    TIER1_MINIMUM = "TIER1_MINIMUM"
    LEVERAGE_MINIMUM = "LEVERAGE_MINIMUM"
    RWA_MULTIPLIER = "RWA_MULTIPLIER"
    COST_PER_ANNUM = "COST_PER_ANNUM"
    BUFFER_REQUIREMENT = "BUFFER_REQUIREMENT"


class RiskArea(str, Enum):
    """Risk area a requirement is tagged with."""

    LIQUIDITY = "LIQUIDITY"
    CAPITAL = "CAPITAL"
    MARKET = "MARKET"
    CREDIT = "CREDIT"
    OPERATIONAL = "OPERATIONAL"
    CONDUCT = "CONDUCT"
    RISK_MANAGEMENT = "RISK_MANAGEMENT"


class RegulatoryRequirement(BaseModel):
    """Numeric threshold extracted from regulatory text."""

    model_config = ConfigDict(frozen=True)

    requirement_id: str = "requirement"
    metric: Union[ImpactMetric, str]
    threshold_value: float
    risk_area: Optional[Union[RiskArea, str]] = None
    confidence_score: float = Field(default=1.0, ge=0, le=1)
    effective_date: Optional[str] = None
    description: Optional[str] = None


class CurrentPosition(BaseModel):
    """Unshocked ratios and their bases, as used by impact calculations."""

    model_config = ConfigDict(frozen=True)

    lcr_ratio: float = Field(ge=0)
    net_outflows: float = Field(ge=0)
    lcr_requirement: float = Field(default=1.0, ge=0)

    tier1_ratio: float = Field(default=0, ge=0)
    tier1_minimum: float = Field(default=0.06, ge=0)
    risk_weighted_assets: float = Field(default=0, ge=0)

    leverage_ratio: float = Field(default=0, ge=0)
    total_exposure: float = Field(default=0, ge=0)

    @classmethod
    def from_results(cls, lcr_result: LCRResult, capital_result: CapitalResult) -> "CurrentPosition":
        return cls(
            lcr_ratio=lcr_result.lcr_ratio,
            net_outflows=lcr_result.net_cash_outflows,
            lcr_requirement=lcr_result.requirement,
            tier1_ratio=capital_result.tier1_ratio,
            tier1_minimum=capital_result.tier1_minimum,
            risk_weighted_assets=capital_result.risk_weighted_assets,
            leverage_ratio=capital_result.leverage_ratio,
            total_exposure=capital_result.total_exposure,
        )


class ImpactAssessment(BaseModel):
    """Compliance and cost consequence of one requirement."""

    model_config = ConfigDict(frozen=True)

    requirement_id: str
    metric: str
    risk_area: Optional[str] = None
    status: ComplianceStatus
    shortfall_or_surplus: float = Field(description="Negative for a shortfall, positive for a surplus")
    annual_cost_estimate: float = Field(ge=0)
    recommended_actions: List[str] = Field(default_factory=list)

    @property
    def shortfall(self) -> float:
        return max(0.0, -self.shortfall_or_surplus)


class ThresholdImpactCalculator:
    """
    Translates a regulatory threshold into a shortfall or surplus amount and
    an annual cost estimate.

    Liquidity shortfalls are costed at the funding cost of holding extra HQLA,
    capital shortfalls at the cost of equity. Unrecognised metrics yield a
    COMPLIANT, zero-impact assessment so a single unknown requirement never
    blocks a wider impact report.
    """

    def __init__(self, config: Optional[ReggioConfig] = None):
        self.config = config or ReggioConfig.load_default()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.hqla_funding_cost = self.config.get_impact_assumption("hqla_funding_cost")
        self.cost_of_equity = self.config.get_impact_assumption("cost_of_equity")
        self.lcr_at_risk_margin = self.config.get_impact_assumption("lcr_at_risk_margin")
        self.capital_at_risk_margin = self.config.get_impact_assumption("capital_at_risk_margin")
        self.currency_symbol = self.config.get_impact_assumption("currency_symbol")

    def assess(self, requirement: RegulatoryRequirement, position: CurrentPosition) -> ImpactAssessment:
        """Assess a single requirement against the current position."""
        metric = _value(requirement.metric)
        threshold = requirement.threshold_value

        if metric == ImpactMetric.LCR_MINIMUM.value:
            return self._assess_liquidity(requirement, position, threshold)

        if metric == ImpactMetric.TIER1_MINIMUM.value:
            return self._assess_tier1(requirement, position, threshold)

        if metric == ImpactMetric.LEVERAGE_MINIMUM.value:
            return self._assess_leverage(requirement, position, threshold)

        if metric == ImpactMetric.COST_PER_ANNUM.value:
            return self._build(requirement, ComplianceStatus.COMPLIANT, 0.0, threshold, [
                "Budget for additional compliance costs",
                "Review operational efficiency opportunities",
            ])

        if metric == ImpactMetric.BUFFER_REQUIREMENT.value:
            return self._assess_buffer(requirement, position, threshold)

        self.logger.warning(
            f"Unrecognised requirement metric {metric!r} on {requirement.requirement_id}; reporting no impact"
        )
        return self._no_impact(requirement)

    def assess_all(self, requirements: List[RegulatoryRequirement],
                   position: CurrentPosition) -> List[ImpactAssessment]:
        return [self.assess(requirement, position) for requirement in requirements]

    def _assess_liquidity(self, requirement: RegulatoryRequirement, position: CurrentPosition,
                          threshold: float, action: str = "Increase HQLA by") -> ImpactAssessment:
        gap = (position.lcr_ratio - threshold) * position.net_outflows

        if position.lcr_ratio < threshold:
            shortfall = -gap
            return self._build(requirement, ComplianceStatus.NON_COMPLIANT, gap,
                               shortfall * self.hqla_funding_cost, [
                                   f"{action} {self._money(shortfall)}",
                                   "Review deposit mix to reduce outflow rates",
                                   "Consider secured funding alternatives",
                               ])

        status = self._headroom_status(position.lcr_ratio - threshold, self.lcr_at_risk_margin)
        return self._build(requirement, status, gap, 0.0, self._surplus_actions(status, gap))

    def _assess_tier1(self, requirement: RegulatoryRequirement, position: CurrentPosition,
                      threshold: float, action: str = "Raise") -> ImpactAssessment:
        gap = (position.tier1_ratio - threshold) * position.risk_weighted_assets

        if position.tier1_ratio < threshold:
            shortfall = -gap
            return self._build(requirement, ComplianceStatus.NON_COMPLIANT, gap,
                               shortfall * self.cost_of_equity, [
                                   f"{action} {self._money(shortfall)} in Tier 1 capital",
                                   "Consider asset optimisation to reduce RWA",
                                   "Review dividend policy",
                               ])

        status = self._headroom_status(position.tier1_ratio - threshold, self.capital_at_risk_margin)
        return self._build(requirement, status, gap, 0.0, self._surplus_actions(status, gap))

    def _assess_leverage(self, requirement: RegulatoryRequirement, position: CurrentPosition,
                         threshold: float) -> ImpactAssessment:
        gap = (position.leverage_ratio - threshold) * position.total_exposure

        if position.leverage_ratio < threshold:
            shortfall = -gap
            return self._build(requirement, ComplianceStatus.NON_COMPLIANT, gap,
                               shortfall * self.cost_of_equity, [
                                   f"Raise {self._money(shortfall)} in Tier 1 capital",
                                   "Reduce the leverage exposure measure",
                               ])

        status = self._headroom_status(position.leverage_ratio - threshold, self.capital_at_risk_margin)
        return self._build(requirement, status, gap, 0.0, self._surplus_actions(status, gap))

    def _assess_buffer(self, requirement: RegulatoryRequirement, position: CurrentPosition,
                       buffer: float) -> ImpactAssessment:
        """Route a buffer add-on to the liquidity or capital formula by risk area."""
        risk_area = _value(requirement.risk_area) if requirement.risk_area is not None else None

        if risk_area == RiskArea.LIQUIDITY.value:
            return self._assess_liquidity(
                requirement, position, position.lcr_requirement + buffer,
                action="Build additional liquidity buffer of",
            )

        if risk_area == RiskArea.CAPITAL.value:
            return self._assess_tier1(
                requirement, position, position.tier1_minimum + buffer,
                action="Build additional capital buffer by raising",
            )

        self.logger.warning(
            f"Buffer requirement {requirement.requirement_id} has no liquidity/capital risk area; reporting no impact"
        )
        return self._no_impact(requirement)

    def _headroom_status(self, headroom: float, margin: float) -> ComplianceStatus:
        return ComplianceStatus.AT_RISK if headroom < margin else ComplianceStatus.COMPLIANT

    def _surplus_actions(self, status: ComplianceStatus, surplus: float) -> List[str]:
        if status == ComplianceStatus.AT_RISK:
            return [
                f"Headroom of {self._money(surplus)} is thin; stress test the position against the new minimum",
            ]
        return [f"No action required; surplus of {self._money(surplus)} over the new minimum"]

    def _no_impact(self, requirement: RegulatoryRequirement) -> ImpactAssessment:
        return self._build(requirement, ComplianceStatus.COMPLIANT, 0.0, 0.0, [])

    def _build(self, requirement: RegulatoryRequirement, status: ComplianceStatus,
               shortfall_or_surplus: float, annual_cost: float,
               actions: List[str]) -> ImpactAssessment:
        return ImpactAssessment(
            requirement_id=requirement.requirement_id,
            metric=_value(requirement.metric),
            risk_area=_value(requirement.risk_area) if requirement.risk_area is not None else None,
            status=status,
            shortfall_or_surplus=shortfall_or_surplus,
            annual_cost_estimate=max(0.0, annual_cost),
            recommended_actions=actions,
        )

    def _money(self, amount: float) -> str:
        return format_currency(abs(amount), self.currency_symbol)


def _value(member: Union[Enum, str]) -> str:
    return member.value if isinstance(member, Enum) else str(member).upper()
