"""Aggregate financial impact of a regulatory change across its requirements."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
import logging

from ..core.config import ReggioConfig
from ..liquidity.lcr import ComplianceStatus
from .impact import (
    CurrentPosition, ImpactAssessment, ImpactMetric, RegulatoryRequirement,
    RiskArea, ThresholdImpactCalculator, _value,
)

logger = logging.getLogger(__name__)


class ChangeSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ImplementationComplexity(str, Enum):
    SIMPLE = "SIMPLE"
    MODERATE = "MODERATE"
    COMPLEX = "COMPLEX"
    MAJOR_TRANSFORMATION = "MAJOR_TRANSFORMATION"


class TotalFinancialImpact(BaseModel):
    capital_impact: float = 0.0
    liquidity_impact: float = 0.0
    operational_cost_impact: float = 0.0
    total_one_time_cost: float = 0.0
    total_annual_cost: float = 0.0


class StrategicAssessment(BaseModel):
    overall_severity: ChangeSeverity
    implementation_complexity: ImplementationComplexity
    recommended_timeline: str
    key_risks: List[str] = Field(default_factory=list)


class RegulatoryChangeImpact(BaseModel):
    """Impact report for one regulatory change."""

    model_config = ConfigDict(frozen=True)

    regulation_id: str
    regulation_title: str
    effective_date: Optional[str] = None
    assessments: List[ImpactAssessment]
    total_financial_impact: TotalFinancialImpact
    strategic_assessment: StrategicAssessment

    def get_non_compliant(self) -> List[ImpactAssessment]:
        return [a for a in self.assessments if a.status == ComplianceStatus.NON_COMPLIANT]


class RegulatoryChangeAnalyzer:
    """Runs threshold-impact assessments for every requirement of a change and rolls them up."""

    # (total cost threshold, non-compliant count threshold, severity, timeline)
    SEVERITY_BANDS = [
        (100_000_000, 5, ChangeSeverity.CRITICAL, "12-18 months"),
        (50_000_000, 2, ChangeSeverity.HIGH, "9-12 months"),
        (10_000_000, 0, ChangeSeverity.MEDIUM, "6-9 months"),
    ]
    MATERIAL_AMOUNT = 50_000_000
    MATERIAL_OPERATIONAL_COST = 10_000_000

    def __init__(self, config: Optional[ReggioConfig] = None,
                 impact_calculator: Optional[ThresholdImpactCalculator] = None):
        self.config = config or ReggioConfig.load_default()
        self.impact_calculator = impact_calculator or ThresholdImpactCalculator(self.config)
        self.implementation_cost_rate = self.config.get_impact_assumption("implementation_cost_rate")
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def analyze(self, requirements: List[RegulatoryRequirement], position: CurrentPosition,
                regulation_id: str, regulation_title: str,
                effective_date: Optional[str] = None) -> RegulatoryChangeImpact:
        """Assess and aggregate all requirements of a regulatory change."""
        self.logger.info(f"Analysing regulatory change {regulation_id} ({len(requirements)} requirements)")

        assessments = self.impact_calculator.assess_all(requirements, position)
        totals = self._aggregate(requirements, assessments)

        return RegulatoryChangeImpact(
            regulation_id=regulation_id,
            regulation_title=regulation_title,
            effective_date=effective_date,
            assessments=assessments,
            total_financial_impact=totals,
            strategic_assessment=self._assess_strategic_impact(requirements, assessments, totals),
        )

    def _aggregate(self, requirements: List[RegulatoryRequirement],
                   assessments: List[ImpactAssessment]) -> TotalFinancialImpact:
        totals = TotalFinancialImpact()

        for requirement, assessment in zip(requirements, assessments):
            area = self._risk_area(requirement)
            if area == RiskArea.CAPITAL:
                totals.capital_impact += assessment.shortfall
            elif area == RiskArea.LIQUIDITY:
                totals.liquidity_impact += assessment.shortfall
            else:
                totals.operational_cost_impact += assessment.annual_cost_estimate

            totals.total_annual_cost += assessment.annual_cost_estimate

        totals.total_one_time_cost = (
            (totals.capital_impact + totals.liquidity_impact) * self.implementation_cost_rate
        )
        return totals

    def _risk_area(self, requirement: RegulatoryRequirement) -> Optional[RiskArea]:
        """Tagged risk area, or the one implied by the metric."""
        if requirement.risk_area is not None:
            try:
                return RiskArea(_value(requirement.risk_area))
            except ValueError:
                return None

        metric = _value(requirement.metric)
        if metric == ImpactMetric.LCR_MINIMUM.value:
            return RiskArea.LIQUIDITY
        if metric in (ImpactMetric.TIER1_MINIMUM.value, ImpactMetric.LEVERAGE_MINIMUM.value):
            return RiskArea.CAPITAL
        return None

    def _assess_strategic_impact(self, requirements: List[RegulatoryRequirement],
                                 assessments: List[ImpactAssessment],
                                 totals: TotalFinancialImpact) -> StrategicAssessment:
        total_cost = totals.total_annual_cost + totals.total_one_time_cost
        non_compliant = [a for a in assessments if a.status == ComplianceStatus.NON_COMPLIANT]

        severity = ChangeSeverity.LOW
        timeline = "3-6 months"
        for cost_threshold, count_threshold, band_severity, band_timeline in self.SEVERITY_BANDS:
            if total_cost > cost_threshold or len(non_compliant) > count_threshold:
                severity = band_severity
                timeline = band_timeline
                break

        risk_areas = {self._risk_area(r) for r in requirements}
        has_capital = totals.capital_impact > 0
        has_liquidity = totals.liquidity_impact > 0

        complexity = ImplementationComplexity.SIMPLE
        if len(risk_areas) > 4 and has_capital and has_liquidity:
            complexity = ImplementationComplexity.MAJOR_TRANSFORMATION
        elif len(risk_areas) > 2 and (has_capital or has_liquidity):
            complexity = ImplementationComplexity.COMPLEX
        elif len(risk_areas) > 1:
            complexity = ImplementationComplexity.MODERATE

        key_risks = []
        if non_compliant:
            key_risks.append("Immediate compliance breaches identified")
        if totals.capital_impact > self.MATERIAL_AMOUNT:
            key_risks.append("Significant capital raising required")
        if totals.liquidity_impact > self.MATERIAL_AMOUNT:
            key_risks.append("Major liquidity restructuring needed")
        if totals.operational_cost_impact > self.MATERIAL_OPERATIONAL_COST:
            key_risks.append("High ongoing compliance costs")

        return StrategicAssessment(
            overall_severity=severity,
            implementation_complexity=complexity,
            recommended_timeline=timeline,
            key_risks=key_risks,
        )
