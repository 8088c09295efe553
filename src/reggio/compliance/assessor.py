"""Severity classification and remediation for LCR and capital results."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
import logging

from ..core.config import ReggioConfig
from ..liquidity.lcr import LCRResult
from ..metrics.ratios import CapitalResult
from ..reporting.formatters import format_currency, format_percentage

logger = logging.getLogger(__name__)


class PassStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ComplianceAssessment(BaseModel):
    """Overall verdict for one (LCR, capital) result pair."""

    model_config = ConfigDict(frozen=True)

    pass_status: PassStatus
    severity: Severity
    violations: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.pass_status == PassStatus.PASS


class ComplianceAssessor:
    """
    Aggregates ratio results into a pass/fail verdict, a severity and
    amount-specific remediation.

    FAIL when the LCR or Tier 1 ratio is below its minimum. Severity is HIGH
    on any violation, MEDIUM when a compliant LCR or Tier 1 ratio sits within
    the configured warning margin of its minimum or large exposures are
    present, LOW otherwise.
    """

    def __init__(self, config: Optional[ReggioConfig] = None):
        self.config = config or ReggioConfig.load_default()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.lcr_margin = self.config.get_assessment_margin("lcr_warning_margin")
        self.tier1_margin = self.config.get_assessment_margin("tier1_warning_margin")
        self.currency_symbol = self.config.get_impact_assumption("currency_symbol")

    def assess(self, lcr_result: LCRResult, capital_result: CapitalResult) -> ComplianceAssessment:
        """Classify a result pair."""
        violations = self.find_violations(lcr_result, capital_result)
        risk_factors = list(violations)

        pass_status = PassStatus.PASS
        if not lcr_result.compliant or not capital_result.compliance_status.tier1_compliant:
            pass_status = PassStatus.FAIL

        severity = Severity.LOW
        if violations:
            severity = Severity.HIGH
        else:
            if lcr_result.get_headroom() < self.lcr_margin:
                risk_factors.append("LCR buffer reduced but compliant")
                severity = Severity.MEDIUM
            if capital_result.tier1_ratio - capital_result.tier1_minimum < self.tier1_margin:
                risk_factors.append("Tier 1 headroom reduced but compliant")
                severity = Severity.MEDIUM

        if capital_result.large_exposures:
            risk_factors.append(
                f"{len(capital_result.large_exposures)} exposure(s) above the large-exposure limit"
            )
            if severity == Severity.LOW:
                severity = Severity.MEDIUM

        if not risk_factors:
            risk_factors.append("Stress impact within acceptable ranges")

        return ComplianceAssessment(
            pass_status=pass_status,
            severity=severity,
            violations=violations,
            risk_factors=risk_factors,
        )

    def find_violations(self, lcr_result: LCRResult, capital_result: CapitalResult) -> List[str]:
        violations = []
        compliance = capital_result.compliance_status

        if not lcr_result.compliant:
            violations.append(
                f"LCR {format_percentage(lcr_result.lcr_ratio)} below "
                f"{format_percentage(lcr_result.requirement)} requirement"
            )
        if not compliance.tier1_compliant:
            violations.append(
                f"Tier 1 ratio {format_percentage(capital_result.tier1_ratio)} below "
                f"{format_percentage(capital_result.tier1_minimum)} minimum"
            )
        if not compliance.total_capital_compliant:
            violations.append(
                f"Total capital ratio {format_percentage(capital_result.total_capital_ratio)} below "
                f"{format_percentage(capital_result.total_capital_minimum)} minimum"
            )
        if not compliance.leverage_compliant:
            violations.append(
                f"Leverage ratio {format_percentage(capital_result.leverage_ratio)} below "
                f"{format_percentage(capital_result.leverage_minimum)} minimum"
            )

        return violations

    def recommend(self, lcr_result: LCRResult, capital_result: CapitalResult) -> List[str]:
        """Generate amount-specific remediation actions."""
        recommendations = []
        compliance = capital_result.compliance_status
        rwa = capital_result.risk_weighted_assets

        if not lcr_result.compliant:
            shortfall = abs(lcr_result.buffer_or_deficit)
            recommendations.append(
                f"Increase HQLA by {self._money(shortfall)} to meet LCR requirements"
            )

        if not compliance.tier1_compliant:
            shortfall = capital_result.get_tier1_shortfall()
            recommendations.append(f"Raise {self._money(shortfall)} in Tier 1 capital")

        if not compliance.total_capital_compliant:
            shortfall = (capital_result.total_capital_minimum - capital_result.total_capital_ratio) * rwa
            recommendations.append(f"Raise {self._money(shortfall)} in total regulatory capital")

        if not compliance.leverage_compliant:
            shortfall = (
                capital_result.leverage_minimum - capital_result.leverage_ratio
            ) * max(capital_result.total_exposure, self.config.capital_floor)
            recommendations.append(
                f"Raise {self._money(shortfall)} in Tier 1 capital or reduce exposure to restore the leverage ratio"
            )

        if capital_result.large_exposures:
            recommendations.append(
                "Reduce large exposures: " + ", ".join(capital_result.large_exposures)
            )

        if not recommendations:
            recommendations.append("Maintain current risk management practices")
            recommendations.append("Monitor market conditions for early warning signals")

        return recommendations

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency_symbol)
