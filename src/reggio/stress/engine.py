"""Stress testing engine for the Reggio engine."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, Any, List, Optional, Sequence, Tuple
import logging
from pydantic import BaseModel, ConfigDict, Field

from .scenarios import StressScenario, create_null_scenario, load_predefined_scenarios
from ..compliance.assessor import ComplianceAssessment, ComplianceAssessor, PassStatus, Severity
from ..core.capital import CapitalBase
from ..core.config import ReggioConfig
from ..core.parameters import RegulatoryParameters
from ..core.portfolio import FundingProfile, Portfolio
from ..liquidity.lcr import LCRCalculator, LCRResult
from ..metrics.ratios import CapitalAdequacyCalculator, CapitalResult
from ..reporting.summary import summarize_results

logger = logging.getLogger(__name__)

SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}


class ScenarioResult(BaseModel):
    """Outcome of one scenario run."""

    model_config = ConfigDict(frozen=True)

    scenario_name: str
    scenario_description: str = ""

    lcr_result: LCRResult
    capital_result: CapitalResult
    assessment: ComplianceAssessment
    recommendations: List[str] = Field(default_factory=list)

    @property
    def severity(self) -> Severity:
        return self.assessment.severity

    @property
    def pass_status(self) -> PassStatus:
        return self.assessment.pass_status

    @property
    def passed(self) -> bool:
        return self.assessment.passed

    def get_liquidity_shortfall(self) -> float:
        """HQLA needed to restore the LCR requirement (zero when compliant)."""
        return max(0.0, -self.lcr_result.buffer_or_deficit)

    def get_capital_shortfall(self) -> float:
        return self.capital_result.get_tier1_shortfall()


class StressTestReport(BaseModel):
    """Baseline plus every scenario run, with summary metrics."""

    model_config = ConfigDict(frozen=True)

    baseline: ScenarioResult
    scenario_results: List[ScenarioResult]
    summary: Dict[str, Any]
    test_date: str

    def get_result(self, scenario_name: str) -> Optional[ScenarioResult]:
        for result in self.scenario_results:
            if result.scenario_name == scenario_name:
                return result
        return None

    def get_failed_scenarios(self) -> List[str]:
        return [r.scenario_name for r in self.scenario_results if not r.passed]


class ScenarioEngine:
    """
    Applies stress scenarios to a portfolio and funding profile and runs the
    LCR and capital calculators on the shocked data.

    Runs never mutate their inputs and share no state, so a batch of
    scenarios may be fanned out across a thread pool.
    """

    def __init__(self, config: Optional[ReggioConfig] = None,
                 lcr_calculator: Optional[LCRCalculator] = None,
                 capital_calculator: Optional[CapitalAdequacyCalculator] = None,
                 assessor: Optional[ComplianceAssessor] = None):
        self.config = config or ReggioConfig.load_default()
        self.lcr_calculator = lcr_calculator or LCRCalculator(self.config)
        self.capital_calculator = capital_calculator or CapitalAdequacyCalculator(self.config)
        self.assessor = assessor or ComplianceAssessor(self.config)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def apply(self, scenario: StressScenario, portfolio: Portfolio,
              funding: FundingProfile) -> Tuple[Portfolio, FundingProfile]:
        """Shock asset values by class; funding balances are returned unchanged.

        Funding shocks act on run-off rates, not balances, and are applied
        by the outflow calculator.
        """
        stressed_assets = []
        for asset in portfolio.assets:
            shock = scenario.get_asset_shock(asset.asset_class)
            if shock == 0:
                stressed_assets.append(asset)
            else:
                stressed_assets.append(asset.with_market_value(max(0.0, asset.market_value * (1 + shock))))

        suffix = "" if scenario.is_null() else "_stressed"
        return portfolio.with_assets(stressed_assets, suffix=suffix), funding.model_copy(deep=True)

    def run_scenario(self, scenario: StressScenario, portfolio: Portfolio,
                     funding: FundingProfile, params: RegulatoryParameters) -> ScenarioResult:
        """Run LCR and capital calculations for one scenario."""
        self.logger.info(f"Running stress scenario: {scenario.name}")

        stressed_portfolio, stressed_funding = self.apply(scenario, portfolio, funding)

        lcr_result = self.lcr_calculator.calculate_lcr(
            stressed_portfolio.assets, stressed_funding, params,
            funding_shocks=scenario.funding_shocks,
        )
        capital_result = self.capital_calculator.calculate(
            stressed_portfolio.assets, scenario.capital_base, params,
            apply_credit_losses=scenario.has_asset_stress(),
        )

        assessment = self.assessor.assess(lcr_result, capital_result)
        result = ScenarioResult(
            scenario_name=scenario.name,
            scenario_description=scenario.description,
            lcr_result=lcr_result,
            capital_result=capital_result,
            assessment=assessment,
            recommendations=self.assessor.recommend(lcr_result, capital_result),
        )

        self.logger.info(
            f"Completed stress scenario: {scenario.name} -> {assessment.pass_status.value} "
            f"({assessment.severity.value}), LCR {lcr_result.lcr_ratio:.2%}, "
            f"Tier 1 {capital_result.tier1_ratio:.2%}"
        )
        return result

    def run_scenarios(self, scenarios: Sequence[StressScenario], portfolio: Portfolio,
                      funding: FundingProfile, params: RegulatoryParameters,
                      max_workers: Optional[int] = None) -> List[ScenarioResult]:
        """Run several scenarios; results keep the order of ``scenarios``."""
        if not max_workers or max_workers <= 1 or len(scenarios) <= 1:
            return [self.run_scenario(s, portfolio, funding, params) for s in scenarios]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(
                lambda scenario: self.run_scenario(scenario, portfolio, funding, params),
                scenarios,
            ))

    def run_baseline(self, portfolio: Portfolio, funding: FundingProfile,
                     capital_base: CapitalBase, params: RegulatoryParameters) -> ScenarioResult:
        """Unshocked run against the bank's own capital base."""
        return self.run_scenario(create_null_scenario(capital_base, name="Baseline"),
                                 portfolio, funding, params)

    def run_stress_test(self, portfolio: Portfolio, funding: FundingProfile,
                        capital_base: CapitalBase, params: RegulatoryParameters,
                        scenarios: Optional[Sequence[StressScenario]] = None,
                        max_workers: Optional[int] = None) -> StressTestReport:
        """Baseline plus every scenario (the predefined set when none are given)."""
        if scenarios is None:
            scenarios = list(load_predefined_scenarios(self.config).values())

        self.logger.info(f"Running stress test with {len(scenarios)} scenarios")

        baseline = self.run_baseline(portfolio, funding, capital_base, params)
        results = self.run_scenarios(scenarios, portfolio, funding, params, max_workers=max_workers)

        return StressTestReport(
            baseline=baseline,
            scenario_results=results,
            summary=summarize_results(results),
            test_date=datetime.now().strftime("%Y-%m-%d"),
        )

    def compare_scenarios(self, results: Sequence[ScenarioResult]) -> Dict[str, Any]:
        """Compare results across scenarios and rank them from most to least severe."""
        if not results:
            return {}

        comparison: Dict[str, Any] = {
            "scenario_summary": {},
            "worst_case_metrics": {},
            "ranking": [],
        }

        for result in results:
            comparison["scenario_summary"][result.scenario_name] = {
                "pass_status": result.pass_status.value,
                "severity": result.severity.value,
                "lcr_ratio": result.lcr_result.lcr_ratio,
                "tier1_ratio": result.capital_result.tier1_ratio,
                "leverage_ratio": result.capital_result.leverage_ratio,
                "liquidity_shortfall": result.get_liquidity_shortfall(),
                "capital_shortfall": result.get_capital_shortfall(),
                "violations": len(result.assessment.violations),
            }

        comparison["worst_case_metrics"] = {
            "worst_lcr_ratio": min(r.lcr_result.lcr_ratio for r in results),
            "worst_tier1_ratio": min(r.capital_result.tier1_ratio for r in results),
            "worst_leverage_ratio": min(r.capital_result.leverage_ratio for r in results),
            "max_liquidity_shortfall": max(r.get_liquidity_shortfall() for r in results),
            "max_capital_shortfall": max(r.get_capital_shortfall() for r in results),
        }

        # Severity band first, then the weaker headroom to the binding minimum
        ranked = sorted(
            results,
            key=lambda r: (
                -SEVERITY_RANK[r.severity],
                min(r.lcr_result.get_headroom(), r.capital_result.tier1_ratio - r.capital_result.tier1_minimum),
            ),
        )
        comparison["ranking"] = [(r.scenario_name, r.severity.value) for r in ranked]

        return comparison
