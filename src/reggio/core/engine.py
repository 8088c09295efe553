"""Main Reggio engine coordinating liquidity, capital, stress and impact calculations."""

from typing import List, Optional, Sequence
import logging

from .capital import CapitalBase
from .config import ReggioConfig
from .parameters import RegulatoryParameters
from .portfolio import FundingProfile, Portfolio
from ..compliance.change import RegulatoryChangeAnalyzer, RegulatoryChangeImpact
from ..compliance.impact import (
    CurrentPosition, ImpactAssessment, RegulatoryRequirement, ThresholdImpactCalculator,
)
from ..liquidity.lcr import LCRCalculator, LCRResult
from ..metrics.ratios import CapitalAdequacyCalculator, CapitalResult
from ..stress.engine import ScenarioEngine, ScenarioResult, StressTestReport
from ..stress.scenarios import StressScenario


logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Entry point for the stress-testing and compliance calculations.

    Wires the calculators to a single configuration. Every call is pure:
    inputs are never mutated and no state is kept between calls, so one
    engine can be shared across threads.
    """

    def __init__(self, config: Optional[ReggioConfig] = None):
        """Initialize engine with configuration."""
        self.config = config or ReggioConfig.load_default()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.lcr_calculator = LCRCalculator(self.config)
        self.capital_calculator = CapitalAdequacyCalculator(self.config)
        self.scenario_engine = ScenarioEngine(
            self.config,
            lcr_calculator=self.lcr_calculator,
            capital_calculator=self.capital_calculator,
        )
        self.impact_calculator = ThresholdImpactCalculator(self.config)
        self.change_analyzer = RegulatoryChangeAnalyzer(self.config, self.impact_calculator)

    def calculate_lcr(self, portfolio: Portfolio, funding: FundingProfile,
                      params: RegulatoryParameters) -> LCRResult:
        """Unshocked LCR."""
        return self.lcr_calculator.calculate_lcr(portfolio.assets, funding, params)

    def calculate_capital(self, portfolio: Portfolio, capital_base: CapitalBase,
                          params: RegulatoryParameters) -> CapitalResult:
        """Unshocked capital ratios (no credit-loss erosion)."""
        return self.capital_calculator.calculate(portfolio.assets, capital_base, params)

    def run_scenario(self, scenario: StressScenario, portfolio: Portfolio,
                     funding: FundingProfile, params: RegulatoryParameters) -> ScenarioResult:
        return self.scenario_engine.run_scenario(scenario, portfolio, funding, params)

    def run_scenarios(self, scenarios: Sequence[StressScenario], portfolio: Portfolio,
                      funding: FundingProfile, params: RegulatoryParameters,
                      max_workers: Optional[int] = None) -> List[ScenarioResult]:
        return self.scenario_engine.run_scenarios(scenarios, portfolio, funding, params, max_workers)

    def run_stress_test(self, portfolio: Portfolio, funding: FundingProfile,
                        capital_base: CapitalBase, params: RegulatoryParameters,
                        scenarios: Optional[Sequence[StressScenario]] = None,
                        max_workers: Optional[int] = None) -> StressTestReport:
        return self.scenario_engine.run_stress_test(
            portfolio, funding, capital_base, params, scenarios, max_workers
        )

    def current_position(self, portfolio: Portfolio, funding: FundingProfile,
                         capital_base: CapitalBase, params: RegulatoryParameters) -> CurrentPosition:
        """Unshocked ratios in the shape the impact calculators consume."""
        return CurrentPosition.from_results(
            self.calculate_lcr(portfolio, funding, params),
            self.calculate_capital(portfolio, capital_base, params),
        )

    def assess_threshold_impact(self, requirement: RegulatoryRequirement,
                                current_position: CurrentPosition) -> ImpactAssessment:
        return self.impact_calculator.assess(requirement, current_position)

    def analyze_regulatory_change(self, requirements: List[RegulatoryRequirement],
                                  current_position: CurrentPosition,
                                  regulation_id: str, regulation_title: str,
                                  effective_date: Optional[str] = None) -> RegulatoryChangeImpact:
        return self.change_analyzer.analyze(
            requirements, current_position, regulation_id, regulation_title, effective_date
        )


_default_engine: Optional[ComplianceEngine] = None


def get_default_engine() -> ComplianceEngine:
    """Lazily built engine on the packaged configuration."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ComplianceEngine()
    return _default_engine


def calculate_lcr(portfolio: Portfolio, funding: FundingProfile,
                  params: RegulatoryParameters) -> LCRResult:
    return get_default_engine().calculate_lcr(portfolio, funding, params)


def calculate_capital(portfolio: Portfolio, capital_base: CapitalBase,
                      params: RegulatoryParameters) -> CapitalResult:
    return get_default_engine().calculate_capital(portfolio, capital_base, params)


def run_scenario(scenario: StressScenario, portfolio: Portfolio,
                 funding: FundingProfile, params: RegulatoryParameters) -> ScenarioResult:
    return get_default_engine().run_scenario(scenario, portfolio, funding, params)


def run_scenarios(scenarios: Sequence[StressScenario], portfolio: Portfolio,
                  funding: FundingProfile, params: RegulatoryParameters,
                  max_workers: Optional[int] = None) -> List[ScenarioResult]:
    return get_default_engine().run_scenarios(scenarios, portfolio, funding, params, max_workers)


def assess_threshold_impact(requirement: RegulatoryRequirement,
                            current_position: CurrentPosition) -> ImpactAssessment:
    return get_default_engine().assess_threshold_impact(requirement, current_position)
