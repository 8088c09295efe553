"""
Example showing a full stress-testing and regulatory-impact run.

Builds the reference balance sheet, runs the predefined supervisory
scenarios, ranks them, and costs a proposed tightening of the LCR and
Tier 1 minimums.
"""

import logging

from reggio import ComplianceEngine, RegulatoryRequirement
from reggio.compliance.impact import ImpactMetric, RiskArea
from reggio.reporting import format_currency, results_to_frame
from reggio.simulator.portfolio import reference_capital, reference_funding, reference_portfolio


def main():
    """Run stress test and regulatory change analysis."""
    logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")

    print("Reggio - Regulatory Stress Test")
    print("=" * 60)

    engine = ComplianceEngine()
    portfolio = reference_portfolio()
    funding = reference_funding()
    capital = reference_capital()
    params = engine.config.get_regulatory_parameters("UK")

    # 1. Baseline ratios
    print("\nBaseline position")
    lcr = engine.calculate_lcr(portfolio, funding, params)
    capital_result = engine.calculate_capital(portfolio, capital, params)
    print(f"  LCR: {lcr.lcr_ratio:.2%} ({lcr.compliance_status.value})")
    print(f"  HQLA: {format_currency(lcr.hqla_value)}  Outflows: {format_currency(lcr.net_cash_outflows)}")
    print(f"  Tier 1 ratio: {capital_result.tier1_ratio:.2%}  RWA: {format_currency(capital_result.risk_weighted_assets)}")

    # 2. Predefined scenarios
    print("\nSupervisory scenarios")
    report = engine.run_stress_test(portfolio, funding, capital, params, max_workers=4)
    print(results_to_frame(report.scenario_results)[["pass_status", "severity", "lcr_ratio", "tier1_ratio"]])

    summary = report.summary
    print(f"\n  Passed {summary['scenarios_passed']}/{summary['scenarios_tested']} "
          f"(worst LCR {summary['worst_lcr']:.2%} under {summary['worst_scenario']})")

    ranking = engine.scenario_engine.compare_scenarios(report.scenario_results)["ranking"]
    print("  Ranking: " + ", ".join(f"{name} [{severity}]" for name, severity in ranking))

    # 3. Regulatory change impact
    print("\nRegulatory change impact")
    position = engine.current_position(portfolio, funding, capital, params)
    requirements = [
        RegulatoryRequirement(requirement_id="lcr_uplift", metric=ImpactMetric.LCR_MINIMUM,
                              threshold_value=1.20, risk_area=RiskArea.LIQUIDITY),
        RegulatoryRequirement(requirement_id="ccyb", metric=ImpactMetric.BUFFER_REQUIREMENT,
                              threshold_value=0.02, risk_area=RiskArea.CAPITAL),
        RegulatoryRequirement(requirement_id="reporting", metric=ImpactMetric.COST_PER_ANNUM,
                              threshold_value=750_000, risk_area=RiskArea.OPERATIONAL),
    ]
    impact = engine.analyze_regulatory_change(requirements, position, "PS-2025-01", "Liquidity and buffer reform")

    for assessment in impact.assessments:
        print(f"  {assessment.requirement_id}: {assessment.status.value}, "
              f"annual cost {format_currency(assessment.annual_cost_estimate)}")
        for action in assessment.recommended_actions:
            print(f"    - {action}")

    strategic = impact.strategic_assessment
    print(f"\n  Severity: {strategic.overall_severity.value}, timeline {strategic.recommended_timeline}")
    print(f"  One-time cost: {format_currency(impact.total_financial_impact.total_one_time_cost)}")


if __name__ == "__main__":
    main()
