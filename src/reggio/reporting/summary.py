"""Summary metrics and tabular views over scenario results."""

from typing import Any, Dict, List, Sequence, TYPE_CHECKING
import pandas as pd

if TYPE_CHECKING:
    from ..stress.engine import ScenarioResult


def summarize_results(results: Sequence["ScenarioResult"]) -> Dict[str, Any]:
    """Headline metrics across a set of scenario runs."""
    if not results:
        return {
            "scenarios_tested": 0,
            "scenarios_passed": 0,
            "pass_rate": 0.0,
            "worst_lcr": None,
            "worst_tier1": None,
            "worst_scenario": None,
            "max_capital_shortfall": 0.0,
            "max_liquidity_shortfall": 0.0,
        }

    passed = [r for r in results if r.passed]
    worst = min(results, key=lambda r: r.lcr_result.lcr_ratio)

    return {
        "scenarios_tested": len(results),
        "scenarios_passed": len(passed),
        "pass_rate": len(passed) / len(results),
        "worst_lcr": worst.lcr_result.lcr_ratio,
        "worst_tier1": min(r.capital_result.tier1_ratio for r in results),
        "worst_scenario": worst.scenario_name,
        "max_capital_shortfall": max(r.get_capital_shortfall() for r in results),
        "max_liquidity_shortfall": max(r.get_liquidity_shortfall() for r in results),
    }


def results_to_frame(results: Sequence["ScenarioResult"]) -> pd.DataFrame:
    """One row per scenario run, indexed by scenario name."""
    rows: List[Dict[str, Any]] = []
    for result in results:
        lcr = result.lcr_result
        capital = result.capital_result
        rows.append({
            "scenario": result.scenario_name,
            "pass_status": result.pass_status.value,
            "severity": result.severity.value,
            "lcr_ratio": lcr.lcr_ratio,
            "hqla": lcr.hqla_value,
            "net_cash_outflows": lcr.net_cash_outflows,
            "tier1_ratio": capital.tier1_ratio,
            "total_capital_ratio": capital.total_capital_ratio,
            "leverage_ratio": capital.leverage_ratio,
            "rwa": capital.risk_weighted_assets,
            "credit_losses": capital.credit_losses,
            "liquidity_shortfall": result.get_liquidity_shortfall(),
            "capital_shortfall": result.get_capital_shortfall(),
        })

    columns = [
        "scenario", "pass_status", "severity", "lcr_ratio", "hqla", "net_cash_outflows",
        "tier1_ratio", "total_capital_ratio", "leverage_ratio", "rwa", "credit_losses",
        "liquidity_shortfall", "capital_shortfall",
    ]
    return pd.DataFrame(rows, columns=columns).set_index("scenario")
