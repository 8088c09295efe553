"""Stress testing module for the Reggio engine."""

from .scenarios import (
    StressScenario, get_scenario, list_available_scenarios,
    load_predefined_scenarios, create_custom_scenario, create_null_scenario,
)
from .engine import ScenarioEngine, ScenarioResult, StressTestReport

__all__ = [
    "StressScenario",
    "get_scenario",
    "list_available_scenarios",
    "load_predefined_scenarios",
    "create_custom_scenario",
    "create_null_scenario",
    "ScenarioEngine",
    "ScenarioResult",
    "StressTestReport",
]
