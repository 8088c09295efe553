"""Reggio - regulatory stress-testing and capital/liquidity compliance engine."""

# Core engine and components
from .core.engine import ComplianceEngine
from .core.portfolio import (
    Asset, AssetClass, CreditRating, LiquidityClass, FundingProfile, FundingSource, Portfolio,
)
from .core.capital import CapitalBase
from .core.parameters import RegulatoryParameters
from .core.config import ReggioConfig

# Liquidity and capital
from .liquidity.lcr import LCRCalculator, LCRResult, ComplianceStatus
from .metrics.ratios import CapitalAdequacyCalculator, CapitalResult

# Stress testing
from .stress.scenarios import StressScenario, get_scenario, create_custom_scenario
from .stress.engine import ScenarioEngine, ScenarioResult

# Compliance and regulatory impact
from .compliance.impact import ThresholdImpactCalculator, RegulatoryRequirement, CurrentPosition
from .compliance.change import RegulatoryChangeAnalyzer

# Portfolio simulation
from .simulator.portfolio import PortfolioGenerator

__version__ = "0.1.0"
__author__ = "Reggio Contributors"

__all__ = [
    # Core components
    "ComplianceEngine",
    "Asset",
    "AssetClass",
    "CreditRating",
    "LiquidityClass",
    "FundingProfile",
    "FundingSource",
    "Portfolio",
    "CapitalBase",
    "RegulatoryParameters",
    "ReggioConfig",

    # Liquidity and capital
    "LCRCalculator",
    "LCRResult",
    "ComplianceStatus",
    "CapitalAdequacyCalculator",
    "CapitalResult",

    # Stress testing
    "StressScenario",
    "get_scenario",
    "create_custom_scenario",
    "ScenarioEngine",
    "ScenarioResult",

    # Regulatory impact
    "ThresholdImpactCalculator",
    "RegulatoryRequirement",
    "CurrentPosition",
    "RegulatoryChangeAnalyzer",

    # Simulation
    "PortfolioGenerator",
]
