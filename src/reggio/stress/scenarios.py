"""Stress testing scenarios for the Reggio engine."""

from typing import Dict, Any, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.capital import CapitalBase
from ..core.config import ReggioConfig
from ..core.portfolio import AssetClass, FundingSource


class StressScenario(BaseModel):
    """
    Named, coordinated set of asset-price and funding-outflow shocks.

    Shock maps are keyed by the closed ``AssetClass`` and ``FundingSource``
    enumerations. Unknown keys are rejected and missing keys are filled with
    a zero shock, so every scenario covers the full key set.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    asset_shocks: Dict[AssetClass, float] = Field(default_factory=dict, validate_default=True)
    funding_shocks: Dict[FundingSource, float] = Field(default_factory=dict, validate_default=True)
    capital_base: CapitalBase

    @field_validator("asset_shocks")
    @classmethod
    def complete_asset_shocks(cls, v: Dict[AssetClass, float]) -> Dict[AssetClass, float]:
        return {asset_class: float(v.get(asset_class, 0.0)) for asset_class in AssetClass}

    @field_validator("funding_shocks")
    @classmethod
    def complete_funding_shocks(cls, v: Dict[FundingSource, float]) -> Dict[FundingSource, float]:
        return {source: float(v.get(source, 0.0)) for source in FundingSource}

    def get_asset_shock(self, asset_class: AssetClass) -> float:
        return self.asset_shocks.get(asset_class, 0.0)

    def get_funding_shock(self, source: FundingSource) -> float:
        return self.funding_shocks.get(source, 0.0)

    def has_asset_stress(self) -> bool:
        """True when at least one asset class is shocked."""
        return any(shock != 0 for shock in self.asset_shocks.values())

    def is_null(self) -> bool:
        """True when the scenario shocks nothing."""
        return not self.has_asset_stress() and all(
            shock == 0 for shock in self.funding_shocks.values()
        )


def _build_scenario(definition: Mapping[str, Any]) -> StressScenario:
    return StressScenario(
        name=definition["name"],
        description=definition.get("description", ""),
        asset_shocks=definition.get("asset_shocks", {}),
        funding_shocks=definition.get("funding_shocks", {}),
        capital_base=CapitalBase(**definition.get("capital_base", {})),
    )


def load_predefined_scenarios(config: Optional[ReggioConfig] = None) -> Dict[str, StressScenario]:
    """Load every scenario defined in configuration, keyed by scenario id."""
    config = config or ReggioConfig.load_default()
    return {
        scenario_id: _build_scenario(definition)
        for scenario_id, definition in config.stress_scenarios.items()
    }


def get_scenario(scenario_name: str, config: Optional[ReggioConfig] = None) -> StressScenario:
    """Get a predefined scenario by id or display name."""
    scenarios = load_predefined_scenarios(config)

    if scenario_name in scenarios:
        return scenarios[scenario_name]

    for scenario in scenarios.values():
        if scenario.name == scenario_name:
            return scenario

    raise KeyError(f"Unknown scenario: {scenario_name}. Available: {sorted(scenarios)}")


def list_available_scenarios(config: Optional[ReggioConfig] = None) -> List[str]:
    """List ids of the predefined scenarios."""
    config = config or ReggioConfig.load_default()
    return list(config.stress_scenarios.keys())


def create_custom_scenario(name: str,
                           asset_shocks: Mapping[Any, float],
                           funding_shocks: Mapping[Any, float],
                           capital_base: CapitalBase,
                           description: str = "") -> StressScenario:
    """Create a custom scenario from shock maps keyed by enum members or their names."""
    return StressScenario(
        name=name,
        description=description or f"Custom scenario: {name}",
        asset_shocks=dict(asset_shocks),
        funding_shocks=dict(funding_shocks),
        capital_base=capital_base,
    )


def create_null_scenario(capital_base: CapitalBase, name: str = "No stress") -> StressScenario:
    """Scenario with every shock set to zero."""
    return StressScenario(name=name, description="All shocks zero", capital_base=capital_base)
