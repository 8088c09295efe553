"""Configuration management for the Reggio stress-testing engine."""

from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from pydantic import BaseModel, Field


class ReggioConfig(BaseModel):
    """Reggio engine configuration."""

    liquidity: Dict[str, Any] = Field(default_factory=dict)
    capital: Dict[str, Any] = Field(default_factory=dict)
    assessment: Dict[str, Any] = Field(default_factory=dict)
    impact: Dict[str, Any] = Field(default_factory=dict)
    jurisdictions: Dict[str, Dict[str, float]] = Field(default_factory=dict)
    stress_scenarios: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def load_default(cls) -> "ReggioConfig":
        """Load default configuration from package yaml file."""
        config_path = Path(__file__).parent.parent / "config.yaml"
        return cls.load_from_file(config_path)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ReggioConfig":
        """Load configuration from YAML file."""
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        return cls(**config_data)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, indent=2, allow_unicode=True)

    # Liquidity

    def get_haircut(self, liquidity_class: str) -> float:
        """Get HQLA haircut for a liquidity classification."""
        defaults = {"hqla_l1": 0.0, "hqla_l2a": 0.15, "hqla_l2b": 0.25}
        haircuts = self.liquidity.get("haircuts", {})
        key = liquidity_class.lower()
        return haircuts.get(key, defaults.get(key, 1.0))

    def get_hqla_cap(self, cap_name: str) -> float:
        """Get Level 2 / Level 2B composition cap."""
        defaults = {"level2b_share": 0.15, "level2_share": 0.40}
        return self.liquidity.get("caps", {}).get(cap_name, defaults.get(cap_name, 0.0))

    def get_runoff_rate(self, funding_source: str) -> float:
        """Get baseline 30-day run-off rate for a funding source."""
        defaults = {
            "retail_deposits": 0.05,
            "corporate_deposits": 0.25,
            "wholesale_funding": 1.00,
            "secured_funding": 0.00,
        }
        key = funding_source.lower()
        return self.liquidity.get("runoff_rates", {}).get(key, defaults.get(key, 1.0))

    def get_runoff_ceiling(self, funding_source: str) -> float:
        """Get the ceiling a shocked run-off rate may not exceed."""
        defaults = {
            "retail_deposits": 0.10,
            "corporate_deposits": 0.40,
            "wholesale_funding": 1.00,
            "secured_funding": 1.00,
        }
        key = funding_source.lower()
        return self.liquidity.get("runoff_ceilings", {}).get(key, defaults.get(key, 1.0))

    @property
    def apply_runoff_ceilings(self) -> bool:
        return bool(self.liquidity.get("apply_runoff_ceilings", True))

    @property
    def liquidity_floor(self) -> float:
        return self.liquidity.get("denominator_floor", 1.0)

    # Capital

    def get_buffer_rate(self, buffer_type: str) -> float:
        """Get buffer requirement rate (fraction of RWA)."""
        defaults = {"conservation": 0.025, "countercyclical": 0.01, "systemic_risk": 0.005}
        return self.capital.get("buffers", {}).get(buffer_type, defaults.get(buffer_type, 0.0))

    def get_credit_loss_rate(self, asset_class: str, key: Optional[str] = None) -> float:
        """Get stressed credit-loss rate for an asset class and rating/sector key.

        Unknown classes or keys fall back to the default (highest) loss rate.
        """
        loss_rates = self.capital.get("credit_loss_rates", {})
        default_rate = loss_rates.get("default", 0.20)

        class_rates = loss_rates.get(asset_class.lower(), {})
        if key and key.lower() in class_rates:
            return class_rates[key.lower()]

        return default_rate

    @property
    def capital_floor(self) -> float:
        return self.capital.get("denominator_floor", 1.0)

    # Assessment and impact

    def get_assessment_margin(self, margin_name: str) -> float:
        """Get severity warning margin."""
        defaults = {"lcr_warning_margin": 0.05, "tier1_warning_margin": 0.01}
        return self.assessment.get(margin_name, defaults.get(margin_name, 0.0))

    def get_impact_assumption(self, name: str) -> Any:
        """Get financial-impact assumption (cost rates, margins, currency)."""
        defaults = {
            "hqla_funding_cost": 0.025,
            "cost_of_equity": 0.12,
            "lcr_at_risk_margin": 0.05,
            "capital_at_risk_margin": 0.01,
            "implementation_cost_rate": 0.02,
            "currency_symbol": "£",
        }
        return self.impact.get(name, defaults.get(name))

    def get_regulatory_parameters(self, jurisdiction: str, effective_date: Optional[str] = None):
        """Build regulatory parameters from the configured jurisdiction table."""
        from .parameters import RegulatoryParameters

        if jurisdiction not in self.jurisdictions:
            raise KeyError(f"No regulatory minimums configured for jurisdiction: {jurisdiction}")

        return RegulatoryParameters(
            jurisdiction=jurisdiction,
            effective_date=effective_date,
            **self.jurisdictions[jurisdiction]
        )

    def get_stress_scenario(self, scenario_id: str) -> Dict[str, Any]:
        """Get raw stress scenario definition."""
        return self.stress_scenarios.get(scenario_id, {})
