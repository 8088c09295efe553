"""Tests for configuration loading and lookups."""

import pytest
import yaml

from reggio.core.config import ReggioConfig
from reggio.core.parameters import RegulatoryParameters


class TestReggioConfig:
    """Test configuration management."""

    def test_load_default(self, test_config):
        assert test_config.get_haircut("HQLA_L2A") == 0.15
        assert test_config.get_hqla_cap("level2b_share") == 0.15
        assert test_config.get_runoff_rate("WHOLESALE_FUNDING") == 1.0
        assert test_config.get_runoff_ceiling("retail_deposits") == 0.10
        assert test_config.apply_runoff_ceilings is True
        assert test_config.liquidity_floor == 1.0
        assert test_config.capital_floor == 1.0

    def test_credit_loss_fallbacks(self, test_config):
        assert test_config.get_credit_loss_rate("CORPORATE", "BBB") == 0.08
        assert test_config.get_credit_loss_rate("CORPORATE", "CCC") == 0.20
        assert test_config.get_credit_loss_rate("CORPORATE") == 0.20
        assert test_config.get_credit_loss_rate("PROPERTY", "residential") == 0.05

    def test_defaults_when_section_missing(self):
        config = ReggioConfig()

        assert config.get_haircut("hqla_l2b") == 0.25
        assert config.get_runoff_rate("corporate_deposits") == 0.25
        assert config.get_buffer_rate("conservation") == 0.025
        assert config.get_assessment_margin("lcr_warning_margin") == 0.05
        assert config.get_impact_assumption("cost_of_equity") == 0.12
        assert config.get_credit_loss_rate("corporate", "aaa") == 0.20

    def test_save_and_reload(self, test_config, temp_dir):
        path = temp_dir / "config.yaml"
        test_config.save_to_file(path)

        reloaded = ReggioConfig.load_from_file(path)

        assert reloaded == test_config
        assert reloaded.get_impact_assumption("currency_symbol") == "£"

    def test_load_custom_file(self, temp_dir):
        path = temp_dir / "custom.yaml"
        path.write_text(yaml.safe_dump({"liquidity": {"runoff_rates": {"retail_deposits": 0.10}}}))

        config = ReggioConfig.load_from_file(path)

        assert config.get_runoff_rate("retail_deposits") == 0.10
        assert config.get_runoff_rate("corporate_deposits") == 0.25

    def test_missing_file_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            ReggioConfig.load_from_file(temp_dir / "missing.yaml")

    def test_regulatory_parameters_by_jurisdiction(self, test_config):
        params = test_config.get_regulatory_parameters("US", effective_date="2025-01-01")

        assert isinstance(params, RegulatoryParameters)
        assert params.jurisdiction == "US"
        assert params.leverage_minimum == 0.04
        assert params.lcr_requirement == 1.0

    def test_unknown_jurisdiction(self, test_config):
        with pytest.raises(KeyError):
            test_config.get_regulatory_parameters("XX")

    def test_stress_scenario_definition(self, test_config):
        definition = test_config.get_stress_scenario("basel_iii_minimum")

        assert definition["name"] == "Basel III Minimum Requirements"
        assert test_config.get_stress_scenario("unknown") == {}
