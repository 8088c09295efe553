"""Tests for capital base, credit losses and capital adequacy ratios."""

import pytest
from pydantic import ValidationError

from reggio.core.buffers import RegulatoryBuffers, BufferType
from reggio.core.capital import CapitalBase
from reggio.core.parameters import RegulatoryParameters
from reggio.core.portfolio import Asset, AssetClass, CreditRating, Portfolio
from reggio.metrics.losses import CreditLossModel
from reggio.metrics.ratios import CapitalAdequacyCalculator

from conftest import LOSS_RATINGS, assert_ratio_bounds


class TestCapitalBase:
    """Test capital base model."""

    def test_total_capital(self, reference_capital):
        assert reference_capital.get_total_capital() == 120e6

    def test_losses_absorbed_by_tier1(self, reference_capital):
        stressed = reference_capital.after_losses(40e6)

        assert stressed.tier1_capital == pytest.approx(50e6)
        assert stressed.tier2_capital == pytest.approx(30e6)
        assert reference_capital.tier1_capital == 90e6

    def test_tier1_floored_at_zero(self, reference_capital):
        assert reference_capital.after_losses(500e6).tier1_capital == 0

    def test_negative_capital_rejected(self):
        with pytest.raises(ValidationError):
            CapitalBase(tier1_capital=-1)


class TestRegulatoryBuffers:
    """Test buffer configuration."""

    def test_defaults_from_config(self, test_config):
        buffers = RegulatoryBuffers.from_config(test_config)

        assert buffers.conservation_buffer == 0.025
        assert buffers.countercyclical_buffer == 0.01
        assert buffers.systemic_risk_buffer == 0.005
        assert buffers.get_total_buffer_requirement() == pytest.approx(0.04)

    def test_buffer_amounts(self):
        amounts = RegulatoryBuffers().get_buffer_amounts(1000e6)

        assert amounts["capital_conservation_buffer"] == pytest.approx(25e6)
        assert amounts["total_buffer_requirement"] == pytest.approx(40e6)

    def test_buffer_type_keys_match_config(self, test_config):
        for buffer_type in BufferType:
            assert buffer_type.value in test_config.capital["buffers"]


class TestCreditLossModel:
    """Test rating- and sector-based loss rates."""

    @pytest.fixture
    def model(self, test_config):
        return CreditLossModel(test_config)

    @pytest.mark.parametrize("rating,expected", LOSS_RATINGS)
    def test_corporate_loss_by_rating(self, model, rating, expected):
        asset = Asset(asset_id="c", asset_class=AssetClass.CORPORATE, market_value=100, rating=rating)
        assert model.get_loss_rate(asset) == pytest.approx(expected)

    @pytest.mark.parametrize("sector,expected", [
        ("residential", 0.05),
        ("commercial", 0.12),
        ("  Commercial ", 0.12),
        ("industrial", 0.20),
        (None, 0.20),
    ])
    def test_property_loss_by_sector(self, model, sector, expected):
        asset = Asset(asset_id="p", asset_class=AssetClass.PROPERTY, market_value=100, sector=sector)
        assert model.get_loss_rate(asset) == pytest.approx(expected)

    def test_sovereign_and_equity_bear_no_credit_loss(self, model):
        for asset_class in (AssetClass.SOVEREIGN, AssetClass.EQUITY, AssetClass.OTHER):
            asset = Asset(asset_id="x", asset_class=asset_class, market_value=100)
            assert model.get_loss_rate(asset) == 0

    def test_reference_losses(self, model, reference_portfolio):
        losses = model.calculate_losses(reference_portfolio.assets)

        assert "gilts" not in losses
        assert losses["covered_bonds"] == pytest.approx(1.6e6)
        assert losses["a_rated_bonds"] == pytest.approx(1.2e6)
        assert losses["corporate_loans"] == pytest.approx(32e6)
        assert losses["commercial_property"] == pytest.approx(36e6)
        assert model.calculate_total_losses(reference_portfolio.assets) == pytest.approx(70.8e6)

    def test_severity_multiplier_capped_at_full_loss(self, test_config):
        model = CreditLossModel(test_config, severity_multiplier=10)
        asset = Asset(asset_id="c", asset_class=AssetClass.CORPORATE, market_value=100, rating="BB")
        assert model.get_loss_rate(asset) == 1.0

    def test_lowercase_rating_accepted(self, model):
        asset = Asset(asset_id="c", asset_class=AssetClass.CORPORATE, market_value=100, rating="bbb")
        assert asset.rating == CreditRating.BBB
        assert model.get_loss_rate(asset) == pytest.approx(0.08)

    @pytest.mark.parametrize("rating", ["BBB+", "Baa2", "", "NR"])
    def test_unrecognised_rating_treated_as_unrated(self, model, rating):
        asset = Asset(asset_id="c", asset_class=AssetClass.CORPORATE, market_value=1e6, rating=rating)

        assert asset.rating == CreditRating.UNRATED
        assert model.get_loss_rate(asset) == pytest.approx(0.20)


class TestCapitalAdequacyCalculator:
    """Test capital ratios and compliance."""

    @pytest.fixture
    def calculator(self, test_config):
        return CapitalAdequacyCalculator(test_config)

    def test_reference_ratios(self, calculator, reference_portfolio, reference_capital, params):
        result = calculator.calculate(reference_portfolio.assets, reference_capital, params)

        assert result.risk_weighted_assets == pytest.approx(746e6)
        assert result.tier1_ratio == pytest.approx(90 / 746)
        assert result.total_capital_ratio == pytest.approx(120 / 746)
        assert result.leverage_ratio == pytest.approx(90 / 1310)
        assert result.credit_losses == 0
        assert result.meets_minimum_requirements()
        assert result.get_tier1_shortfall() == 0

        assert_ratio_bounds({
            "tier1_ratio": result.tier1_ratio,
            "total_capital_ratio": result.total_capital_ratio,
            "leverage_ratio": result.leverage_ratio,
        })

    def test_requirements_and_buffers_reported(self, calculator, reference_portfolio,
                                               reference_capital, params):
        result = calculator.calculate(reference_portfolio.assets, reference_capital, params)

        assert result.capital_requirements["tier1_minimum"] == pytest.approx(746e6 * 0.06)
        assert result.buffers_and_surcharges["capital_conservation_buffer"] == pytest.approx(746e6 * 0.025)

    def test_credit_losses_erode_tier1(self, calculator, reference_portfolio, reference_capital, params):
        result = calculator.calculate(
            reference_portfolio.assets, reference_capital, params, apply_credit_losses=True
        )

        assert result.credit_losses == pytest.approx(70.8e6)
        assert result.tier1_capital == pytest.approx(19.2e6)
        assert result.tier1_ratio == pytest.approx(19.2 / 746)
        assert not result.compliance_status.tier1_compliant
        assert result.get_tier1_shortfall() == pytest.approx((0.06 - 19.2 / 746) * 746e6)

    def test_tier1_floored_when_losses_exceed_capital(self, calculator, reference_portfolio, params):
        result = calculator.calculate(
            reference_portfolio.assets, CapitalBase(tier1_capital=10e6), params, apply_credit_losses=True
        )

        assert result.tier1_capital == 0
        assert result.tier1_ratio == 0
        assert result.leverage_ratio == 0

    def test_empty_portfolio_floors_denominators(self, calculator, params):
        result = calculator.calculate([], CapitalBase(tier1_capital=5), params)

        assert result.risk_weighted_assets == 1
        assert result.tier1_ratio == 5
        assert result.leverage_ratio == 5

    def test_binding_constraint(self, calculator, reference_portfolio, reference_capital):
        params = RegulatoryParameters(leverage_minimum=0.068)
        result = calculator.calculate(reference_portfolio.assets, reference_capital, params)

        assert result.get_binding_constraint() == "Leverage"

    def test_large_exposures_exclude_sovereigns(self, calculator, reference_portfolio,
                                                reference_capital, params):
        result = calculator.calculate(reference_portfolio.assets, reference_capital, params)

        # limit = 25% of 90M = 22.5M
        assert "gilts" not in result.large_exposures
        assert set(result.large_exposures) == {
            "covered_bonds", "a_rated_bonds", "corporate_loans", "commercial_property"
        }

    def test_large_exposure_limit_disabled(self, calculator, reference_portfolio, reference_capital):
        params = RegulatoryParameters(large_exposure_limit=0)
        result = calculator.calculate(reference_portfolio.assets, reference_capital, params)

        assert result.large_exposures == []

    def test_portfolio_not_mutated(self, calculator, reference_portfolio, reference_capital, params):
        before = reference_portfolio.model_dump()
        calculator.calculate(reference_portfolio.assets, reference_capital, params, apply_credit_losses=True)

        assert reference_portfolio.model_dump() == before

    def test_zero_risk_weight_portfolio(self, calculator, sovereign_only_portfolio, params):
        result = calculator.calculate(sovereign_only_portfolio.assets, CapitalBase(tier1_capital=10e6), params)

        assert result.risk_weighted_assets == 1
        assert result.leverage_ratio == pytest.approx(0.1)
        assert isinstance(sovereign_only_portfolio, Portfolio)
