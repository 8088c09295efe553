"""Pytest configuration and shared fixtures."""

import pytest
import tempfile
from pathlib import Path

from reggio.core.config import ReggioConfig
from reggio.core.portfolio import (
    Asset, AssetClass, CreditRating, FundingProfile, LiquidityClass, Portfolio,
)
from reggio.core.capital import CapitalBase
from reggio.core.parameters import RegulatoryParameters
from reggio.simulator.portfolio import PortfolioGenerator, BankSize


@pytest.fixture(scope="session")
def test_config():
    """Test configuration fixture."""
    return ReggioConfig.load_default()


@pytest.fixture
def temp_dir():
    """Temporary directory fixture."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def reference_portfolio():
    """Five-asset example portfolio used throughout the worked examples."""
    return Portfolio(
        portfolio_id="reference",
        bank_name="Test Bank",
        assets=(
            Asset(
                asset_id="gilts",
                asset_class=AssetClass.SOVEREIGN,
                market_value=500e6,
                rating=CreditRating.AAA,
                basel_risk_weight=0.0,
                liquidity_classification=LiquidityClass.HQLA_L1,
            ),
            Asset(
                asset_id="covered_bonds",
                asset_class=AssetClass.CORPORATE,
                market_value=80e6,
                rating=CreditRating.AA,
                basel_risk_weight=0.2,
                liquidity_classification=LiquidityClass.HQLA_L2A,
            ),
            Asset(
                asset_id="a_rated_bonds",
                asset_class=AssetClass.CORPORATE,
                market_value=30e6,
                rating=CreditRating.A,
                basel_risk_weight=1.0,
                liquidity_classification=LiquidityClass.HQLA_L2B,
            ),
            Asset(
                asset_id="corporate_loans",
                asset_class=AssetClass.CORPORATE,
                market_value=400e6,
                rating=CreditRating.BBB,
                basel_risk_weight=1.0,
            ),
            Asset(
                asset_id="commercial_property",
                asset_class=AssetClass.PROPERTY,
                market_value=300e6,
                sector="commercial",
                basel_risk_weight=1.0,
            ),
        ),
    )


@pytest.fixture
def reference_funding():
    """Funding profile for the reference portfolio."""
    return FundingProfile(
        retail_deposits=1000e6,
        corporate_deposits=600e6,
        wholesale_funding=300e6,
    )


@pytest.fixture
def reference_capital():
    """Capital base for the reference portfolio."""
    return CapitalBase(tier1_capital=90e6, tier2_capital=30e6)


@pytest.fixture
def params():
    """Basel III minimums with a 100% LCR requirement."""
    return RegulatoryParameters(jurisdiction="UK", lcr_requirement=1.0)


@pytest.fixture
def sovereign_only_portfolio():
    """Portfolio holding only Level 1 sovereign bonds."""
    return Portfolio(
        portfolio_id="sovereign_only",
        assets=(
            Asset(
                asset_id="sovereign_001",
                asset_class=AssetClass.SOVEREIGN,
                market_value=100e6,
                rating=CreditRating.AAA,
                basel_risk_weight=0.0,
                liquidity_classification=LiquidityClass.HQLA_L1,
            ),
        ),
    )


@pytest.fixture
def medium_bank():
    """Medium bank balance sheet using generator."""
    generator = PortfolioGenerator(seed=42)
    return generator.generate_bank(BankSize.MEDIUM, "Test Medium Bank")


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark property-based tests
        if "test_properties" in item.nodeid:
            item.add_marker(pytest.mark.property)

        # Mark integration tests
        if "integration" in item.nodeid or "test_engine" in item.nodeid:
            item.add_marker(pytest.mark.integration)

        # Mark slow tests
        if any(marker in item.nodeid for marker in ["thread_pool", "large", "gsib"]):
            item.add_marker(pytest.mark.slow)


# Custom assertion helpers
def assert_hqla_caps_hold(breakdown, level2b_share=0.15, level2_share=0.40):
    """Assert that the Level 2B and Level 2 composition caps hold."""
    tolerance = 1e-6 * max(1.0, breakdown.pre_cap_total)

    assert breakdown.level2b_after_haircut_capped <= level2b_share * breakdown.pre_cap_total + tolerance, (
        f"Level 2B ({breakdown.level2b_after_haircut_capped:,.0f}) exceeds "
        f"{level2b_share:.0%} of pre-cap stock ({breakdown.pre_cap_total:,.0f})"
    )
    assert breakdown.level2_total <= level2_share * breakdown.hqla_total + tolerance, (
        f"Level 2 ({breakdown.level2_total:,.0f}) exceeds "
        f"{level2_share:.0%} of HQLA ({breakdown.hqla_total:,.0f})"
    )


def assert_ratio_bounds(ratio_dict):
    """Assert that ratios are non-negative."""
    for ratio_name, ratio_value in ratio_dict.items():
        if "ratio" in ratio_name.lower():
            assert ratio_value >= 0, f"Ratio {ratio_name} should be non-negative, got {ratio_value:.2%}"


# Parametrize helpers
BANK_SIZES = [BankSize.SMALL, BankSize.MEDIUM, BankSize.LARGE]
LOSS_RATINGS = [
    (CreditRating.AAA, 0.02),
    (CreditRating.AA, 0.02),
    (CreditRating.A, 0.04),
    (CreditRating.BBB, 0.08),
    (CreditRating.BB, 0.15),
    (CreditRating.B, 0.20),
    (CreditRating.UNRATED, 0.20),
]
