"""Portfolio generation for Reggio engine testing and demonstrations."""

from typing import Dict, Any, List, Optional, Tuple
from enum import Enum
import numpy as np

from ..core.capital import CapitalBase
from ..core.portfolio import (
    Asset, AssetClass, CreditRating, FundingProfile, LiquidityClass, Portfolio,
)


class BankSize(str, Enum):
    """Bank size categories for portfolio generation."""

    SMALL = "small"           # Community bank
    MEDIUM = "medium"         # Regional bank
    LARGE = "large"           # Large commercial bank
    GSIB = "gsib"             # Global systemically important bank


# Balance-sheet shape per bank size: total assets range, asset mix, funding mix
# (as a fraction of total assets) and Tier 1 ratio range.
SIZE_PROFILES: Dict[BankSize, Dict[str, Any]] = {
    BankSize.SMALL: {
        "total_assets": (500e6, 5e9),
        "mix": {"cash": 0.05, "sovereign": 0.12, "covered": 0.03, "corporate_bonds": 0.03,
                "corporate_loans": 0.27, "residential": 0.40, "commercial": 0.10, "equity": 0.0},
        "funding": {"retail_deposits": 0.70, "corporate_deposits": 0.12,
                    "wholesale_funding": 0.03, "secured_funding": 0.05},
        "tier1_ratio": (0.13, 0.18),
    },
    BankSize.MEDIUM: {
        "total_assets": (5e9, 50e9),
        "mix": {"cash": 0.05, "sovereign": 0.12, "covered": 0.04, "corporate_bonds": 0.04,
                "corporate_loans": 0.30, "residential": 0.30, "commercial": 0.13, "equity": 0.02},
        "funding": {"retail_deposits": 0.55, "corporate_deposits": 0.20,
                    "wholesale_funding": 0.08, "secured_funding": 0.07},
        "tier1_ratio": (0.12, 0.16),
    },
    BankSize.LARGE: {
        "total_assets": (50e9, 500e9),
        "mix": {"cash": 0.06, "sovereign": 0.14, "covered": 0.05, "corporate_bonds": 0.05,
                "corporate_loans": 0.32, "residential": 0.22, "commercial": 0.12, "equity": 0.04},
        "funding": {"retail_deposits": 0.45, "corporate_deposits": 0.22,
                    "wholesale_funding": 0.13, "secured_funding": 0.10},
        "tier1_ratio": (0.11, 0.15),
    },
    BankSize.GSIB: {
        "total_assets": (500e9, 2e12),
        "mix": {"cash": 0.08, "sovereign": 0.16, "covered": 0.05, "corporate_bonds": 0.06,
                "corporate_loans": 0.30, "residential": 0.18, "commercial": 0.10, "equity": 0.07},
        "funding": {"retail_deposits": 0.35, "corporate_deposits": 0.25,
                    "wholesale_funding": 0.18, "secured_funding": 0.12},
        "tier1_ratio": (0.12, 0.16),
    },
}


class PortfolioGenerator:
    """Generator for synthetic bank balance sheets with realistic characteristics.

    Each generator owns its random state, so two generators built with the
    same seed produce identical portfolios.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def generate_bank(self, size: BankSize = BankSize.MEDIUM,
                      bank_name: Optional[str] = None) -> Tuple[Portfolio, FundingProfile, CapitalBase]:
        """Generate a portfolio, funding profile and capital base for one bank."""
        profile = SIZE_PROFILES[size]
        bank_name = bank_name or f"Synthetic Bank {self.rng.integers(1000, 10000)}"

        total_assets = float(self.rng.uniform(*profile["total_assets"]))
        mix = profile["mix"]

        assets: List[Asset] = []
        assets += self._add_cash(total_assets * mix["cash"])
        assets += self._add_sovereign_bonds(total_assets * mix["sovereign"])
        assets += self._add_covered_bonds(total_assets * mix["covered"])
        assets += self._add_corporate_bonds(total_assets * mix["corporate_bonds"])
        assets += self._add_corporate_loans(total_assets * mix["corporate_loans"])
        assets += self._add_property_loans(total_assets * mix["residential"], "residential")
        assets += self._add_property_loans(total_assets * mix["commercial"], "commercial")
        assets += self._add_equities(total_assets * mix["equity"])

        portfolio = Portfolio(
            portfolio_id=f"{size.value}_{self.rng.integers(10_000_000, 100_000_000)}",
            bank_name=bank_name,
            assets=tuple(assets),
        )

        funding = self.generate_funding(total_assets, size)
        capital = self.generate_capital(portfolio, size)
        return portfolio, funding, capital

    def generate_portfolio(self, size: BankSize = BankSize.MEDIUM,
                           bank_name: Optional[str] = None) -> Portfolio:
        return self.generate_bank(size, bank_name)[0]

    def generate_funding(self, total_assets: float, size: BankSize = BankSize.MEDIUM) -> FundingProfile:
        """Funding balances scaled to total assets with +/-10% noise per source."""
        shares = SIZE_PROFILES[size]["funding"]
        balances = {
            source: total_assets * share * float(self.rng.uniform(0.9, 1.1))
            for source, share in shares.items()
        }
        return FundingProfile(**balances)

    def generate_capital(self, portfolio: Portfolio, size: BankSize = BankSize.MEDIUM) -> CapitalBase:
        """Capital base sized to a Tier 1 ratio drawn from the size profile."""
        rwa = sum(asset.get_risk_weighted_amount() for asset in portfolio.assets)
        tier1_ratio = float(self.rng.uniform(*SIZE_PROFILES[size]["tier1_ratio"]))
        tier1 = rwa * tier1_ratio
        return CapitalBase(tier1_capital=tier1, tier2_capital=tier1 * float(self.rng.uniform(0.15, 0.30)))

    def _split(self, total_amount: float, count: int, sigma: float) -> np.ndarray:
        """Split an amount into ``count`` lognormally sized positions."""
        weights = self.rng.lognormal(mean=0.0, sigma=sigma, size=count)
        return total_amount * weights / weights.sum()

    def _add_cash(self, total_amount: float) -> List[Asset]:
        if total_amount <= 0:
            return []
        return [Asset(
            asset_id="central_bank_reserves",
            asset_class=AssetClass.OTHER,
            market_value=total_amount,
            rating=CreditRating.AAA,
            basel_risk_weight=0.0,
            liquidity_classification=LiquidityClass.HQLA_L1,
        )]

    def _add_sovereign_bonds(self, total_amount: float) -> List[Asset]:
        sizes = self._split(total_amount, int(self.rng.integers(5, 15)), 0.5)
        jurisdictions = ["UK", "DE", "FR", "US"]
        return [
            Asset(
                asset_id=f"govt_bond_{i:03d}",
                asset_class=AssetClass.SOVEREIGN,
                market_value=float(size),
                rating=str(self.rng.choice(["AAA", "AA"])),
                jurisdiction=str(self.rng.choice(jurisdictions)),
                sector="sovereign",
                basel_risk_weight=0.0,
                liquidity_classification=LiquidityClass.HQLA_L1,
            )
            for i, size in enumerate(sizes)
        ]

    def _add_covered_bonds(self, total_amount: float) -> List[Asset]:
        sizes = self._split(total_amount, int(self.rng.integers(3, 10)), 0.4)
        return [
            Asset(
                asset_id=f"covered_bond_{i:03d}",
                asset_class=AssetClass.CORPORATE,
                market_value=float(size),
                rating=str(self.rng.choice(["AAA", "AA"])),
                sector="financial",
                basel_risk_weight=0.2,
                liquidity_classification=LiquidityClass.HQLA_L2A,
            )
            for i, size in enumerate(sizes)
        ]

    def _add_corporate_bonds(self, total_amount: float) -> List[Asset]:
        sizes = self._split(total_amount, int(self.rng.integers(5, 20)), 0.6)
        assets = []
        for i, size in enumerate(sizes):
            rating = str(self.rng.choice(["A", "BBB", "BB"], p=[0.4, 0.45, 0.15]))
            # Sub-investment-grade bonds do not qualify as HQLA
            liquidity = LiquidityClass.NON_HQLA if rating == "BB" else LiquidityClass.HQLA_L2B
            assets.append(Asset(
                asset_id=f"corporate_bond_{i:03d}",
                asset_class=AssetClass.CORPORATE,
                market_value=float(size),
                rating=rating,
                sector=str(self.rng.choice(["industrial", "energy", "technology", "consumer"])),
                basel_risk_weight=0.5 if rating == "A" else 1.0,
                liquidity_classification=liquidity,
            ))
        return assets

    def _add_corporate_loans(self, total_amount: float) -> List[Asset]:
        sizes = self._split(total_amount, int(self.rng.integers(20, 60)), 0.8)
        ratings = ["A", "BBB", "BB", "B", "UNRATED"]
        return [
            Asset(
                asset_id=f"corporate_loan_{i:03d}",
                asset_class=AssetClass.CORPORATE,
                market_value=float(size),
                rating=str(self.rng.choice(ratings, p=[0.1, 0.35, 0.3, 0.1, 0.15])),
                sector=str(self.rng.choice(["manufacturing", "services", "retail", "construction"])),
                basel_risk_weight=1.0,
            )
            for i, size in enumerate(sizes)
        ]

    def _add_property_loans(self, total_amount: float, sector: str) -> List[Asset]:
        if total_amount <= 0:
            return []
        sizes = self._split(total_amount, int(self.rng.integers(10, 40)), 0.3)
        risk_weight = 0.35 if sector == "residential" else 1.0
        return [
            Asset(
                asset_id=f"{sector}_mortgage_{i:03d}",
                asset_class=AssetClass.PROPERTY,
                market_value=float(size),
                sector=sector,
                basel_risk_weight=risk_weight,
            )
            for i, size in enumerate(sizes)
        ]

    def _add_equities(self, total_amount: float) -> List[Asset]:
        if total_amount <= 0:
            return []
        sizes = self._split(total_amount, int(self.rng.integers(3, 10)), 0.7)
        return [
            Asset(
                asset_id=f"equity_{i:03d}",
                asset_class=AssetClass.EQUITY,
                market_value=float(size),
                basel_risk_weight=1.0,
            )
            for i, size in enumerate(sizes)
        ]


def reference_portfolio() -> Portfolio:
    """The documented five-asset example portfolio."""
    return Portfolio(
        portfolio_id="reference",
        bank_name="Reference Bank",
        assets=(
            Asset(asset_id="uk_gilts", asset_class=AssetClass.SOVEREIGN, market_value=500e6,
                  rating=CreditRating.AAA, jurisdiction="UK", basel_risk_weight=0.0,
                  liquidity_classification=LiquidityClass.HQLA_L1),
            Asset(asset_id="covered_bonds", asset_class=AssetClass.CORPORATE, market_value=80e6,
                  rating=CreditRating.AA, basel_risk_weight=0.2,
                  liquidity_classification=LiquidityClass.HQLA_L2A),
            Asset(asset_id="a_rated_bonds", asset_class=AssetClass.CORPORATE, market_value=30e6,
                  rating=CreditRating.A, basel_risk_weight=1.0,
                  liquidity_classification=LiquidityClass.HQLA_L2B),
            Asset(asset_id="corporate_loans", asset_class=AssetClass.CORPORATE, market_value=400e6,
                  rating=CreditRating.BBB, basel_risk_weight=1.0),
            Asset(asset_id="commercial_property", asset_class=AssetClass.PROPERTY, market_value=300e6,
                  sector="commercial", basel_risk_weight=1.0),
        ),
    )


def reference_funding() -> FundingProfile:
    """Funding profile matching ``reference_portfolio``."""
    return FundingProfile(
        retail_deposits=1000e6,
        corporate_deposits=600e6,
        wholesale_funding=300e6,
    )


def reference_capital() -> CapitalBase:
    return CapitalBase(tier1_capital=90e6, tier2_capital=30e6)
