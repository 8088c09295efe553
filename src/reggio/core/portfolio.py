"""Portfolio and funding definitions for the Reggio stress-testing engine."""

from enum import Enum
from typing import Optional, Dict, Any, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetClass(str, Enum):
    """Asset classes recognised by the stress engine."""

    SOVEREIGN = "SOVEREIGN"
    CORPORATE = "CORPORATE"
    EQUITY = "EQUITY"
    PROPERTY = "PROPERTY"
    OTHER = "OTHER"


class CreditRating(str, Enum):
    """External credit rating buckets."""

    AAA = "AAA"
    AA = "AA"
    A = "A"
    BBB = "BBB"
    BB = "BB"
    B = "B"
    CCC = "CCC"
    CC = "CC"
    C = "C"
    D = "D"
    UNRATED = "UNRATED"


class LiquidityClass(str, Enum):
    """Basel III LCR liquidity classification."""

    HQLA_L1 = "HQLA_L1"      # 0% haircut (cash, central bank reserves, sovereign bonds)
    HQLA_L2A = "HQLA_L2A"    # 15% haircut
    HQLA_L2B = "HQLA_L2B"    # 25% haircut
    NON_HQLA = "NON_HQLA"


class FundingSource(str, Enum):
    """Funding sources subject to 30-day run-off."""

    RETAIL_DEPOSITS = "RETAIL_DEPOSITS"
    CORPORATE_DEPOSITS = "CORPORATE_DEPOSITS"
    WHOLESALE_FUNDING = "WHOLESALE_FUNDING"
    SECURED_FUNDING = "SECURED_FUNDING"


class Asset(BaseModel):
    """Single held position."""

    model_config = ConfigDict(frozen=True)

    asset_id: str
    asset_class: AssetClass
    market_value: float = Field(ge=0, description="Market value in base currency")
    rating: CreditRating = CreditRating.UNRATED
    jurisdiction: Optional[str] = None
    sector: Optional[str] = None
    basel_risk_weight: float = Field(default=1.0, ge=0)
    liquidity_classification: LiquidityClass = LiquidityClass.NON_HQLA

    @field_validator("rating", mode="before")
    @classmethod
    def normalise_rating(cls, v: Any) -> Any:
        """Accept lower-case ratings; missing or unrecognised ratings become unrated."""
        if v is None:
            return CreditRating.UNRATED
        if isinstance(v, str):
            rating = v.strip().upper()
            if rating in CreditRating.__members__:
                return CreditRating(rating)
            return CreditRating.UNRATED
        return v

    def get_risk_weighted_amount(self) -> float:
        """Risk-weighted amount of the position."""
        return self.market_value * self.basel_risk_weight

    def is_hqla(self) -> bool:
        """Check if the asset counts towards the HQLA stock."""
        return self.liquidity_classification != LiquidityClass.NON_HQLA

    def with_market_value(self, market_value: float) -> "Asset":
        """Return a copy of the asset revalued at ``market_value``."""
        return self.model_copy(update={"market_value": market_value})


class Portfolio(BaseModel):
    """Immutable snapshot of held assets."""

    model_config = ConfigDict(frozen=True)

    portfolio_id: str = "portfolio"
    bank_name: Optional[str] = None
    reporting_date: Optional[str] = None
    assets: Tuple[Asset, ...] = ()

    def get_total_market_value(self) -> float:
        """Get total market value of all assets."""
        return sum(asset.market_value for asset in self.assets)

    def get_assets_by_class(self, asset_class: AssetClass) -> List[Asset]:
        """Get all assets of a specific class."""
        return [asset for asset in self.assets if asset.asset_class == asset_class]

    def get_assets_by_liquidity(self, liquidity_class: LiquidityClass) -> List[Asset]:
        """Get all assets with a specific liquidity classification."""
        return [asset for asset in self.assets if asset.liquidity_classification == liquidity_class]

    def get_asset(self, asset_id: str) -> Optional[Asset]:
        for asset in self.assets:
            if asset.asset_id == asset_id:
                return asset
        return None

    def get_sector_concentration(self) -> Dict[str, float]:
        """Share of total market value held per sector."""
        total = self.get_total_market_value()
        if total == 0:
            return {}

        sector_values: Dict[str, float] = {}
        for asset in self.assets:
            sector = asset.sector or "unknown"
            sector_values[sector] = sector_values.get(sector, 0.0) + asset.market_value

        return {sector: value / total for sector, value in sector_values.items()}

    def with_assets(self, assets: List[Asset], suffix: str = "") -> "Portfolio":
        """Return a new portfolio holding ``assets``."""
        return self.model_copy(update={
            "portfolio_id": f"{self.portfolio_id}{suffix}",
            "assets": tuple(assets),
        })


class FundingProfile(BaseModel):
    """Aggregate funding balances by source."""

    model_config = ConfigDict(frozen=True)

    retail_deposits: float = Field(default=0, ge=0)
    corporate_deposits: float = Field(default=0, ge=0)
    wholesale_funding: float = Field(default=0, ge=0)
    secured_funding: float = Field(default=0, ge=0)

    stable_funding_ratio: Optional[float] = Field(default=None, ge=0)
    deposit_concentration: Dict[str, float] = Field(default_factory=dict)

    @field_validator("deposit_concentration")
    @classmethod
    def validate_concentration(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Ensure concentration balances are non-negative."""
        for name, amount in v.items():
            if amount < 0:
                raise ValueError(f"Deposit concentration for {name} must be non-negative")
        return v

    def balance(self, source: FundingSource) -> float:
        """Get balance for a funding source."""
        return getattr(self, source.value.lower())

    def get_total_funding(self) -> float:
        return sum(self.balance(source) for source in FundingSource)
