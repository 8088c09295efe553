"""High Quality Liquid Assets stock with Basel III haircuts and composition caps."""

from typing import Dict, Iterable, Optional
from pydantic import BaseModel, ConfigDict, Field
import logging

from ..core.config import ReggioConfig
from ..core.portfolio import Asset, LiquidityClass

logger = logging.getLogger(__name__)


class HQLABreakdown(BaseModel):
    """HQLA stock after haircuts and caps."""

    model_config = ConfigDict(frozen=True)

    level1: float = Field(ge=0)
    level2a_after_haircut: float = Field(ge=0)
    level2b_after_haircut: float = Field(ge=0)
    level2b_after_haircut_capped: float = Field(ge=0)
    level2_total: float = Field(ge=0, description="Level 2 after both caps")
    pre_cap_total: float = Field(ge=0)

    level2b_cap_adjustment: float = Field(ge=0, description="Level 2B removed by the 15% cap")
    level2_cap_adjustment: float = Field(ge=0, description="Level 2 removed by the 40% cap")

    hqla_total: float = Field(ge=0)

    def as_dict(self) -> Dict[str, float]:
        return self.model_dump()


class HQLACalculator:
    """
    Converts a portfolio into an eligibility-capped HQLA stock.

    Level 1 is taken at market value, Level 2A and 2B after haircuts. Level 2B
    is capped at 15% of the pre-cap stock and total Level 2 may not exceed 40%
    of the final stock, which is the same as Level 2 <= 2/3 of Level 1.
    """

    def __init__(self, config: Optional[ReggioConfig] = None):
        self.config = config or ReggioConfig.load_default()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.hqla_haircuts = {
            LiquidityClass.HQLA_L1: self.config.get_haircut(LiquidityClass.HQLA_L1.value),
            LiquidityClass.HQLA_L2A: self.config.get_haircut(LiquidityClass.HQLA_L2A.value),
            LiquidityClass.HQLA_L2B: self.config.get_haircut(LiquidityClass.HQLA_L2B.value),
        }
        self.level2b_cap = self.config.get_hqla_cap("level2b_share")
        self.level2_cap = self.config.get_hqla_cap("level2_share")

    def calculate(self, assets: Iterable[Asset]) -> HQLABreakdown:
        """Calculate the capped HQLA stock for ``assets``."""
        market_values = self._sum_by_level(assets)

        level1 = market_values[LiquidityClass.HQLA_L1] * (1 - self.hqla_haircuts[LiquidityClass.HQLA_L1])
        level2a = market_values[LiquidityClass.HQLA_L2A] * (1 - self.hqla_haircuts[LiquidityClass.HQLA_L2A])
        level2b = market_values[LiquidityClass.HQLA_L2B] * (1 - self.hqla_haircuts[LiquidityClass.HQLA_L2B])

        pre_cap_total = level1 + level2a + level2b

        # Level 2B cannot exceed 15% of the pre-cap stock
        level2b_capped = min(level2b, self.level2b_cap * pre_cap_total)

        # Level 2 cannot exceed 40% of the post-cap stock
        level2 = level2a + level2b_capped
        max_level2 = self._max_level2(level1)
        level2_capped = min(level2, max_level2)

        breakdown = HQLABreakdown(
            level1=level1,
            level2a_after_haircut=level2a,
            level2b_after_haircut=level2b,
            level2b_after_haircut_capped=level2b_capped,
            level2_total=level2_capped,
            pre_cap_total=pre_cap_total,
            level2b_cap_adjustment=level2b - level2b_capped,
            level2_cap_adjustment=level2 - level2_capped,
            hqla_total=level1 + level2_capped,
        )

        self.logger.debug(f"HQLA calculated: {breakdown.as_dict()}")
        return breakdown

    def _max_level2(self, level1: float) -> float:
        """Largest Level 2 amount keeping Level 2 within its share of the stock."""
        if self.level2_cap >= 1:
            return float("inf")
        return level1 * self.level2_cap / (1 - self.level2_cap)

    def _sum_by_level(self, assets: Iterable[Asset]) -> Dict[LiquidityClass, float]:
        totals = {level: 0.0 for level in LiquidityClass}
        for asset in assets:
            totals[asset.liquidity_classification] += asset.market_value or 0.0
        return totals
