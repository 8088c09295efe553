"""Stressed credit-loss rates used to erode Tier 1 capital."""

from typing import Dict, Iterable, Optional
import logging

from ..core.config import ReggioConfig
from ..core.portfolio import Asset, AssetClass, CreditRating

logger = logging.getLogger(__name__)


class CreditLossModel:
    """Rating- and sector-keyed loss curve for corporate and property assets."""

    LOSS_BEARING_CLASSES = (AssetClass.CORPORATE, AssetClass.PROPERTY)

    def __init__(self, config: Optional[ReggioConfig] = None, severity_multiplier: float = 1.0):
        self.config = config or ReggioConfig.load_default()
        self.severity_multiplier = severity_multiplier

    def get_loss_rate(self, asset: Asset) -> float:
        """Loss rate for an asset; unknown ratings and sectors take the default (highest) rate."""
        if asset.asset_class not in self.LOSS_BEARING_CLASSES:
            return 0.0

        if asset.asset_class == AssetClass.CORPORATE:
            key = asset.rating.value if asset.rating != CreditRating.UNRATED else None
        else:
            key = asset.sector.strip() if asset.sector else None

        rate = self.config.get_credit_loss_rate(asset.asset_class.value, key)
        return min(1.0, rate * self.severity_multiplier)

    def calculate_losses(self, assets: Iterable[Asset]) -> Dict[str, float]:
        """Credit loss per asset id for loss-bearing assets."""
        losses: Dict[str, float] = {}
        for asset in assets:
            rate = self.get_loss_rate(asset)
            if rate > 0:
                losses[asset.asset_id] = losses.get(asset.asset_id, 0.0) + asset.market_value * rate
        return losses

    def calculate_total_losses(self, assets: Iterable[Asset]) -> float:
        return sum(self.calculate_losses(assets).values())
