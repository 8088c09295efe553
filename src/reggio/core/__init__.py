"""Core components of the Reggio stress-testing engine."""

from .portfolio import (
    Asset, AssetClass, CreditRating, LiquidityClass,
    FundingProfile, FundingSource, Portfolio,
)
from .capital import CapitalBase
from .parameters import RegulatoryParameters
from .buffers import RegulatoryBuffers, BufferType
from .config import ReggioConfig
from .engine import ComplianceEngine

__all__ = [
    "Asset",
    "AssetClass",
    "CreditRating",
    "LiquidityClass",
    "FundingProfile",
    "FundingSource",
    "Portfolio",
    "CapitalBase",
    "RegulatoryParameters",
    "RegulatoryBuffers",
    "BufferType",
    "ReggioConfig",
    "ComplianceEngine",
]
