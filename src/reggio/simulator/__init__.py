"""Synthetic portfolio generation."""

from .portfolio import (
    PortfolioGenerator, BankSize, reference_portfolio, reference_funding, reference_capital,
)

__all__ = ["PortfolioGenerator", "BankSize", "reference_portfolio", "reference_funding", "reference_capital"]
