"""Display formatting for amounts and ratios in recommendations and reports."""


def format_currency(value: float, symbol: str = "£") -> str:
    """Format an amount in millions or thousands, e.g. ``£15.3M``."""
    if abs(value) >= 1_000_000:
        return f"{symbol}{value / 1_000_000:.1f}M"
    elif abs(value) >= 1_000:
        return f"{symbol}{value / 1_000:.0f}K"
    return f"{symbol}{value:.0f}"


def format_percentage(value: float) -> str:
    """Format a fraction with one decimal place, e.g. ``118.1%``."""
    return f"{value * 100:.1f}%"
