"""Reporting helpers for the Reggio engine."""

from .formatters import format_currency, format_percentage
from .summary import summarize_results, results_to_frame

__all__ = ["format_currency", "format_percentage", "summarize_results", "results_to_frame"]
