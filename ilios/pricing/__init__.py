"""
Ilios Pricing

Suggested wholesale prices from cost breakdowns, price rounding and
label codes, and supplier price analysis.

Version: wholesale_pricing_v1
"""

from .price import (
    PricedLine,
    round_price,
    suggest_wholesale_price,
    suggest_price_for_cost,
    reprice_lines,
    codify_price,
    format_decimal,
    format_currency,
)
from .supplier import SupplierAnalysis, SupplierBreakdown, analyze_supplier_value

__version__ = "wholesale_pricing_v1"

__all__ = [
    "PricedLine",
    "round_price",
    "suggest_wholesale_price",
    "suggest_price_for_cost",
    "reprice_lines",
    "codify_price",
    "format_decimal",
    "format_currency",
    "SupplierAnalysis",
    "SupplierBreakdown",
    "analyze_supplier_value",
    "__version__",
]
