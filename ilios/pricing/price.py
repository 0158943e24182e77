"""
Suggested Price Calculator

Pure functions from cost components to a wholesale price, plus the
rounding and formatting used wherever prices are shown or printed.

Cheap enough to rerun over every line in view on each keystroke of the
metal price field.

Version: wholesale_pricing_v1
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel

from ilios.catalog.lookup import MaterialSource, ProductSource, index_materials, index_products
from ilios.catalog.models import GlobalSettings, Product
from ilios.costing.models import CostBreakdown, CostOptions
from ilios.costing.rollup import CostWalk

from . import schedule

logger = logging.getLogger(__name__)


class PricedLine(BaseModel):
    """A product/variant line with its cost and suggested price."""
    sku: str
    variant_suffix: str = ""
    cost: CostBreakdown
    suggested_price: float
    list_price: Optional[float] = None


def round_price(price: float) -> float:
    """Nearest 10 cents, halves rounded up (21.54 -> 21.5, 21.55 -> 21.6)."""
    if not price:
        return 0.0
    step = Decimal(schedule.PRICE_STEP)
    return float(Decimal(str(price)).quantize(step, rounding=ROUND_HALF_UP))


def _check_amount(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value}")
    return value


def suggest_wholesale_price(
    total_weight: float,
    silver_cost: float,
    labor_cost: float,
    materials_cost: float,
) -> float:
    """
    Suggested wholesale price:

        2 x (labor + materials) + silver + 2 EUR per gram

    rounded to 10 cents. All zeros gives 0.
    """
    total_weight = _check_amount("total_weight", total_weight)
    silver_cost = _check_amount("silver_cost", silver_cost)
    labor_cost = _check_amount("labor_cost", labor_cost)
    materials_cost = _check_amount("materials_cost", materials_cost)

    non_metal = (labor_cost + materials_cost) * schedule.NON_METAL_MULTIPLIER
    surcharge = total_weight * schedule.WEIGHT_SURCHARGE_PER_GRAM
    return round_price(non_metal + silver_cost + surcharge)


def suggest_price_for_cost(cost: CostBreakdown) -> float:
    return suggest_wholesale_price(
        cost.details.total_weight,
        cost.silver_cost,
        cost.labor_cost,
        cost.materials_cost,
    )


def reprice_lines(
    lines: Iterable[Tuple[Product, Optional[str]]],
    catalog: ProductSource,
    materials: MaterialSource,
    settings: GlobalSettings,
    metal_price: Optional[float] = None,
    options: Optional[CostOptions] = None,
) -> List[PricedLine]:
    """
    Recost and reprice (product, variant suffix) lines at a metal price.

    One walk is shared by all lines, so common sub-assemblies are costed
    once per call.
    """
    walk = CostWalk(
        index_products(catalog),
        index_materials(materials),
        settings,
        options,
        metal_price,
    )
    priced: List[PricedLine] = []
    for product, suffix in lines:
        cost = walk.finish(product, suffix or "")
        variant = product.get_variant(suffix) if suffix else None
        list_price = product.selling_price
        if variant is not None and variant.selling_price is not None:
            list_price = variant.selling_price
        priced.append(PricedLine(
            sku=product.sku,
            variant_suffix=cost.variant_suffix,
            cost=cost,
            suggested_price=suggest_price_for_cost(cost),
            list_price=list_price,
        ))
    logger.debug(f"Repriced {len(priced)} lines at {walk.metal_price}/g")
    return priced


def codify_price(price: Optional[float]) -> str:
    """Retail label code: 36.90 -> '136909'. Empty for no price."""
    if not price or price <= 0:
        return ""
    cents = int(Decimal(str(price)).scaleb(2).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return f"{schedule.LABEL_CODE_HEAD}{cents}{schedule.LABEL_CODE_TAIL}"


def format_decimal(num: Optional[float], precision: int = 2) -> str:
    if num is None or (isinstance(num, float) and math.isnan(num)):
        num = 0.0
    return f"{num:.{precision}f}".replace(".", schedule.DECIMAL_SEPARATOR)


def format_currency(num: Optional[float]) -> str:
    return f"{format_decimal(num, 2)}{schedule.CURRENCY_SYMBOL}"
