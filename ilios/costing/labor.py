"""
Labor schedules.

Casting and technician work are billed by weight unless the product
carries a manual figure. Plating is picked by the finish being costed.
"""

from typing import Optional

from ilios.catalog.models import Product

from .models import LaborBreakdown

CASTING_RATE_PER_GRAM = 0.15
COMPONENT_TECHNICIAN_RATE = 0.50

# (max weight in grams, rate per gram), first band that fits wins
TECHNICIAN_BANDS = [
    (2.2, 1.30),
    (4.2, 0.90),
    (8.2, 0.70),
]
TECHNICIAN_TOP_RATE = 0.50

GOLD_FINISHES = ("X", "H")
TWO_TONE_FINISH = "D"


def technician_rate(weight_g: float) -> float:
    for limit, rate in TECHNICIAN_BANDS:
        if weight_g <= limit:
            return rate
    return TECHNICIAN_TOP_RATE


def calculate_technician_cost(weight_g: float) -> float:
    if weight_g <= 0:
        return 0.0
    return weight_g * technician_rate(weight_g)


def calculate_casting_cost(weight_g: float) -> float:
    return max(weight_g, 0.0) * CASTING_RATE_PER_GRAM


def plating_labor(product: Product, finish_code: str) -> float:
    """Flat per-piece plating labor for in-house products."""
    if finish_code == TWO_TONE_FINISH:
        return product.labor.plating_cost_d
    if finish_code in GOLD_FINISHES:
        return product.labor.plating_cost_x
    return 0.0


def imported_plating_cost(product: Product, finish_code: str) -> float:
    """Imported pieces are plated at a per-gram supplier rate."""
    if finish_code == TWO_TONE_FINISH:
        return product.weight_g * product.labor.plating_cost_d
    if finish_code in GOLD_FINISHES:
        return product.weight_g * product.labor.plating_cost_x
    return 0.0


def compute_labor(product: Product, finish_code: Optional[str] = None) -> LaborBreakdown:
    """
    Labor for one in-house unit of `product` in the given finish.

    Two-tone pieces bill the primary metal at the band rate of the total
    weight and the secondary metal on its own schedule.
    """
    labor = product.labor
    total_weight = product.total_weight_g

    if labor.technician_cost_manual_override:
        technician = labor.technician_cost
    elif product.is_component:
        technician = product.weight_g * COMPONENT_TECHNICIAN_RATE
    elif finish_code == TWO_TONE_FINISH:
        technician = (
            product.weight_g * technician_rate(total_weight)
            + calculate_technician_cost(product.secondary_weight_g or 0.0)
        )
    else:
        technician = calculate_technician_cost(total_weight)

    if labor.casting_cost_manual_override:
        casting = labor.casting_cost
    elif product.is_component:
        casting = 0.0
    else:
        casting = calculate_casting_cost(total_weight)

    return LaborBreakdown(
        casting=casting,
        setter=labor.setter_cost,
        technician=technician,
        plating=plating_labor(product, finish_code or ""),
        subcontract=labor.subcontract_cost,
    )
