"""
Supplier value analysis.

Compares what a supplier charges for a finished piece against what the
same piece would cost to make in-house, and flags metal priced above spot.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel

from ilios.catalog.lookup import MaterialSource, ProductSource, index_materials, index_products
from ilios.catalog.models import ComponentItem, GlobalSettings, LaborCosts, RawItem, RecipeItem
from ilios.codes.grammar import normalize_code
from ilios.costing.labor import calculate_casting_cost, calculate_technician_cost
from ilios.costing.rollup import CostWalk

from . import schedule
from .price import round_price

Efficiency = Literal["Cheaper", "Similar", "More Expensive"]


class SupplierBreakdown(BaseModel):
    silver_cost: float
    material_cost: float
    est_labor: float
    supplier_reported_labor: float


class SupplierAnalysis(BaseModel):
    intrinsic_value: float
    theoretical_make_cost: float
    supplier_premium: float
    premium_percent: float
    verdict: Literal["Excellent", "Fair", "Expensive", "Overpriced"]
    effective_silver_price: float
    has_hidden_markup: bool
    labor_efficiency: Efficiency
    plating_efficiency: Efficiency
    breakdown: SupplierBreakdown


def _efficiency(diff: float, cheaper: float, dearer: float) -> Efficiency:
    if diff < cheaper:
        return "Cheaper"
    if diff > dearer:
        return "More Expensive"
    return "Similar"


def _verdict(supplier_cost: float, make_cost: float) -> str:
    for factor, verdict in schedule.VERDICT_BANDS:
        if supplier_cost <= make_cost * factor:
            return verdict
    return schedule.VERDICT_OVER


def analyze_supplier_value(
    weight: float,
    supplier_cost: float,
    recipe: List[RecipeItem],
    settings: GlobalSettings,
    materials: MaterialSource,
    catalog: ProductSource,
    reported_labor: Optional[LaborCosts] = None,
) -> SupplierAnalysis:
    """
    Judge a supplier's price for a piece of `weight` grams built from `recipe`.

    Metal is valued at spot without loss: the supplier carries the waste.
    Sub-assemblies in the recipe are costed through the rollup engine.

    Raises:
        CycleDetected: a sub-assembly in `recipe` is part of a cycle
    """
    reported = reported_labor or LaborCosts()
    material_table = index_materials(materials)
    walk = CostWalk(index_products(catalog), material_table, settings)

    silver_cost = weight * settings.metal_price_gram
    material_cost = 0.0
    for item in recipe:
        if isinstance(item, RawItem):
            material = material_table.get(item.material_id)
            if material is not None:
                material_cost += material.unit_cost * item.quantity
        elif isinstance(item, ComponentItem):
            sub_product = walk.products.get(normalize_code(item.sku))
            if sub_product is not None:
                material_cost += walk.finish(sub_product).total * item.quantity

    intrinsic_value = silver_cost + material_cost
    est_casting = calculate_casting_cost(weight)
    est_technician = calculate_technician_cost(weight)
    reported_plating = reported.plating_cost_x + reported.plating_cost_d
    est_plating = weight * schedule.EST_PLATING_RATE_PER_GRAM if reported_plating > 0 else 0.0
    est_labor = est_casting + est_technician + est_plating
    make_cost = intrinsic_value + est_labor

    reported_work = reported.technician_cost + reported.stone_setting_cost
    reported_extras = reported_work + reported_plating

    labor_efficiency: Efficiency = "Similar"
    if reported_work > 0:
        labor_efficiency = _efficiency(
            reported_work - (est_casting + est_technician),
            schedule.LABOR_CHEAPER_DIFF,
            schedule.LABOR_DEARER_DIFF,
        )

    plating_efficiency: Efficiency = "Similar"
    if reported_plating > 0:
        plating_efficiency = _efficiency(
            reported_plating - est_plating,
            schedule.PLATING_CHEAPER_DIFF,
            schedule.PLATING_DEARER_DIFF,
        )

    effective_silver_price = 0.0
    if reported_extras > 0 and weight > 0:
        effective_silver_price = (supplier_cost - material_cost - reported_extras) / weight

    premium = supplier_cost - intrinsic_value
    premium_percent = (premium / supplier_cost) * 100 if supplier_cost > 0 else 0.0

    return SupplierAnalysis(
        intrinsic_value=round_price(intrinsic_value),
        theoretical_make_cost=round_price(make_cost),
        supplier_premium=round_price(premium),
        premium_percent=round(premium_percent, 1),
        verdict=_verdict(supplier_cost, make_cost),
        effective_silver_price=round(effective_silver_price, 3),
        has_hidden_markup=(
            effective_silver_price > settings.metal_price_gram * schedule.HIDDEN_MARKUP_FACTOR
        ),
        labor_efficiency=labor_efficiency,
        plating_efficiency=plating_efficiency,
        breakdown=SupplierBreakdown(
            silver_cost=silver_cost,
            material_cost=material_cost,
            est_labor=est_labor,
            supplier_reported_labor=reported_extras,
        ),
    )
