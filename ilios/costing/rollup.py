"""
Cost Rollup Engine

Walks a product's recipe depth-first, recursing into sub-assemblies:

    total = silver_cost + labor_cost + materials_cost

- silver_cost:    own weight (primary + secondary) x metal price x (1 + loss%)
- materials_cost: raw materials + full cost of every sub-assembly x qty
- labor_cost:     this product's own operations (see labor.py)

One walk serves one top-level call. It memoizes sub-assembly costs by SKU
and tracks the SKUs on the active path; a reference back onto that path
stops the walk and surfaces as CycleDetected at the call boundary. Nothing
is cached between calls, since the metal price may change in between.

Missing materials/components are costed at zero and reported as warnings.

Version: cost_rollup_v1
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ilios.catalog.lookup import MaterialSource, ProductSource, index_materials, index_products
from ilios.catalog.models import (
    ComponentItem,
    GlobalSettings,
    Material,
    MaterialType,
    Product,
    ProductionType,
    RawItem,
)
from ilios.codes.grammar import decode_suffix, normalize_code
from ilios.codes.tables import finish_for_plating
from ilios.shared.hashing import canonicalize_and_hash

from .labor import compute_labor, imported_plating_cost
from .models import (
    CostBreakdown,
    CostDetails,
    CostLine,
    CostOptions,
    CostWarning,
    CycleDetected,
    LaborBreakdown,
    WarningKind,
)

logger = logging.getLogger(__name__)


class CostWalk:
    """
    State for one top-level costing call: memo, active path, cycle found.

    cost_of() returns None once a cycle has been found; callers unwind
    and the boundary turns it into CycleDetected.
    """

    def __init__(
        self,
        products: Dict[str, Product],
        materials: Dict[str, Material],
        settings: GlobalSettings,
        options: Optional[CostOptions] = None,
        metal_price_override: Optional[float] = None,
    ):
        self.products = products
        self.materials = materials
        self.settings = settings
        self.options = options or CostOptions()
        self.metal_price = (
            settings.metal_price_gram if metal_price_override is None else metal_price_override
        )
        self.memo: Dict[str, CostBreakdown] = {}
        self.path: List[str] = []
        self.on_path: Set[str] = set()
        self.cycle: Optional[List[str]] = None

    def cost_of(
        self,
        product: Product,
        variant_suffix: str = "",
        use_memo: bool = True,
    ) -> Optional[CostBreakdown]:
        sku = product.sku
        suffix = normalize_code(variant_suffix)
        use_memo = use_memo and not suffix

        if sku in self.on_path:
            self.cycle = self.path[self.path.index(sku):] + [sku]
            logger.error(f"Component cycle: {' -> '.join(self.cycle)}")
            return None

        if use_memo and sku in self.memo:
            logger.debug(f"Memo hit for {sku}")
            return self.memo[sku]

        self.path.append(sku)
        self.on_path.add(sku)
        if product.production_type == ProductionType.IMPORTED:
            result = self._imported_cost(product, suffix)
        else:
            result = self._in_house_cost(product, suffix)
        self.path.pop()
        self.on_path.discard(sku)

        if result is not None and use_memo:
            self.memo[sku] = result
        return result

    def _finish_code(self, product: Product, suffix: str) -> str:
        components = decode_suffix(suffix, product.gender)
        if components.finish is not None:
            return components.finish.code
        return finish_for_plating(product.plating_type)

    def _silver_cost(self, weight_g: float) -> float:
        return weight_g * self.metal_price * self.settings.loss_factor

    def _imported_cost(self, product: Product, suffix: str) -> CostBreakdown:
        """Bought-in pieces: supplier per-gram rates, no recipe walk."""
        finish = self._finish_code(product, suffix)
        technician = product.weight_g * product.labor.technician_cost
        plating = imported_plating_cost(product, finish)
        stone_setting = product.labor.stone_setting_cost
        silver = self._silver_cost(product.total_weight_g)
        labor = LaborBreakdown(technician=technician, plating=plating)

        return CostBreakdown(
            sku=product.sku,
            variant_suffix=suffix,
            total=silver + labor.total + stone_setting,
            silver_cost=silver,
            labor_cost=labor.total,
            materials_cost=stone_setting,
            metal_price_gram=self.metal_price,
            details=CostDetails(
                labor=labor,
                stone_cost=stone_setting,
                total_weight=product.total_weight_g,
            ),
        )

    def _in_house_cost(self, product: Product, suffix: str) -> Optional[CostBreakdown]:
        components = decode_suffix(suffix, product.gender)
        finish = self._finish_code(product, suffix)
        stone_code = components.stone_code

        lines: List[CostLine] = []
        warnings: List[CostWarning] = []
        component_skus: Set[str] = set()
        material_ids: Set[str] = set()
        materials_cost = 0.0
        stone_cost = 0.0
        stone_diff = 0.0
        component_labor = 0.0

        for item in product.recipe:
            if isinstance(item, RawItem):
                material = self.materials.get(item.material_id)
                if material is None:
                    logger.warning(f"{product.sku}: material '{item.material_id}' not found")
                    warnings.append(CostWarning(
                        kind=WarningKind.MISSING_MATERIAL,
                        ref=item.material_id,
                        owner_sku=product.sku,
                    ))
                    lines.append(CostLine(
                        kind="raw", ref=item.material_id, quantity=item.quantity,
                        unit_cost=0.0, line_cost=0.0, missing=True,
                    ))
                    continue

                material_ids.add(material.id)
                unit_cost = material.unit_cost
                if stone_code and stone_code in material.variant_prices:
                    unit_cost = material.variant_prices[stone_code]
                    stone_diff += (unit_cost - material.unit_cost) * item.quantity
                line_cost = unit_cost * item.quantity
                is_stone = material.type == MaterialType.STONE
                materials_cost += line_cost
                if is_stone:
                    stone_cost += line_cost
                lines.append(CostLine(
                    kind="raw", ref=material.id, name=material.name,
                    quantity=item.quantity, unit_cost=unit_cost,
                    line_cost=line_cost, is_stone=is_stone,
                ))

            elif isinstance(item, ComponentItem):
                sub_sku = normalize_code(item.sku)
                sub_product = self.products.get(sub_sku)
                if sub_product is None:
                    logger.warning(f"{product.sku}: component '{sub_sku}' not found")
                    warnings.append(CostWarning(
                        kind=WarningKind.MISSING_COMPONENT,
                        ref=sub_sku,
                        owner_sku=product.sku,
                    ))
                    lines.append(CostLine(
                        kind="component", ref=sub_sku, quantity=item.quantity,
                        unit_cost=0.0, line_cost=0.0, missing=True,
                    ))
                    continue

                sub_cost = self.cost_of(sub_product)
                if sub_cost is None:
                    return None

                component_skus.add(sub_sku)
                component_skus.update(sub_cost.details.component_skus)
                material_ids.update(sub_cost.details.material_ids)
                for warning in sub_cost.details.warnings:
                    if warning not in warnings:
                        warnings.append(warning)

                line_cost = sub_cost.total * item.quantity
                if self.options.component_labor_as_labor:
                    moved = sub_cost.labor_cost * item.quantity
                    component_labor += moved
                    materials_cost += line_cost - moved
                else:
                    materials_cost += line_cost
                lines.append(CostLine(
                    kind="component", ref=sub_sku, name=sub_product.category,
                    quantity=item.quantity, unit_cost=sub_cost.total, line_cost=line_cost,
                ))

            else:
                raise TypeError(f"Unsupported recipe item: {item!r}")

        labor = compute_labor(product, finish)
        labor.components = component_labor
        silver = self._silver_cost(product.total_weight_g)

        return CostBreakdown(
            sku=product.sku,
            variant_suffix=suffix,
            total=silver + labor.total + materials_cost,
            silver_cost=silver,
            labor_cost=labor.total,
            materials_cost=materials_cost,
            metal_price_gram=self.metal_price,
            details=CostDetails(
                lines=lines,
                labor=labor,
                stone_cost=stone_cost,
                stone_diff=stone_diff,
                total_weight=product.total_weight_g,
                warnings=warnings,
                component_skus=sorted(component_skus),
                material_ids=sorted(material_ids),
            ),
        )

    def inputs_hash(self, product: Product, result: CostBreakdown) -> str:
        """Fingerprint of the records and settings that produced `result`."""
        skus = result.details.component_skus
        return canonicalize_and_hash({
            "variant_suffix": result.variant_suffix,
            "metal_price_gram": self.metal_price,
            "loss_percentage": self.settings.loss_percentage,
            "options": self.options,
            "products": [product] + [self.products[s] for s in skus if s in self.products],
            "materials": [self.materials[m] for m in result.details.material_ids],
        })

    def finish(self, product: Product, variant_suffix: str = "") -> CostBreakdown:
        """
        Cost a top-level product, raising CycleDetected at this boundary.

        Only the catalog's own record of a SKU shares the memo; an edited
        copy passed in here is always costed from its own fields.
        """
        self.cycle = None
        in_catalog = self.products.get(product.sku) is product
        result = self.cost_of(product, variant_suffix, use_memo=in_catalog)
        if result is None:
            raise CycleDetected(self.cycle or [product.sku])
        return result.model_copy(update={"inputs_hash": self.inputs_hash(product, result)})


def compute_product_cost(
    product: Product,
    catalog: ProductSource,
    materials: MaterialSource,
    settings: GlobalSettings,
    *,
    variant_suffix: Optional[str] = None,
    options: Optional[CostOptions] = None,
    metal_price_override: Optional[float] = None,
) -> CostBreakdown:
    """
    Cost one unit of `product`, optionally in a variant.

    Args:
        product: Product to cost (need not be in `catalog`)
        catalog: Products used to resolve component references
        materials: Raw materials table
        settings: Metal price and loss percentage
        variant_suffix: Active variant; its finish selects plating labor
            and its stone selects stone-specific material prices
        options: CostOptions
        metal_price_override: Price per gram to use instead of settings

    Raises:
        CycleDetected: the component graph below `product` has a cycle
    """
    walk = CostWalk(
        index_products(catalog),
        index_materials(materials),
        settings,
        options,
        metal_price_override,
    )
    return walk.finish(product, variant_suffix or "")


def compute_batch_costs(
    products: Iterable[Product],
    catalog: ProductSource,
    materials: MaterialSource,
    settings: GlobalSettings,
    *,
    options: Optional[CostOptions] = None,
    metal_price_override: Optional[float] = None,
) -> Dict[str, CostBreakdown]:
    """
    Cost several master products in one call, sharing the sub-assembly memo.

    Raises:
        CycleDetected: on the first cycle met
    """
    walk = CostWalk(
        index_products(catalog),
        index_materials(materials),
        settings,
        options,
        metal_price_override,
    )
    return {product.sku: walk.finish(product) for product in products}


def find_component_cycles(catalog: ProductSource) -> List[List[str]]:
    """
    Every cycle in the component graph, as SKU paths ending where they start.

    Catalog validation helper; costs nothing.
    """
    products = index_products(catalog)
    cycles: List[List[str]] = []
    done: Set[str] = set()
    path: List[str] = []
    on_path: Set[str] = set()

    def visit(sku: str) -> None:
        if sku in on_path:
            cycles.append(path[path.index(sku):] + [sku])
            return
        if sku in done or sku not in products:
            return
        path.append(sku)
        on_path.add(sku)
        for item in products[sku].recipe:
            if isinstance(item, ComponentItem):
                visit(normalize_code(item.sku))
        path.pop()
        on_path.discard(sku)
        done.add(sku)

    for sku in products:
        visit(sku)
    return cycles
