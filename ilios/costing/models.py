"""
Cost Rollup Models

Output types for the cost engine. Every amount is kept at full float
precision; round only when presenting (see CostBreakdown.presented).

Version: cost_rollup_v1
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class CycleDetected(Exception):
    """
    The component graph loops back on itself.

    A data-integrity fault in the catalog: no partial cost is returned
    because it could be mistaken for a real price.
    """

    def __init__(self, path: List[str]):
        self.path = list(path)
        self.sku = self.path[-1] if self.path else ""
        super().__init__(f"Component cycle detected: {' -> '.join(self.path)}")


class WarningKind(str, Enum):
    MISSING_MATERIAL = "MISSING_MATERIAL"
    MISSING_COMPONENT = "MISSING_COMPONENT"


class CostWarning(BaseModel):
    """A recipe reference that could not be resolved and was costed at zero."""
    kind: WarningKind
    ref: str = Field(description="Material id or component SKU that was not found")
    owner_sku: str = Field(description="Product whose recipe holds the reference")

    class Config:
        frozen = True

    @property
    def message(self) -> str:
        what = "material" if self.kind == WarningKind.MISSING_MATERIAL else "component"
        return f"{self.owner_sku}: {what} '{self.ref}' not found, costed at 0"


class CostLine(BaseModel):
    """One costed recipe row."""
    kind: Literal["raw", "component"]
    ref: str
    name: str = ""
    quantity: float
    unit_cost: float
    line_cost: float
    is_stone: bool = False
    missing: bool = False


class LaborBreakdown(BaseModel):
    casting: float = 0.0
    setter: float = 0.0
    technician: float = 0.0
    plating: float = 0.0
    subcontract: float = 0.0
    components: float = Field(
        default=0.0,
        description="Sub-assembly labor moved here by CostOptions.component_labor_as_labor"
    )

    @property
    def total(self) -> float:
        return (
            self.casting + self.setter + self.technician
            + self.plating + self.subcontract + self.components
        )


class CostDetails(BaseModel):
    lines: List[CostLine] = Field(default_factory=list)
    labor: LaborBreakdown = Field(default_factory=LaborBreakdown)
    stone_cost: float = Field(
        default=0.0,
        description="Part of materials_cost spent on stone-type materials"
    )
    stone_diff: float = Field(
        default=0.0,
        description="Extra (or saved) cost from stone-specific variant prices"
    )
    total_weight: float = 0.0
    warnings: List[CostWarning] = Field(default_factory=list)
    component_skus: List[str] = Field(
        default_factory=list,
        description="Every sub-assembly reached below this product"
    )
    material_ids: List[str] = Field(default_factory=list)


class CostOptions(BaseModel):
    component_labor_as_labor: bool = Field(
        default=False,
        description=(
            "Report sub-assembly labor in the parent's labor_cost instead of "
            "folding it into materials_cost. Totals are unchanged."
        )
    )


class CostBreakdown(BaseModel):
    """Cost of one unit of a product (optionally in a given variant)."""
    sku: str
    variant_suffix: str = ""
    total: float
    silver_cost: float
    labor_cost: float
    materials_cost: float
    metal_price_gram: float
    details: CostDetails = Field(default_factory=CostDetails)
    inputs_hash: Optional[str] = Field(
        default=None,
        description="Fingerprint of every record and setting that fed this result"
    )

    @property
    def has_warnings(self) -> bool:
        return bool(self.details.warnings)

    def presented(self) -> Dict[str, Any]:
        """Two-decimal view for display."""
        return {
            "sku": self.sku,
            "variant_suffix": self.variant_suffix,
            "total": round(self.total, 2),
            "silver_cost": round(self.silver_cost, 2),
            "labor_cost": round(self.labor_cost, 2),
            "materials_cost": round(self.materials_cost, 2),
            "stone_cost": round(self.details.stone_cost, 2),
            "total_weight": round(self.details.total_weight, 2),
            "warnings": [w.message for w in self.details.warnings],
        }
