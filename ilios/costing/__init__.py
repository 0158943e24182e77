"""
Ilios Cost Rollup

Computes what one unit of a product costs to make, recursing through
sub-assemblies in its bill of materials.

PRINCIPLE: A cyclic catalog is a hard error, never a partial price.

Version: cost_rollup_v1
"""

from .models import (
    CycleDetected,
    WarningKind,
    CostWarning,
    CostLine,
    LaborBreakdown,
    CostDetails,
    CostOptions,
    CostBreakdown,
)
from .labor import (
    calculate_technician_cost,
    calculate_casting_cost,
    compute_labor,
)
from .rollup import (
    CostWalk,
    compute_product_cost,
    compute_batch_costs,
    find_component_cycles,
)

__version__ = "cost_rollup_v1"

__all__ = [
    "CycleDetected",
    "WarningKind",
    "CostWarning",
    "CostLine",
    "LaborBreakdown",
    "CostDetails",
    "CostOptions",
    "CostBreakdown",
    "calculate_technician_cost",
    "calculate_casting_cost",
    "compute_labor",
    "CostWalk",
    "compute_product_cost",
    "compute_batch_costs",
    "find_component_cycles",
    "__version__",
]
