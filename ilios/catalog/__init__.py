"""
Ilios Catalog Model

In-memory records for products, variants, recipes, materials and global
pricing settings, as supplied by the surrounding application.

This module does NOT:
- Load or persist records
- Check the component graph for cycles (see ilios.costing)

Version: catalog_models_v1
"""

from .models import (
    Gender,
    MaterialType,
    PlatingType,
    ProductionType,
    Material,
    RawItem,
    ComponentItem,
    RecipeItem,
    LaborCosts,
    ProductVariant,
    Product,
    GlobalSettings,
)
from .lookup import index_products, index_materials

__version__ = "catalog_models_v1"

__all__ = [
    "Gender",
    "MaterialType",
    "PlatingType",
    "ProductionType",
    "Material",
    "RawItem",
    "ComponentItem",
    "RecipeItem",
    "LaborCosts",
    "ProductVariant",
    "Product",
    "GlobalSettings",
    "index_products",
    "index_materials",
    "__version__",
]
