"""
Lookup tables over a catalog snapshot.

Callers may hand the core either plain lists (as loaded) or prebuilt
maps; these helpers normalise both to dicts keyed by identity.
"""

from typing import Dict, Iterable, Mapping, Union

from .models import Material, Product

ProductSource = Union[Iterable[Product], Mapping[str, Product]]
MaterialSource = Union[Iterable[Material], Mapping[str, Material]]


def index_products(products: ProductSource) -> Dict[str, Product]:
    """Map master SKU -> Product. A later duplicate replaces an earlier one."""
    if isinstance(products, Mapping):
        return {sku.strip().upper(): p for sku, p in products.items()}
    return {p.sku: p for p in products}


def index_materials(materials: MaterialSource) -> Dict[str, Material]:
    if isinstance(materials, Mapping):
        return dict(materials)
    return {m.id: m for m in materials}
