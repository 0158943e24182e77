"""
Scan Matching Core Logic

Resolves scanned or typed codes to catalog entries.

Resolution order (first success wins):
1. Exact full code: master SKU + registered variant suffix
2. Master SKU alone (the base piece)
3. Longest master SKU prefixing the code, remainder decoded as a suffix
   even if no such variant is on file (fresh labels, sized labels). With
   require_recognized_suffix the remainder must carry a finish or stone.

Input and catalog codes are both compared in canonical form: upper case,
Greek transliterated to Latin the same way labels are printed.

Version: code_matching_v1
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ilios.catalog.lookup import index_products
from ilios.catalog.models import Product, ProductVariant
from ilios.codes.grammar import decode_suffix, describe_suffix, normalize_code
from ilios.codes.sku import transliterate_for_barcode

from .models import MatchType, NotFound, ScanMatch

logger = logging.getLogger(__name__)


def canonical_code(code: str) -> str:
    return transliterate_for_barcode(normalize_code(code)).upper()


def _code_forms(code: str) -> List[str]:
    """Raw upper-case form first, then the transliterated one if different."""
    upper = normalize_code(code)
    canonical = canonical_code(code)
    return [upper] if upper == canonical else [upper, canonical]


class CatalogIndex:
    """
    Lookup tables for one catalog snapshot.

    Build once and reuse across scans; rebuild when the catalog changes.
    When two entries collide on a code the first one in catalog order wins.
    """

    def __init__(self, products: Union[Iterable[Product], Mapping[str, Product]]):
        self.products: Dict[str, Product] = index_products(products)
        self._variants: Dict[str, Tuple[Product, ProductVariant]] = {}
        self._masters: Dict[str, Product] = {}

        for product in self.products.values():
            for key in _code_forms(product.sku):
                self._masters.setdefault(key, product)
            for variant in product.variants:
                for key in _code_forms(product.sku + variant.suffix):
                    self._variants.setdefault(key, (product, variant))

    def __len__(self) -> int:
        return len(self.products)

    def variant_for(self, code: str) -> Optional[Tuple[Product, ProductVariant]]:
        return self._variants.get(code)

    def master_for(self, code: str) -> Optional[Product]:
        return self._masters.get(code)

    def longest_master_prefix(self, code: str) -> Optional[Tuple[Product, str]]:
        """Longest known master code that is a strict prefix of `code`."""
        for end in range(len(code) - 1, 0, -1):
            product = self._masters.get(code[:end])
            if product is not None:
                return product, code[end:]
        return None


CatalogSource = Union[CatalogIndex, Iterable[Product], Mapping[str, Product]]


def _as_index(catalog: CatalogSource) -> CatalogIndex:
    if isinstance(catalog, CatalogIndex):
        return catalog
    return CatalogIndex(catalog)


def _resolve(raw: str, index: CatalogIndex, require_recognized_suffix: bool) -> Optional[ScanMatch]:
    forms = _code_forms(raw)

    for form in forms:
        hit = index.variant_for(form)
        if hit is not None:
            product, variant = hit
            return ScanMatch(
                product=product,
                variant=variant,
                suffix=variant.suffix,
                components=decode_suffix(variant.suffix, product.gender),
                match_type=MatchType.EXACT_VARIANT,
            )

    for form in forms:
        product = index.master_for(form)
        if product is not None:
            return ScanMatch(product=product, match_type=MatchType.MASTER)

    for form in forms:
        hit = index.longest_master_prefix(form)
        if hit is None:
            continue
        product, suffix = hit
        components = decode_suffix(suffix, product.gender)
        if require_recognized_suffix and not components.is_recognized:
            logger.debug(f"'{form}' prefixes {product.sku} but '{suffix}' is not a suffix")
            continue
        variant = ProductVariant(
            suffix=suffix,
            description=describe_suffix(suffix, product.gender, product.plating_type) or "",
        )
        return ScanMatch(
            product=product,
            variant=variant,
            suffix=variant.suffix,
            components=components,
            match_type=MatchType.PREFIX,
            registered=False,
        )

    return None


def find_by_scanned_code(
    raw: str,
    catalog: CatalogSource,
    include_components: bool = True,
    require_recognized_suffix: bool = False,
) -> Union[ScanMatch, NotFound]:
    """
    Resolve a scanned/typed code to a product and variant.

    Args:
        raw: Code as read from the scanner or typed by the user
        catalog: CatalogIndex, or the products to build one from
        include_components: False for sales flows, where sub-assemblies
            must not be picked up
        require_recognized_suffix: Reject prefix matches whose remainder
            has no finish or stone token (e.g. "RN2001" against "RN200")

    Returns:
        ScanMatch, or NotFound (returned, never raised)
    """
    normalized = canonical_code(raw or "")
    not_found = NotFound(raw=raw or "", normalized=normalized)
    if not normalized:
        return not_found

    match = _resolve(raw, _as_index(catalog), require_recognized_suffix)
    if match is None:
        logger.info(f"No catalog entry for scanned code '{normalized}'")
        return not_found
    if not include_components and match.product.is_component:
        logger.info(f"Scanned code '{normalized}' is component {match.product.sku}")
        return not_found
    return match


def resolve_codes(
    codes: Iterable[str],
    catalog: CatalogSource,
    include_components: bool = True,
    require_recognized_suffix: bool = False,
) -> Tuple[List[ScanMatch], List[NotFound]]:
    """Resolve many codes against one index (bulk-add flows)."""
    index = _as_index(catalog)
    matched: List[ScanMatch] = []
    missing: List[NotFound] = []
    for code in codes:
        result = find_by_scanned_code(
            code, index, include_components, require_recognized_suffix
        )
        if result:
            matched.append(result)
        else:
            missing.append(result)
    return matched, missing
