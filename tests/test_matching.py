"""
Matching Layer Tests

Tests validate:
- Exact variant, master and prefix resolution order
- Greek/Latin transliterated labels
- NotFound as a falsy return value
- Range expansion and bulk line parsing

Version: code_matching_v1
"""

import pytest
from typing import List

from ilios.catalog.models import Gender, Product, ProductVariant
from ilios.matching import (
    CatalogIndex,
    MatchType,
    NotFound,
    ScanMatch,
    expand_sku_range,
    expand_sku_tokens,
    find_by_scanned_code,
    parse_batch_lines,
    resolve_codes,
)


# ============================================================================
# Test Fixtures
# ============================================================================

def make_product(
    sku: str,
    gender: Gender = Gender.UNISEX,
    suffixes: List[str] = None,
    is_component: bool = False,
) -> Product:
    """Helper to create catalog products."""
    return Product(
        sku=sku,
        gender=gender,
        weight_g=5.0,
        variants=[ProductVariant(suffix=s, description=s) for s in (suffixes or [])],
        is_component=is_component,
    )


@pytest.fixture
def catalog() -> List[Product]:
    return [
        make_product("RN200", Gender.MEN, ["XKR", "P"]),
        make_product("ΔΑ100", Gender.WOMEN, ["P"]),
        make_product("DA300", Gender.WOMEN, ["PCO"]),
        make_product("STX-505", is_component=True),
    ]


# ============================================================================
# Resolution Tests
# ============================================================================

class TestFindByScannedCode:
    """Test the resolution order."""

    def test_exact_variant(self, catalog):
        match = find_by_scanned_code("RN200XKR", catalog)

        assert isinstance(match, ScanMatch)
        assert match.product.sku == "RN200"
        assert match.variant.suffix == "XKR"
        assert match.match_type == MatchType.EXACT_VARIANT
        assert match.registered
        assert match.components.stone_code == "KR"
        assert match.full_code == "RN200XKR"

    def test_input_is_normalized(self, catalog):
        match = find_by_scanned_code("  rn200xkr \n", catalog)

        assert match.variant.suffix == "XKR"

    def test_master(self, catalog):
        match = find_by_scanned_code("RN200", catalog)

        assert match.product.sku == "RN200"
        assert match.variant is None
        assert match.match_type == MatchType.MASTER
        assert match.components.is_master

    def test_not_found(self, catalog):
        result = find_by_scanned_code("ZZ999", catalog)

        assert isinstance(result, NotFound)
        assert not result
        assert result.normalized == "ZZ999"

    def test_empty_input(self, catalog):
        assert not find_by_scanned_code("   ", catalog)

    def test_unregistered_variant_by_prefix(self, catalog):
        """A fresh label whose variant is not on file still resolves."""
        match = find_by_scanned_code("RN200XTG", catalog)

        assert match.product.sku == "RN200"
        assert match.match_type == MatchType.PREFIX
        assert not match.registered
        assert match.suffix == "XTG"
        assert match.components.finish_code == "X"
        assert match.components.stone_code == "TG"
        assert match.variant.description == "Gold-plated, Tiger's Eye"

    def test_sized_label_resolves_to_master(self, catalog):
        """Size codes after the master are kept as residual, not rejected."""
        match = find_by_scanned_code("RN20062", catalog)

        assert match.product.sku == "RN200"
        assert match.match_type == MatchType.PREFIX
        assert not match.registered
        assert match.suffix == "62"
        assert match.components.residual == "62"
        assert not match.components.is_recognized

    def test_sized_variant_label(self, catalog):
        match = find_by_scanned_code("RN200XKR62", catalog)

        assert match.product.sku == "RN200"
        assert match.components.finish_code == "X"
        assert match.components.stone_code == "KR"
        assert match.components.residual == "62"

    def test_strict_mode_rejects_bare_residue(self, catalog):
        assert not find_by_scanned_code("RN2001", catalog, require_recognized_suffix=True)
        assert find_by_scanned_code("RN200XTG", catalog, require_recognized_suffix=True)

    def test_longest_master_prefix_wins(self):
        products = [
            make_product("RN20", Gender.MEN),
            make_product("RN200", Gender.MEN),
        ]

        match = find_by_scanned_code("RN200X", products)

        assert match.product.sku == "RN200"
        assert match.suffix == "X"

    def test_latin_scan_of_greek_master(self, catalog):
        match = find_by_scanned_code("DA100", catalog)

        assert match.product.sku == "ΔΑ100"
        assert match.match_type == MatchType.MASTER

    def test_latin_scan_of_greek_variant(self, catalog):
        match = find_by_scanned_code("DA100P", catalog)

        assert match.product.sku == "ΔΑ100"
        assert match.variant.suffix == "P"
        assert match.match_type == MatchType.EXACT_VARIANT

    def test_greek_input(self, catalog):
        match = find_by_scanned_code("δα100", catalog)

        assert match.product.sku == "ΔΑ100"

    def test_components_excluded_on_request(self, catalog):
        assert find_by_scanned_code("STX-505", catalog).product.is_component
        assert not find_by_scanned_code("STX-505", catalog, include_components=False)


class TestCatalogIndex:
    """Test reuse of a prebuilt index."""

    def test_index_accepted(self, catalog):
        index = CatalogIndex(catalog)

        assert len(index) == 4
        assert find_by_scanned_code("RN200P", index).variant.suffix == "P"

    def test_first_entry_wins_on_collision(self):
        first = make_product("RN200", Gender.MEN, ["X"])
        clash = make_product("RN200X", Gender.MEN)

        match = find_by_scanned_code("RN200X", [first, clash])

        assert match.product.sku == "RN200"
        assert match.variant.suffix == "X"

    def test_resolve_codes(self, catalog):
        matched, missing = resolve_codes(expand_sku_range("RN199-RN201"), catalog)

        assert [m.product.sku for m in matched] == ["RN200"]
        assert [m.normalized for m in missing] == ["RN199", "RN201"]


# ============================================================================
# Range Expansion Tests
# ============================================================================

class TestExpandSkuRange:
    """Test range syntax."""

    def test_simple_range(self):
        assert expand_sku_range("DA100-DA103") == ["DA100", "DA101", "DA102", "DA103"]

    def test_single_code(self):
        assert expand_sku_range("DA100") == ["DA100"]

    def test_zero_padding_kept(self):
        assert expand_sku_range("DA050-DA052") == ["DA050", "DA051", "DA052"]

    def test_padding_survives_wider_end(self):
        codes = expand_sku_range("DA098-DA100")

        assert codes == ["DA098", "DA099", "DA100"]

    def test_unpadded_growing_width(self):
        assert expand_sku_range("da8-da11") == ["DA8", "DA9", "DA10", "DA11"]

    def test_trailing_suffix(self):
        assert expand_sku_range("DA050X-DA051X") == ["DA050X", "DA051X"]

    def test_dash_in_prefix(self):
        assert expand_sku_range("STX-505-STX-507") == ["STX-505", "STX-506", "STX-507"]

    def test_prefix_mismatch_passes_through(self):
        assert expand_sku_range("DA100-MN103") == ["DA100-MN103"]

    def test_suffix_mismatch_passes_through(self):
        assert expand_sku_range("DA100X-DA103P") == ["DA100X-DA103P"]

    def test_reversed_range_passes_through(self):
        assert expand_sku_range("DA105-DA100") == ["DA105-DA100"]

    def test_span_limit(self):
        assert expand_sku_range("DA1-DA9999") == ["DA1-DA9999"]
        assert expand_sku_range("DA1-DA3", limit=1) == ["DA1-DA3"]

    def test_garbage_passes_through(self):
        assert expand_sku_range("not a range") == ["not a range"]
        assert expand_sku_range("") == [""]


class TestBulkEntry:
    """Test token and line parsing for bulk-add flows."""

    def test_expand_tokens(self):
        codes = expand_sku_tokens("da100-da102, RN200\nxr1")

        assert codes == ["DA100", "DA101", "DA102", "RN200", "XR1"]

    def test_parse_batch_lines(self):
        text = "DA100-DA101 3\nRN200\nXR2020 0\nMN1 x\n\n\tSK5 2pcs\x00\n"

        lines = parse_batch_lines(text)

        assert [(l.code, l.quantity) for l in lines] == [
            ("DA100", 3),
            ("DA101", 3),
            ("RN200", 1),
            ("SK5", 2),
        ]
