"""
Code Grammar Tests

Tests validate:
- Finish/stone decoding per gender vocabulary
- Finish-first tie-break on overlapping codes
- Bridge markers and residual qualifiers
- Human-readable descriptions
- Variant prefix checks
- Encode/decode round trip over the code tables

Version: suffix_grammar_v1
"""

import pytest

from ilios.catalog.models import Gender, PlatingType
from ilios.codes import (
    FINISH_CODES,
    TokenKind,
    decode_suffix,
    describe_suffix,
    encode_suffix,
    find_ambiguous_suffixes,
    is_variant_of,
    stone_vocabulary,
)


# ============================================================================
# Decode Tests
# ============================================================================

class TestDecodeSuffix:
    """Test suffix decoding."""

    def test_empty_suffix_is_master(self):
        """Empty suffix decodes to the base piece."""
        decoded = decode_suffix("", Gender.MEN)

        assert decoded.is_master
        assert decoded.finish is None
        assert decoded.stone is None

    def test_none_suffix_is_master(self):
        assert decode_suffix(None).is_master

    def test_finish_and_stone(self):
        decoded = decode_suffix("XKR", Gender.MEN)

        assert decoded.finish.code == "X"
        assert decoded.finish.kind == TokenKind.FINISH
        assert decoded.stone.code == "KR"
        assert decoded.stone.kind == TokenKind.STONE
        assert decoded.stone.name == "Carnelian"
        assert decoded.residual == ""

    def test_lowercase_input(self):
        decoded = decode_suffix(" pkr ", Gender.MEN)

        assert decoded.finish_code == "P"
        assert decoded.stone_code == "KR"

    def test_finish_only(self):
        decoded = decode_suffix("D", Gender.WOMEN)

        assert decoded.finish.name == "Two-tone"
        assert decoded.stone is None

    def test_stone_only(self):
        decoded = decode_suffix("BST", Gender.WOMEN)

        assert decoded.finish is None
        assert decoded.stone.name == "Blue Sky Topaz"

    def test_finish_wins_on_overlap(self):
        """PCO (Women) reads as Patina + Copper, not Green Copper."""
        decoded = decode_suffix("PCO", Gender.WOMEN)

        assert decoded.finish_code == "P"
        assert decoded.stone_code == "CO"

    def test_stone_split_used_when_finish_split_leaves_residue(self):
        """PAX (Women): P + AX is not clean, so the whole code is the stone."""
        decoded = decode_suffix("PAX", Gender.WOMEN)

        assert decoded.finish is None
        assert decoded.stone_code == "PAX"

    def test_stone_split_keeps_size_residue(self):
        """PAX62 (Women) is Green Agate in size 62, not P + leftover AX62."""
        decoded = decode_suffix("PAX62", Gender.WOMEN)

        assert decoded.finish is None
        assert decoded.stone_code == "PAX"
        assert decoded.residual == "62"

    def test_equal_residue_keeps_finish_split(self):
        decoded = decode_suffix("PCO62", Gender.WOMEN)

        assert decoded.finish_code == "P"
        assert decoded.stone_code == "CO"
        assert decoded.residual == "62"

    def test_same_code_differs_by_gender(self):
        """AX is a Men stone, so PAX splits for Men."""
        decoded = decode_suffix("PAX", Gender.MEN)

        assert decoded.finish_code == "P"
        assert decoded.stone_code == "AX"

    def test_stone_outside_gender_vocabulary(self):
        decoded = decode_suffix("CO", Gender.MEN)

        assert decoded.stone is None
        assert decoded.residual == "CO"
        assert not decoded.is_recognized

    def test_unisex_sees_both_vocabularies(self):
        assert decode_suffix("CO", Gender.UNISEX).stone_code == "CO"
        assert decode_suffix("KR", Gender.UNISEX).stone_code == "KR"

    def test_residual_preserved(self):
        """Size codes after the stone are kept, not an error."""
        decoded = decode_suffix("KR62", Gender.MEN)

        assert decoded.stone_code == "KR"
        assert decoded.residual == "62"
        assert decoded.is_recognized
        assert not decoded.is_clean

    def test_finish_with_residual(self):
        decoded = decode_suffix("PKR62", Gender.MEN)

        assert decoded.finish_code == "P"
        assert decoded.stone_code == "KR"
        assert decoded.residual == "62"

    def test_unrecognised_suffix(self):
        decoded = decode_suffix("ZZ", Gender.MEN)

        assert not decoded.is_recognized
        assert decoded.residual == "ZZ"

    def test_bridge_after_finish(self):
        decoded = decode_suffix("XS", Gender.WOMEN)

        assert decoded.finish_code == "X"
        assert decoded.bridge == "S"
        assert decoded.is_clean

    def test_bridge_before_stone(self):
        decoded = decode_suffix("XSKR", Gender.MEN)

        assert decoded.finish_code == "X"
        assert decoded.bridge == "S"
        assert decoded.stone_code == "KR"

    def test_bridge_after_stone(self):
        decoded = decode_suffix("XKRS", Gender.MEN)

        assert decoded.finish_code == "X"
        assert decoded.stone_code == "KR"
        assert decoded.bridge == "S"
        assert decoded.is_clean

    def test_trailing_s_without_stone_is_residue(self):
        decoded = decode_suffix("KRS", Gender.MEN)

        assert decoded.stone_code == "KR"
        assert decoded.bridge == ""
        assert decoded.residual == "S"


# ============================================================================
# Tie-break Reach Tests
# ============================================================================

class TestAmbiguousSuffixes:
    """Test listing of codes shadowed by the finish-first tie-break."""

    def test_women(self):
        assert find_ambiguous_suffixes(Gender.WOMEN) == ["PCO"]

    def test_men(self):
        assert find_ambiguous_suffixes(Gender.MEN) == []

    def test_unisex(self):
        assert find_ambiguous_suffixes(Gender.UNISEX) == ["PAX", "PCO"]


# ============================================================================
# Round Trip Tests
# ============================================================================

class TestRoundTrip:
    """decode(encode(finish, stone)) recovers the pair."""

    @pytest.mark.parametrize("gender", [Gender.MEN, Gender.WOMEN])
    def test_all_pairs(self, gender):
        shadowed = set(find_ambiguous_suffixes(gender))
        finishes = [None] + [code for code in FINISH_CODES if code]
        stones = [None] + sorted(stone_vocabulary(gender))

        for finish in finishes:
            for stone in stones:
                if finish is None and stone in shadowed:
                    continue
                decoded = decode_suffix(encode_suffix(finish, stone), gender)
                assert decoded.finish_code == (finish or ""), (finish, stone)
                assert decoded.stone_code == (stone or ""), (finish, stone)
                assert decoded.is_clean

    def test_encode_rejects_unknown_finish(self):
        with pytest.raises(ValueError):
            encode_suffix("Q", "KR")

    def test_encode_rejects_bare_bridge(self):
        with pytest.raises(ValueError):
            encode_suffix(None, "KR", bridge="S")

    def test_encode_with_bridge(self):
        assert encode_suffix("x", "kr", bridge="s") == "XSKR"


# ============================================================================
# Describe Tests
# ============================================================================

class TestDescribeSuffix:
    """Test human-readable labels."""

    def test_finish_and_stone(self):
        assert describe_suffix("XKR", Gender.MEN) == "Gold-plated, Carnelian"

    def test_finish_only(self):
        assert describe_suffix("P", Gender.WOMEN) == "Patina"

    def test_stone_defaults_to_polished(self):
        assert describe_suffix("KR", Gender.MEN) == "Polished, Carnelian"

    def test_stone_takes_master_plating(self):
        label = describe_suffix("KR", Gender.MEN, plating=PlatingType.GOLD_PLATED)

        assert label == "Gold-plated, Carnelian"

    def test_empty_is_none(self):
        assert describe_suffix("", Gender.MEN) is None

    def test_unrecognised_is_none(self):
        assert describe_suffix("ZZ", Gender.MEN) is None


# ============================================================================
# Variant Check Tests
# ============================================================================

class TestIsVariantOf:
    """Test strict master prefix check."""

    def test_variant(self):
        check = is_variant_of("RN200XKR", "RN200")

        assert check.is_variant
        assert check.suffix == "XKR"

    def test_same_code_is_not_variant(self):
        check = is_variant_of("RN200", "RN200")

        assert not check.is_variant
        assert check.suffix == ""

    def test_shorter_code_is_not_variant(self):
        assert not is_variant_of("RN20", "RN200").is_variant

    def test_other_master(self):
        assert not is_variant_of("DA200X", "RN200").is_variant

    def test_empty_master(self):
        assert not is_variant_of("RN200", "").is_variant
