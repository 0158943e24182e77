"""
Ilios Product Code Grammar

Single source of truth for what a variant suffix means.

This module ONLY:
- Holds the gender-scoped finish/stone code tables
- Decodes and describes suffixes
- Splits raw codes into master + suffix by prefix rules

Version: suffix_grammar_v1
"""

from .tables import (
    CODE_TABLE_VERSION,
    TokenKind,
    CodeToken,
    FINISH_CODES,
    STONE_CODES_MEN,
    STONE_CODES_WOMEN,
    stone_vocabulary,
)
from .grammar import (
    SuffixComponents,
    VariantCheck,
    decode_suffix,
    describe_suffix,
    encode_suffix,
    is_variant_of,
    find_ambiguous_suffixes,
)
from .sku import (
    SkuInfo,
    SkuAnalysis,
    SizingInfo,
    parse_sku,
    analyze_sku,
    transliterate_for_barcode,
    is_sizable,
    get_sizing_info,
    get_prevalent_variant,
)

__version__ = "suffix_grammar_v1"

__all__ = [
    "CODE_TABLE_VERSION",
    "TokenKind",
    "CodeToken",
    "FINISH_CODES",
    "STONE_CODES_MEN",
    "STONE_CODES_WOMEN",
    "stone_vocabulary",
    "SuffixComponents",
    "VariantCheck",
    "decode_suffix",
    "describe_suffix",
    "encode_suffix",
    "is_variant_of",
    "find_ambiguous_suffixes",
    "SkuInfo",
    "SkuAnalysis",
    "SizingInfo",
    "parse_sku",
    "analyze_sku",
    "transliterate_for_barcode",
    "is_sizable",
    "get_sizing_info",
    "get_prevalent_variant",
    "__version__",
]
