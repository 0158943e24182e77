"""
Ilios Matching Layer

Turns what a person scanned or typed into a catalog entry:
- Exact variant codes, master codes, or fresh labels for unregistered variants
- Greek/Latin transliterated labels
- Range syntax for bulk entry ("DA100-DA105")

Version: code_matching_v1
"""

from .models import MatchType, ScanMatch, NotFound, BatchLine
from .match import CatalogIndex, canonical_code, find_by_scanned_code, resolve_codes
from .ranges import expand_sku_range, expand_sku_tokens, parse_batch_lines

__version__ = "code_matching_v1"

__all__ = [
    "MatchType",
    "ScanMatch",
    "NotFound",
    "BatchLine",
    "CatalogIndex",
    "canonical_code",
    "find_by_scanned_code",
    "resolve_codes",
    "expand_sku_range",
    "expand_sku_tokens",
    "parse_batch_lines",
    "__version__",
]
