"""
SKU analysis helpers.

Catalog-free reading of product codes: prefix rules that imply gender and
category, splitting a full code into master + suffix, the Greek -> Latin
transliteration used on printed barcodes, and size tables for sized
prefixes.
"""

import re
from typing import Dict, List, Optional

from pydantic import BaseModel

from ilios.catalog.models import Gender, PlatingType, ProductVariant

from .grammar import decode_suffix, describe_suffix, normalize_code
from .tables import FINISH_TO_PLATING

COMPONENT_PREFIX = "STX"

MEN_PREFIXES: Dict[str, str] = {
    "XR": "Bracelet",
    "CR": "Cross",
    "RN": "Ring",
    "PN": "Pendant",
}

WOMEN_PREFIXES: Dict[str, str] = {
    "DA": "Ring",
    "SK": "Earrings",
    "MN": "Pendant",
    "BR": "Bracelet",
}

# XR numbering bands, checked in order: (upper bound, gender, category)
XR_BANDS = [
    (100, Gender.MEN, "Leather Bracelet"),
    (199, Gender.MEN, "Solid Bracelet"),
    (700, Gender.UNISEX, "Bracelet with Stones"),
]
XR_RELIGIOUS_MACRAME = (1100, 1149)

_BRIDGE_PATTERN = re.compile(r"^([A-Z-]+\d+)([XPHD])(S)$")
_PLAIN_FINISH_PATTERN = re.compile(r"^([A-Z-]+\d+)([XPHD])$")
_ENDS_WITH_DIGIT = re.compile(r"\d$")

# Shortest master the exhaustive split will consider
MIN_MASTER_LENGTH = 3

GREEK_TO_LATIN: Dict[str, str] = {
    'Α': 'A', 'Β': 'V', 'Γ': 'G', 'Δ': 'D', 'Ε': 'E', 'Ζ': 'Z', 'Η': 'I', 'Θ': 'TH',
    'Ι': 'I', 'Κ': 'K', 'Λ': 'L', 'Μ': 'M', 'Ν': 'N', 'Ξ': 'X', 'Ο': 'O', 'Π': 'P',
    'Ρ': 'R', 'Σ': 'S', 'Τ': 'T', 'Υ': 'Y', 'Φ': 'F', 'Χ': 'CH', 'Ψ': 'PS', 'Ω': 'O',
    'Ά': 'A', 'Έ': 'E', 'Ή': 'I', 'Ί': 'I', 'Ό': 'O', 'Ύ': 'Y', 'Ώ': 'O',
    'α': 'a', 'β': 'v', 'γ': 'g', 'δ': 'd', 'ε': 'e', 'ζ': 'z', 'η': 'i', 'θ': 'th',
    'ι': 'i', 'κ': 'k', 'λ': 'l', 'μ': 'm', 'ν': 'n', 'ξ': 'x', 'ο': 'o', 'π': 'p',
    'ρ': 'r', 'σ': 's', 'τ': 't', 'υ': 'y', 'φ': 'f', 'χ': 'ch', 'ψ': 'ps', 'ω': 'o',
    'ς': 's', 'ά': 'a', 'έ': 'e', 'ή': 'i', 'ί': 'i', 'ό': 'o', 'ύ': 'y', 'ώ': 'o',
}

SIZED_PREFIXES = {
    "RINGS_MEN": "RN",
    "RINGS_WOMEN": "DA",
    "BRACELETS_WOMEN": "BR",
    "BRACELETS_MEN": "XR",
}

RING_SIZES_MEN = [str(n) for n in range(58, 71)]
RING_SIZES_WOMEN = [str(n) for n in range(48, 63)]
BRACELET_SIZES_WOMEN = ["17cm", "19cm", "21cm"]
BRACELET_SIZES_MEN = ["19cm", "21cm", "23cm"]


class SkuInfo(BaseModel):
    gender: Gender
    category: str


class SkuAnalysis(BaseModel):
    """Result of splitting a raw code without a catalog."""
    is_variant: bool
    master_sku: str
    suffix: str = ""
    plating: PlatingType = PlatingType.NONE
    bridge: str = ""
    description: str = ""


class SizingInfo(BaseModel):
    kind: str  # "number" (ring size) or "length" (bracelet)
    sizes: List[str]


def transliterate_for_barcode(text: str) -> str:
    """Greek -> Latin so codes survive Code 128 label printing."""
    return "".join(GREEK_TO_LATIN.get(ch, ch) for ch in text)


def _number_part(sku: str) -> Optional[int]:
    match = re.match(r"\d+", re.sub(r"[A-Z-]", "", sku))
    return int(match.group()) if match else None


def parse_sku(sku: str) -> SkuInfo:
    """Gender and category implied by a code's prefix."""
    clean = normalize_code(sku)
    prefix = clean[:2]

    if clean.startswith(COMPONENT_PREFIX):
        return SkuInfo(gender=Gender.UNISEX, category="Component (STX)")

    number = _number_part(clean)
    if prefix == "XR" and number is not None:
        for upper, gender, category in XR_BANDS:
            if number <= upper:
                return SkuInfo(gender=gender, category=category)
        low, high = XR_RELIGIOUS_MACRAME
        if low <= number <= high:
            return SkuInfo(gender=Gender.UNISEX, category="Religious Macrame Bracelet")
        if number <= 1199:
            return SkuInfo(gender=Gender.UNISEX, category="Colored Macrame Bracelet")
        if number <= 1290:
            return SkuInfo(gender=Gender.UNISEX, category="Religious Leather Bracelet")
        return SkuInfo(gender=Gender.MEN, category="Bracelet")

    if prefix in WOMEN_PREFIXES:
        return SkuInfo(gender=Gender.WOMEN, category=WOMEN_PREFIXES[prefix])
    if prefix in MEN_PREFIXES:
        return SkuInfo(gender=Gender.MEN, category=MEN_PREFIXES[prefix])
    return SkuInfo(
        gender=Gender.UNISEX,
        category="Cross" if prefix == "ST" else "General",
    )


def analyze_sku(raw_sku: str, gender: Optional[Gender] = None) -> SkuAnalysis:
    """
    Split a full code into master + suffix without looking at a catalog.

    - MN050X   -> master MN050, suffix X
    - MN050XS  -> a master of its own (bridge pieces carry their own
                  weight and molds), bridge S
    - XR2020PKR -> master XR2020, suffix PKR
    """
    clean = normalize_code(raw_sku)
    gender = gender or parse_sku(clean).gender

    bridge_match = _BRIDGE_PATTERN.match(clean)
    if bridge_match:
        return SkuAnalysis(
            is_variant=False,
            master_sku=clean,
            plating=FINISH_TO_PLATING.get(bridge_match.group(2), PlatingType.NONE),
            bridge=bridge_match.group(3),
        )

    plain_match = _PLAIN_FINISH_PATTERN.match(clean)
    if plain_match:
        finish = plain_match.group(2)
        plating = FINISH_TO_PLATING.get(finish, PlatingType.NONE)
        return SkuAnalysis(
            is_variant=True,
            master_sku=plain_match.group(1),
            suffix=finish,
            plating=plating,
            description=describe_suffix(finish, gender, plating) or "",
        )

    best = SkuAnalysis(is_variant=False, master_sku=clean)
    for i in range(len(clean) - 1, MIN_MASTER_LENGTH - 1, -1):
        master, suffix = clean[:i], clean[i:]
        components = decode_suffix(suffix, gender)
        if not components.is_recognized:
            continue
        plating = FINISH_TO_PLATING.get(components.finish_code, PlatingType.NONE)
        best = SkuAnalysis(
            is_variant=True,
            master_sku=master,
            suffix=suffix,
            plating=plating,
            bridge=components.bridge,
            description=describe_suffix(suffix, gender, plating) or "",
        )
        if _ENDS_WITH_DIGIT.search(master):
            break

    return best


def is_sizable(prefix: str) -> bool:
    return normalize_code(prefix) in SIZED_PREFIXES.values()


def get_sizing_info(prefix: str) -> Optional[SizingInfo]:
    prefix = normalize_code(prefix)
    if prefix == SIZED_PREFIXES["RINGS_MEN"]:
        return SizingInfo(kind="number", sizes=RING_SIZES_MEN)
    if prefix == SIZED_PREFIXES["RINGS_WOMEN"]:
        return SizingInfo(kind="number", sizes=RING_SIZES_WOMEN)
    if prefix == SIZED_PREFIXES["BRACELETS_MEN"]:
        return SizingInfo(kind="length", sizes=BRACELET_SIZES_MEN)
    if prefix == SIZED_PREFIXES["BRACELETS_WOMEN"]:
        return SizingInfo(kind="length", sizes=BRACELET_SIZES_WOMEN)
    return None


def get_prevalent_variant(variants: Optional[List[ProductVariant]]) -> Optional[ProductVariant]:
    """The variant shown by default: plain patina, else gold-plated, else the first."""
    if not variants:
        return None
    for v in variants:
        if "P" in v.suffix and "X" not in v.suffix and "D" not in v.suffix:
            return v
    for v in variants:
        if "X" in v.suffix:
            return v
    return variants[0]
