"""
Code Tables

Static, gender-scoped vocabularies for variant suffixes. Treated as a
versioned constant: bump CODE_TABLE_VERSION whenever a code is added,
renamed or removed, since printed labels depend on them.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel

from ilios.catalog.models import Gender, PlatingType

CODE_TABLE_VERSION = "code_table_v1"


class TokenKind(str, Enum):
    FINISH = "Finish"
    STONE = "Stone"


class CodeToken(BaseModel):
    """A recognised piece of a suffix."""
    code: str
    kind: TokenKind
    name: str

    class Config:
        frozen = True


# "" is the implicit finish of an undecorated piece; it is never matched
# as a token, only used for labels.
DEFAULT_FINISH_CODE = ""

FINISH_CODES: Dict[str, str] = {
    "": "Polished",
    "P": "Patina",
    "X": "Gold-plated",
    "D": "Two-tone",
    "H": "Platinum",
}

STONE_CODES_WOMEN: Dict[str, str] = {
    "CO": "Copper",
    "PCO": "Green Copper",
    "MCO": "Purple Copper",
    "PAX": "Green Agate",
    "MAX": "Blue Agate",
    "KAX": "Red Agate",
    "AI": "Hematite",
    "AP": "Apatite",
    "AM": "Amazonite",
    "LR": "Labradorite",
    "LA": "Lapis",
    "FI": "Mother of Pearl",
    "TPR": "Green Triplet",
    "TKO": "Red Triplet",
    "TMP": "Blue Triplet",
    "BST": "Blue Sky Topaz",
}

STONE_CODES_MEN: Dict[str, str] = {
    "KR": "Carnelian",
    "LA": "Lapis",
    "LE": "Howlite",
    "AX": "Agate",
    "TG": "Tiger's Eye",
    "QN": "Onyx",
    "TY": "Turquoise",
}

# Marks a bridge piece when it directly follows a finish (e.g. "XS")
BRIDGE_CODE = "S"

FINISH_TO_PLATING: Dict[str, PlatingType] = {
    "": PlatingType.NONE,
    "P": PlatingType.NONE,
    "X": PlatingType.GOLD_PLATED,
    "D": PlatingType.TWO_TONE,
    "H": PlatingType.PLATINUM,
}

PLATING_TO_FINISH: Dict[PlatingType, str] = {
    PlatingType.GOLD_PLATED: "X",
    PlatingType.TWO_TONE: "D",
    PlatingType.PLATINUM: "H",
}


def stone_vocabulary(gender: Optional[Gender]) -> Dict[str, str]:
    """Stone codes valid for a gender; Unisex (or unknown) sees both lines."""
    if gender == Gender.MEN:
        return STONE_CODES_MEN
    if gender == Gender.WOMEN:
        return STONE_CODES_WOMEN
    return {**STONE_CODES_MEN, **STONE_CODES_WOMEN}


def finish_token(code: str) -> Optional[CodeToken]:
    if not code or code not in FINISH_CODES:
        return None
    return CodeToken(code=code, kind=TokenKind.FINISH, name=FINISH_CODES[code])


def stone_token(code: str, gender: Optional[Gender]) -> Optional[CodeToken]:
    vocab = stone_vocabulary(gender)
    if not code or code not in vocab:
        return None
    return CodeToken(code=code, kind=TokenKind.STONE, name=vocab[code])


def finish_for_plating(plating: Optional[PlatingType]) -> str:
    if plating is None:
        return DEFAULT_FINISH_CODE
    return PLATING_TO_FINISH.get(plating, DEFAULT_FINISH_CODE)
