"""
Suffix Grammar

A variant suffix is read as:

    [finish] [bridge] [stone] [bridge] [residual]

- finish:   at most one finish token (P, X, D, H)
- bridge:   "S" directly after a finish, or closing a finish + stone
            ("XS", "XSKR", "XKRS")
- stone:    at most one stone token from the gender's vocabulary
- residual: anything left over (size codes etc.), kept but unclassified

Decoding never fails. An empty suffix is the master piece.

Tie-break: when a suffix splits cleanly both as finish + stone and as a
single stone ("PCO" for Women: Patina + Copper vs Green Copper), the
finish split wins because finish is read first. See
find_ambiguous_suffixes() for the codes this affects. When neither
split is clean, the one leaving less residue wins ("PAX62" for Women is
Green Agate + 62), finish first on a tie.

Version: suffix_grammar_v1
"""

import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel

from ilios.catalog.models import Gender, PlatingType

from .tables import (
    BRIDGE_CODE,
    DEFAULT_FINISH_CODE,
    FINISH_CODES,
    CodeToken,
    finish_for_plating,
    finish_token,
    stone_token,
    stone_vocabulary,
)

logger = logging.getLogger(__name__)


class SuffixComponents(BaseModel):
    """Decoded form of a suffix."""
    finish: Optional[CodeToken] = None
    stone: Optional[CodeToken] = None
    bridge: str = ""
    residual: str = ""

    class Config:
        frozen = True

    @property
    def finish_code(self) -> str:
        return self.finish.code if self.finish else DEFAULT_FINISH_CODE

    @property
    def stone_code(self) -> str:
        return self.stone.code if self.stone else ""

    @property
    def is_master(self) -> bool:
        return not (self.finish or self.stone or self.bridge or self.residual)

    @property
    def is_recognized(self) -> bool:
        return self.finish is not None or self.stone is not None

    @property
    def is_clean(self) -> bool:
        """True when every character was classified."""
        return not self.residual


class VariantCheck(BaseModel):
    is_variant: bool
    suffix: str = ""


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def _match_finish(text: str) -> Optional[CodeToken]:
    """Longest finish code that prefixes text."""
    for code in sorted(FINISH_CODES, key=len, reverse=True):
        if code and text.startswith(code):
            return finish_token(code)
    return None


def _split_stone(text: str, gender: Optional[Gender]) -> Tuple[Optional[CodeToken], str]:
    """Longest stone code that prefixes text, and what follows it."""
    for code in sorted(stone_vocabulary(gender), key=len, reverse=True):
        if text.startswith(code):
            return stone_token(code, gender), text[len(code):]
    return None, text


def decode_suffix(suffix: Optional[str], gender: Optional[Gender] = None) -> SuffixComponents:
    """
    Decode a variant suffix into finish/stone tokens.

    Args:
        suffix: Raw suffix, case-insensitive (e.g. "pkr", "XS", "PCO62")
        gender: Product gender; selects the stone vocabulary

    Returns:
        SuffixComponents. Unrecognised characters end up in `residual`.
    """
    text = normalize_code(suffix)
    if not text:
        return SuffixComponents()

    finish_first: Optional[SuffixComponents] = None
    finish = _match_finish(text)
    if finish is not None:
        rest = text[len(finish.code):]
        bridge = ""
        if rest.startswith(BRIDGE_CODE):
            after_bridge = rest[len(BRIDGE_CODE):]
            if not after_bridge or _split_stone(after_bridge, gender)[0] is not None:
                bridge, rest = BRIDGE_CODE, after_bridge
        stone, residual = _split_stone(rest, gender)
        if not bridge and stone is not None and residual == BRIDGE_CODE:
            bridge, residual = BRIDGE_CODE, ""
        finish_first = SuffixComponents(
            finish=finish, stone=stone, bridge=bridge, residual=residual
        )
        if finish_first.is_clean:
            if text in stone_vocabulary(gender):
                logger.debug(f"Suffix '{text}' is also a stone code; finish split wins")
            return finish_first

    stone, residual = _split_stone(text, gender)
    stone_first = SuffixComponents(stone=stone, residual=residual)
    if stone is not None and (
        finish_first is None or len(residual) < len(finish_first.residual)
    ):
        return stone_first

    if finish_first is not None:
        return finish_first
    return stone_first


def encode_suffix(
    finish: Optional[str] = None,
    stone: Optional[str] = None,
    bridge: str = "",
) -> str:
    """Build a suffix from its parts. Inverse of decode_suffix for unambiguous codes."""
    finish = normalize_code(finish)
    if finish and finish not in FINISH_CODES:
        raise ValueError(f"unknown finish code: {finish!r}")
    bridge = normalize_code(bridge)
    if bridge and not finish:
        raise ValueError("a bridge marker must follow a finish code")
    return f"{finish}{bridge}{normalize_code(stone)}"


def describe_suffix(
    suffix: Optional[str],
    gender: Optional[Gender] = None,
    plating: Optional[PlatingType] = None,
) -> Optional[str]:
    """
    Human-readable label for a suffix, e.g. "Gold-plated, Carnelian".

    A stone without a finish takes the master's plating label, falling
    back to "Polished". Returns None when nothing was recognised.
    """
    components = decode_suffix(suffix, gender)
    if not components.is_recognized:
        return None

    if components.finish is not None:
        finish_name = components.finish.name
    else:
        finish_name = FINISH_CODES[finish_for_plating(plating)]

    if components.stone is not None:
        return f"{finish_name}, {components.stone.name}"
    return finish_name


def is_variant_of(candidate_sku: Optional[str], master_sku: Optional[str]) -> VariantCheck:
    """
    Strict prefix check: candidate is a variant iff it starts with the
    exact master code and has something after it.
    """
    candidate = normalize_code(candidate_sku)
    master = normalize_code(master_sku)
    if not master or not candidate.startswith(master) or candidate == master:
        return VariantCheck(is_variant=False)
    return VariantCheck(is_variant=True, suffix=candidate[len(master):])


def find_ambiguous_suffixes(gender: Optional[Gender] = None) -> List[str]:
    """
    Stone codes that cannot be written bare because the finish-first
    tie-break reads them as finish + stone.
    """
    shadowed = []
    for code in sorted(stone_vocabulary(gender)):
        decoded = decode_suffix(code, gender)
        if decoded.stone_code != code or decoded.finish is not None:
            shadowed.append(code)
    return shadowed
