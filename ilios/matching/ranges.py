"""
Range expansion for bulk entry.

"DA050-DA063" -> DA050, DA051, ... DA063. Anything that does not parse as
a range comes back unchanged as a single code; the matcher rejects it
later if it is not a real code.
"""

import logging
import re
from typing import List, Optional

from ilios import config

from .models import BatchLine

logger = logging.getLogger(__name__)

_RANGE_PATTERN = re.compile(
    r"^([A-Z-]+)(\d+)([A-Z]*)-([A-Z-]+)(\d+)([A-Z]*)$",
    re.IGNORECASE,
)
_TOKEN_SEPARATORS = re.compile(r"[\s,;]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F-\x9F]")


def expand_sku_range(text: str, limit: Optional[int] = None) -> List[str]:
    """
    Expand `PREFIX<N1>[SUFFIX]-PREFIX<N2>[SUFFIX]` into every code in between.

    Both ends must share prefix and trailing suffix, N1 <= N2, and the span
    must not exceed `limit` (config.RANGE_LIMIT by default). Zero padding
    of N1 is kept. Never raises: malformed input returns [text].
    """
    limit = config.RANGE_LIMIT if limit is None else limit
    match = _RANGE_PATTERN.match(text or "")
    if not match:
        return [text]

    prefix1, num1, suffix1, prefix2, num2, suffix2 = match.groups()
    if prefix1.upper() != prefix2.upper() or suffix1.upper() != suffix2.upper():
        return [text]

    start, end = int(num1), int(num2)
    if start > end:
        return [text]
    if end - start > limit:
        logger.debug(f"Range '{text}' spans {end - start} codes, over limit {limit}")
        return [text]

    padded = (num1.startswith("0") and len(num1) > 1) or len(num1) == len(num2)
    width = len(num1) if padded else 0
    prefix, suffix = prefix1.upper(), suffix1.upper()

    return [f"{prefix}{str(n).zfill(width)}{suffix}" for n in range(start, end + 1)]


def expand_sku_tokens(text: str, limit: Optional[int] = None) -> List[str]:
    """Split free text on whitespace/commas and expand every token."""
    codes: List[str] = []
    for token in _TOKEN_SEPARATORS.split(text or ""):
        if token:
            codes.extend(expand_sku_range(token.upper(), limit))
    return codes


def parse_batch_lines(text: str, limit: Optional[int] = None) -> List[BatchLine]:
    """
    Parse pasted `CODE [QTY]` lines.

    Lines whose quantity is missing digits or not positive are skipped.
    """
    lines: List[BatchLine] = []
    for raw_line in (text or "").splitlines():
        clean = _CONTROL_CHARS.sub(" ", raw_line).strip()
        if not clean:
            continue
        parts = clean.split()
        token = parts[0].upper()
        digits = re.sub(r"[^0-9]", "", parts[1] if len(parts) > 1 else "1")
        if not digits or int(digits) <= 0:
            logger.debug(f"Skipping batch line with bad quantity: '{clean}'")
            continue
        quantity = int(digits)
        for code in expand_sku_range(token, limit):
            lines.append(BatchLine(code=code, quantity=quantity))
    return lines
