"""
Matching Layer Models

Result types for scan/typed-code resolution and bulk entry.

Version: code_matching_v1
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ilios.catalog.models import Product, ProductVariant
from ilios.codes.grammar import SuffixComponents


class MatchType(str, Enum):
    """Which resolution step produced the match."""
    EXACT_VARIANT = "EXACT_VARIANT"
    MASTER = "MASTER"
    PREFIX = "PREFIX"


class ScanMatch(BaseModel):
    """
    A catalog product plus the variant the code points at.

    For PREFIX matches the variant is built from the decoded suffix and
    `registered` is False: the label exists but the variant is not on file.
    """
    product: Product
    variant: Optional[ProductVariant] = Field(
        default=None,
        description="None means the master/base piece"
    )
    suffix: str = ""
    components: SuffixComponents = Field(default_factory=SuffixComponents)
    match_type: MatchType
    registered: bool = True

    class Config:
        extra = "forbid"

    @property
    def full_code(self) -> str:
        return f"{self.product.sku}{self.suffix}"


class NotFound(BaseModel):
    """No catalog entry matches. Falsy, so `if match:` reads naturally."""
    raw: str
    normalized: str

    class Config:
        extra = "forbid"

    def __bool__(self) -> bool:
        return False


class BatchLine(BaseModel):
    """One `CODE QTY` entry from pasted bulk input, ranges already expanded."""
    code: str
    quantity: int = Field(ge=1)
