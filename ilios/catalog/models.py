"""
Catalog Models

Pydantic models for the in-memory catalog records the core reads:
products, their variants and recipes, raw materials, and global pricing
settings. Records arrive already loaded from the surrounding
application's data layer and are never mutated here.

Version: catalog_models_v1
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class Gender(str, Enum):
    """Product line gender targeting. Selects the stone vocabulary."""
    MEN = "Men"
    WOMEN = "Women"
    UNISEX = "Unisex"


class MaterialType(str, Enum):
    STONE = "Stone"
    METAL = "Metal"
    OTHER = "Other"


class PlatingType(str, Enum):
    """Default plating of a master product when no variant is active."""
    NONE = "None"
    GOLD_PLATED = "Gold-Plated"
    TWO_TONE = "Two-Tone"
    PLATINUM = "Platinum"
    ROSE_GOLD = "Rose-Gold"


class ProductionType(str, Enum):
    IN_HOUSE = "InHouse"
    IMPORTED = "Imported"


class Material(BaseModel):
    """
    A purchasable raw material (stone, chain, cord, clasp...).
    """
    id: str
    name: str
    unit: str = "pcs"
    type: MaterialType = MaterialType.OTHER
    unit_cost: float = Field(ge=0.0)
    variant_prices: Dict[str, float] = Field(
        default_factory=dict,
        description="Stone code -> unit cost used when the active variant carries that stone"
    )

    class Config:
        extra = "allow"


class RawItem(BaseModel):
    """Recipe line pointing at the materials table."""
    kind: Literal["raw"] = "raw"
    material_id: str
    quantity: float = Field(gt=0.0)


class ComponentItem(BaseModel):
    """Recipe line pointing at another product (sub-assembly)."""
    kind: Literal["component"] = "component"
    sku: str
    quantity: float = Field(gt=0.0)


RecipeItem = Annotated[Union[RawItem, ComponentItem], Field(discriminator="kind")]


class LaborCosts(BaseModel):
    """
    Per-operation fixed costs for one unit of a product.

    casting_cost and technician_cost are normally derived from weight;
    they are only taken literally when the matching *_manual_override flag
    is set. plating_cost_x covers gold/platinum plating, plating_cost_d
    covers two-tone. stone_setting_cost is only used by imported products.
    """
    casting_cost: float = Field(default=0.0, ge=0.0)
    casting_cost_manual_override: bool = False
    setter_cost: float = Field(default=0.0, ge=0.0)
    technician_cost: float = Field(default=0.0, ge=0.0)
    technician_cost_manual_override: bool = False
    plating_cost_x: float = Field(default=0.0, ge=0.0)
    plating_cost_d: float = Field(default=0.0, ge=0.0)
    subcontract_cost: float = Field(default=0.0, ge=0.0)
    stone_setting_cost: float = Field(default=0.0, ge=0.0)

    class Config:
        extra = "allow"


class ProductVariant(BaseModel):
    """
    A registered version of a master product (finish and/or stone).

    Price fields left as None inherit from the master product.
    """
    suffix: str
    description: str = ""
    selling_price: Optional[float] = Field(default=None, ge=0.0)
    active_price: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Cost override for this variant"
    )

    class Config:
        extra = "allow"

    @field_validator("suffix")
    @classmethod
    def normalize_suffix(cls, v: str) -> str:
        return v.strip().upper()


class Product(BaseModel):
    """
    A catalog product identified by its master SKU.
    """
    sku: str = Field(..., description="Master code, unique across the catalog")
    category: str = ""
    gender: Gender = Gender.UNISEX
    weight_g: float = Field(default=0.0, ge=0.0)
    secondary_weight_g: Optional[float] = Field(default=None, ge=0.0)
    plating_type: PlatingType = PlatingType.NONE
    production_type: ProductionType = ProductionType.IN_HOUSE
    recipe: List[RecipeItem] = Field(default_factory=list)
    labor: LaborCosts = Field(default_factory=LaborCosts)
    variants: List[ProductVariant] = Field(default_factory=list)
    is_component: bool = Field(
        default=False,
        description="Usable only as a sub-assembly, never sold standalone"
    )
    selling_price: Optional[float] = Field(default=None, ge=0.0)
    supplier_cost: Optional[float] = Field(default=None, ge=0.0)

    class Config:
        extra = "allow"

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("sku must not be empty")
        return v

    @field_validator("variants")
    @classmethod
    def unique_suffixes(cls, v: List[ProductVariant]) -> List[ProductVariant]:
        seen = set()
        for variant in v:
            if variant.suffix in seen:
                raise ValueError(f"duplicate variant suffix: {variant.suffix!r}")
            seen.add(variant.suffix)
        return v

    @property
    def total_weight_g(self) -> float:
        return self.weight_g + (self.secondary_weight_g or 0.0)

    def get_variant(self, suffix: str) -> Optional[ProductVariant]:
        suffix = (suffix or "").strip().upper()
        for variant in self.variants:
            if variant.suffix == suffix:
                return variant
        return None


class GlobalSettings(BaseModel):
    """Pricing inputs that change independently of the catalog."""
    metal_price_gram: float = Field(ge=0.0, description="Silver spot price per gram")
    loss_percentage: float = Field(
        default=0.0,
        ge=0.0,
        description="Production waste applied multiplicatively to metal weight"
    )

    @property
    def loss_factor(self) -> float:
        return 1.0 + self.loss_percentage / 100.0
