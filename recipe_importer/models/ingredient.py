"""
Ingredient data models for the Recipe Importer.

Closed enumerations for units and shopping categories, and the structured
NormalizedIngredient produced from a raw ingredient line.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Unit(str, Enum):
    """Supported measurement units."""

    # US volume
    TSP = "tsp"
    TBSP = "tbsp"
    CUP = "cup"
    FL_OZ = "fl_oz"
    PINT = "pint"
    QUART = "quart"
    GALLON = "gallon"
    # Metric volume
    ML = "ml"
    L = "l"
    # US weight
    OZ = "oz"
    LB = "lb"
    # Metric weight
    G = "g"
    KG = "kg"
    # Count
    PIECE = "piece"
    DOZEN = "dozen"
    # Special
    PINCH = "pinch"
    DASH = "dash"
    TO_TASTE = "to_taste"

    @property
    def is_volume(self) -> bool:
        return self in _VOLUME_UNITS

    @property
    def is_weight(self) -> bool:
        return self in _WEIGHT_UNITS

    @property
    def system(self) -> str | None:
        """'us', 'metric', or None for count and special units."""
        if self in _US_UNITS:
            return "us"
        if self in _METRIC_UNITS:
            return "metric"
        return None


_VOLUME_UNITS = frozenset({
    Unit.TSP, Unit.TBSP, Unit.CUP, Unit.FL_OZ, Unit.PINT, Unit.QUART,
    Unit.GALLON, Unit.ML, Unit.L,
})
_WEIGHT_UNITS = frozenset({Unit.OZ, Unit.LB, Unit.G, Unit.KG})
_US_UNITS = frozenset({
    Unit.TSP, Unit.TBSP, Unit.CUP, Unit.FL_OZ, Unit.PINT, Unit.QUART,
    Unit.GALLON, Unit.OZ, Unit.LB,
})
_METRIC_UNITS = frozenset({Unit.ML, Unit.L, Unit.G, Unit.KG})


class IngredientCategory(str, Enum):
    """Shopping categories, in the order they are tested."""

    PRODUCE = "produce"
    MEAT = "meat"
    SEAFOOD = "seafood"
    DAIRY = "dairy"
    BAKERY = "bakery"
    FROZEN = "frozen"
    PANTRY = "pantry"
    SPICES = "spices"
    BEVERAGES = "beverages"
    OTHER = "other"


class NormalizedIngredient(BaseModel):
    """A structured representation of a single ingredient line.

    Attributes:
        name: The ingredient name (e.g., 'all-purpose flour')
        quantity: Numeric quantity, 1 when the line has none
        unit: Unit of measurement, `piece` when the line has none
        notes: Optional preparation notes (e.g., 'sifted')
        category: Shopping category guessed from the name
        raw: The original line, kept for auditing
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        description="The name of the ingredient, e.g., 'all-purpose flour'"
    )
    quantity: float = Field(
        default=1.0,
        ge=0,
        description="The numeric quantity, e.g., 2.5"
    )
    unit: Unit = Field(
        default=Unit.PIECE,
        description="The unit of measurement"
    )
    notes: str | None = Field(
        default=None,
        description="Preparation notes, e.g., 'sifted', 'diced'"
    )
    category: IngredientCategory = Field(
        default=IngredientCategory.OTHER,
        description="Shopping category, e.g., 'pantry'"
    )
    raw: str = Field(
        description="The original ingredient line"
    )
