"""Models package."""
from .ingredient import IngredientCategory, NormalizedIngredient, Unit
from .options import ParseOptions
from .recipe import Duration, ParsedRecipe, ParseResult, ParseSource, SchemaOrgRecipe
from .visual import FieldConfidence, VisualParseResult

__all__ = [
    "Duration",
    "FieldConfidence",
    "IngredientCategory",
    "NormalizedIngredient",
    "ParseOptions",
    "ParseResult",
    "ParseSource",
    "ParsedRecipe",
    "SchemaOrgRecipe",
    "Unit",
    "VisualParseResult",
]
