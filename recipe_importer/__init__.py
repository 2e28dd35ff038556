"""Recipe Importer: structured recipe extraction and ingredient normalization."""
from .models import (
    Duration,
    FieldConfidence,
    IngredientCategory,
    NormalizedIngredient,
    ParsedRecipe,
    ParseOptions,
    ParseResult,
    ParseSource,
    SchemaOrgRecipe,
    Unit,
    VisualParseResult,
)
from .extractors.structured_data import extract_schema_org
from .parsers.ingredient_parser import normalize_ingredient, normalize_ingredients
from .parsers.schema_mapper import schema_org_to_recipe
from .services.recipe_service import (
    calculate_confidence,
    parse_from_html,
    parse_from_html_with_ai,
    parse_from_url,
    parse_from_url_with_ai,
)

__version__ = "0.1.0"

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
    "calculate_confidence",
    "extract_schema_org",
    "normalize_ingredient",
    "normalize_ingredients",
    "parse_from_html",
    "parse_from_html_with_ai",
    "parse_from_url",
    "parse_from_url_with_ai",
    "schema_org_to_recipe",
]
