"""Services package."""
from .ingredient_formatter import (
    format_ingredient,
    format_ingredients_for_list,
    format_quantity,
    scale_ingredients,
)
from .recipe_service import (
    calculate_confidence,
    parse_from_html,
    parse_from_html_with_ai,
    parse_from_url,
    parse_from_url_with_ai,
)

__all__ = [
    "calculate_confidence",
    "format_ingredient",
    "format_ingredients_for_list",
    "format_quantity",
    "parse_from_html",
    "parse_from_html_with_ai",
    "parse_from_url",
    "parse_from_url_with_ai",
    "scale_ingredients",
]
