"""
Ingredient Formatter.

This module handles formatting, scaling, and metric conversion of normalized
ingredients for display and for shopping lists.
"""
from __future__ import annotations

import logging

from ..models.ingredient import NormalizedIngredient, Unit
from ..unit_converter import convert_to_metric

_LOGGER = logging.getLogger(__name__)

# Units that read naturally without being written out
_IMPLICIT_UNITS = frozenset({Unit.PIECE})

_UNIT_LABELS = {
    Unit.FL_OZ: "fl oz",
    Unit.TO_TASTE: "to taste",
}


def format_quantity(quantity: float | int | None) -> str:
    """
    Format quantity to remove unnecessary decimals.

    Args:
        quantity: The numeric quantity (can be int, float, or None)

    Returns:
        Formatted string (empty string if quantity is None)

    Examples:
        >>> format_quantity(2.0)
        '2'
        >>> format_quantity(2.5)
        '2.5'
        >>> format_quantity(0.333)
        '0.33'
    """
    if quantity is None:
        return ""

    # If it's a whole number, return without decimals
    if quantity == int(quantity):
        return str(int(quantity))

    # Otherwise, return with up to 2 decimal places, removing trailing zeros
    return f"{quantity:.2f}".rstrip('0').rstrip('.')


def format_unit(unit: Unit) -> str:
    """Display label for a unit, empty for implicit units."""
    if unit in _IMPLICIT_UNITS:
        return ""
    return _UNIT_LABELS.get(unit, unit.value)


def _converted(ingredient: NormalizedIngredient, convert_units: bool) -> tuple[float | int, Unit]:
    if not convert_units:
        return ingredient.quantity, ingredient.unit
    quantity, unit = convert_to_metric(ingredient.quantity, ingredient.unit)
    if unit != ingredient.unit:
        _LOGGER.debug("Converted units for %s: %s %s -> %s %s", ingredient.name,
                      ingredient.quantity, ingredient.unit.value, quantity, unit.value)
    return quantity, unit


def format_ingredient(ingredient: NormalizedIngredient, convert_units: bool = False) -> str:
    """Rebuild a display line from a normalized ingredient.

    Args:
        ingredient: The normalized ingredient
        convert_units: Whether to convert US units to metric

    Returns:
        A line such as '2.5 cup all-purpose flour, sifted'
    """
    quantity, unit = _converted(ingredient, convert_units)

    parts = [format_quantity(quantity)]
    unit_label = format_unit(unit)
    if unit_label:
        parts.append(unit_label)
    if ingredient.name:
        parts.append(ingredient.name)

    line = " ".join(part for part in parts if part)
    if ingredient.notes:
        line = f"{line}, {ingredient.notes}"
    return line


def scale_ingredients(
    ingredients: list[NormalizedIngredient],
    original_servings: int | float | None,
    target_servings: int | float
) -> list[NormalizedIngredient]:
    """Scale ingredient quantities based on servings.

    Args:
        ingredients: Normalized ingredients
        original_servings: Original number of servings in the recipe
        target_servings: Target number of servings to scale to (can be fractional)

    Returns:
        New ingredients with scaled quantities, or the input unchanged if
        either serving count is missing or not positive
    """
    if original_servings is None or original_servings <= 0:
        _LOGGER.warning(
            "Cannot scale recipe: original servings not available or invalid")
        return ingredients

    if target_servings <= 0:
        _LOGGER.warning(
            "Cannot scale recipe: target servings must be positive")
        return ingredients

    scaling_factor = target_servings / original_servings
    _LOGGER.info("Scaling ingredients from %s to %s servings (factor: %.2f)",
                 original_servings, target_servings, scaling_factor)

    scaled_ingredients = []
    for ingredient in ingredients:
        scaled_qty = ingredient.quantity * scaling_factor
        _LOGGER.debug("Scaled %s: %.2f -> %.2f",
                      ingredient.name, ingredient.quantity, scaled_qty)
        scaled_ingredients.append(ingredient.model_copy(update={"quantity": scaled_qty}))

    return scaled_ingredients


def format_ingredients_for_list(
    ingredients: list[NormalizedIngredient],
    convert_units: bool = False
) -> list[str]:
    """Format ingredients as shopping list items ('flour 2.5 cup').

    Args:
        ingredients: Normalized ingredients
        convert_units: Whether to convert US units to metric

    Returns:
        List of formatted item strings; ingredients without a name are skipped
    """
    items = []

    for idx, ingredient in enumerate(ingredients):
        if not ingredient.name:
            _LOGGER.debug(
                "Skipping ingredient %d: missing name", idx + 1)
            continue

        quantity, unit = _converted(ingredient, convert_units)

        parts = [ingredient.name]
        formatted_qty = format_quantity(quantity)
        if formatted_qty:
            parts.append(formatted_qty)
        unit_label = format_unit(unit)
        if unit_label:
            parts.append(unit_label)

        item = ' '.join(parts)
        _LOGGER.debug("Formatted ingredient %d as: '%s'", idx + 1, item)
        items.append(item)

    return items
