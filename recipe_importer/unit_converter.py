"""Unit conversion utilities for recipe ingredients."""
from __future__ import annotations

from types import MappingProxyType

from .models.ingredient import Unit

# Volume conversions to milliliters (ml)
VOLUME_TO_ML = MappingProxyType({
    # US
    Unit.TSP: 4.92892,
    Unit.TBSP: 14.7868,
    Unit.FL_OZ: 29.5735,
    Unit.CUP: 236.588,
    Unit.PINT: 473.176,
    Unit.QUART: 946.353,
    Unit.GALLON: 3785.41,
    # Metric
    Unit.ML: 1,
    Unit.L: 1000,
})

# Weight conversions to grams (g)
WEIGHT_TO_G = MappingProxyType({
    # US
    Unit.OZ: 28.3495,
    Unit.LB: 453.592,
    # Metric
    Unit.G: 1,
    Unit.KG: 1000,
})

# Small measures stay as they are when converting to metric
_KEPT_UNITS = frozenset({Unit.TSP, Unit.TBSP, Unit.PINCH, Unit.DASH})


def convert(quantity: float, from_unit: Unit, to_unit: Unit) -> float | None:
    """Convert a quantity between two units of the same dimension.

    Args:
        quantity: The numeric quantity
        from_unit: The unit of the quantity
        to_unit: The unit to convert to

    Returns:
        The converted quantity, or None if the units are not both volumes or
        both weights

    Examples:
        >>> convert(1, Unit.L, Unit.ML)
        1000.0
        >>> convert(1, Unit.CUP, Unit.G) is None
        True
    """
    if from_unit == to_unit:
        return float(quantity)

    if from_unit in VOLUME_TO_ML and to_unit in VOLUME_TO_ML:
        return quantity * VOLUME_TO_ML[from_unit] / VOLUME_TO_ML[to_unit]

    if from_unit in WEIGHT_TO_G and to_unit in WEIGHT_TO_G:
        return quantity * WEIGHT_TO_G[from_unit] / WEIGHT_TO_G[to_unit]

    return None


def convert_to_metric(quantity: float, unit: Unit) -> tuple[float | int, Unit]:
    """
    Convert US units to metric equivalents.

    Args:
        quantity: The numeric quantity
        unit: The unit of the quantity

    Returns:
        Tuple of (converted_quantity, metric_unit)
        If no conversion is needed, returns original values

    Examples:
        >>> convert_to_metric(1, Unit.CUP)
        (237.0, <Unit.ML: 'ml'>)
        >>> convert_to_metric(1, Unit.LB)
        (454.0, <Unit.G: 'g'>)
    """
    if not quantity or unit in _KEPT_UNITS:
        return quantity, unit

    if unit in VOLUME_TO_ML:
        ml = quantity * VOLUME_TO_ML[unit]

        # Use liters for large volumes
        if ml >= 1000:
            return round(ml / 1000, 2), Unit.L
        return round(ml, 0), Unit.ML

    if unit in WEIGHT_TO_G:
        grams = quantity * WEIGHT_TO_G[unit]

        # Use kilograms for large weights
        if grams >= 1000:
            return round(grams / 1000, 2), Unit.KG
        return round(grams, 0), Unit.G

    return quantity, unit
