"""
Ingredient line normalizer.

This module parses a raw ingredient line ('2 1/2 cups all-purpose flour,
sifted') into quantity, unit, name, notes and shopping category. Parsing runs
in four stages that each consume a prefix of the line; every stage has a
default, so any string produces a NormalizedIngredient.
"""
from __future__ import annotations

import logging
import re
from types import MappingProxyType

from ..models.ingredient import IngredientCategory, NormalizedIngredient, Unit

_LOGGER = logging.getLogger(__name__)

# Map unicode fractions to their decimal values
UNICODE_FRACTIONS = MappingProxyType({
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
})

# Unit aliases - spellings and abbreviations mapped to standard units
UNIT_ALIASES = MappingProxyType({
    # Teaspoon
    "teaspoon": Unit.TSP,
    "teaspoons": Unit.TSP,
    "tsp": Unit.TSP,
    "tsps": Unit.TSP,
    "t": Unit.TSP,
    # Tablespoon
    "tablespoon": Unit.TBSP,
    "tablespoons": Unit.TBSP,
    "tbsp": Unit.TBSP,
    "tbsps": Unit.TBSP,
    "tbs": Unit.TBSP,
    "tb": Unit.TBSP,
    # Cup
    "cup": Unit.CUP,
    "cups": Unit.CUP,
    "c": Unit.CUP,
    # Fluid ounce
    "fluid ounce": Unit.FL_OZ,
    "fluid ounces": Unit.FL_OZ,
    "fl oz": Unit.FL_OZ,
    "fl. oz": Unit.FL_OZ,
    "floz": Unit.FL_OZ,
    # Pint
    "pint": Unit.PINT,
    "pints": Unit.PINT,
    "pt": Unit.PINT,
    # Quart
    "quart": Unit.QUART,
    "quarts": Unit.QUART,
    "qt": Unit.QUART,
    "qts": Unit.QUART,
    # Gallon
    "gallon": Unit.GALLON,
    "gallons": Unit.GALLON,
    "gal": Unit.GALLON,
    # Milliliter
    "milliliter": Unit.ML,
    "milliliters": Unit.ML,
    "millilitre": Unit.ML,
    "millilitres": Unit.ML,
    "ml": Unit.ML,
    # Liter
    "liter": Unit.L,
    "liters": Unit.L,
    "litre": Unit.L,
    "litres": Unit.L,
    "l": Unit.L,
    # Ounce (weight)
    "ounce": Unit.OZ,
    "ounces": Unit.OZ,
    "oz": Unit.OZ,
    # Pound
    "pound": Unit.LB,
    "pounds": Unit.LB,
    "lb": Unit.LB,
    "lbs": Unit.LB,
    # Gram
    "gram": Unit.G,
    "grams": Unit.G,
    "g": Unit.G,
    "gr": Unit.G,
    # Kilogram
    "kilogram": Unit.KG,
    "kilograms": Unit.KG,
    "kg": Unit.KG,
    "kilo": Unit.KG,
    "kilos": Unit.KG,
    # Count
    "piece": Unit.PIECE,
    "pieces": Unit.PIECE,
    "pc": Unit.PIECE,
    "pcs": Unit.PIECE,
    "dozen": Unit.DOZEN,
    "doz": Unit.DOZEN,
    # Other
    "pinch": Unit.PINCH,
    "pinches": Unit.PINCH,
    "dash": Unit.DASH,
    "dashes": Unit.DASH,
})

# Keywords per category, tested in declaration order
CATEGORY_KEYWORDS = MappingProxyType({
    IngredientCategory.PRODUCE: (
        "apple", "banana", "orange", "lemon", "lime", "tomato", "potato", "onion",
        "garlic", "carrot", "celery", "lettuce", "spinach", "kale", "broccoli",
        "cauliflower", "pepper", "cucumber", "zucchini", "squash", "mushroom",
        "avocado", "berry", "grape", "melon", "peach", "pear", "plum", "mango",
        "pineapple", "strawberry", "blueberry", "raspberry", "herb", "basil",
        "cilantro", "parsley", "mint", "thyme", "rosemary", "sage", "dill",
        "ginger", "scallion", "shallot", "leek", "cabbage", "corn", "pea",
        "bean", "asparagus", "artichoke", "beet", "radish", "turnip", "eggplant",
    ),
    IngredientCategory.MEAT: (
        "beef", "chicken", "pork", "lamb", "turkey", "duck", "veal", "bacon",
        "ham", "sausage", "steak", "ground", "roast", "chop", "rib", "breast",
        "thigh", "wing", "drumstick", "tenderloin", "brisket", "sirloin",
    ),
    IngredientCategory.SEAFOOD: (
        "fish", "salmon", "tuna", "cod", "tilapia", "halibut", "trout", "bass",
        "shrimp", "prawn", "crab", "lobster", "scallop", "mussel", "clam",
        "oyster", "squid", "calamari", "octopus", "anchovy", "sardine",
    ),
    IngredientCategory.DAIRY: (
        "milk", "cream", "butter", "cheese", "yogurt", "sour cream", "cottage",
        "ricotta", "mozzarella", "cheddar", "parmesan", "feta", "brie",
        "gouda", "swiss", "provolone", "cream cheese", "half and half",
        "whipping cream", "heavy cream", "buttermilk", "egg", "eggs",
    ),
    IngredientCategory.BAKERY: (
        "bread", "roll", "bun", "bagel", "croissant", "muffin", "tortilla",
        "pita", "naan", "baguette", "sourdough", "ciabatta", "focaccia",
    ),
    IngredientCategory.FROZEN: (
        "frozen", "ice cream", "sorbet", "gelato", "popsicle",
    ),
    IngredientCategory.PANTRY: (
        "flour", "sugar", "salt", "oil", "vinegar", "soy sauce", "pasta",
        "rice", "noodle", "bean", "lentil", "chickpea", "can", "canned",
        "broth", "stock", "tomato paste", "tomato sauce", "honey", "maple",
        "syrup", "molasses", "cornstarch", "baking powder", "baking soda",
        "yeast", "vanilla", "chocolate", "cocoa", "nut", "almond", "walnut",
        "pecan", "cashew", "peanut", "oat", "cereal", "cracker", "chip",
    ),
    IngredientCategory.SPICES: (
        "salt", "pepper", "cumin", "paprika", "cinnamon", "nutmeg", "clove",
        "cardamom", "coriander", "turmeric", "curry", "chili", "cayenne",
        "oregano", "basil", "thyme", "rosemary", "sage", "bay leaf", "dill",
        "parsley", "cilantro", "mint", "ginger", "garlic powder", "onion powder",
        "mustard", "allspice", "fennel", "anise", "saffron", "vanilla extract",
    ),
    IngredientCategory.BEVERAGES: (
        "water", "juice", "wine", "beer", "coffee", "tea", "soda", "milk",
        "coconut milk", "almond milk", "oat milk", "broth", "stock",
    ),
})

_FRACTION_CHARS = "".join(UNICODE_FRACTIONS)
_UNICODE_QUANTITY_RE = re.compile(rf"^(?:(\d+)\s*)?([{_FRACTION_CHARS}])\s*")
_UNICODE_FRACTION_RE = re.compile(rf"^([{_FRACTION_CHARS}])\s*")
# A number that is not the numerator of a text fraction, with an optional range
_NUMBER_RE = re.compile(
    r"^(\d+(?:\.\d+)?)(?![\d/])\s*"
    r"(?:(?:-|–|—|to)\s*\d+(?:\.\d+)?(?![\d/])\s*)?"
)
_TEXT_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)\s*")
_PAREN_NOTES_RE = re.compile(r"^([^(]+)\s*\(([^)]+)\)\s*(.*)$", re.DOTALL)
_LEADING_OF_RE = re.compile(r"^of\s+", re.IGNORECASE)
_NOTE_SEPARATORS = (" - ", " – ", " — ")

# Longest alias first so "fluid ounce" wins over "ounce"
_UNIT_PATTERNS = tuple(
    (re.compile(rf"^{re.escape(alias)}(?:\s+|\.|$)", re.IGNORECASE), unit)
    for alias, unit in sorted(UNIT_ALIASES.items(), key=lambda item: len(item[0]), reverse=True)
)


def normalize_ingredient(raw: str) -> NormalizedIngredient:
    """Normalize a raw ingredient line into structured data.

    Args:
        raw: An ingredient line, e.g. '1 cup sugar, packed'

    Returns:
        The normalized ingredient; the original line is kept in `raw`
    """
    trimmed = raw.strip()

    quantity, after_quantity = extract_quantity(trimmed)
    unit, after_unit = extract_unit(after_quantity)
    name, notes = extract_name_and_notes(after_unit)
    category = categorize_ingredient(name)

    return NormalizedIngredient(
        name=name,
        quantity=quantity,
        unit=unit,
        notes=notes,
        category=category,
        raw=trimmed,
    )


def normalize_ingredients(lines: list[str]) -> list[NormalizedIngredient]:
    """Normalize ingredient lines, one result per line, in order."""
    return [normalize_ingredient(line) for line in lines]


def _parse_fraction(numerator: str, denominator: str) -> float | None:
    denominator_value = int(denominator)
    if denominator_value == 0:
        _LOGGER.debug("Ignoring fraction with zero denominator: %s/%s",
                      numerator, denominator)
        return None
    return int(numerator) / denominator_value


def extract_quantity(text: str) -> tuple[float, str]:
    """Extract a leading quantity.

    Handles unicode fractions ('1 ½'), integers and decimals, ranges ('2-3',
    lower bound kept), mixed numbers ('2 1/2') and text fractions ('1/2').

    Returns:
        Tuple of (quantity, remaining text); quantity is 1 when none is found
    """
    remaining = text.strip()

    match = _UNICODE_QUANTITY_RE.match(remaining)
    if match:
        whole, fraction = match.groups()
        quantity = UNICODE_FRACTIONS[fraction] + (int(whole) if whole else 0)
        return quantity, remaining[match.end():]

    quantity = 1.0
    match = _NUMBER_RE.match(remaining)
    if match:
        quantity = float(match.group(1))
        remaining = remaining[match.end():]

        # Fraction after a whole number, e.g. "2 1/2" or "2 ½"
        fraction_match = _TEXT_FRACTION_RE.match(remaining)
        if fraction_match:
            fraction = _parse_fraction(*fraction_match.groups())
            if fraction is not None:
                quantity += fraction
            return quantity, remaining[fraction_match.end():]

        fraction_match = _UNICODE_FRACTION_RE.match(remaining)
        if fraction_match:
            quantity += UNICODE_FRACTIONS[fraction_match.group(1)]
            remaining = remaining[fraction_match.end():]
        return quantity, remaining

    match = _TEXT_FRACTION_RE.match(remaining)
    if match:
        fraction = _parse_fraction(*match.groups())
        if fraction is not None:
            quantity = fraction
        remaining = remaining[match.end():]

    return quantity, remaining


def extract_unit(text: str) -> tuple[Unit, str]:
    """Extract a leading unit.

    The alias must be followed by whitespace, a period, or the end of the text
    so that 'cupcake' does not match 'cup'.

    Returns:
        Tuple of (unit, remaining text); `piece` with the text unchanged when
        no unit is recognized
    """
    stripped = text.strip()
    for pattern, unit in _UNIT_PATTERNS:
        match = pattern.match(stripped)
        if match:
            remaining = stripped[match.end():].strip()
            remaining = _LEADING_OF_RE.sub("", remaining)
            return unit, remaining

    return Unit.PIECE, text


def extract_name_and_notes(text: str) -> tuple[str, str | None]:
    """Split the rest of a line into ingredient name and notes.

    Parenthesized notes win, then the first comma, then a spaced dash.
    """
    trimmed = text.strip()

    match = _PAREN_NOTES_RE.match(trimmed)
    if match:
        name = match.group(1).strip()
        paren_notes = match.group(2).strip()
        after_paren = match.group(3).strip().lstrip(",").strip()
        notes = f"{paren_notes}, {after_paren}" if after_paren else paren_notes
        return name, notes or None

    comma_idx = trimmed.find(",")
    if comma_idx > 0:
        return trimmed[:comma_idx].strip(), trimmed[comma_idx + 1:].strip() or None

    for separator in _NOTE_SEPARATORS:
        idx = trimmed.find(separator)
        if idx > 0:
            return trimmed[:idx].strip(), trimmed[idx + len(separator):].strip() or None

    return trimmed, None


def categorize_ingredient(name: str) -> IngredientCategory:
    """Guess the shopping category of an ingredient from its name."""
    lower = name.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return category
    return IngredientCategory.OTHER
