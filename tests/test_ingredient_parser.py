import pytest

from recipe_importer.models.ingredient import IngredientCategory, Unit
from recipe_importer.parsers.ingredient_parser import (
    CATEGORY_KEYWORDS,
    UNIT_ALIASES,
    categorize_ingredient,
    extract_name_and_notes,
    extract_quantity,
    extract_unit,
    normalize_ingredient,
    normalize_ingredients,
)


def test_end_to_end_example():
    ingredient = normalize_ingredient("2 1/2 cups all-purpose flour, sifted")
    assert ingredient.quantity == 2.5
    assert ingredient.unit == Unit.CUP
    assert ingredient.name == "all-purpose flour"
    assert ingredient.notes == "sifted"
    assert ingredient.category == IngredientCategory.PANTRY
    assert ingredient.raw == "2 1/2 cups all-purpose flour, sifted"


@pytest.mark.parametrize("text,expected", [
    ("½ cup sugar", 0.5),
    ("1 ½ cups milk", 1.5),
    ("1½ cups milk", 1.5),
    ("¾ tsp salt", 0.75),
    ("2 ⅓ cups water", 2 + 1 / 3),
    ("1/2 cup sugar", 0.5),
    ("3/4 cup butter", 0.75),
    ("2 1/2 cups flour", 2.5),
    ("1.5 lbs beef", 1.5),
    ("250 g butter", 250),
    ("2-3 cloves garlic", 2),
    ("2 – 3 cloves garlic", 2),
    ("1 to 2 tbsp honey", 1),
    ("salt", 1),
    ("1/0 cup flour", 1),
])
def test_quantity(text, expected):
    assert normalize_ingredient(text).quantity == pytest.approx(expected)


def test_zero_denominator_is_consumed():
    quantity, remaining = extract_quantity("1/0 cup flour")
    assert quantity == 1
    assert remaining == "cup flour"


def test_range_consumes_upper_bound():
    quantity, remaining = extract_quantity("2-3 cloves garlic")
    assert quantity == 2
    assert remaining == "cloves garlic"


@pytest.mark.parametrize("text,unit", [
    ("1 tsp salt", Unit.TSP),
    ("1 t salt", Unit.TSP),
    ("2 Tablespoons olive oil", Unit.TBSP),
    ("1 tbsp. butter", Unit.TBSP),
    ("2 fl oz milk", Unit.FL_OZ),
    ("2 fl. oz cream", Unit.FL_OZ),
    ("1 fluid ounce rum", Unit.FL_OZ),
    ("4 oz cheddar", Unit.OZ),
    ("1 pint cream", Unit.PINT),
    ("2 qts stock", Unit.QUART),
    ("1 gal water", Unit.GALLON),
    ("500 ml water", Unit.ML),
    ("1 litre water", Unit.L),
    ("2 lbs beef", Unit.LB),
    ("100 gr sugar", Unit.G),
    ("1 kilo potatoes", Unit.KG),
    ("3 pcs bread", Unit.PIECE),
    ("1 dozen eggs", Unit.DOZEN),
    ("1 pinch salt", Unit.PINCH),
    ("2 dashes bitters", Unit.DASH),
    ("3 cloves garlic", Unit.PIECE),
])
def test_unit(text, unit):
    assert normalize_ingredient(text).unit == unit


def test_longest_alias_wins():
    ingredient = normalize_ingredient("2 fl oz milk")
    assert ingredient.unit == Unit.FL_OZ
    assert ingredient.name == "milk"


def test_unit_requires_word_boundary():
    ingredient = normalize_ingredient("2 cupcakes")
    assert ingredient.unit == Unit.PIECE
    assert ingredient.name == "cupcakes"

    ingredient = normalize_ingredient("1 large egg")
    assert ingredient.unit == Unit.PIECE
    assert ingredient.name == "large egg"


def test_unit_match_is_case_insensitive():
    assert extract_unit("CUPS flour") == (Unit.CUP, "flour")


def test_no_unit_leaves_remainder_untouched():
    assert extract_unit("eggs") == (Unit.PIECE, "eggs")


def test_leading_of_is_dropped():
    ingredient = normalize_ingredient("1 cup of sugar")
    assert ingredient.unit == Unit.CUP
    assert ingredient.name == "sugar"


def test_parenthesized_notes():
    ingredient = normalize_ingredient("1 cup sugar (packed)")
    assert ingredient.name == "sugar"
    assert ingredient.notes == "packed"


def test_parenthesized_notes_with_trailing_text():
    assert extract_name_and_notes("butter (cold) cut into cubes") == ("butter", "cold, cut into cubes")


def test_comma_notes():
    assert extract_name_and_notes("onion, finely chopped") == ("onion", "finely chopped")


@pytest.mark.parametrize("separator", [" - ", " – ", " — "])
def test_dash_notes(separator):
    assert extract_name_and_notes(f"parsley{separator}for garnish") == ("parsley", "for garnish")


def test_no_notes():
    assert extract_name_and_notes("  brown sugar ") == ("brown sugar", None)


@pytest.mark.parametrize("name,category", [
    ("red onion", IngredientCategory.PRODUCE),
    ("chicken thighs", IngredientCategory.MEAT),
    ("salmon fillet", IngredientCategory.SEAFOOD),
    ("grated parmesan", IngredientCategory.DAIRY),
    ("eggs", IngredientCategory.DAIRY),
    ("sourdough", IngredientCategory.BAKERY),
    ("gelato", IngredientCategory.FROZEN),
    ("all-purpose flour", IngredientCategory.PANTRY),
    ("cumin", IngredientCategory.SPICES),
    ("coffee", IngredientCategory.BEVERAGES),
    ("xanthan gum", IngredientCategory.OTHER),
])
def test_category(name, category):
    assert categorize_ingredient(name) == category


def test_category_first_table_wins():
    # "pepper" is both produce and a spice; produce is declared first
    assert categorize_ingredient("black pepper") == IngredientCategory.PRODUCE


def test_category_is_case_insensitive():
    assert categorize_ingredient("FRESH BASIL") == IngredientCategory.PRODUCE


@pytest.mark.parametrize("raw", ["", "   ", "(", "1/", "½", "-", "cup", "12345678901234567890 eggs"])
def test_normalization_is_total(raw):
    ingredient = normalize_ingredient(raw)
    assert ingredient.quantity >= 0
    assert ingredient.raw == raw.strip()


def test_normalization_is_idempotent():
    raw = "1 ½ cups milk (whole), warmed"
    assert normalize_ingredient(raw) == normalize_ingredient(raw)


def test_normalize_ingredients_preserves_order():
    lines = ["1 cup rice", "2 cups water", "salt"]
    result = normalize_ingredients(lines)
    assert [i.raw for i in result] == lines
    assert [i.name for i in result] == ["rice", "water", "salt"]


def test_tables_are_immutable():
    with pytest.raises(TypeError):
        UNIT_ALIASES["spoon"] = Unit.TSP
    with pytest.raises(TypeError):
        CATEGORY_KEYWORDS[IngredientCategory.OTHER] = ("gum",)
