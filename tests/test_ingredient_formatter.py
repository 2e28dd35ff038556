import pytest

from recipe_importer.models.ingredient import NormalizedIngredient, Unit
from recipe_importer.parsers.ingredient_parser import normalize_ingredient, normalize_ingredients
from recipe_importer.services.ingredient_formatter import (
    format_ingredient,
    format_ingredients_for_list,
    format_quantity,
    scale_ingredients,
)


@pytest.mark.parametrize("quantity,expected", [
    (2.0, "2"),
    (2, "2"),
    (2.5, "2.5"),
    (2.333, "2.33"),
    (1 / 3, "0.33"),
    (None, ""),
])
def test_format_quantity(quantity, expected):
    assert format_quantity(quantity) == expected


def test_format_ingredient():
    ingredient = normalize_ingredient("2 1/2 cups all-purpose flour, sifted")
    assert format_ingredient(ingredient) == "2.5 cup all-purpose flour, sifted"


def test_format_ingredient_omits_piece():
    assert format_ingredient(normalize_ingredient("3 eggs")) == "3 eggs"


def test_format_ingredient_fluid_ounces():
    assert format_ingredient(normalize_ingredient("2 fl oz milk")) == "2 fl oz milk"


def test_format_ingredient_metric():
    ingredient = normalize_ingredient("1 lb ground beef")
    assert format_ingredient(ingredient, convert_units=True) == "454 g ground beef"


def test_format_ingredient_keeps_spoons_when_converting():
    ingredient = normalize_ingredient("2 tbsp butter")
    assert format_ingredient(ingredient, convert_units=True) == "2 tbsp butter"


def test_scale_ingredients():
    ingredients = normalize_ingredients(["2 cups flour", "1 egg"])
    scaled = scale_ingredients(ingredients, 4, 6)

    assert [i.quantity for i in scaled] == [3.0, 1.5]
    assert [i.unit for i in scaled] == [Unit.CUP, Unit.PIECE]
    # Originals are untouched
    assert ingredients[0].quantity == 2


@pytest.mark.parametrize("original,target", [(None, 4), (0, 4), (-2, 4), (4, 0)])
def test_scale_ingredients_invalid_servings(original, target):
    ingredients = normalize_ingredients(["2 cups flour"])
    assert scale_ingredients(ingredients, original, target) is ingredients


def test_format_ingredients_for_list():
    ingredients = normalize_ingredients(["2 1/2 cups flour", "3 eggs", "1 quart milk"])
    assert format_ingredients_for_list(ingredients) == ["flour 2.5 cup", "eggs 3", "milk 1 quart"]
    assert format_ingredients_for_list(ingredients, convert_units=True) == [
        "flour 591 ml", "eggs 3", "milk 946 ml"]


def test_format_ingredients_for_list_skips_nameless():
    ingredients = [NormalizedIngredient(name="", raw="½"), NormalizedIngredient(name="salt", raw="salt")]
    assert format_ingredients_for_list(ingredients) == ["salt 1"]
