"""Shared fixtures for the recipe importer tests."""
from __future__ import annotations

import json

import pytest

from recipe_importer.models.recipe import Duration, ParsedRecipe
from recipe_importer.parsers.base_parser import BaseRecipeParser


def json_ld_page(*blocks, body: str = "") -> str:
    """Build an HTML page with one JSON-LD script per block."""
    scripts = "\n".join(
        f'<script type="application/ld+json">{block if isinstance(block, str) else json.dumps(block)}</script>'
        for block in blocks
    )
    return f"<html><head><title>Test</title>{scripts}</head><body>{body}</body></html>"


@pytest.fixture
def pancake_json_ld():
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Fluffy Pancakes",
        "description": "Weekend breakfast pancakes.",
        "recipeIngredient": [
            "2 1/2 cups all-purpose flour, sifted",
            "2 large eggs",
            "1 ½ cups milk",
        ],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Whisk the dry ingredients."},
            {"@type": "HowToStep", "text": "Add eggs and milk."},
            {"@type": "HowToStep", "text": "Fry in a hot pan."},
        ],
        "prepTime": "PT10M",
        "cookTime": "PT1H5M",
        "recipeYield": ["4 servings", "4"],
        "image": {"@type": "ImageObject", "url": "https://example.com/pancakes.jpg"},
    }


@pytest.fixture
def pancake_page(pancake_json_ld):
    return json_ld_page(pancake_json_ld)


@pytest.fixture
def microdata_page():
    return """
<html><body>
<div itemscope itemtype="http://schema.org/Recipe">
  <h1 itemprop="name">Grandma's Soup</h1>
  <p itemprop="description">A warming soup.</p>
  <meta itemprop="prepTime" content="PT15M">
  <time itemprop="cookTime" datetime="PT45M">45 minutes</time>
  <img itemprop="image" src="https://example.com/soup.jpg">
  <span itemprop="recipeYield">6 servings</span>
  <div itemprop="author" itemscope itemtype="http://schema.org/Person">
    <span itemprop="name">Grandma</span>
  </div>
  <ul>
    <li itemprop="recipeIngredient">2 carrots, diced</li>
    <li itemprop="recipeIngredient">1 onion</li>
    <li itemprop="recipeIngredient">1 l water</li>
  </ul>
  <div itemprop="recipeInstructions">
    <p>1. Chop the vegetables.</p>
    <p>2. Simmer for 45 minutes.</p>
  </div>
</div>
</body></html>
"""


@pytest.fixture
def plain_page():
    return "<html><body><h1>My blog</h1><p>" + "Nothing structured here. " * 10 + "</p></body></html>"


class StubAIParser(BaseRecipeParser):
    """AI parser returning a fixed recipe, or raising a fixed error."""

    def __init__(self, recipe: ParsedRecipe | None = None, error: Exception | None = None,
                 enabled: bool = True) -> None:
        self.recipe = recipe
        self.error = error
        self.enabled = enabled
        self.calls = []

    def is_enabled(self) -> bool:
        return self.enabled

    def parse_recipe(self, html: str) -> ParsedRecipe | None:
        self.calls.append(html)
        if self.error is not None:
            raise self.error
        return self.recipe


@pytest.fixture
def ai_recipe():
    return ParsedRecipe(
        title="AI Lasagna",
        ingredients=["1 lb ground beef", "12 lasagna noodles"],
        instructions=["Brown the beef.", "Layer and bake."],
        cook_time=Duration(minutes=45),
        servings=8,
    )


@pytest.fixture
def stub_ai_parser():
    return StubAIParser


@pytest.fixture
def make_json_ld_page():
    return json_ld_page
