"""
Schema.org Recipe mapper.

This module converts the loosely-typed schema.org record found in a page into
the canonical ParsedRecipe. Every schema.org field is optional and every
accepted shape has a well-defined fallback, so mapping never fails.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from ..const import UNTITLED_RECIPE
from ..models.recipe import (
    Duration,
    ImageValue,
    ParsedRecipe,
    RecipeInstructions,
    RecipeYield,
    SchemaOrgRecipe,
)

_LOGGER = logging.getLogger(__name__)

_DURATION_RE = re.compile(
    r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:\d+(?:\.\d+)?S)?$", re.IGNORECASE)
_NUMBERED_STEP_RE = re.compile(r"(?:^|\n)\s*\d+[.)]\s*")
_NEWLINES_RE = re.compile(r"\n+")
_FIRST_INTEGER_RE = re.compile(r"\d+")


def schema_org_to_recipe(schema: SchemaOrgRecipe, source_url: str | None = None) -> ParsedRecipe:
    """Convert a schema.org Recipe record into a ParsedRecipe.

    Args:
        schema: The record found by the structured data extractor
        source_url: Optional URL the page was fetched from

    Returns:
        The mapped recipe
    """
    prep_time = parse_duration(schema.prep_time) if schema.prep_time else None
    cook_time = parse_duration(schema.cook_time) if schema.cook_time else None

    recipe = ParsedRecipe(
        title=schema.name or UNTITLED_RECIPE,
        description=schema.description,
        ingredients=schema.recipe_ingredient,
        instructions=extract_instructions(schema.recipe_instructions),
        prep_time=prep_time,
        cook_time=cook_time,
        servings=parse_servings(schema.recipe_yield),
        image_url=extract_image_url(schema.image),
        source_url=source_url,
    )

    _LOGGER.debug(
        "Mapped schema.org recipe '%s': %d ingredients, %d instructions",
        recipe.title, len(recipe.ingredients), len(recipe.instructions))
    return recipe


def parse_duration(iso8601: str) -> Duration | None:
    """Parse an ISO 8601 duration like 'PT15M' or 'PT1H30M'.

    Seconds are tolerated and dropped. Anything else returns None, so an
    unknown time is never confused with zero minutes.
    """
    match = _DURATION_RE.match(iso8601.strip())
    if not match:
        _LOGGER.debug("Unrecognized duration '%s'", iso8601)
        return None

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    return Duration.from_hours_minutes(hours, minutes)


def extract_instructions(instructions: RecipeInstructions | None) -> list[str]:
    """Normalize schema.org recipeInstructions into a flat list of steps."""
    if not instructions:
        return []

    if isinstance(instructions, str):
        return split_instruction_string(instructions)

    return _flatten_instruction_items(instructions)


def split_instruction_string(text: str) -> list[str]:
    """Split a block of instructions into steps.

    Numbered markers ('1.', '2)') are tried first, then line breaks; text
    with neither is a single step.
    """
    numbered = _NUMBERED_STEP_RE.split(text)
    if len(numbered) > 1:
        return [step.strip() for step in numbered if step.strip()]

    lines = _NEWLINES_RE.split(text)
    if len(lines) > 1:
        return [line.strip() for line in lines if line.strip()]

    return [text.strip()] if text.strip() else []


def _flatten_instruction_items(items: list[Any]) -> list[str]:
    """Flatten HowToStep/HowToSection objects depth-first."""
    steps: list[str] = []
    for item in items:
        if isinstance(item, str):
            if item.strip():
                steps.append(item.strip())
            continue

        if not isinstance(item, dict):
            continue

        text = item.get("text")
        name = item.get("name")
        if isinstance(text, str) and text.strip():
            steps.append(text.strip())
        elif isinstance(name, str) and name.strip():
            steps.append(name.strip())

        # HowToSection nests its steps
        children = item.get("itemListElement")
        if isinstance(children, list):
            steps.extend(_flatten_instruction_items(children))

    return steps


def parse_servings(recipe_yield: RecipeYield | None) -> int | float | None:
    """Parse servings from recipeYield.

    Accepts a number, a string containing a number ('8 servings'), or a list
    whose first element is either.
    """
    if recipe_yield is None or isinstance(recipe_yield, bool):
        return None

    if isinstance(recipe_yield, (int, float)):
        return recipe_yield

    if isinstance(recipe_yield, list):
        return parse_servings(recipe_yield[0]) if recipe_yield else None

    if isinstance(recipe_yield, str):
        match = _FIRST_INTEGER_RE.search(recipe_yield)
        return int(match.group()) if match else None

    return None


def extract_image_url(image: ImageValue | None) -> str | None:
    """Extract an image URL from a string, {url} object, or list of either."""
    if not image:
        return None

    if isinstance(image, str):
        return image

    if isinstance(image, list):
        first = image[0] if image else None
        if isinstance(first, str):
            return first
        if isinstance(first, dict):
            return _url_of(first)
        return None

    if isinstance(image, dict):
        return _url_of(image)

    return None


def _url_of(image: dict[str, Any]) -> str | None:
    url = image.get("url")
    return url if isinstance(url, str) and url else None
