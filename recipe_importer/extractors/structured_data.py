"""
Structured recipe data extraction.

This module pulls schema.org Recipe records out of raw HTML. JSON-LD script
blocks are preferred; Microdata markup is only consulted when no JSON-LD
Recipe exists on the page.
"""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup, Tag

from ..models.recipe import SchemaOrgRecipe

_LOGGER = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"

RECIPE_TYPES = frozenset({
    "Recipe",
    "schema:Recipe",
    "http://schema.org/Recipe",
    "https://schema.org/Recipe",
})

_MICRODATA_RECIPE_RE = re.compile(r"schema\.org/Recipe/?$", re.IGNORECASE)

# Microdata properties read once, and those collected for every occurrence
_SINGLE_PROPS = ("name", "description", "recipeYield", "prepTime", "cookTime", "image")
_REPEATED_PROPS = ("recipeIngredient", "recipeInstructions")


def extract_schema_org(html: str) -> SchemaOrgRecipe | None:
    """Extract a schema.org Recipe from HTML.

    Args:
        html: The page HTML

    Returns:
        The first Recipe found, or None if the page carries no recipe markup
    """
    if not html:
        return None

    soup = BeautifulSoup(html, features="html.parser")

    recipe = _extract_json_ld(soup)
    if recipe is not None:
        return recipe

    recipe = _extract_microdata(soup)
    if recipe is not None:
        return recipe

    _LOGGER.debug("No schema.org Recipe markup found")
    return None


def is_recipe_node(node: Any) -> bool:
    """Check if a JSON-LD node is typed as a Recipe."""
    if not isinstance(node, dict):
        return False
    node_type = node.get("@type")
    if isinstance(node_type, str):
        return node_type in RECIPE_TYPES
    if isinstance(node_type, list):
        return any(isinstance(t, str) and t in RECIPE_TYPES for t in node_type)
    return False


def find_json_ld_node(value: Any, predicate: Callable[[Any], bool]) -> dict[str, Any] | None:
    """Depth-first search of a JSON-LD value for the first matching object.

    Objects are tested themselves before their `@graph` members; arrays are
    searched element by element in document order. Scalars never match.
    """
    if isinstance(value, dict):
        if predicate(value):
            return value
        graph = value.get("@graph")
        if isinstance(graph, list):
            return find_json_ld_node(graph, predicate)
        return None

    if isinstance(value, list):
        for item in value:
            found = find_json_ld_node(item, predicate)
            if found is not None:
                return found

    return None


def _is_json_ld_script(script_type: str | None) -> bool:
    if not script_type:
        return False
    return script_type.split(";")[0].strip().lower() == JSON_LD_TYPE


def _extract_json_ld(soup: BeautifulSoup) -> SchemaOrgRecipe | None:
    scripts = soup.find_all("script", type=_is_json_ld_script)
    _LOGGER.debug("Found %d JSON-LD scripts", len(scripts))

    for idx, script in enumerate(scripts):
        content = script.string or script.get_text()
        if not content or not content.strip():
            continue

        try:
            data = json.loads(content.strip())
            node = find_json_ld_node(data, is_recipe_node)
        except (json.JSONDecodeError, RecursionError) as e:
            _LOGGER.debug("Skipping malformed JSON-LD script %d: %s", idx, e)
            continue

        if node is not None:
            _LOGGER.debug("Found Recipe in JSON-LD script %d", idx)
            return SchemaOrgRecipe.model_validate(node)

    return None


def _is_item_scope(tag: Tag) -> bool:
    return tag.has_attr("itemscope") or tag.has_attr("itemtype")


def _is_recipe_item(tag: Tag) -> bool:
    itemtype = tag.get("itemtype")
    if isinstance(itemtype, list):
        itemtype = " ".join(itemtype)
    return bool(itemtype) and any(
        _MICRODATA_RECIPE_RE.search(t) for t in itemtype.split())


def _owned_properties(item: Tag) -> list[Tag]:
    """Return the itemprop elements whose nearest enclosing item is `item`."""
    props = []
    for element in item.find_all(attrs={"itemprop": True}):
        owner = element.find_parent(_is_item_scope)
        if owner is item:
            props.append(element)
    return props


def _property_names(element: Tag) -> list[str]:
    itemprop = element.get("itemprop")
    if isinstance(itemprop, list):
        itemprop = " ".join(itemprop)
    return itemprop.split() if itemprop else []


def _property_value(element: Tag, separator: str = " ") -> str | None:
    if element.has_attr("content"):
        value = element["content"]
    elif element.has_attr("datetime"):
        value = element["datetime"]
    elif element.name in ("img", "source", "video", "audio") and element.has_attr("src"):
        value = element["src"]
    elif element.name in ("a", "link") and element.has_attr("href"):
        value = element["href"]
    else:
        value = element.get_text(separator, strip=True)
    if isinstance(value, list):
        value = " ".join(value)
    value = value.strip()
    return value or None


def _extract_microdata(soup: BeautifulSoup) -> SchemaOrgRecipe | None:
    item = soup.find(_is_recipe_item)
    if item is None:
        return None

    _LOGGER.debug("Found Microdata Recipe on <%s>", item.name)

    record: dict[str, Any] = {"@type": "Recipe"}
    repeated: dict[str, list[str]] = {prop: [] for prop in _REPEATED_PROPS}

    for element in _owned_properties(item):
        for prop in _property_names(element):
            if prop in repeated:
                # Keep line breaks so a single block of steps can still be split
                separator = "\n" if prop == "recipeInstructions" else " "
                value = _property_value(element, separator)
                if value:
                    repeated[prop].append(value)
            elif prop in _SINGLE_PROPS and prop not in record:
                value = _property_value(element)
                if value:
                    record[prop] = value

    if repeated["recipeIngredient"]:
        record["recipeIngredient"] = repeated["recipeIngredient"]

    steps = repeated["recipeInstructions"]
    if len(steps) == 1:
        record["recipeInstructions"] = steps[0]
    elif steps:
        record["recipeInstructions"] = steps

    if not record.get("name"):
        _LOGGER.debug("Microdata Recipe has no name, ignoring it")
        return None

    return SchemaOrgRecipe.model_validate(record)
