"""
AI-based Recipe Parser using LangExtract.

This module handles AI-powered extraction of recipe data from pages without
structured markup, using Google's LangExtract library with Gemini models.
"""
from __future__ import annotations

import logging
import re

import langextract as lx
from langextract import tokenizer

from ..const import DEFAULT_MAX_TEXT_LENGTH, DEFAULT_MIN_TEXT_LENGTH, DEFAULT_MODEL, ERROR_AI_DISABLED
from ..extractors.examples import RECIPE_EXAMPLES
from ..extractors.prompts import EXTRACTION_PROMPT
from ..extractors.scraper import html_to_text
from ..models.recipe import Duration, ParsedRecipe
from .base_parser import BaseRecipeParser

_LOGGER = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")
_HOURS_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*(?:h|hr|hrs|hour|hours|std|stunde|stunden|time|timer)\b",
                       re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*(?:m|min|mins|minute|minutes|minuten|minutter)\b", re.IGNORECASE)
_LEADING_STEP_NUMBER_RE = re.compile(r"^\s*\d+[.)]\s*")
_HTML_HINT_RE = re.compile(r"<\s*(?:html|body|div|p|script|head)\b", re.IGNORECASE)


def _parse_number(value: str | None) -> float | None:
    if not value:
        return None
    match = _NUMBER_RE.search(str(value))
    if not match:
        return None
    return float(match.group().replace(",", "."))


def _parse_servings(text: str | None, attrs: dict) -> int | float | None:
    number = _parse_number(attrs.get("value")) if attrs.get("value") is not None else None
    if number is None:
        number = _parse_number(text)
    if number is None:
        return None
    return int(number) if number.is_integer() else number


def _parse_minutes(text: str | None, attrs: dict) -> Duration | None:
    """Read a duration from the 'minutes' attribute, falling back to the text."""
    minutes = _parse_number(attrs.get("minutes")) if attrs.get("minutes") is not None else None
    if minutes is None and text:
        hours_match = _HOURS_RE.search(text)
        minutes_match = _MINUTES_RE.search(text)
        if hours_match or minutes_match:
            hours = float(hours_match.group(1).replace(",", ".")) if hours_match else 0
            minutes = hours * 60 + (int(minutes_match.group(1)) if minutes_match else 0)
    if minutes is None or minutes < 0:
        return None
    return Duration(minutes=int(round(minutes)))


class AIRecipeParser(BaseRecipeParser):
    """Parses recipe data from unstructured pages using AI (LangExtract)."""

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_MODEL) -> None:
        """Initialize the AI recipe parser.

        A parser without an API key is constructed disabled.

        Args:
            api_key: API key for the language model
            model: The model to use for extraction
        """
        self.api_key = api_key.strip() if api_key and api_key.strip() else None
        self.model = model
        # Use UnicodeTokenizer for multi-language support (fixes alignment warnings)
        self.tokenizer = tokenizer.UnicodeTokenizer()
        _LOGGER.debug("Initialized AIRecipeParser with model %s (enabled: %s)",
                      model, self.is_enabled())

    def is_enabled(self) -> bool:
        return self.api_key is not None

    def parse_recipe(self, html: str) -> ParsedRecipe | None:
        """Parse recipe information from a page using AI.

        Args:
            html: The raw page HTML, or already extracted text

        Returns:
            A ParsedRecipe, or None if the text is too short or nothing was extracted

        Raises:
            RuntimeError: If the parser has no API key
        """
        if not self.is_enabled():
            raise RuntimeError(ERROR_AI_DISABLED)

        text = html_to_text(html, DEFAULT_MAX_TEXT_LENGTH) if html and _HTML_HINT_RE.search(html) else html
        if not text or len(text.strip()) < DEFAULT_MIN_TEXT_LENGTH:
            _LOGGER.warning(
                "Text too short for extraction: %d characters", len(text) if text else 0)
            return None

        _LOGGER.info("Parsing recipe from %d characters of text using AI", len(text))

        try:
            _LOGGER.debug("Calling LangExtract with model %s", self.model)
            result = lx.extract(
                text_or_documents=text,
                prompt_description=EXTRACTION_PROMPT,
                model_id=self.model,
                examples=RECIPE_EXAMPLES,
                tokenizer=self.tokenizer,  # Use UnicodeTokenizer for multi-language support
                api_key=self.api_key
            )
        except Exception as e:
            _LOGGER.error("Error during AI recipe parsing: %s", str(e), exc_info=True)
            raise

        if not result or not getattr(result, "extractions", None):
            _LOGGER.warning("No extractions found in LangExtract result")
            return None

        return self._build_recipe(result.extractions)

    def _build_recipe(self, extractions: list) -> ParsedRecipe | None:
        """Assemble a ParsedRecipe from LangExtract extractions."""
        title = None
        description = None
        servings = None
        prep_time = None
        cook_time = None
        ingredients: list[str] = []
        instructions: list[str] = []

        for extraction in extractions:
            extraction_class = extraction.extraction_class
            text = extraction.extraction_text
            attrs = extraction.attributes or {}

            if extraction_class == "title" and title is None:
                title = text
            elif extraction_class == "description" and description is None:
                description = text
            elif extraction_class == "servings" and servings is None:
                servings = _parse_servings(text, attrs)
            elif extraction_class == "prep_time" and prep_time is None:
                prep_time = _parse_minutes(text, attrs)
            elif extraction_class == "cook_time" and cook_time is None:
                cook_time = _parse_minutes(text, attrs)
            elif extraction_class == "ingredient" and text:
                ingredients.append(text)
            elif extraction_class == "instruction" and text:
                instructions.append(_LEADING_STEP_NUMBER_RE.sub("", text))

        if not title and not ingredients and not instructions:
            _LOGGER.warning("AI parsing completed but no recipe data found")
            return None

        if not ingredients:
            _LOGGER.warning("AI parsing completed but no ingredients found")

        recipe = ParsedRecipe(
            title=title,
            description=description,
            ingredients=ingredients,
            instructions=instructions,
            prep_time=prep_time,
            cook_time=cook_time,
            servings=servings,
        )
        _LOGGER.info("Successfully parsed recipe '%s' with %d ingredients using AI (servings: %s)",
                     recipe.title, len(recipe.ingredients), servings)
        return recipe
