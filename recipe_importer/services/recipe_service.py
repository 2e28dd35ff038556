"""
Recipe Extraction Service.

This module orchestrates the extraction of recipe data from HTML and URLs:
schema.org markup is always tried first, and the AI parser is only used as a
fallback when the caller opts in. Every entry point returns a ParseResult;
failures are reported in its errors list instead of being raised.
"""
from __future__ import annotations

import logging

import requests

from ..const import (
    CONFIDENCE_BASE_AI,
    CONFIDENCE_BASE_SCHEMA_ORG,
    CONFIDENCE_INGREDIENTS,
    CONFIDENCE_INSTRUCTIONS,
    CONFIDENCE_SERVINGS,
    CONFIDENCE_TIME,
    CONFIDENCE_TITLE,
    ERROR_NO_SCHEMA_ORG,
    ERROR_TIMEOUT,
)
from ..extractors.scraper import fetch_html, validate_url
from ..extractors.structured_data import extract_schema_org
from ..models.options import ParseOptions
from ..models.recipe import ParsedRecipe, ParseResult, ParseSource
from ..parsers.schema_mapper import schema_org_to_recipe

_LOGGER = logging.getLogger(__name__)


def calculate_confidence(recipe: ParsedRecipe, base: float) -> float:
    """Score how complete a recipe is.

    Args:
        recipe: The parsed recipe
        base: Starting score for the extraction path

    Returns:
        The score, capped at 1.0
    """
    confidence = base
    if recipe.title and not recipe.has_default_title:
        confidence += CONFIDENCE_TITLE
    if recipe.ingredients:
        confidence += CONFIDENCE_INGREDIENTS
    if recipe.instructions:
        confidence += CONFIDENCE_INSTRUCTIONS
    if recipe.prep_time or recipe.cook_time:
        confidence += CONFIDENCE_TIME
    if recipe.servings:
        confidence += CONFIDENCE_SERVINGS
    return round(min(confidence, 1.0), 4)


def parse_from_html(html: str, source_url: str | None = None) -> ParseResult:
    """Parse a recipe from schema.org markup in HTML.

    Args:
        html: The page HTML
        source_url: Optional URL the page came from

    Returns:
        A successful result with the mapped recipe, or a failure stating that
        no schema.org data was found
    """
    schema = extract_schema_org(html)
    if schema is None:
        _LOGGER.debug("No schema.org Recipe in %s", source_url or "HTML")
        return ParseResult.failure([ERROR_NO_SCHEMA_ORG])

    recipe = schema_org_to_recipe(schema, source_url)
    confidence = calculate_confidence(recipe, CONFIDENCE_BASE_SCHEMA_ORG)
    _LOGGER.info("Extracted recipe '%s' from schema.org data (confidence %.2f)",
                 recipe.title, confidence)
    return ParseResult(
        success=True,
        recipe=recipe,
        confidence=confidence,
        source=ParseSource.SCHEMA_ORG,
    )


def parse_from_html_with_ai(
    html: str,
    source_url: str | None = None,
    options: ParseOptions | None = None,
) -> ParseResult:
    """Parse a recipe from HTML, falling back to AI when no schema.org data exists.

    Args:
        html: The page HTML
        source_url: Optional URL the page came from
        options: Options selecting the AI fallback

    Returns:
        The schema.org result when it succeeds. Otherwise the AI result if the
        fallback is enabled, else the schema.org failure.
    """
    schema_result = parse_from_html(html, source_url)
    if schema_result.success:
        return schema_result

    options = options or ParseOptions()
    ai_service = options.ai_service
    if not options.use_ai or ai_service is None or not ai_service.is_enabled():
        return schema_result

    _LOGGER.info("No schema.org data found, falling back to AI parsing")
    try:
        recipe = ai_service.parse_recipe(html)
        if recipe is None:
            raise ValueError("no recipe data extracted")
    except Exception as e:
        _LOGGER.warning("AI parsing failed for %s: %s", source_url or "HTML", e)
        return ParseResult.failure(
            [*(schema_result.errors or []), f"AI parsing failed: {e}"],
            source=ParseSource.AI,
        )

    if source_url:
        recipe = recipe.model_copy(update={"source_url": source_url})

    confidence = calculate_confidence(recipe, CONFIDENCE_BASE_AI)
    _LOGGER.info("Extracted recipe '%s' using AI (confidence %.2f)", recipe.title, confidence)
    return ParseResult(
        success=True,
        recipe=recipe,
        confidence=confidence,
        source=ParseSource.AI,
    )


def _fetch(url: str, options: ParseOptions) -> tuple[str | None, ParseResult | None]:
    """Validate and fetch a URL.

    Returns:
        Tuple of (html, None) on success, or (None, failure result)
    """
    try:
        url = validate_url(url)
    except ValueError as e:
        return None, ParseResult.failure([str(e)])

    try:
        html = fetch_html(url, timeout=options.timeout, user_agent=options.user_agent)
    except requests.exceptions.Timeout:
        _LOGGER.warning("Timed out fetching %s after %ss", url, options.timeout)
        return None, ParseResult.failure([f"Failed to fetch URL: {ERROR_TIMEOUT}"])
    except requests.exceptions.HTTPError as e:
        response = e.response
        if response is None:
            return None, ParseResult.failure([f"Failed to fetch URL: {e}"])
        _LOGGER.warning("HTTP %s fetching %s", response.status_code, url)
        return None, ParseResult.failure(
            [f"HTTP error: {response.status_code} {response.reason or ''}".rstrip()])
    except (requests.exceptions.RequestException, ValueError) as e:
        _LOGGER.warning("Failed to fetch %s: %s", url, e)
        return None, ParseResult.failure([f"Failed to fetch URL: {e}"])

    return html, None


def parse_from_url(url: str, options: ParseOptions | None = None) -> ParseResult:
    """Fetch a page and parse its schema.org recipe.

    Args:
        url: The http(s) URL of the recipe page
        options: Fetch options; `timeout` is in seconds (default 10), not
            milliseconds

    Returns:
        The parse result; fetch failures are reported without parsing
    """
    options = options or ParseOptions()
    html, failure = _fetch(url, options)
    if failure is not None:
        return failure
    return parse_from_html(html, url.strip())


def parse_from_url_with_ai(url: str, options: ParseOptions | None = None) -> ParseResult:
    """Fetch a page and parse it, falling back to AI when enabled in the options.

    The options' `timeout` is in seconds, as for parse_from_url.
    """
    options = options or ParseOptions()
    html, failure = _fetch(url, options)
    if failure is not None:
        return failure
    return parse_from_html_with_ai(html, url.strip(), options)
