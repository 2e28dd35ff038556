#!/usr/bin/env python3
"""
Recipe Converter - Import recipes from websites

Fetches a recipe page, extracts the schema.org recipe (optionally falling
back to AI extraction), normalizes the ingredient lines, and writes the
result to a JSON file.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from recipe_importer.config import ImporterConfig, load_config
from recipe_importer.models import ParseOptions, ParseResult
from recipe_importer.parsers.ai_parser import AIRecipeParser
from recipe_importer.parsers.ingredient_parser import normalize_ingredients
from recipe_importer.services.ingredient_formatter import format_ingredient
from recipe_importer.services.recipe_service import parse_from_url, parse_from_url_with_ai

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def safe_filename(title: str) -> str:
    """Build a file name from a recipe title."""
    safe_title = "".join(c for c in title if c.isalnum() or c in (' ', '-', '_')).rstrip()
    safe_title = safe_title.replace(' ', '_').lower()
    return safe_title or "recipe"


def build_output(result: ParseResult, convert_units: bool = False) -> dict:
    """Serialize a parse result together with its normalized ingredients."""
    output = {"result": result.model_dump(mode="json")}
    if result.recipe is not None:
        ingredients = normalize_ingredients(result.recipe.ingredients)
        output["normalized_ingredients"] = [
            {
                **ingredient.model_dump(mode="json"),
                "display": format_ingredient(ingredient, convert_units=convert_units),
            }
            for ingredient in ingredients
        ]
    return output


def import_recipe(url: str, output_dir: Path, config: ImporterConfig) -> bool:
    """Import a recipe from a URL and save the results.

    Args:
        url: URL of the recipe website
        output_dir: Directory to save the output file
        config: Importer configuration

    Returns:
        True if a recipe was extracted, False otherwise
    """
    if config.use_ai:
        ai_parser = AIRecipeParser(api_key=config.api_key, model=config.model)
        if not ai_parser.is_enabled():
            logger.warning("AI fallback requested but no API key is configured")
        options = ParseOptions(timeout=config.timeout, user_agent=config.user_agent,
                               use_ai=True, ai_service=ai_parser)
        result = parse_from_url_with_ai(url, options)
    else:
        options = ParseOptions(timeout=config.timeout, user_agent=config.user_agent)
        result = parse_from_url(url, options)

    if not result.success:
        for error in result.errors or []:
            logger.error("Import failed: %s", error)
        return False

    recipe = result.recipe
    output_dir.mkdir(parents=True, exist_ok=True)
    json_file = output_dir / f"{safe_filename(recipe.title)}.json"
    logger.info("Saving structured recipe to: %s", json_file)

    with open(json_file, 'w', encoding='utf-8') as f:
        json.dump(build_output(result, config.convert_units), f, indent=2, ensure_ascii=False)

    print(f"\n✅ Recipe successfully imported ({result.source.value}, confidence {result.confidence:.0%})")
    print(f"📝 Title: {recipe.title}")
    print(f"🥘 Ingredients: {len(recipe.ingredients)}")
    print(f"👣 Steps: {len(recipe.instructions)}")
    print(f"📄 Output: {json_file}")
    return True


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the recipe converter."""
    parser = argparse.ArgumentParser(
        description="Import recipes from websites into structured JSON format"
    )

    try:
        config = load_config()
    except ValidationError as e:
        parser.error(f"invalid configuration in environment: {e}")

    parser.add_argument(
        "url",
        type=str,
        help="URL of the recipe website"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory to save output files (default: ./output)"
    )
    parser.add_argument(
        "--api-key",
        help="API key for the language model (can also be set via LANGEXTRACT_API_KEY env var)"
    )
    parser.add_argument(
        "--model",
        default=config.model,
        help=f"Model to use for AI extraction (default: {config.model})"
    )
    parser.add_argument(
        "--use-ai",
        action="store_true",
        default=config.use_ai,
        help="Fall back to AI extraction when the page has no schema.org recipe"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=config.timeout,
        help=f"Fetch timeout in seconds (default: {config.timeout:g})"
    )
    parser.add_argument(
        "--metric",
        action="store_true",
        default=config.convert_units,
        help="Convert US units to metric in the ingredient display lines"
    )

    args = parser.parse_args(argv)
    if args.timeout <= 0:
        parser.error("--timeout must be positive")

    config = config.model_copy(update={
        "api_key": args.api_key or config.api_key,
        "model": args.model,
        "use_ai": args.use_ai,
        "timeout": args.timeout,
        "convert_units": args.metric,
    })

    try:
        success = import_recipe(args.url, args.output_dir, config)
    except OSError as e:
        logger.error("Error writing recipe: %s", str(e), exc_info=True)
        success = False

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
