"""Extractors package."""
from .scraper import fetch_html, html_to_text, validate_url
from .structured_data import extract_schema_org, find_json_ld_node, is_recipe_node

__all__ = [
    "extract_schema_org",
    "fetch_html",
    "find_json_ld_node",
    "html_to_text",
    "is_recipe_node",
    "validate_url",
]
