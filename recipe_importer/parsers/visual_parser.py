"""
Visual Recipe Parser.

This module extracts recipe data from photos of handwritten or printed
recipes by sending the image to an AI vision service, and scores the result
per field so low-confidence fields can be reviewed.
"""
from __future__ import annotations

import json
import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Any

from ..const import DEFAULT_CONFIDENCE_THRESHOLD, VISUAL_PARSER_SUPPORTED_FORMATS
from ..models.recipe import ParsedRecipe
from ..models.visual import FieldConfidence, VisualParseResult
from .schema_mapper import parse_duration

_LOGGER = logging.getLogger(__name__)

ERROR_VISION_DISABLED = "AI features are not enabled. Visual parsing requires AI to be configured."
ERROR_NO_RECIPE_IN_IMAGE = "Could not extract recipe data from image"

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

# Relative importance of each field in the overall confidence
FIELD_WEIGHTS = {
    "title": 0.15,
    "ingredients": 0.35,
    "instructions": 0.35,
    "prep_time": 0.05,
    "cook_time": 0.05,
    "servings": 0.05,
}

_FIELD_LABELS = {
    "title": "Title",
    "ingredients": "Ingredients",
    "instructions": "Instructions",
    "prep_time": "Prep time",
    "cook_time": "Cook time",
    "servings": "Servings",
}

# Reply keys holding each field's value and confidence
_REPLY_KEYS = {
    "title": ("title", "titleConfidence"),
    "ingredients": ("ingredients", "ingredientsConfidence"),
    "instructions": ("instructions", "instructionsConfidence"),
    "prep_time": ("prepTime", "prepTimeConfidence"),
    "cook_time": ("cookTime", "cookTimeConfidence"),
    "servings": ("servings", "servingsConfidence"),
}

VISUAL_PARSE_PROMPT = """You are analyzing an image of a recipe. {type_hint} {language_hint}

Extract the recipe information from the image and return a JSON object with the following structure:
{{
  "title": "Recipe title",
  "titleConfidence": 0.0-1.0,
  "description": "Optional description",
  "ingredients": ["ingredient 1", "ingredient 2", ...],
  "ingredientsConfidence": 0.0-1.0,
  "instructions": ["step 1", "step 2", ...],
  "instructionsConfidence": 0.0-1.0,
  "prepTime": "ISO 8601 duration like PT15M (optional)",
  "prepTimeConfidence": 0.0-1.0,
  "cookTime": "ISO 8601 duration like PT30M (optional)",
  "cookTimeConfidence": 0.0-1.0,
  "servings": number (optional),
  "servingsConfidence": 0.0-1.0,
  "rawText": "The raw text extracted from the image"
}}

Confidence scores should reflect how certain you are about each field:
- 1.0: Very confident, text is clear and unambiguous
- 0.7-0.9: Reasonably confident, minor uncertainty
- 0.4-0.6: Moderate confidence, some text unclear or ambiguous
- 0.1-0.3: Low confidence, significant uncertainty
- 0.0: Could not extract this field

If you cannot read or extract a field, omit it or set its confidence to 0.

Only return the JSON object, no other text."""


class VisionService(ABC):
    """An AI provider able to answer a prompt about an image."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Return True if the service is configured."""

    @abstractmethod
    def analyze_image(self, prompt: str, image: bytes, mime_type: str) -> str:
        """Send an image with a prompt and return the model's text reply."""


def build_prompt(language: str | None = None, recipe_type: str | None = None) -> str:
    """Build the JSON-only extraction prompt."""
    language_hint = f"The text may be in {language}." if language else ""
    type_hint = (f"This is a {recipe_type} recipe." if recipe_type
                 else "This may be a handwritten, printed, or screenshot recipe.")
    return VISUAL_PARSE_PROMPT.format(type_hint=type_hint, language_hint=language_hint)


def parse_reply(reply: str) -> dict[str, Any]:
    """Extract the JSON object from a model reply.

    Raises:
        ValueError: If the reply holds no parseable JSON object
    """
    match = _JSON_OBJECT_RE.search(reply or "")
    if not match:
        raise ValueError("Failed to parse AI response: No JSON found in AI response")
    try:
        data = json.loads(match.group())
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse AI response: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Failed to parse AI response: expected a JSON object")
    return data


def _has_value(value: Any) -> bool:
    if isinstance(value, (list, str)):
        return bool(value)
    return value is not None and value is not False and value != 0


def _field_confidence(data: dict[str, Any]) -> FieldConfidence:
    """Read per-field confidences, defaulting to 0.5 for fields present without one."""
    scores = {}
    for field, (value_key, confidence_key) in _REPLY_KEYS.items():
        confidence = data.get(confidence_key)
        if (isinstance(confidence, (int, float)) and not isinstance(confidence, bool)
                and math.isfinite(confidence)):
            scores[field] = min(max(float(confidence), 0.0), 1.0)
        else:
            scores[field] = 0.5 if _has_value(data.get(value_key)) else 0.0
    return FieldConfidence(**scores)


def calculate_overall_confidence(field_confidence: FieldConfidence) -> float:
    """Weighted mean over the fields that were extracted at all."""
    total_weight = 0.0
    weighted_sum = 0.0
    for field, weight in FIELD_WEIGHTS.items():
        confidence = getattr(field_confidence, field)
        if confidence > 0:
            weighted_sum += confidence * weight
            total_weight += weight
    return weighted_sum / total_weight if total_weight > 0 else 0.0


def _as_lines(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def _as_servings(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) and value > 0 else None
    if isinstance(value, str):
        match = re.search(r"\d+", value)
        return int(match.group()) if match else None
    return None


def _build_recipe(data: dict[str, Any]) -> ParsedRecipe | None:
    title = data.get("title") if isinstance(data.get("title"), str) else None
    ingredients = _as_lines(data.get("ingredients"))
    instructions = _as_lines(data.get("instructions"))
    if not (title or ingredients or instructions):
        return None

    prep_time = data.get("prepTime")
    cook_time = data.get("cookTime")
    description = data.get("description")
    return ParsedRecipe(
        title=title,
        description=description if isinstance(description, str) else None,
        ingredients=ingredients,
        instructions=instructions,
        prep_time=parse_duration(prep_time) if isinstance(prep_time, str) else None,
        cook_time=parse_duration(cook_time) if isinstance(cook_time, str) else None,
        servings=_as_servings(data.get("servings")),
    )


class VisualParser:
    """Extracts recipes from images through a VisionService."""

    def __init__(self, vision_service: VisionService,
                 confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD) -> None:
        self.vision_service = vision_service
        self.confidence_threshold = confidence_threshold

    def is_available(self) -> bool:
        return self.vision_service.is_enabled()

    @staticmethod
    def supported_formats() -> list[str]:
        return list(VISUAL_PARSER_SUPPORTED_FORMATS)

    @staticmethod
    def is_supported_format(mime_type: str) -> bool:
        return mime_type in VISUAL_PARSER_SUPPORTED_FORMATS

    def set_confidence_threshold(self, threshold: float) -> None:
        """Set the threshold below which fields produce warnings.

        Raises:
            ValueError: If the threshold is outside [0, 1]
        """
        if threshold < 0 or threshold > 1:
            raise ValueError("Confidence threshold must be between 0 and 1")
        self.confidence_threshold = threshold

    def parse_from_image(
        self,
        image: bytes,
        mime_type: str,
        language: str | None = None,
        recipe_type: str | None = None,
    ) -> VisualParseResult:
        """Parse a recipe from an image.

        Never raises; failures are reported in the result's errors.

        Args:
            image: The raw image bytes
            mime_type: The image MIME type, e.g. 'image/jpeg'
            language: Optional language hint, e.g. 'German'
            recipe_type: Optional hint such as 'handwritten'

        Returns:
            The parse result with per-field confidence and warnings
        """
        if not self.is_available():
            return VisualParseResult(success=False, errors=[ERROR_VISION_DISABLED])

        if not self.is_supported_format(mime_type):
            return VisualParseResult(
                success=False, errors=[f"Unsupported image format: {mime_type}"])

        prompt = build_prompt(language, recipe_type)
        try:
            _LOGGER.debug("Sending %d byte %s image to vision service", len(image), mime_type)
            reply = self.vision_service.analyze_image(prompt, image, mime_type)
            data = parse_reply(reply)
            return self._build_result(data)
        except Exception as e:
            _LOGGER.warning("Visual parsing failed: %s", e)
            return VisualParseResult(success=False, errors=[str(e) or "Unknown error occurred during visual parsing"])

    def _build_result(self, data: dict[str, Any]) -> VisualParseResult:
        field_confidence = _field_confidence(data)
        confidence = calculate_overall_confidence(field_confidence)
        warnings = self._warnings(field_confidence)
        recipe = _build_recipe(data)
        success = recipe is not None and confidence > 0

        raw_text = data.get("rawText")
        if success:
            _LOGGER.info("Extracted recipe '%s' from image (confidence %.2f)",
                         recipe.title, confidence)
        else:
            _LOGGER.warning("No recipe data found in image")

        return VisualParseResult(
            success=success,
            recipe=recipe if success else None,
            confidence=confidence,
            field_confidence=field_confidence,
            warnings=warnings or None,
            raw_text=raw_text if isinstance(raw_text, str) else None,
            errors=None if success else [ERROR_NO_RECIPE_IN_IMAGE],
        )

    def _warnings(self, field_confidence: FieldConfidence) -> list[str]:
        warnings = []
        for field, label in _FIELD_LABELS.items():
            confidence = getattr(field_confidence, field)
            if 0 < confidence < self.confidence_threshold:
                warnings.append(f"{label} extraction has low confidence ({confidence * 100:.0f}%)")
        return warnings
