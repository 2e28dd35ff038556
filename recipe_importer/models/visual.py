"""Data models for recipes extracted from photos."""
from __future__ import annotations

from pydantic import BaseModel, Field

from .recipe import ParsedRecipe


class FieldConfidence(BaseModel):
    """Per-field confidence scores in [0, 1]; 0 means the field was not read."""

    title: float = Field(default=0.0, ge=0.0, le=1.0)
    ingredients: float = Field(default=0.0, ge=0.0, le=1.0)
    instructions: float = Field(default=0.0, ge=0.0, le=1.0)
    prep_time: float = Field(default=0.0, ge=0.0, le=1.0)
    cook_time: float = Field(default=0.0, ge=0.0, le=1.0)
    servings: float = Field(default=0.0, ge=0.0, le=1.0)


class VisualParseResult(BaseModel):
    """Result of parsing a recipe photo.

    Attributes:
        success: Whether a recipe was extracted
        recipe: The extracted recipe, if any
        confidence: Weighted overall confidence
        field_confidence: Confidence per recipe field
        warnings: Messages for fields below the confidence threshold
        raw_text: Text the vision model read from the image
        errors: Error messages when unsuccessful
    """

    success: bool
    recipe: ParsedRecipe | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    field_confidence: FieldConfidence = Field(default_factory=FieldConfidence)
    warnings: list[str] | None = None
    raw_text: str | None = None
    errors: list[str] | None = None
