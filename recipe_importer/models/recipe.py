"""
Recipe data models for the Recipe Importer.

This module defines the Pydantic models used to carry recipe data through the
extraction pipeline: the loosely-typed schema.org record pulled out of a page,
the canonical ParsedRecipe handed to callers, and the ParseResult envelope.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..const import SOURCE_AI, SOURCE_MANUAL, SOURCE_SCHEMA_ORG, UNTITLED_RECIPE

# Accepted shapes for the duck-typed schema.org fields
RecipeYield = Union[int, float, str, list[Union[int, float, str]]]
ImageValue = Union[str, dict[str, Any], list[Union[str, dict[str, Any]]]]
RecipeInstructions = Union[str, list[Union[str, dict[str, Any]]]]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ParseSource(str, Enum):
    """Where a parsed recipe came from."""

    SCHEMA_ORG = SOURCE_SCHEMA_ORG
    AI = SOURCE_AI
    MANUAL = SOURCE_MANUAL


class Duration(BaseModel):
    """A cooking duration in whole minutes."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(ge=0, description="Total duration in minutes")

    @classmethod
    def from_hours_minutes(cls, hours: int, minutes: int) -> Duration:
        return cls(minutes=hours * 60 + minutes)

    def format(self) -> str:
        """Format for display, e.g. '1 hr 30 min'."""
        hours, mins = divmod(self.minutes, 60)
        if hours == 0:
            return f"{mins} min"
        if mins == 0:
            return f"{hours} hr"
        return f"{hours} hr {mins} min"

    def to_iso8601(self) -> str:
        hours, mins = divmod(self.minutes, 60)
        if hours == 0:
            return f"PT{mins}M"
        if mins == 0:
            return f"PT{hours}H"
        return f"PT{hours}H{mins}M"


class SchemaOrgRecipe(BaseModel):
    """A schema.org Recipe record as found in JSON-LD or Microdata.

    Every field is optional. Values in shapes the pipeline does not understand
    are dropped to None during validation, so building this model from
    arbitrary page data never fails.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type_: Any = Field(default=None, alias="@type")
    name: str | None = None
    description: str | None = None
    recipe_ingredient: list[str] = Field(
        default_factory=list, alias="recipeIngredient")
    recipe_instructions: RecipeInstructions | None = Field(
        default=None, alias="recipeInstructions")
    prep_time: str | None = Field(default=None, alias="prepTime")
    cook_time: str | None = Field(default=None, alias="cookTime")
    recipe_yield: RecipeYield | None = Field(default=None, alias="recipeYield")
    image: ImageValue | None = None

    @field_validator("name", "description", "prep_time", "cook_time", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        if isinstance(value, list):
            value = next((item for item in value if isinstance(item, str)), None)
        if isinstance(value, str):
            return value.strip() or None
        return None

    @field_validator("recipe_ingredient", mode="before")
    @classmethod
    def _coerce_ingredients(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            return []
        return [str(item) for item in value if isinstance(item, str) or _is_number(item)]

    @field_validator("recipe_instructions", mode="before")
    @classmethod
    def _coerce_instructions(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value
        if isinstance(value, dict):
            return [value]
        if isinstance(value, list):
            return [item for item in value if isinstance(item, (str, dict))]
        return None

    @field_validator("recipe_yield", mode="before")
    @classmethod
    def _coerce_yield(cls, value: Any) -> Any:
        if isinstance(value, str) or _is_number(value):
            return value
        if isinstance(value, list):
            return [item for item in value if isinstance(item, str) or _is_number(item)]
        return None

    @field_validator("image", mode="before")
    @classmethod
    def _coerce_image(cls, value: Any) -> Any:
        if isinstance(value, (str, dict)):
            return value
        if isinstance(value, list):
            return [item for item in value if isinstance(item, (str, dict))]
        return None


class ParsedRecipe(BaseModel):
    """The canonical recipe produced by every extraction path.

    Attributes:
        title: The recipe title, never empty
        description: Optional short description
        ingredients: Raw ingredient lines, trimmed, in page order
        instructions: Instruction steps, trimmed, in page order
        prep_time: Optional preparation time
        cook_time: Optional cooking time
        servings: Optional number of servings
        image_url: Optional image URL
        source_url: Optional URL the recipe was imported from
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(
        default=UNTITLED_RECIPE,
        description="The title of the recipe"
    )
    description: str | None = Field(
        default=None,
        description="A short description of the dish"
    )
    ingredients: list[str] = Field(
        default_factory=list,
        description="Raw, unnormalized ingredient lines, e.g. '2 cups flour'"
    )
    instructions: list[str] = Field(
        default_factory=list,
        description="Step-by-step instructions"
    )
    prep_time: Duration | None = None
    cook_time: Duration | None = None
    servings: int | float | None = Field(
        default=None,
        description="Number of servings the recipe yields"
    )
    image_url: str | None = None
    source_url: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return UNTITLED_RECIPE

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _clean_lines(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]

    @property
    def has_default_title(self) -> bool:
        return self.title == UNTITLED_RECIPE


class ParseResult(BaseModel):
    """Outcome of one extraction attempt.

    `success` is True exactly when `recipe` is present. `confidence` is a
    completeness heuristic in [0, 1] and is 0 for failed attempts.
    """

    success: bool
    recipe: ParsedRecipe | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    source: ParseSource = ParseSource.SCHEMA_ORG
    errors: list[str] | None = None

    @model_validator(mode="after")
    def _check_recipe_presence(self) -> ParseResult:
        if self.success != (self.recipe is not None):
            raise ValueError("success must be True exactly when a recipe is present")
        return self

    @classmethod
    def failure(cls, errors: list[str], source: ParseSource = ParseSource.SCHEMA_ORG) -> ParseResult:
        return cls(success=False, confidence=0.0, source=source, errors=errors)
