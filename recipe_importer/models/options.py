"""Options accepted by the extraction service."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..const import DEFAULT_TIMEOUT
from ..parsers.base_parser import BaseRecipeParser


class ParseOptions(BaseModel):
    """Per-call options for URL fetching and AI fallback.

    Attributes:
        timeout: Fetch timeout in seconds (not milliseconds)
        user_agent: User-Agent header to send instead of the browser profile's
        use_ai: Whether to fall back to the AI parser when no schema.org data exists
        ai_service: The AI parser to fall back to
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Fetch timeout in seconds"
    )
    user_agent: str | None = Field(
        default=None,
        description="User-Agent header, e.g. 'RecipeImporter/1.0'"
    )
    use_ai: bool = Field(
        default=False,
        description="Fall back to AI parsing when no schema.org Recipe is found"
    )
    ai_service: BaseRecipeParser | None = None
