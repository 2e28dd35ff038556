"""
Base Recipe Parser.

This module defines the interface an AI recipe parser must implement to be
used as a fallback by the extraction service.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.recipe import ParsedRecipe


class BaseRecipeParser(ABC):
    """Abstract base class for AI-backed recipe parsers.

    The extraction service only calls `is_enabled` and `parse_recipe`; how a
    parser talks to its provider is its own concern.
    """

    @abstractmethod
    def is_enabled(self) -> bool:
        """Return True if the parser is configured and may be called."""

    @abstractmethod
    def parse_recipe(self, html: str) -> ParsedRecipe | None:
        """Parse recipe information from a page.

        Args:
            html: The raw HTML (or text) of the page

        Returns:
            A ParsedRecipe, or None if nothing could be extracted

        Raises:
            RuntimeError: If called while the parser is not enabled
        """
