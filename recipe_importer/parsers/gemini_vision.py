"""Gemini-backed vision service for the visual recipe parser."""
from __future__ import annotations

import logging

import google.generativeai as genai

from ..const import DEFAULT_VISION_MODEL, ERROR_AI_DISABLED
from .visual_parser import VisionService

_LOGGER = logging.getLogger(__name__)


class GeminiVisionService(VisionService):
    """Sends recipe images to a Gemini model."""

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_VISION_MODEL) -> None:
        self.api_key = api_key.strip() if api_key and api_key.strip() else None
        self.model = model
        self._model = None

    def is_enabled(self) -> bool:
        return self.api_key is not None

    def _generative_model(self) -> genai.GenerativeModel:
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model)
            _LOGGER.debug("Initialized Gemini vision model %s", self.model)
        return self._model

    def analyze_image(self, prompt: str, image: bytes, mime_type: str) -> str:
        """Ask the model about an image.

        Raises:
            RuntimeError: If the service has no API key
        """
        if not self.is_enabled():
            raise RuntimeError(ERROR_AI_DISABLED)

        response = self._generative_model().generate_content(
            [prompt, {"mime_type": mime_type, "data": image}])
        return response.text
