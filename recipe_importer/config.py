"""Configuration for the Recipe Importer, read from the environment."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .const import (
    AVAILABLE_MODELS,
    CONF_API_KEY,
    CONF_CONVERT_UNITS,
    CONF_MODEL,
    CONF_TIMEOUT,
    CONF_USE_AI,
    CONF_USER_AGENT,
    CONF_VISION_MODEL,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT,
    DEFAULT_VISION_MODEL,
)

_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


class ImporterConfig(BaseModel):
    """Settings shared by the CLI and library callers."""

    api_key: str | None = Field(
        default=None,
        description="API key for the language model"
    )
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Model used for AI text extraction"
    )
    vision_model: str = Field(
        default=DEFAULT_VISION_MODEL,
        description="Model used for recipe photos"
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Fetch timeout in seconds"
    )
    user_agent: str | None = None
    use_ai: bool = False
    convert_units: bool = False

    @field_validator("api_key", "user_agent", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("model")
    @classmethod
    def _check_model(cls, value: str) -> str:
        if value not in AVAILABLE_MODELS:
            _LOGGER.warning("Model %s is not in the list of tested models", value)
        return value


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUE_VALUES


def load_config(dotenv_path: str | None = None) -> ImporterConfig:
    """Load configuration from the environment and an optional .env file.

    Args:
        dotenv_path: Path of the .env file; python-dotenv searches for one if omitted

    Returns:
        The configuration

    Raises:
        pydantic.ValidationError: If a value (e.g. the timeout) is invalid
    """
    load_dotenv(dotenv_path)

    values = {
        "api_key": os.getenv(CONF_API_KEY),
        "user_agent": os.getenv(CONF_USER_AGENT),
        "use_ai": _env_flag(CONF_USE_AI),
        "convert_units": _env_flag(CONF_CONVERT_UNITS),
    }
    for key, env_name in (("model", CONF_MODEL), ("vision_model", CONF_VISION_MODEL),
                          ("timeout", CONF_TIMEOUT)):
        value = os.getenv(env_name)
        if value:
            values[key] = value

    return ImporterConfig(**values)
