"""Provider client configuration for the assistant and image models."""

from openai import OpenAI

from core.config import (
    get_gemini_api_base,
    get_gemini_image_model,
    get_openai_api_key,
)
from core.errors import ConfigurationError


def get_openai_client(api_key: str | None = None) -> OpenAI:
    """Get a configured OpenAI client for the Assistants API.

    Args:
        api_key: Optional OpenAI API key. If not provided, checks env var.

    Returns:
        OpenAI client instance

    Raises:
        ConfigurationError: If no API key is available
    """
    key = api_key or get_openai_api_key()
    if not key:
        raise ConfigurationError("OPENAI_API_KEY is not configured")
    return OpenAI(api_key=key)


def get_gemini_endpoint(model: str | None = None) -> str:
    """Build the generateContent URL for an image model."""
    model = model or get_gemini_image_model()
    return f"{get_gemini_api_base()}/models/{model}:generateContent"
