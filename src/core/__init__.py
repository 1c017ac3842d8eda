"""Core module for UGC Studio business logic."""

from core.config import (
    PROJECT_ROOT,
    get_api_base_url,
    get_api_host,
    get_api_port,
    get_gemini_image_model,
    get_log_level,
)

__all__ = [
    "PROJECT_ROOT",
    "get_api_base_url",
    "get_api_host",
    "get_api_port",
    "get_gemini_image_model",
    "get_log_level",
]
