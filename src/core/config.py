"""Configuration settings for UGC Studio."""

import os
from pathlib import Path
from typing import Any

import yaml

# =============================================================================
# Path Configuration (always relative to project structure)
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_FILE = PROJECT_ROOT / "configs" / "config.yaml"

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


# =============================================================================
# Config Loading
# =============================================================================


def load_config() -> dict[str, Any]:
    """Load configuration from config.yaml."""
    if CONFIG_FILE.exists():
        with open(CONFIG_FILE) as f:
            return yaml.safe_load(f) or {}
    return {}


def get_config(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'api.port')."""
    config = load_config()
    keys = key.split(".")
    value = config
    for k in keys:
        if isinstance(value, dict):
            value = value.get(k)
        else:
            return default
    return value if value is not None else default


# =============================================================================
# Credentials (environment only)
# =============================================================================


def _get_env(key: str) -> str | None:
    value = os.getenv(key, "").strip()
    return value or None


def get_openai_api_key() -> str | None:
    return _get_env("OPENAI_API_KEY")


def get_openai_assistant_id() -> str | None:
    return _get_env("OPENAI_ASSISTANT_ID")


def get_gemini_api_key() -> str | None:
    return _get_env("GOOGLE_GEMINI_API_KEY")


def get_supabase_url() -> str | None:
    return _get_env("SUPABASE_URL")


def get_supabase_service_role_key() -> str | None:
    return _get_env("SUPABASE_SERVICE_ROLE_KEY")


# =============================================================================
# Convenience accessors
# =============================================================================


def get_api_host() -> str:
    return get_config("api.host", "0.0.0.0")


def get_api_port() -> int:
    return get_config("api.port", 8000)


def get_api_base_url() -> str:
    return f"http://localhost:{get_api_port()}"


def get_cors_origins() -> list[str]:
    return get_config("api.cors_origins", ["*"])


def get_log_level() -> str:
    return str(get_config("logging.level", "INFO")).upper()


def get_gemini_image_model() -> str:
    """Image model from GOOGLE_GEMINI_IMAGE_MODEL, then config, then default."""
    return _get_env("GOOGLE_GEMINI_IMAGE_MODEL") or get_config(
        "gemini.image_model", DEFAULT_IMAGE_MODEL
    )


def get_gemini_api_base() -> str:
    return get_config("gemini.api_base", GEMINI_API_BASE)


def get_run_poll_interval() -> float:
    return float(get_config("assistant.poll_interval_seconds", 1.0))


def get_run_max_polls() -> int:
    return int(get_config("assistant.max_polls", 180))


def get_image_request_timeout() -> int:
    return get_config("timeouts.image_request", 120)


def get_frontend_request_timeout() -> int:
    return get_config("timeouts.frontend_request", 300)


def get_metadata_table() -> str:
    return get_config("storage.table", "ugc_generations")
