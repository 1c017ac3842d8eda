"""HTTP client and payload builders for the UGC Studio API."""

from __future__ import annotations

import base64
from typing import Any

import requests

from core.config import get_api_base_url, get_frontend_request_timeout

VISUAL_STYLES = ["Natural", "Night Light", "Golden hour", "Soft morning"]
TONE_OPTIONS = ["Playful", "Professional", "Minimal", "Cinematic"]
ORIENTATION_OPTIONS = ["Landscape", "Square (1:1)", "Portrait (2:3)"]
QUALITY_OPTIONS = ["Draft", "Standard", "Ultra"]

ADDITIONAL_TOGGLES = [
    ("addMotion", "Motion cues"),
    ("retouchProduct", "Retouch product"),
    ("includeCaptions", "Reserve caption space"),
]

DEFAULT_SETTINGS: dict[str, Any] = {
    "focusOnProduct": 3,
    "shots": 6,
    "visualStyle": VISUAL_STYLES[0],
    "tone": TONE_OPTIONS[0],
    "orientation": ORIENTATION_OPTIONS[1],
    "quality": QUALITY_OPTIONS[1],
    "addMotion": False,
    "retouchProduct": True,
    "includeCaptions": False,
}


class StudioClientError(Exception):
    """Raised when the API returns an error or cannot be reached."""

    pass


# ============================================================================
# Payload Builders
# ============================================================================


def enabled_toggle_labels(settings: dict[str, Any]) -> list[str]:
    """Labels of the enhancement toggles switched on, in display order."""
    return [label for key, label in ADDITIONAL_TOGGLES if settings.get(key)]


def encode_image(content: bytes) -> str:
    """Base64-encode raw image bytes for inline transport."""
    return base64.b64encode(content).decode("ascii")


def build_scenario_payload(
    thread_id: str,
    audience: str,
    product_details: str,
    product_name: str,
    niche: str,
    settings: dict[str, Any],
) -> dict[str, Any]:
    return {
        "threadId": thread_id,
        "audience": audience,
        "productDetails": product_details,
        "productName": product_name,
        "niche": niche,
        "tone": settings["tone"],
        "visualStyle": settings["visualStyle"],
        "shots": settings["shots"],
        "focusOnProduct": settings["focusOnProduct"],
        "additionalNotes": enabled_toggle_labels(settings),
    }


def build_image_payload(
    thread_id: str | None,
    product_name: str,
    scenarios: list[dict[str, Any]],
    selected_ids: set[str],
    settings: dict[str, Any],
    image_bytes: bytes,
    mime_type: str | None,
) -> dict[str, Any]:
    """Build the render request for the selected scenarios.

    Raises:
        StudioClientError: If no scenario is selected
    """
    chosen = [s for s in scenarios if s["id"] in selected_ids]
    if not chosen:
        raise StudioClientError("Select at least one scenario to render")

    return {
        "threadId": thread_id,
        "productName": product_name,
        "scenarios": chosen,
        "settings": settings,
        "productImage": {
            "data": encode_image(image_bytes),
            "mimeType": mime_type or "image/png",
        },
    }


# ============================================================================
# API Functions
# ============================================================================


def _post(path: str, payload: dict[str, Any] | None, fallback_error: str) -> dict:
    try:
        response = requests.post(
            f"{get_api_base_url()}{path}",
            json=payload,
            timeout=get_frontend_request_timeout(),
        )
    except requests.exceptions.RequestException as e:
        raise StudioClientError(f"Could not reach the studio API: {e}") from e

    try:
        data = response.json()
    except ValueError:
        data = None

    if response.status_code != 200:
        message = data.get("error") if isinstance(data, dict) else None
        raise StudioClientError(message or fallback_error)

    if not isinstance(data, dict):
        raise StudioClientError(fallback_error)
    return data


def create_thread() -> str:
    """Open an assistant thread and return its id."""
    data = _post("/api/threads", None, "Unable to start OpenAI assistant thread")
    thread_id = data.get("threadId")
    if not thread_id:
        raise StudioClientError("Unable to start OpenAI assistant thread")
    return thread_id


def request_scenarios(payload: dict[str, Any]) -> list[dict[str, Any]]:
    data = _post("/api/scenarios", payload, "Unable to generate scenarios")
    return data.get("scenarios", [])


def request_images(payload: dict[str, Any]) -> list[dict[str, Any]]:
    data = _post("/api/images", payload, "Image generation failed")
    return data.get("images", [])
