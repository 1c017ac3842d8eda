"""Image Renderer agent that calls the Gemini generateContent endpoint."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from core.config import (
    get_gemini_api_key,
    get_gemini_image_model,
    get_image_request_timeout,
)
from core.errors import ConfigurationError, ResponseShapeError, UpstreamError
from core.model_provider import get_gemini_endpoint
from core.prompts.prompt_templates import (
    CAPTIONS_NOTE,
    IMAGE_PROMPT,
    MOTION_NOTE,
    RETOUCH_NOTE,
    SHOT_LIST_LINE,
)
from core.schemas import (
    CamelModel,
    GeneratedImage,
    GenerationSettings,
    ProductImage,
    Scenario,
)

logger = logging.getLogger(__name__)

GENERATION_CONFIG = {
    "temperature": 0.85,
    "topP": 0.95,
    "topK": 32,
    "responseModalities": ["TEXT", "IMAGE"],
}


# ============================================================================
# Gemini response models
# ============================================================================


class InlineData(CamelModel):
    data: str | None = None
    mime_type: str | None = None


class GeminiPart(CamelModel):
    text: str | None = None
    inline_data: InlineData | None = None


class GeminiContent(CamelModel):
    parts: list[GeminiPart] = []


class GeminiCandidate(CamelModel):
    content: GeminiContent | None = None


class GeminiResponse(CamelModel):
    candidates: list[GeminiCandidate] = []


def extract_inline_image(payload: dict) -> InlineData:
    """Return the first inline image part of the first candidate.

    Raises:
        ResponseShapeError: If no complete data/mimeType pair is present
    """
    try:
        response = GeminiResponse.model_validate(payload)
    except ValidationError as e:
        raise ResponseShapeError("Gemini response was not a generateContent payload") from e

    candidate = response.candidates[0] if response.candidates else None
    parts = candidate.content.parts if candidate and candidate.content else []
    part = next((p for p in parts if p.inline_data is not None), None)

    if part is None or not part.inline_data.data or not part.inline_data.mime_type:
        raise ResponseShapeError("Gemini response did not include image data")

    return part.inline_data


# ============================================================================
# Prompt construction
# ============================================================================


def build_setting_notes(settings: GenerationSettings) -> list[str]:
    """Human-readable instruction lines derived from the generation settings."""
    notes = [
        f"Tone: {settings.tone}",
        f"Visual style: {settings.visual_style}",
        f"Orientation: {settings.orientation}",
        f"Quality: {settings.quality}",
        f"Focus level (1-5): {settings.focus_on_product}",
    ]
    if settings.add_motion:
        notes.append(MOTION_NOTE)
    if settings.retouch_product:
        notes.append(RETOUCH_NOTE)
    if settings.include_captions:
        notes.append(CAPTIONS_NOTE)
    return notes


def build_image_prompt(
    scenario: Scenario,
    product_name: str | None,
    settings: GenerationSettings,
) -> str:
    """Build the natural-language prompt for one scenario."""
    shot_list = (
        SHOT_LIST_LINE.format(shots=", ".join(scenario.shot_list))
        if scenario.shot_list
        else ""
    )
    return IMAGE_PROMPT.format(
        product_name=product_name or "the featured product",
        title=scenario.title,
        summary=scenario.summary,
        setting=scenario.setting or "",
        shot_list=shot_list,
        notes=" | ".join(build_setting_notes(settings)),
    )


# ============================================================================
# Agent
# ============================================================================


class ImageRendererAgent:
    """Agent that renders one marketing photo per scenario."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: int | None = None,
    ):
        self.api_key = api_key or get_gemini_api_key()
        self.model = model or get_gemini_image_model()
        self.timeout = timeout or get_image_request_timeout()

        if not self.api_key:
            raise ConfigurationError("Missing GOOGLE_GEMINI_API_KEY environment variable.")

    @property
    def endpoint(self) -> str:
        return get_gemini_endpoint(self.model)

    def build_payload(self, prompt: str, product_image: ProductImage) -> dict:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": prompt},
                        {
                            "inlineData": {
                                "mimeType": product_image.mime_type,
                                "data": product_image.data,
                            }
                        },
                    ],
                }
            ],
            "generationConfig": GENERATION_CONFIG,
        }

    def render(
        self,
        scenario: Scenario,
        product_image: ProductImage,
        settings: GenerationSettings,
        product_name: str | None = None,
    ) -> GeneratedImage:
        """Render a single scenario.

        Args:
            scenario: Scenario to depict
            product_image: The shared product photo
            settings: Generation settings applied to every scenario
            product_name: Optional product name for the prompt

        Returns:
            The generated image paired with its scenario

        Raises:
            UpstreamError: On transport failure or non-success status
            ResponseShapeError: If the response carries no inline image
        """
        prompt = build_image_prompt(scenario, product_name, settings)
        logger.info("Rendering scenario %s with %s", scenario.id, self.model)

        try:
            response = requests.post(
                self.endpoint,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.api_key,
                },
                json=self.build_payload(prompt, product_image),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Gemini image request failed: {e}") from e

        if not response.ok:
            raise UpstreamError(
                f"Gemini image generation failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseShapeError("Gemini response was not valid JSON") from e

        inline = extract_inline_image(payload)
        return GeneratedImage(
            mime_type=inline.mime_type,
            data=inline.data,
            scenario=scenario,
        )
