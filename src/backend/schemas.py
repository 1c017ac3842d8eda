"""Pydantic schemas for the web API."""

from __future__ import annotations

from pydantic import Field

from core.schemas import (
    CamelModel,
    GeneratedImage,
    GenerationSettings,
    ProductImage,
    Scenario,
    ScenarioBrief,
)


class ThreadResponse(CamelModel):
    """Response for thread creation."""

    thread_id: str


class ScenarioRequest(ScenarioBrief):
    """Request for scenario generation on an existing thread."""

    thread_id: str


class ScenarioResponse(CamelModel):
    """Scenarios planned by the assistant."""

    thread_id: str
    scenarios: list[Scenario]


class ImageGenerationRequest(CamelModel):
    """Request to render one image per selected scenario."""

    thread_id: str | None = None
    product_name: str | None = None
    product_image: ProductImage
    scenarios: list[Scenario] = Field(min_length=1)
    settings: GenerationSettings


class ImageGenerationResponse(CamelModel):
    """Rendered images in request order."""

    images: list[GeneratedImage]


class FieldError(CamelModel):
    """A single violated field in a request payload."""

    field: str
    message: str


class ErrorResponse(CamelModel):
    """Error body returned for every failed request."""

    error: str
    details: list[FieldError] | None = None
