"""Pydantic models shared by the scenario planner, image renderer and API."""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

TARGET_SCENARIO_COUNT = 6


class CamelModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Scenario Models
# ============================================================================


class Scenario(CamelModel):
    """A single AI-authored concept for one marketing photo."""

    id: str = Field(description="Identifier, unique within a batch")
    title: str = Field(description="Short scenario title")
    summary: str = Field(description="What happens in the shot")
    setting: str | None = Field(default=None, description="Environment / location")
    shot_list: list[str] | None = Field(
        default=None, description="Ordered key shots for the scenario"
    )
    hook: str | None = Field(default=None, description="Scroll-stopping hook line")


class ScenarioBatch(CamelModel):
    """A batch of scenarios returned by the assistant."""

    scenarios: list[Scenario] = Field(
        min_length=1, description="At least one scenario is required"
    )

    @model_validator(mode="after")
    def check_unique_ids(self) -> "ScenarioBatch":
        seen: set[str] = set()
        for scenario in self.scenarios:
            if scenario.id in seen:
                raise ValueError(f"Duplicate scenario id: {scenario.id}")
            seen.add(scenario.id)
        return self


class ScenarioBrief(CamelModel):
    """Creative brief the assistant turns into scenarios."""

    audience: str = Field(min_length=1, description="Who the photos are for")
    product_details: str = Field(min_length=1, description="What the product is")
    product_name: str | None = None
    niche: str | None = None
    tone: str | None = None
    visual_style: str | None = None
    shots: int = Field(default=6, ge=1, le=12)
    focus_on_product: int = Field(default=3, ge=1, le=5)
    additional_notes: list[str] | None = None


# ============================================================================
# Generation Settings
# ============================================================================


class GenerationSettings(CamelModel):
    """Rendering preferences applied to every scenario in one request."""

    focus_on_product: int = Field(ge=1, le=5, description="Product focus level")
    shots: int = Field(ge=1, le=12, description="Number of shots requested")
    visual_style: str
    tone: str
    orientation: str
    quality: str
    add_motion: bool | None = None
    retouch_product: bool | None = None
    include_captions: bool | None = None


# ============================================================================
# Image Models
# ============================================================================


class ProductImage(CamelModel):
    """Inline-encoded product photo supplied by the client."""

    data: str = Field(min_length=10, description="Image data is required")
    mime_type: str = Field(default="image/png")


class GeneratedImage(CamelModel):
    """One rendered image, tied to the scenario it was made for."""

    mime_type: str
    data: str
    scenario: Scenario


class GenerationRecord(BaseModel):
    """Metadata row mirrored to the datastore (no image bytes)."""

    thread_id: str | None = None
    scenario_id: str
    scenario_title: str
    scenario_summary: str
    settings: dict
    created_at: str
