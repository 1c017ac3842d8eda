"""Generation service that runs the blocking agents off the event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from core.metadata_store import MetadataStore, metadata_store

if TYPE_CHECKING:
    from backend.schemas import ImageGenerationRequest, ScenarioRequest
    from core.agents import ImageRendererAgent, ScenarioPlannerAgent
    from core.schemas import GeneratedImage, Scenario

logger = logging.getLogger(__name__)


class GenerationService:
    """Wraps the agents for async web execution, one provider call at a time."""

    def __init__(self, store: MetadataStore = metadata_store):
        self.store = store

    async def open_thread(self, planner: ScenarioPlannerAgent) -> str:
        """Open a new assistant thread."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, planner.create_thread)

    async def generate_scenarios(
        self, planner: ScenarioPlannerAgent, request: ScenarioRequest
    ) -> list[Scenario]:
        """Plan scenarios on the request's thread."""
        loop = asyncio.get_event_loop()
        scenarios = await loop.run_in_executor(
            None,
            lambda: planner.generate_scenarios(request.thread_id, request),
        )
        logger.info(
            "Planned %d scenarios on thread %s", len(scenarios), request.thread_id
        )
        return scenarios

    async def generate_images(
        self, renderer: ImageRendererAgent, request: ImageGenerationRequest
    ) -> list[GeneratedImage]:
        """Render every scenario in order, then log metadata.

        Any failure aborts the whole batch before metadata is written.

        Args:
            renderer: Configured image renderer
            request: Validated image generation request

        Returns:
            One generated image per scenario, in input order
        """
        loop = asyncio.get_event_loop()
        images: list[GeneratedImage] = []

        for index, scenario in enumerate(request.scenarios, start=1):
            logger.debug(
                "Rendering scenario %d/%d: %s",
                index,
                len(request.scenarios),
                scenario.title,
            )
            image = await loop.run_in_executor(
                None,
                lambda s=scenario: renderer.render(
                    scenario=s,
                    product_image=request.product_image,
                    settings=request.settings,
                    product_name=request.product_name,
                ),
            )
            images.append(image)

        await loop.run_in_executor(
            None,
            lambda: self.store.record_generations(
                images, request.settings, thread_id=request.thread_id
            ),
        )
        return images


# Global generation service instance
generation_service = GenerationService()
