"""FastAPI application for the UGC Studio web interface."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.generation_service import generation_service
from backend.schemas import (
    ErrorResponse,
    FieldError,
    ImageGenerationRequest,
    ImageGenerationResponse,
    ScenarioRequest,
    ScenarioResponse,
    ThreadResponse,
)
from core.agents import ImageRendererAgent, ScenarioPlannerAgent
from core.config import get_cors_origins
from core.errors import ConfigurationError, StudioError

logger = logging.getLogger(__name__)

THREAD_FAILURE_MESSAGE = "Unable to create a new assistant thread. Please try again."
SCENARIO_FAILURE_MESSAGE = (
    "Unable to generate scenarios at this time. Please refine your brief and try again."
)
IMAGE_FAILURE_MESSAGE = (
    "Image generation failed. Please try again with a different concept."
)

app = FastAPI(
    title="UGC Studio API",
    description="Turn one product photo into AI-planned, AI-rendered marketing images",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Helper Functions
# ============================================================================


def error_response(
    message: str, status_code: int = 500, details: list[FieldError] | None = None
) -> JSONResponse:
    """Build a user-safe error body."""
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def get_scenario_planner() -> ScenarioPlannerAgent:
    """Build the planner; raises ConfigurationError before any provider call."""
    return ScenarioPlannerAgent()


def get_image_renderer() -> ImageRendererAgent:
    """Build the renderer; raises ConfigurationError before any provider call."""
    return ImageRendererAgent()


# ============================================================================
# Error Handlers
# ============================================================================


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return error_response(str(exc))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        FieldError(
            field=".".join(str(part) for part in err["loc"] if part != "body") or "body",
            message=err["msg"],
        )
        for err in exc.errors()
    ]
    logger.info("Rejected payload on %s: %d violations", request.url.path, len(details))
    return error_response("Invalid request payload", status_code=400, details=details)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return error_response("Unexpected server error. Please try again.")


# ============================================================================
# Thread Endpoints
# ============================================================================


@app.post("/api/threads", response_model=ThreadResponse)
async def create_thread(
    planner: Annotated[ScenarioPlannerAgent, Depends(get_scenario_planner)],
):
    """Open a new assistant thread."""
    try:
        thread_id = await generation_service.open_thread(planner)
    except StudioError:
        logger.exception("Failed to create OpenAI assistant thread")
        return error_response(THREAD_FAILURE_MESSAGE)

    return ThreadResponse(thread_id=thread_id)


# ============================================================================
# Generation Endpoints
# ============================================================================


@app.post(
    "/api/scenarios",
    response_model=ScenarioResponse,
    response_model_exclude_none=True,
)
async def generate_scenarios(
    planner: Annotated[ScenarioPlannerAgent, Depends(get_scenario_planner)],
    request: ScenarioRequest,
):
    """Plan scenarios for a product on an existing thread."""
    try:
        scenarios = await generation_service.generate_scenarios(planner, request)
    except StudioError:
        logger.exception("Failed to generate scenarios")
        return error_response(SCENARIO_FAILURE_MESSAGE)

    return ScenarioResponse(thread_id=request.thread_id, scenarios=scenarios)


@app.post(
    "/api/images",
    response_model=ImageGenerationResponse,
    response_model_exclude_none=True,
)
async def generate_images(
    renderer: Annotated[ImageRendererAgent, Depends(get_image_renderer)],
    request: ImageGenerationRequest,
):
    """Render one image per selected scenario."""
    try:
        images = await generation_service.generate_images(renderer, request)
    except StudioError:
        logger.exception("Gemini generation failed")
        return error_response(IMAGE_FAILURE_MESSAGE)

    return ImageGenerationResponse(images=images)


# ============================================================================
# Health Check
# ============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "UGC Studio API",
        "docs": "/docs",
    }
