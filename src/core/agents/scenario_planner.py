"""Scenario Planner agent backed by the OpenAI Assistants API."""

import json
import logging
import time
from typing import Any

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from core.config import (
    get_openai_api_key,
    get_openai_assistant_id,
    get_run_max_polls,
    get_run_poll_interval,
)
from core.errors import (
    ConfigurationError,
    ResponseShapeError,
    RunCancelledError,
    RunExpiredError,
    RunFailedError,
    RunIncompleteError,
    RunRequiresActionError,
    RunStatusError,
    RunTimeoutError,
    UpstreamError,
)
from core.model_provider import get_openai_client
from core.prompts.prompt_templates import SCENARIO_BRIEF, SCENARIO_RUN_INSTRUCTIONS
from core.schemas import TARGET_SCENARIO_COUNT, Scenario, ScenarioBatch, ScenarioBrief

logger = logging.getLogger(__name__)

TERMINAL_RUN_STATUSES = {
    "completed",
    "failed",
    "cancelled",
    "expired",
    "incomplete",
    "requires_action",
}

RUN_STATUS_ERRORS: dict[str, type[RunStatusError]] = {
    "failed": RunFailedError,
    "cancelled": RunCancelledError,
    "expired": RunExpiredError,
    "incomplete": RunIncompleteError,
    "requires_action": RunRequiresActionError,
}


def sanitize_response(raw: str) -> str:
    """Strip markdown code fences the assistant may wrap around JSON."""
    return raw.replace("```json", "").replace("```", "").strip()


def build_scenario_brief(brief: ScenarioBrief) -> str:
    """Render the creative brief posted to the assistant thread."""
    return SCENARIO_BRIEF.format(
        product_name=brief.product_name or "Unknown",
        niche=brief.niche or "Not provided",
        audience=brief.audience,
        product_details=brief.product_details,
        tone=brief.tone or "Not specified",
        visual_style=brief.visual_style or "Not specified",
        shots=brief.shots,
        focus_on_product=brief.focus_on_product,
        additional_notes=(
            ", ".join(brief.additional_notes) if brief.additional_notes else "None"
        ),
    )


def parse_scenarios(raw: str) -> list[Scenario]:
    """Parse assistant text into validated scenarios.

    Raises:
        ResponseShapeError: If the text is not JSON or fails the schema
    """
    clean = sanitize_response(raw)
    try:
        batch = ScenarioBatch.model_validate(json.loads(clean))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Assistant returned an unusable scenario payload: %r", raw)
        raise ResponseShapeError(
            "Assistant response did not match the scenario schema"
        ) from e

    if len(batch.scenarios) != TARGET_SCENARIO_COUNT:
        logger.warning(
            "Assistant returned %d scenarios, expected %d",
            len(batch.scenarios),
            TARGET_SCENARIO_COUNT,
        )
    return batch.scenarios


class ScenarioPlannerAgent:
    """Agent that opens assistant threads and plans photo scenarios on them."""

    def __init__(
        self,
        api_key: str | None = None,
        assistant_id: str | None = None,
        client: OpenAI | None = None,
        poll_interval: float | None = None,
        max_polls: int | None = None,
    ):
        """Initialize the Scenario Planner agent.

        Args:
            api_key: OpenAI API key (uses OPENAI_API_KEY env var if not provided)
            assistant_id: Assistant to run (uses OPENAI_ASSISTANT_ID if not provided)
            client: Pre-built OpenAI client, mainly for tests
            poll_interval: Seconds between run status checks
            max_polls: Status checks before giving up on a run
        """
        self.api_key = api_key or get_openai_api_key()
        self.assistant_id = assistant_id or get_openai_assistant_id()
        self.poll_interval = (
            poll_interval if poll_interval is not None else get_run_poll_interval()
        )
        self.max_polls = max_polls if max_polls is not None else get_run_max_polls()
        self._client = client

        if not self.api_key or not self.assistant_id:
            raise ConfigurationError(
                "Missing OPENAI_API_KEY or OPENAI_ASSISTANT_ID. Update your "
                "environment variables to enable the assistant workflow."
            )

    @property
    def client(self) -> OpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            self._client = get_openai_client(self.api_key)
        return self._client

    def create_thread(self) -> str:
        """Open a new conversational thread and return its identifier."""
        try:
            thread = self.client.beta.threads.create()
        except OpenAIError as e:
            raise UpstreamError(f"Unable to create assistant thread: {e}") from e
        logger.info("Opened assistant thread %s", thread.id)
        return thread.id

    def generate_scenarios(self, thread_id: str, brief: ScenarioBrief) -> list[Scenario]:
        """Ask the assistant for scenarios on an existing thread.

        Args:
            thread_id: Thread returned by create_thread
            brief: The validated creative brief

        Returns:
            Validated scenarios (at least one)
        """
        try:
            self.client.beta.threads.messages.create(
                thread_id,
                role="user",
                content=build_scenario_brief(brief),
            )
            self._run_and_wait(thread_id)
            raw = self._latest_assistant_text(thread_id)
        except OpenAIError as e:
            raise UpstreamError(f"Assistant request failed: {e}") from e

        return parse_scenarios(raw)

    def _run_and_wait(self, thread_id: str) -> Any:
        """Start a run and poll until it reaches a terminal status."""
        runs = self.client.beta.threads.runs
        run = runs.create(
            thread_id=thread_id,
            assistant_id=self.assistant_id,
            instructions=SCENARIO_RUN_INSTRUCTIONS,
        )

        polls = 0
        while run.status not in TERMINAL_RUN_STATUSES:
            if polls >= self.max_polls:
                raise RunTimeoutError(
                    run.status,
                    f"Assistant run {run.id} still {run.status} after {polls} polls",
                )
            time.sleep(self.poll_interval)
            run = runs.retrieve(run.id, thread_id=thread_id)
            polls += 1

        if run.status != "completed":
            error_cls = RUN_STATUS_ERRORS.get(run.status, RunStatusError)
            raise error_cls(run.status)

        logger.debug("Run %s completed after %d polls", run.id, polls)
        return run

    def _latest_assistant_text(self, thread_id: str) -> str:
        """Return the text of the newest assistant message on the thread."""
        messages = self.client.beta.threads.messages.list(
            thread_id, order="desc", limit=10
        )

        assistant_message = next(
            (m for m in messages.data if m.role == "assistant"), None
        )
        content = assistant_message.content if assistant_message else []
        text_part = next((p for p in content or [] if p.type == "text"), None)

        if text_part is None:
            raise ResponseShapeError("Assistant response did not contain text content")

        return text_part.text.value or ""
