"""Best-effort metadata log of generated images in Supabase."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache

from supabase import Client, create_client
from supabase.client import ClientOptions

from core.config import get_metadata_table, get_supabase_service_role_key, get_supabase_url
from core.schemas import GeneratedImage, GenerationRecord, GenerationSettings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _create_supabase_client(url: str, key: str) -> Client:
    return create_client(
        url,
        key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


def get_supabase_client() -> Client | None:
    """Return the process-wide Supabase client, or None when not configured."""
    url = get_supabase_url()
    key = get_supabase_service_role_key()
    if not url or not key:
        return None
    return _create_supabase_client(url, key)


def build_records(
    images: list[GeneratedImage],
    settings: GenerationSettings,
    thread_id: str | None = None,
) -> list[GenerationRecord]:
    """One metadata row per generated image; image bytes are never stored."""
    created_at = datetime.now(timezone.utc).isoformat()
    settings_json = settings.model_dump(by_alias=True, exclude_none=True)
    return [
        GenerationRecord(
            thread_id=thread_id,
            scenario_id=image.scenario.id,
            scenario_title=image.scenario.title,
            scenario_summary=image.scenario.summary,
            settings=settings_json,
            created_at=created_at,
        )
        for image in images
    ]


class MetadataStore:
    """Writes generation metadata when a datastore is configured."""

    def __init__(self, table: str | None = None):
        self.table = table or get_metadata_table()

    def record_generations(
        self,
        images: list[GeneratedImage],
        settings: GenerationSettings,
        thread_id: str | None = None,
    ) -> bool:
        """Insert metadata rows. Failures are logged, never raised.

        Returns:
            True if rows were written, False if skipped or failed
        """
        if not get_supabase_url() or not get_supabase_service_role_key():
            return False

        rows = [r.model_dump() for r in build_records(images, settings, thread_id)]
        try:
            client = get_supabase_client()
            client.table(self.table).insert(rows).execute()
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to persist generation metadata in Supabase: %s", e)
            return False

        logger.info("Persisted %d generation records to %s", len(rows), self.table)
        return True


# Global metadata store instance
metadata_store = MetadataStore()
