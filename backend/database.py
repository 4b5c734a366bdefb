"""
Database module for Supabase integration.

Holds the process-wide async Supabase client used by the repositories in
infrastructure.db.
"""
import logging
from typing import Optional

from supabase import AsyncClient, acreate_client

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[AsyncClient] = None


async def get_supabase_client(settings: Optional[Settings] = None) -> Optional[AsyncClient]:
    """
    Get the shared async Supabase client, creating it on first use.

    Returns:
        AsyncClient, or None if credentials are not configured
    """
    global _client
    if _client is not None:
        return _client

    settings = settings or get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured. Workout storage will be disabled.")
        return None

    _client = await acreate_client(settings.supabase_url, settings.supabase_key)
    logger.info("Supabase client created")
    return _client


def reset_supabase_client() -> None:
    """Forget the cached client (used by tests and on settings changes)."""
    global _client
    _client = None
