# backend/sitefactory/stores/__init__.py
from ..config import Settings
from .base import ProjectStore
from .sqlite import SqlProjectStore
from .supabase import SupabaseProjectStore


def create_store(settings: Settings) -> ProjectStore:
    """Build the project store selected by STORAGE_BACKEND"""
    if settings.STORAGE_BACKEND == "supabase":
        return SupabaseProjectStore(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_ROLE_KEY,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
    return SqlProjectStore.from_url(settings.DATABASE_URL, settings.MIGRATIONS_PATH)


__all__ = ["ProjectStore", "SqlProjectStore", "SupabaseProjectStore", "create_store"]
