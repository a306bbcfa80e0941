"""
Supabase client configuration for the CV data store.
Handles Supabase initialization with proper error handling and connection management.
"""

import logging
from functools import lru_cache
from typing import Optional

from postgrest import APIError
from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class SupabaseManager:
    """
    Supabase client manager with lazy initialization.
    The backend talks to PostgREST with the service role key when one is configured.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._client: Optional[Client] = None
        self.settings = settings or get_settings()

    @property
    def client(self) -> Client:
        """Get or create Supabase client with lazy initialization."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> Client:
        """Create Supabase client with proper configuration."""
        supabase_key = self.settings.SUPABASE_SERVICE_ROLE_KEY or self.settings.SUPABASE_ANON_KEY
        if not self.settings.SUPABASE_URL or not supabase_key:
            raise ConnectionError("Supabase initialization failed: SUPABASE_URL and a key are required")

        try:
            client_options = ClientOptions(
                schema="public",
                headers={
                    "User-Agent": f"CVBuilderAPI/{self.settings.APP_VERSION}",
                },
                auto_refresh_token=False,
                persist_session=False,
            )

            client = create_client(
                supabase_url=self.settings.SUPABASE_URL,
                supabase_key=supabase_key,
                options=client_options
            )

            logger.info("Supabase client initialized successfully")
            return client

        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise ConnectionError(f"Supabase initialization failed: {e}")

    def health_check(self) -> dict:
        """
        Check the database through PostgREST.

        Returns:
            dict: ``{"database_service": bool, "error": str | None}``
        """
        health_status = {"database_service": False, "error": None}

        try:
            self.client.table("users").select("id").limit(1).execute()
            health_status["database_service"] = True
        except APIError as e:
            error_msg = f"Supabase API error: {e}"
            logger.error(error_msg)
            health_status["error"] = error_msg
        except Exception as e:
            error_msg = f"Supabase health check failed: {e}"
            logger.error(error_msg)
            health_status["error"] = error_msg

        return health_status

    def close(self):
        """Drop the cached client."""
        if self._client:
            self._client = None
            logger.info("Supabase client connections closed")


@lru_cache()
def get_supabase_manager() -> SupabaseManager:
    """
    Get cached Supabase manager instance.

    Returns:
        SupabaseManager: Singleton Supabase manager
    """
    return SupabaseManager()


def get_supabase_client() -> Client:
    """Get Supabase client for direct usage."""
    return get_supabase_manager().client
