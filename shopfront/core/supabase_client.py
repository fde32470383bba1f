# shopfront/core/supabase_client.py
from functools import lru_cache

from supabase import Client, create_client

from shopfront.core.config import Settings


@lru_cache
def _create_cached_client(url: str, key: str) -> Client:
    return create_client(url, key)


def supabase_client(settings: Settings) -> Client:
    """
    Return the Supabase client backing the remote store.

    Prefers the service role key (bypasses RLS, backend only) and falls
    back to the anon key.

    WARNING:
      - Never expose service role key to frontend.

    Raises:
        RuntimeError: if SUPABASE_URL or a key is not configured.
    """
    key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_KEY
    if not settings.SUPABASE_URL or not key:
        raise RuntimeError("Missing SUPABASE_URL / SUPABASE_KEY in .env")
    return _create_cached_client(settings.SUPABASE_URL, key)
