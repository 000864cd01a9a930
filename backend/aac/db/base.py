from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from aac.config import settings
from aac.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """Return a cached Supabase client using the service role key.

    Only the volume cache talks to Supabase, from background writes, so a
    single service-role client is shared.
    """
    logger.debug("Initializing Supabase admin client")
    if not settings.supabase_url:
        raise RuntimeError("supabase_url is required for the supabase cache backend")
    if not settings.supabase_service_role_key:
        raise RuntimeError("supabase_service_role_key is required for admin client")
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
