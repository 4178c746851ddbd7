from supabase import acreate_client, AsyncClient
from app.configs.app_settings import settings
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# 1. lifespan startup awaits create_supabase_client(), which fills the module level _supabase_client once
# 2. request dependencies read that same module level reference afterwards
# 3. with USE_MOCK_DATA on the client is never created and data sources use the in-memory mocks;
#    with it off, missing credentials stop the startup


_supabase_client: Optional[AsyncClient] = None


async def create_supabase_client() -> Optional[AsyncClient]:
    """Create async supabase client - only called once during startup"""
    global _supabase_client
    if settings.USE_MOCK_DATA:
        logger.info("USE_MOCK_DATA is on, skipping Supabase client")
        return None
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise RuntimeError("SUPABASE_URL and SUPABASE_KEY are required when USE_MOCK_DATA is off")
    if _supabase_client is None:
        _supabase_client = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _supabase_client


async def get_optional_supabase_client() -> Optional[AsyncClient]:
    """Dependency function for data sources that can fall back to mocks"""
    return _supabase_client


async def close_supabase_client():
    """Clean up supabase client during shutdown"""
    global _supabase_client
    if _supabase_client:
        # Supabase client doesn't have explicit close method, but we reset the reference
        _supabase_client = None
