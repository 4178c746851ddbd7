from fastapi import Depends
from supabase import AsyncClient
from app.configs.app_settings import settings
from app.utils.supabase_client_handlers import get_optional_supabase_client
from app.data_sources.base import RevenueDataSource, CuratedDateDataSource, WaitlistRepository, VerificationCodeStore
from app.data_sources.mock_sources import (
    MockRevenueDataSource,
    MockCuratedDateDataSource,
    MockWaitlistRepository,
    MockVerificationCodeStore,
)
from app.data_sources.supabase_sources import (
    SupabaseRevenueDataSource,
    SupabaseCuratedDateDataSource,
    SupabaseWaitlistRepository,
    SupabaseVerificationCodeStore,
)
from app.custom_error import ServerError
from typing import Optional

# FastAPI dependencies that pick the data source for each request.
# USE_MOCK_DATA picks the in-memory sources; otherwise the Supabase client must be up.
# mock sources are built lazily once per process so status updates and notes survive between requests.

_mock_revenue_source: Optional[MockRevenueDataSource] = None
_mock_curated_date_source: Optional[MockCuratedDateDataSource] = None
_mock_waitlist_repository: Optional[MockWaitlistRepository] = None
_mock_verification_code_store: Optional[MockVerificationCodeStore] = None


def _require_client(supabase_client: Optional[AsyncClient]) -> AsyncClient:
    """With mock data off, a missing client fails the request"""
    if supabase_client is None:
        raise ServerError("Supabase client not initialized")
    return supabase_client


def reset_mock_data_sources():
    """Drop the cached mock sources; the next request regenerates them"""
    global _mock_revenue_source, _mock_curated_date_source, _mock_waitlist_repository, _mock_verification_code_store
    _mock_revenue_source = None
    _mock_curated_date_source = None
    _mock_waitlist_repository = None
    _mock_verification_code_store = None


async def get_revenue_data_source(supabase_client: Optional[AsyncClient] = Depends(get_optional_supabase_client)) -> RevenueDataSource:
    global _mock_revenue_source
    if settings.USE_MOCK_DATA:
        if _mock_revenue_source is None:
            _mock_revenue_source = MockRevenueDataSource(count=settings.MOCK_TRANSACTION_COUNT, seed=settings.MOCK_DATA_SEED)
        return _mock_revenue_source
    return SupabaseRevenueDataSource(_require_client(supabase_client))


async def get_curated_date_data_source(
    supabase_client: Optional[AsyncClient] = Depends(get_optional_supabase_client),
) -> CuratedDateDataSource:
    global _mock_curated_date_source
    if settings.USE_MOCK_DATA:
        if _mock_curated_date_source is None:
            _mock_curated_date_source = MockCuratedDateDataSource(count=settings.MOCK_CURATED_DATE_COUNT, seed=settings.MOCK_DATA_SEED)
        return _mock_curated_date_source
    return SupabaseCuratedDateDataSource(_require_client(supabase_client))


async def get_waitlist_repository(supabase_client: Optional[AsyncClient] = Depends(get_optional_supabase_client)) -> WaitlistRepository:
    global _mock_waitlist_repository
    if settings.USE_MOCK_DATA:
        if _mock_waitlist_repository is None:
            _mock_waitlist_repository = MockWaitlistRepository()
        return _mock_waitlist_repository
    return SupabaseWaitlistRepository(_require_client(supabase_client))


async def get_verification_code_store(
    supabase_client: Optional[AsyncClient] = Depends(get_optional_supabase_client),
) -> VerificationCodeStore:
    global _mock_verification_code_store
    if settings.USE_MOCK_DATA:
        if _mock_verification_code_store is None:
            _mock_verification_code_store = MockVerificationCodeStore()
        return _mock_verification_code_store
    return SupabaseVerificationCodeStore(_require_client(supabase_client))
