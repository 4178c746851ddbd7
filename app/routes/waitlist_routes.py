from fastapi import APIRouter, Depends, Query, status
from app.data_sources.base import WaitlistRepository
from app.data_sources.providers import get_waitlist_repository
from app.services.waitlist_services import WaitlistService
from app.utils.admin_auth import get_current_admin_user_id
from app.models.waitlist_models import (
    WaitlistCreate,
    WaitlistEntryResponse,
    PaginatedWaitlistResponse,
    WaitlistCountResponse,
)

waitlist_router = APIRouter(tags=["Waitlist"])


async def get_waitlist_service(repository: WaitlistRepository = Depends(get_waitlist_repository)) -> WaitlistService:
    """Dependency to get WaitlistService instance"""
    return WaitlistService(repository)


@waitlist_router.post("/waitlist", response_model=WaitlistEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_to_waitlist(
    waitlist_entry: WaitlistCreate,
    waitlist_service: WaitlistService = Depends(get_waitlist_service),
):
    """Join the pre-launch waitlist"""
    return await waitlist_service.add_to_waitlist(waitlist_entry)


@waitlist_router.get("/waitlist-count", response_model=WaitlistCountResponse)
async def get_waitlist_count(waitlist_service: WaitlistService = Depends(get_waitlist_service)):
    """Public signup counter"""
    return await waitlist_service.get_waitlist_count()


@waitlist_router.get("/waitlist-data", response_model=PaginatedWaitlistResponse, dependencies=[Depends(get_current_admin_user_id)])
async def get_waitlist_data(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(30, ge=1, le=100, description="Items per page"),
    waitlist_service: WaitlistService = Depends(get_waitlist_service),
):
    """Admin listing of waitlist signups, newest first"""
    return await waitlist_service.get_waitlist_data(page, page_size)
