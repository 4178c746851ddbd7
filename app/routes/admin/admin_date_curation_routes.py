from fastapi import APIRouter, Depends, Path, Query
from app.data_sources.base import CuratedDateDataSource
from app.data_sources.providers import get_curated_date_data_source
from app.services.admin.admin_date_curation_services import AdminDateCurationService
from app.utils.admin_auth import get_current_admin_user_id
from app.utils.query_params import build_date_range, RECORD_ID_PATTERN
from app.models.admin.curated_date_models import (
    CuratedDate,
    DateFilters,
    DateStats,
    PaginatedDatesResponse,
    UpdateDateStatusRequest,
    AddDateNoteRequest,
    DateUpdateResponse,
)
from datetime import datetime
from typing import Literal, Optional

admin_date_curation_router = APIRouter(prefix="/admin/date-curation", tags=["Admin"], dependencies=[Depends(get_current_admin_user_id)])


async def get_admin_date_curation_service(
    data_source: CuratedDateDataSource = Depends(get_curated_date_data_source),
) -> AdminDateCurationService:
    """Dependency to get AdminDateCurationService instance"""
    return AdminDateCurationService(data_source)


async def get_date_filters(
    search: str = Query("", max_length=100, description="Matches participant names or date id"),
    status: Literal["all", "scheduled", "ongoing", "completed", "cancelled", "no_show"] = Query("all"),
    date_type: Literal["all", "online", "offline"] = Query("all"),
    city: Optional[str] = Query(None, max_length=100),
    date_from: Optional[datetime] = Query(None, description="Inclusive lower bound on scheduled_at"),
    date_to: Optional[datetime] = Query(None, description="Inclusive upper bound on scheduled_at"),
    has_issues: bool = Query(False, description="Only cancelled, no-show or low rated dates"),
) -> DateFilters:
    """Collect curated date filters from the query string"""
    return DateFilters(
        search=search.strip(),
        status=status,
        date_type=date_type,
        city=city or None,
        date_range=build_date_range(date_from, date_to),
        has_issues=has_issues,
    )


# =====================================
# CURATED DATES ENDPOINTS
# =====================================


@admin_date_curation_router.get("/curated-dates", response_model=PaginatedDatesResponse)
async def get_curated_dates(
    filters: DateFilters = Depends(get_date_filters),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
    curation_service: AdminDateCurationService = Depends(get_admin_date_curation_service),
):
    """Get filtered curated dates with pagination"""
    return await curation_service.get_dates(filters, page, page_size)


# --------------------------------------------------------------


@admin_date_curation_router.get("/curated-dates/{date_id}", response_model=CuratedDate)
async def get_curated_date(
    date_id: str = Path(..., pattern=RECORD_ID_PATTERN),
    curation_service: AdminDateCurationService = Depends(get_admin_date_curation_service),
):
    """Get full curated date detail"""
    return await curation_service.get_date(date_id)


# --------------------------------------------------------------


@admin_date_curation_router.put("/curated-dates/{date_id}", response_model=DateUpdateResponse)
async def update_curated_date_status(
    status_update: UpdateDateStatusRequest,
    date_id: str = Path(..., pattern=RECORD_ID_PATTERN),
    curation_service: AdminDateCurationService = Depends(get_admin_date_curation_service),
):
    """Change the status of a curated date (reason is kept for cancellations)"""
    return await curation_service.update_date_status(date_id, status_update.status, status_update.reason)


# --------------------------------------------------------------


@admin_date_curation_router.put("/curated-dates/{date_id}/notes", response_model=DateUpdateResponse)
async def add_curated_date_note(
    note_request: AddDateNoteRequest,
    date_id: str = Path(..., pattern=RECORD_ID_PATTERN),
    curation_service: AdminDateCurationService = Depends(get_admin_date_curation_service),
):
    """Save an admin note on a curated date"""
    return await curation_service.add_note(date_id, note_request.note)


# =====================================
# ANALYTICS ENDPOINTS
# =====================================


@admin_date_curation_router.get("/analytics/overview", response_model=DateStats)
async def get_curated_date_stats(curation_service: AdminDateCurationService = Depends(get_admin_date_curation_service)):
    """Get status counts, success rate and average rating"""
    return await curation_service.get_date_stats()
