from app.data_sources.base import CuratedDateDataSource
from app.models.admin.curated_date_models import (
    CuratedDate,
    CuratedDateStatus,
    DateFilters,
    DateStats,
    PaginatedDatesResponse,
    DateUpdateResponse,
)
from app.services.admin.date_aggregations import compute_date_stats
from app.utils.record_filters import filter_curated_dates
from app.utils.pagination import sort_newest_first, paginate, count_pages
from app.utils.date_utils import utc_now, as_utc
from app.custom_error import ServerError, ValidationError, CuratedDateNotFoundError
from datetime import datetime
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


class AdminDateCurationService:
    def __init__(self, data_source: CuratedDateDataSource, clock: Callable[[], datetime] = utc_now):
        self.data_source = data_source
        self.clock = clock

    # =====================================
    # CURATED DATES
    # =====================================

    async def get_dates(self, filters: Optional[DateFilters] = None, page: int = 1, page_size: int = 10) -> PaginatedDatesResponse:
        """Filtered page of curated dates, latest scheduled first"""
        try:
            dates = await self.data_source.list_curated_dates()

            filtered = filter_curated_dates(dates, filters)
            ordered = sort_newest_first(filtered, key=lambda d: as_utc(d.scheduled_at))
            page_items, total = paginate(ordered, page, page_size)

            return PaginatedDatesResponse(
                dates=page_items,
                total_count=total,
                page=page,
                page_size=page_size,
                total_pages=count_pages(total, page_size),
            )

        except Exception as e:
            logger.error(f"Error fetching curated dates: {str(e)}")
            raise ServerError(f"Failed to fetch curated dates: {str(e)}")

    # --------------------------------------------------------------

    async def get_date(self, date_id: str) -> CuratedDate:
        try:
            curated_date = await self.data_source.get_curated_date(date_id)
            if curated_date is None:
                raise CuratedDateNotFoundError()
            return curated_date

        except Exception as e:
            logger.error(f"Error fetching curated date {date_id}: {str(e)}")
            if isinstance(e, (CuratedDateNotFoundError, ValidationError)):
                raise e
            raise ServerError(f"Failed to fetch curated date: {str(e)}")

    # --------------------------------------------------------------

    async def update_date_status(self, date_id: str, status: CuratedDateStatus, reason: Optional[str] = None) -> DateUpdateResponse:
        """Any status may follow any other; the cancellation reason is kept only for cancelled dates"""
        try:
            changes = {
                "status": status,
                "cancellation_reason": reason if status == CuratedDateStatus.CANCELLED else None,
                "last_updated_at": self.clock(),
            }
            updated = await self.data_source.update_curated_date(date_id, changes)
            if updated is None:
                raise CuratedDateNotFoundError()

            logger.info(f"✅ Curated date {date_id} moved to {status.value}")
            return DateUpdateResponse(success=True, date=updated)

        except Exception as e:
            logger.error(f"Error updating curated date status: {str(e)}")
            if isinstance(e, (CuratedDateNotFoundError, ValidationError)):
                raise e
            raise ServerError(f"Failed to update curated date status: {str(e)}")

    # --------------------------------------------------------------

    async def add_note(self, date_id: str, note: str) -> DateUpdateResponse:
        """Replace the admin note on a curated date"""
        try:
            if not note.strip():
                raise ValidationError("Note cannot be empty")

            updated = await self.data_source.update_curated_date(date_id, {"notes": note.strip(), "last_updated_at": self.clock()})
            if updated is None:
                raise CuratedDateNotFoundError()

            logger.info(f"📝 Note saved on curated date {date_id}")
            return DateUpdateResponse(success=True, date=updated)

        except Exception as e:
            logger.error(f"Error adding note to curated date: {str(e)}")
            if isinstance(e, (CuratedDateNotFoundError, ValidationError)):
                raise e
            raise ServerError(f"Failed to add note: {str(e)}")

    # =====================================
    # ANALYTICS
    # =====================================

    async def get_date_stats(self) -> DateStats:
        try:
            dates = await self.data_source.list_curated_dates()
            return compute_date_stats(dates)

        except Exception as e:
            logger.error(f"Error calculating curated date stats: {str(e)}")
            raise ServerError(f"Failed to fetch curated date stats: {str(e)}")
