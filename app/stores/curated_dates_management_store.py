from pydantic import BaseModel, Field, ValidationError
from app.stores.base_store import ObservableStore, Pagination, describe_validation_error
from app.stores.service_response import call_service
from app.services.admin.admin_date_curation_services import AdminDateCurationService
from app.models.admin.curated_date_models import CuratedDate, CuratedDateStatus, DateFilters, DateStats
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class CuratedDatesManagementState(BaseModel):
    dates: List[CuratedDate] = []
    selected_date: Optional[CuratedDate] = None
    stats: Optional[DateStats] = None
    is_loading: bool = False
    error: Optional[str] = None
    filters: DateFilters = Field(default_factory=DateFilters)
    pagination: Pagination = Field(default_factory=Pagination)


class CuratedDatesManagementStore(ObservableStore[CuratedDatesManagementState]):
    """Curated dates table, detail selection and status stats"""

    def __init__(self, curation_service: AdminDateCurationService):
        super().__init__(CuratedDatesManagementState())
        self.curation_service = curation_service

    # =====================================
    # LISTING
    # =====================================

    async def set_filters(self, **filter_changes) -> None:
        state = self.get_state()
        try:
            filters = DateFilters.model_validate({**state.filters.model_dump(by_alias=True), **filter_changes})
        except ValidationError as e:
            self.set_state(error=describe_validation_error(e))
            return

        self.set_state(
            filters=filters,
            pagination=state.pagination.model_copy(update={"current_page": 1}),
        )
        await self.fetch_dates()

    async def fetch_dates(self, page: Optional[int] = None) -> None:
        generation = self._next_generation("dates")
        self.set_state(is_loading=True, error=None)

        state = self.get_state()
        current_page = page if page is not None else state.pagination.current_page
        result = await call_service(self.curation_service.get_dates(state.filters, current_page, state.pagination.page_size))

        if not self._is_latest("dates", generation):
            return

        if result.error:
            self.set_state(error=result.error.message, is_loading=False)
            return

        self.set_state(
            dates=result.response.dates,
            pagination=self.get_state().pagination.model_copy(update={"current_page": current_page, "total_items": result.response.total_count}),
            is_loading=False,
        )

    async def fetch_stats(self) -> None:
        generation = self._next_generation("stats")
        result = await call_service(self.curation_service.get_date_stats())

        if not self._is_latest("stats", generation):
            return
        if result.error:
            logger.error(f"Failed to fetch stats: {result.error.message}")
            return
        self.set_state(stats=result.response)

    async def go_to_page(self, page: int) -> None:
        await self.fetch_dates(page)

    async def set_page_size(self, size: int) -> None:
        self.set_state(pagination=self.get_state().pagination.model_copy(update={"page_size": size, "current_page": 1}))
        await self.fetch_dates(1)

    async def reset_filters(self) -> None:
        self.set_state(filters=DateFilters(), pagination=self.get_state().pagination.model_copy(update={"current_page": 1}))
        await self.fetch_dates(1)

    def select_date(self, curated_date: Optional[CuratedDate]) -> None:
        self.set_state(selected_date=curated_date)

    def clear_error(self) -> None:
        self.set_state(error=None)

    # =====================================
    # MUTATIONS
    # =====================================

    def _replace_date(self, updated: CuratedDate) -> None:
        """Swap the updated record into the table and the selection"""
        state = self.get_state()
        selected = state.selected_date
        self.set_state(
            dates=[updated if d.id == updated.id else d for d in state.dates],
            selected_date=updated if selected and selected.id == updated.id else selected,
            is_loading=False,
        )

    async def update_date_status(self, date_id: str, status: CuratedDateStatus, reason: Optional[str] = None) -> None:
        self.set_state(is_loading=True, error=None)
        result = await call_service(self.curation_service.update_date_status(date_id, status, reason))

        if result.error:
            self.set_state(error=result.error.message, is_loading=False)
            return

        self._replace_date(result.response.date)
        await self.fetch_stats()

    async def add_note(self, date_id: str, note: str) -> None:
        self.set_state(is_loading=True, error=None)
        result = await call_service(self.curation_service.add_note(date_id, note))

        if result.error:
            self.set_state(error=result.error.message, is_loading=False)
            return

        self._replace_date(result.response.date)
