from pydantic import BaseModel, Field, ValidationError
from app.stores.base_store import ObservableStore, Pagination, describe_validation_error
from app.stores.service_response import call_service
from app.services.admin.admin_revenue_services import AdminRevenueService
from app.models.admin.revenue_models import (
    Transaction,
    RevenueFilters,
    RevenueMetrics,
    RevenueByPeriod,
    RevenueByCategory,
    TopUser,
    PaymentMethodStats,
    SubscriptionMetrics,
)
from typing import List, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)


class RevenueTrackingState(BaseModel):
    transactions: List[Transaction] = []
    selected_transaction: Optional[Transaction] = None
    metrics: Optional[RevenueMetrics] = None
    revenue_by_period: List[RevenueByPeriod] = []
    revenue_by_category: List[RevenueByCategory] = []
    top_users: List[TopUser] = []
    payment_method_stats: List[PaymentMethodStats] = []
    subscription_metrics: Optional[SubscriptionMetrics] = None
    is_loading: bool = False
    error: Optional[str] = None
    filters: RevenueFilters = Field(default_factory=RevenueFilters)
    pagination: Pagination = Field(default_factory=Pagination)


class RevenueTrackingStore(ObservableStore[RevenueTrackingState]):
    """Revenue dashboard state: transaction table, filters and analytics panels"""

    def __init__(self, revenue_service: AdminRevenueService):
        super().__init__(RevenueTrackingState())
        self.revenue_service = revenue_service

    # =====================================
    # TRANSACTIONS
    # =====================================

    async def set_filters(self, **filter_changes) -> None:
        """Merge filter changes, go back to page 1 and refetch"""
        state = self.get_state()
        try:
            filters = RevenueFilters.model_validate({**state.filters.model_dump(by_alias=True), **filter_changes})
        except ValidationError as e:
            self.set_state(error=describe_validation_error(e))
            return

        self.set_state(
            filters=filters,
            pagination=state.pagination.model_copy(update={"current_page": 1}),
        )
        await self.fetch_transactions()

    async def fetch_transactions(self, page: Optional[int] = None) -> None:
        generation = self._next_generation("transactions")
        self.set_state(is_loading=True, error=None)

        state = self.get_state()
        current_page = page if page is not None else state.pagination.current_page
        result = await call_service(self.revenue_service.get_transactions(state.filters, current_page, state.pagination.page_size))

        if not self._is_latest("transactions", generation):
            return

        if result.error:
            self.set_state(error=result.error.message, is_loading=False)
            return

        self.set_state(
            transactions=result.response.transactions,
            pagination=self.get_state().pagination.model_copy(update={"current_page": current_page, "total_items": result.response.total_count}),
            is_loading=False,
        )

    async def go_to_page(self, page: int) -> None:
        await self.fetch_transactions(page)

    async def set_page_size(self, size: int) -> None:
        self.set_state(pagination=self.get_state().pagination.model_copy(update={"page_size": size, "current_page": 1}))
        await self.fetch_transactions(1)

    async def reset_filters(self) -> None:
        self.set_state(filters=RevenueFilters(), pagination=self.get_state().pagination.model_copy(update={"current_page": 1}))
        await self.fetch_transactions(1)

    def select_transaction(self, transaction: Optional[Transaction]) -> None:
        self.set_state(selected_transaction=transaction)

    def clear_error(self) -> None:
        self.set_state(error=None)

    # =====================================
    # ANALYTICS PANELS
    # =====================================

    async def _fetch_panel(self, slice_name: str, operation, label: str) -> None:
        """Panels log failures instead of surfacing them; only the table drives the error banner"""
        generation = self._next_generation(slice_name)
        result = await call_service(operation)

        if not self._is_latest(slice_name, generation):
            return
        if result.error:
            logger.error(f"Failed to fetch {label}: {result.error.message}")
            return
        self.set_state(**{slice_name: result.response})

    async def fetch_metrics(self) -> None:
        await self._fetch_panel("metrics", self.revenue_service.get_revenue_metrics(), "metrics")

    async def fetch_revenue_by_period(self, days: int = 30) -> None:
        await self._fetch_panel("revenue_by_period", self.revenue_service.get_revenue_by_period(days), "revenue by period")

    async def fetch_revenue_by_category(self) -> None:
        await self._fetch_panel("revenue_by_category", self.revenue_service.get_revenue_by_category(), "revenue by category")

    async def fetch_top_users(self, limit: int = 10) -> None:
        await self._fetch_panel("top_users", self.revenue_service.get_top_users(limit), "top users")

    async def fetch_payment_method_stats(self) -> None:
        await self._fetch_panel("payment_method_stats", self.revenue_service.get_payment_method_stats(), "payment method stats")

    async def fetch_subscription_metrics(self) -> None:
        await self._fetch_panel("subscription_metrics", self.revenue_service.get_subscription_metrics(), "subscription metrics")

    async def fetch_all_data(self) -> None:
        await asyncio.gather(
            self.fetch_transactions(),
            self.fetch_metrics(),
            self.fetch_revenue_by_period(),
            self.fetch_revenue_by_category(),
            self.fetch_top_users(),
            self.fetch_payment_method_stats(),
            self.fetch_subscription_metrics(),
        )
