"""Unit tests for the dashboard state stores"""

import asyncio
import pytest
from datetime import timedelta
from app.custom_error import ServerError
from app.data_sources.mock_sources import MockRevenueDataSource, MockCuratedDateDataSource
from app.models.admin.revenue_models import DateRange, PaginatedTransactionsResponse, TransactionStatus
from app.models.admin.curated_date_models import CuratedDateStatus
from app.services.admin.admin_revenue_services import AdminRevenueService
from app.services.admin.admin_date_curation_services import AdminDateCurationService
from app.stores.base_store import ObservableStore, Pagination
from app.stores.service_response import call_service
from app.stores.revenue_tracking_store import RevenueTrackingStore
from app.stores.curated_dates_management_store import CuratedDatesManagementStore


@pytest.fixture
def revenue_store(make_transaction, now) -> RevenueTrackingStore:
    transactions = [make_transaction(user_name=f"User {i}", status=TransactionStatus.COMPLETED if i % 2 else TransactionStatus.FAILED) for i in range(25)]
    return RevenueTrackingStore(AdminRevenueService(MockRevenueDataSource(transactions=transactions), clock=lambda: now))


@pytest.fixture
def dates_store(make_curated_date, now) -> CuratedDatesManagementStore:
    dates = [make_curated_date() for _ in range(12)]
    return CuratedDatesManagementStore(AdminDateCurationService(MockCuratedDateDataSource(dates=dates), clock=lambda: now))


class GatedRevenueService:
    """get_transactions blocks until the test releases the matching call"""

    def __init__(self, make_transaction):
        self.make_transaction = make_transaction
        self.gates = []

    async def get_transactions(self, filters, page, page_size):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return PaginatedTransactionsResponse(
            transactions=[self.make_transaction(user_name=filters.search)],
            total_count=1,
            page=page,
            page_size=page_size,
            total_pages=1,
        )


# =====================================
# OBSERVABLE STORE
# =====================================


def test_subscribers_get_new_and_previous_state():
    store = ObservableStore(Pagination())
    seen = []
    unsubscribe = store.subscribe(lambda new, old: seen.append((old.current_page, new.current_page)))

    store.set_state(current_page=2)
    unsubscribe()
    store.set_state(current_page=3)

    assert seen == [(1, 2)]
    assert store.get_state().current_page == 3


def test_set_state_replaces_the_state_object():
    store = ObservableStore(Pagination())
    before = store.get_state()

    store.set_state(total_items=5)

    assert before.total_items == 0
    assert store.get_state() is not before


async def test_call_service_folds_errors():
    async def failing():
        raise ServerError("Failed to fetch transactions: boom")

    async def working():
        return 42

    failed = await call_service(failing())
    succeeded = await call_service(working())

    assert failed.response is None
    assert failed.error.message == "Failed to fetch transactions: boom"
    assert succeeded.response == 42
    assert succeeded.error is None


# =====================================
# REVENUE TRACKING STORE
# =====================================


async def test_fetch_transactions_updates_table_and_pagination(revenue_store):
    await revenue_store.fetch_transactions()

    state = revenue_store.get_state()
    assert len(state.transactions) == 10
    assert state.pagination.total_items == 25
    assert state.is_loading is False
    assert state.error is None


async def test_set_filters_resets_to_first_page(revenue_store):
    await revenue_store.go_to_page(3)
    assert revenue_store.get_state().pagination.current_page == 3

    await revenue_store.set_filters(status="completed")

    state = revenue_store.get_state()
    assert state.pagination.current_page == 1
    assert state.pagination.total_items == 12
    assert all(t.status == TransactionStatus.COMPLETED for t in state.transactions)


async def test_set_page_size_and_reset_filters(revenue_store):
    await revenue_store.set_filters(search="User 1")
    await revenue_store.set_page_size(5)

    state = revenue_store.get_state()
    assert state.pagination.page_size == 5
    assert state.pagination.current_page == 1

    await revenue_store.reset_filters()
    assert revenue_store.get_state().filters.search == ""
    assert revenue_store.get_state().pagination.total_items == 25


async def test_fetch_all_data_fills_every_panel(revenue_store):
    await revenue_store.fetch_all_data()

    state = revenue_store.get_state()
    assert state.metrics.successful_transactions == 12
    assert len(state.revenue_by_period) == 30
    assert len(state.revenue_by_category) == 3
    assert len(state.payment_method_stats) == 4
    assert state.top_users
    assert state.subscription_metrics is not None


async def test_service_error_is_stored_for_display(make_transaction):
    class BrokenService:
        async def get_transactions(self, filters, page, page_size):
            raise ServerError("Failed to fetch transactions: database offline")

    store = RevenueTrackingStore(BrokenService())
    await store.fetch_transactions()

    assert store.get_state().error == "Failed to fetch transactions: database offline"
    assert store.get_state().is_loading is False

    store.clear_error()
    assert store.get_state().error is None


async def test_stale_response_does_not_overwrite_newer_filters(make_transaction):
    service = GatedRevenueService(make_transaction)
    store = RevenueTrackingStore(service)

    older = asyncio.create_task(store.set_filters(search="older"))
    await asyncio.sleep(0)
    newer = asyncio.create_task(store.set_filters(search="newer"))
    await asyncio.sleep(0)

    service.gates[1].set()
    await newer
    service.gates[0].set()
    await older

    state = store.get_state()
    assert state.filters.search == "newer"
    assert [t.user_name for t in state.transactions] == ["newer"]
    assert state.is_loading is False


# =====================================
# CURATED DATES STORE
# =====================================


async def test_update_status_refreshes_row_selection_and_stats(dates_store):
    await dates_store.fetch_dates()
    target = dates_store.get_state().dates[0]
    dates_store.select_date(target)

    await dates_store.update_date_status(target.id, CuratedDateStatus.CANCELLED, "Venue closed")

    state = dates_store.get_state()
    assert state.dates[0].status == CuratedDateStatus.CANCELLED
    assert state.selected_date.cancellation_reason == "Venue closed"
    assert state.stats.cancelled == 1
    assert state.is_loading is False


async def test_add_note_updates_local_copy(dates_store):
    await dates_store.fetch_dates()
    target = dates_store.get_state().dates[1]

    await dates_store.add_note(target.id, "Prefers evenings")

    assert dates_store.get_state().dates[1].notes == "Prefers evenings"


async def test_unknown_date_sets_error(dates_store):
    await dates_store.update_date_status("missing", CuratedDateStatus.COMPLETED)

    assert dates_store.get_state().error == "Curated date not found"


async def test_dates_store_paging(dates_store):
    await dates_store.set_page_size(5)
    await dates_store.go_to_page(3)

    state = dates_store.get_state()
    assert len(state.dates) == 2
    assert state.pagination.current_page == 3
    assert state.pagination.total_items == 12


async def test_invalid_filter_values_are_rejected(revenue_store):
    await revenue_store.fetch_transactions()

    await revenue_store.set_filters(status="bogus")

    state = revenue_store.get_state()
    assert state.error.startswith("Invalid status")
    assert state.filters.status == "all"
    assert len(state.transactions) == 10


async def test_date_range_filter_is_validated_into_a_model(revenue_store, now):
    await revenue_store.set_filters(date_range={"from": (now - timedelta(days=5)).isoformat(), "to": now.isoformat()})

    state = revenue_store.get_state()
    assert isinstance(state.filters.date_range, DateRange)
    assert state.pagination.total_items == 5
    assert state.error is None


async def test_page_zero_is_not_treated_as_current_page(revenue_store):
    await revenue_store.go_to_page(2)
    await revenue_store.go_to_page(0)

    state = revenue_store.get_state()
    assert state.error.startswith("Failed to fetch transactions")
    assert state.pagination.current_page == 2


async def test_curated_date_filters_are_validated(dates_store):
    await dates_store.set_filters(date_type="hybrid")

    assert dates_store.get_state().error.startswith("Invalid date_type")
    assert dates_store.get_state().filters.date_type == "all"
