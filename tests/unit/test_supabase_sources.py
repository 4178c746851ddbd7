"""Unit tests for the Supabase data sources against a recording fake client"""

import pytest
from datetime import datetime, timezone
from types import SimpleNamespace
from app.custom_error import DatabaseError, ValidationError
from app.models.admin.curated_date_models import CuratedDateStatus, DateLocation
from app.data_sources.supabase_sources import (
    _to_row,
    SupabaseRevenueDataSource,
    SupabaseCuratedDateDataSource,
    SupabaseWaitlistRepository,
    SupabaseVerificationCodeStore,
)


class FakeQuery:
    """Records every builder call; execute() hands back the next queued response"""

    def __init__(self, client, table_name):
        self.client = client
        self.calls = [("table", (table_name,), {})]

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return record

    async def execute(self):
        self.client.queries.append(self.calls)
        return self.client.responses.pop(0)


class FakeSupabaseClient:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.queries = []

    def table(self, name):
        return FakeQuery(self, name)


def _response(data=None, count=None):
    return SimpleNamespace(data=data if data is not None else [], count=count)


def _call(query, name):
    return next(call for call in query if call[0] == name)


# =====================================
# ROW MAPPING
# =====================================


def test_to_row_serializes_column_values():
    when = datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc)
    location = DateLocation(name="Cafe Social", address="Koramangala, 5th Block", city="Bangalore")

    row = _to_row({"status": CuratedDateStatus.NO_SHOW, "last_updated_at": when, "location": location, "notes": None})

    assert row == {
        "status": "no_show",
        "last_updated_at": "2026-10-01T09:30:00+00:00",
        "location": location.model_dump(mode="json"),
        "notes": None,
    }


async def test_transactions_are_parsed_from_rows(make_transaction):
    stored = [make_transaction(), make_transaction()]
    client = FakeSupabaseClient(_response([t.model_dump(mode="json") for t in stored]))

    transactions = await SupabaseRevenueDataSource(client).list_transactions()

    assert transactions == stored
    assert _call(client.queries[0], "table")[1] == ("transactions",)
    assert _call(client.queries[0], "order") == ("order", ("created_at",), {"desc": True})


async def test_transaction_lookup_by_id_or_number(make_transaction):
    stored = make_transaction()
    client = FakeSupabaseClient(_response([stored.model_dump(mode="json")]), _response())
    source = SupabaseRevenueDataSource(client)

    assert await source.get_transaction(stored.transaction_id) == stored
    assert await source.get_transaction("TXN99999999") is None
    assert _call(client.queries[0], "or_")[1] == (f"id.eq.{stored.transaction_id},transaction_id.eq.{stored.transaction_id}",)


# =====================================
# RECORD ID FILTERS
# =====================================


@pytest.mark.parametrize("record_id", ["x,status.eq.scheduled", "x)", "or(id.neq.0)", "a b", ""])
async def test_ids_that_would_extend_the_filter_are_rejected(record_id):
    client = FakeSupabaseClient(_response())
    source = SupabaseCuratedDateDataSource(client)

    with pytest.raises(ValidationError):
        await source.update_curated_date(record_id, {"status": CuratedDateStatus.CANCELLED})

    assert client.queries == []


async def test_curated_date_update_sends_serialized_changes(make_curated_date):
    updated = make_curated_date(status=CuratedDateStatus.CANCELLED, cancellation_reason="Venue closed")
    client = FakeSupabaseClient(_response([updated.model_dump(mode="json")]), _response())
    source = SupabaseCuratedDateDataSource(client)

    result = await source.update_curated_date("DATE000001", {"status": CuratedDateStatus.CANCELLED, "cancellation_reason": "Venue closed"})

    assert result == updated
    assert _call(client.queries[0], "update")[1] == ({"status": "cancelled", "cancellation_reason": "Venue closed"},)
    assert _call(client.queries[0], "or_")[1] == ("id.eq.DATE000001,date_id.eq.DATE000001",)
    assert await source.update_curated_date("missing", {"notes": "x"}) is None


# =====================================
# WAITLIST & VERIFICATION CODES
# =====================================


async def test_waitlist_paging_uses_inclusive_range():
    row = {"id": "w1", "name": "Maya", "email": "maya@example.com", "created_at": "2026-10-01T09:30:00+00:00"}
    client = FakeSupabaseClient(_response([row]))

    entries = await SupabaseWaitlistRepository(client).list_entries(offset=20, limit=10)

    assert entries[0].email == "maya@example.com"
    assert _call(client.queries[0], "range")[1] == (20, 29)
    assert _call(client.queries[0], "order") == ("order", ("created_at",), {"desc": True})


async def test_waitlist_count_and_lookup():
    client = FakeSupabaseClient(_response(count=7), _response(count=None), _response())
    repository = SupabaseWaitlistRepository(client)

    assert await repository.count_entries() == 7
    assert await repository.count_entries() == 0
    assert await repository.find_by_email("Maya@Example.com") is None
    assert _call(client.queries[2], "eq")[1] == ("email", "maya@example.com")


async def test_waitlist_insert_without_rows_is_a_database_error():
    client = FakeSupabaseClient(_response())

    with pytest.raises(DatabaseError):
        await SupabaseWaitlistRepository(client).add_entry("Maya", "maya@example.com")


async def test_verification_code_rows():
    record = {"code": "123456", "attempts": 1, "expires_at": 2000.0}
    client = FakeSupabaseClient(_response(), _response([record]), _response())
    store = SupabaseVerificationCodeStore(client)

    await store.save_code("Maya@Example.com", "123456", 2000.0)
    assert await store.get_code("maya@example.com") == record
    assert await store.get_code("nobody@example.com") is None

    assert _call(client.queries[0], "upsert")[1] == ({"email": "maya@example.com", "code": "123456", "attempts": 0, "expires_at": 2000.0},)
