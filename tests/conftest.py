"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Generator
from fastapi.testclient import TestClient
from app.main import app
from app.utils.admin_auth import get_current_admin_user_id
from app.data_sources.providers import (
    get_revenue_data_source,
    get_curated_date_data_source,
    get_waitlist_repository,
    get_verification_code_store,
)
from app.data_sources.mock_sources import (
    MockRevenueDataSource,
    MockCuratedDateDataSource,
    MockWaitlistRepository,
    MockVerificationCodeStore,
)
from app.models.admin.revenue_models import Transaction, TransactionType, TransactionStatus, PaymentMethod
from app.models.admin.curated_date_models import (
    CuratedDate,
    CuratedDateStatus,
    DateType,
    DateParticipant,
    DateFeedback,
    ParticipantFeedback,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for transactions; every field can be overridden"""
    counter = {"n": 0}

    def _make(**overrides) -> Transaction:
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            id=f"t{n}",
            transaction_id=f"TXN{n:08d}",
            user_id="u1",
            user_name="Rahul Sharma",
            user_email="rahul@example.com",
            type=TransactionType.PURCHASE,
            amount=1000,
            status=TransactionStatus.COMPLETED,
            payment_method=PaymentMethod.CARD,
            description="Purchase of 100 Love Tokens",
            love_tokens=100,
            created_at=NOW - timedelta(days=n),
        )
        fields.update(overrides)
        return Transaction(**fields)

    return _make


@pytest.fixture
def make_feedback() -> Callable[..., DateFeedback]:
    def _make(rating1: int = 4, rating2: int = 4, interested1: bool = False, interested2: bool = False) -> DateFeedback:
        return DateFeedback(
            user1=ParticipantFeedback(rating=rating1, interested=interested1, submitted_at=NOW),
            user2=ParticipantFeedback(rating=rating2, interested=interested2, submitted_at=NOW),
        )

    return _make


@pytest.fixture
def make_curated_date() -> Callable[..., CuratedDate]:
    """Factory for curated dates; every field can be overridden"""
    counter = {"n": 0}

    def _make(**overrides) -> CuratedDate:
        counter["n"] += 1
        n = counter["n"]
        scheduled_at = overrides.pop("scheduled_at", NOW - timedelta(days=n))
        fields = dict(
            id=f"cd{n}",
            date_id=f"DATE{n:06d}",
            user1=DateParticipant(id=f"u{n * 2 - 1}", first_name="John", last_name="Smith", email="john@example.com", age=28, city="Bangalore"),
            user2=DateParticipant(id=f"u{n * 2}", first_name="Emma", last_name="Davis", email="emma@example.com", age=27, city="Bangalore"),
            date_type=DateType.ONLINE,
            scheduled_at=scheduled_at,
            status=CuratedDateStatus.SCHEDULED,
            match_score=80,
            created_at=scheduled_at - timedelta(days=7),
            created_by="Admin User",
            last_updated_at=scheduled_at,
        )
        fields.update(overrides)
        return CuratedDate(**fields)

    return _make


@pytest.fixture
def revenue_source() -> MockRevenueDataSource:
    return MockRevenueDataSource(count=60, seed=7)


@pytest.fixture
def curated_date_source() -> MockCuratedDateDataSource:
    return MockCuratedDateDataSource(count=40, seed=7)


@pytest.fixture
def waitlist_repository() -> MockWaitlistRepository:
    return MockWaitlistRepository()


@pytest.fixture
def code_store() -> MockVerificationCodeStore:
    return MockVerificationCodeStore()


@pytest.fixture
def client(revenue_source, curated_date_source, waitlist_repository, code_store) -> Generator[TestClient, None, None]:
    """FastAPI test client with an admin caller and in-memory data sources"""
    app.dependency_overrides[get_current_admin_user_id] = lambda: "user_admin"
    app.dependency_overrides[get_revenue_data_source] = lambda: revenue_source
    app.dependency_overrides[get_curated_date_data_source] = lambda: curated_date_source
    app.dependency_overrides[get_waitlist_repository] = lambda: waitlist_repository
    app.dependency_overrides[get_verification_code_store] = lambda: code_store

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(revenue_source, curated_date_source) -> Generator[TestClient, None, None]:
    """Test client without the admin override"""
    app.dependency_overrides[get_revenue_data_source] = lambda: revenue_source
    app.dependency_overrides[get_curated_date_data_source] = lambda: curated_date_source

    yield TestClient(app)

    app.dependency_overrides.clear()
