from app.data_sources.base import RevenueDataSource, CuratedDateDataSource, WaitlistRepository, VerificationCodeStore
from app.data_sources.mock_data import generate_mock_transactions, generate_mock_curated_dates
from app.models.admin.revenue_models import Transaction
from app.models.admin.curated_date_models import CuratedDate
from app.models.waitlist_models import WaitlistEntryResponse
from app.utils.date_utils import utc_now
from typing import Any, Dict, List, Optional
import uuid

# In-memory implementations used while USE_MOCK_DATA is on and in tests.
# Each instance owns its records; reads hand out copies so callers cannot mutate the store.


class MockRevenueDataSource(RevenueDataSource):
    def __init__(self, transactions: Optional[List[Transaction]] = None, count: int = 150, seed: Optional[int] = None):
        self._transactions = transactions if transactions is not None else generate_mock_transactions(count, seed=seed)

    async def list_transactions(self) -> List[Transaction]:
        return list(self._transactions)

    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction_id in (transaction.id, transaction.transaction_id):
                return transaction
        return None


class MockCuratedDateDataSource(CuratedDateDataSource):
    def __init__(self, dates: Optional[List[CuratedDate]] = None, count: int = 50, seed: Optional[int] = None):
        self._dates = dates if dates is not None else generate_mock_curated_dates(count, seed=seed)

    async def list_curated_dates(self) -> List[CuratedDate]:
        return list(self._dates)

    async def get_curated_date(self, date_id: str) -> Optional[CuratedDate]:
        for curated_date in self._dates:
            if date_id in (curated_date.id, curated_date.date_id):
                return curated_date
        return None

    async def update_curated_date(self, date_id: str, changes: Dict[str, Any]) -> Optional[CuratedDate]:
        for index, curated_date in enumerate(self._dates):
            if date_id in (curated_date.id, curated_date.date_id):
                # replace rather than mutate so earlier snapshots stay as they were
                updated = curated_date.model_copy(update=changes)
                self._dates[index] = updated
                return updated
        return None


class MockWaitlistRepository(WaitlistRepository):
    def __init__(self):
        self._entries: List[WaitlistEntryResponse] = []

    async def find_by_email(self, email: str) -> Optional[WaitlistEntryResponse]:
        email_lower = email.lower()
        return next((entry for entry in self._entries if entry.email.lower() == email_lower), None)

    async def add_entry(self, name: str, email: str) -> WaitlistEntryResponse:
        entry = WaitlistEntryResponse(id=str(uuid.uuid4()), name=name, email=email.lower(), created_at=utc_now())
        self._entries.append(entry)
        return entry

    async def list_entries(self, offset: int, limit: int) -> List[WaitlistEntryResponse]:
        newest_first = list(reversed(self._entries))
        return newest_first[offset : offset + limit]

    async def count_entries(self) -> int:
        return len(self._entries)


class MockVerificationCodeStore(VerificationCodeStore):
    def __init__(self):
        self._codes: Dict[str, Dict[str, Any]] = {}

    async def save_code(self, email: str, code: str, expires_at: float) -> None:
        self._codes[email.lower()] = {"code": code, "attempts": 0, "expires_at": expires_at}

    async def get_code(self, email: str) -> Optional[Dict[str, Any]]:
        record = self._codes.get(email.lower())
        return dict(record) if record else None

    async def record_attempt(self, email: str, attempts: int) -> None:
        if email.lower() in self._codes:
            self._codes[email.lower()]["attempts"] = attempts

    async def delete_code(self, email: str) -> None:
        self._codes.pop(email.lower(), None)
