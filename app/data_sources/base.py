from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from app.models.admin.revenue_models import Transaction
from app.models.admin.curated_date_models import CuratedDate
from app.models.waitlist_models import WaitlistEntryResponse

# Services depend on these interfaces only; the mock or Supabase implementation is picked in
# app/data_sources/providers.py from settings.USE_MOCK_DATA.


class RevenueDataSource(ABC):
    @abstractmethod
    async def list_transactions(self) -> List[Transaction]: ...

    @abstractmethod
    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]: ...


class CuratedDateDataSource(ABC):
    @abstractmethod
    async def list_curated_dates(self) -> List[CuratedDate]: ...

    @abstractmethod
    async def get_curated_date(self, date_id: str) -> Optional[CuratedDate]: ...

    @abstractmethod
    async def update_curated_date(self, date_id: str, changes: Dict[str, Any]) -> Optional[CuratedDate]:
        """Apply changes and return the updated record, or None when the id is unknown"""


class WaitlistRepository(ABC):
    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[WaitlistEntryResponse]: ...

    @abstractmethod
    async def add_entry(self, name: str, email: str) -> WaitlistEntryResponse: ...

    @abstractmethod
    async def list_entries(self, offset: int, limit: int) -> List[WaitlistEntryResponse]:
        """Newest first"""

    @abstractmethod
    async def count_entries(self) -> int: ...


class VerificationCodeStore(ABC):
    @abstractmethod
    async def save_code(self, email: str, code: str, expires_at: float) -> None: ...

    @abstractmethod
    async def get_code(self, email: str) -> Optional[Dict[str, Any]]:
        """{"code", "attempts", "expires_at"} or None"""

    @abstractmethod
    async def record_attempt(self, email: str, attempts: int) -> None: ...

    @abstractmethod
    async def delete_code(self, email: str) -> None: ...
