from supabase import AsyncClient
from app.data_sources.base import RevenueDataSource, CuratedDateDataSource, WaitlistRepository, VerificationCodeStore
from app.models.admin.revenue_models import Transaction
from app.models.admin.curated_date_models import CuratedDate
from app.models.waitlist_models import WaitlistEntryResponse
from app.custom_error import DatabaseError
from app.utils.query_params import ensure_record_id
from pydantic import BaseModel
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

# table layout:
# - transactions: one column per Transaction field, metadata as jsonb
# - curated_dates: one column per CuratedDate field, user1 / user2 / location / genie / feedback as jsonb
# - waitlist: id, name, email (unique, lower-cased), created_at
# - verification_codes: email (primary key), code, attempts, expires_at


def _to_row(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize nested models, enums and datetimes into json-safe column values"""
    row = {}
    for key, value in changes.items():
        if isinstance(value, BaseModel):
            row[key] = value.model_dump(mode="json")
        elif isinstance(value, datetime):
            row[key] = value.isoformat()
        elif isinstance(value, Enum):
            row[key] = value.value
        else:
            row[key] = value
    return row


def _id_filter(record_id: str, number_column: str) -> str:
    """Match a record by its uuid or its human readable number"""
    record_id = ensure_record_id(record_id)
    return f"id.eq.{record_id},{number_column}.eq.{record_id}"


class SupabaseRevenueDataSource(RevenueDataSource):
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def list_transactions(self) -> List[Transaction]:
        result = await self.supabase_client.table("transactions").select("*").order("created_at", desc=True).execute()
        return [Transaction(**row) for row in result.data or []]

    async def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        result = (
            await self.supabase_client.table("transactions")
            .select("*")
            .or_(_id_filter(transaction_id, "transaction_id"))
            .limit(1)
            .execute()
        )
        return Transaction(**result.data[0]) if result.data else None


class SupabaseCuratedDateDataSource(CuratedDateDataSource):
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def list_curated_dates(self) -> List[CuratedDate]:
        result = await self.supabase_client.table("curated_dates").select("*").order("scheduled_at", desc=True).execute()
        return [CuratedDate(**row) for row in result.data or []]

    async def get_curated_date(self, date_id: str) -> Optional[CuratedDate]:
        result = await self.supabase_client.table("curated_dates").select("*").or_(_id_filter(date_id, "date_id")).limit(1).execute()
        return CuratedDate(**result.data[0]) if result.data else None

    async def update_curated_date(self, date_id: str, changes: Dict[str, Any]) -> Optional[CuratedDate]:
        result = await self.supabase_client.table("curated_dates").update(_to_row(changes)).or_(_id_filter(date_id, "date_id")).execute()
        return CuratedDate(**result.data[0]) if result.data else None


class SupabaseWaitlistRepository(WaitlistRepository):
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def find_by_email(self, email: str) -> Optional[WaitlistEntryResponse]:
        result = await self.supabase_client.table("waitlist").select("*").eq("email", email.lower()).execute()
        return WaitlistEntryResponse(**result.data[0]) if result.data else None

    async def add_entry(self, name: str, email: str) -> WaitlistEntryResponse:
        result = await self.supabase_client.table("waitlist").insert({"name": name, "email": email.lower()}).execute()
        if not result.data:
            raise DatabaseError("Failed to add waitlist entry")
        return WaitlistEntryResponse(**result.data[0])

    async def list_entries(self, offset: int, limit: int) -> List[WaitlistEntryResponse]:
        result = (
            await self.supabase_client.table("waitlist")
            .select("*")
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [WaitlistEntryResponse(**row) for row in result.data or []]

    async def count_entries(self) -> int:
        result = await self.supabase_client.table("waitlist").select("id", count="exact").execute()
        return result.count if result.count else 0


class SupabaseVerificationCodeStore(VerificationCodeStore):
    def __init__(self, supabase_client: AsyncClient):
        self.supabase_client = supabase_client

    async def save_code(self, email: str, code: str, expires_at: float) -> None:
        await self.supabase_client.table("verification_codes").upsert(
            {"email": email.lower(), "code": code, "attempts": 0, "expires_at": expires_at}
        ).execute()

    async def get_code(self, email: str) -> Optional[Dict[str, Any]]:
        result = await self.supabase_client.table("verification_codes").select("code, attempts, expires_at").eq("email", email.lower()).execute()
        return result.data[0] if result.data else None

    async def record_attempt(self, email: str, attempts: int) -> None:
        await self.supabase_client.table("verification_codes").update({"attempts": attempts}).eq("email", email.lower()).execute()

    async def delete_code(self, email: str) -> None:
        await self.supabase_client.table("verification_codes").delete().eq("email", email.lower()).execute()
