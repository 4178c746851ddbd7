from app.data_sources.base import WaitlistRepository
from app.services.email_services import EmailService
from app.models.waitlist_models import (
    WaitlistCreate,
    WaitlistEntryResponse,
    PaginatedWaitlistResponse,
    WaitlistCountResponse,
)
from app.utils.pagination import count_pages
from app.custom_error import ConflictError, ServerError
import logging

logger = logging.getLogger(__name__)


class WaitlistService:
    def __init__(self, repository: WaitlistRepository):
        self.repository = repository

    async def add_to_waitlist(self, waitlist_entry: WaitlistCreate) -> WaitlistEntryResponse:
        """Add a signup; emails are unique regardless of case"""
        try:
            existing = await self.repository.find_by_email(waitlist_entry.email)
            if existing:
                raise ConflictError("Email is already on the waitlist")

            entry = await self.repository.add_entry(waitlist_entry.name.strip(), waitlist_entry.email)
            logger.info(f"✅ Waitlist signup {entry.email}")

            EmailService.send_waitlist_welcome(entry.email, entry.name)
            return entry

        except Exception as e:
            logger.error(f"Error adding to waitlist: {str(e)}")
            if isinstance(e, ConflictError):
                raise e
            raise ServerError(f"Failed to add to waitlist: {str(e)}")

    # --------------------------------------------------------------

    async def get_waitlist_data(self, page: int = 1, page_size: int = 30) -> PaginatedWaitlistResponse:
        try:
            offset = (page - 1) * page_size
            total = await self.repository.count_entries()
            entries = await self.repository.list_entries(offset, page_size)

            return PaginatedWaitlistResponse(
                entries=entries,
                total_count=total,
                page=page,
                page_size=page_size,
                total_pages=count_pages(total, page_size),
            )

        except Exception as e:
            logger.error(f"Error fetching waitlist: {str(e)}")
            raise ServerError(f"Failed to fetch waitlist: {str(e)}")

    # --------------------------------------------------------------

    async def get_waitlist_count(self) -> WaitlistCountResponse:
        try:
            return WaitlistCountResponse(count=await self.repository.count_entries())

        except Exception as e:
            logger.error(f"Error counting waitlist: {str(e)}")
            raise ServerError(f"Failed to count waitlist: {str(e)}")
