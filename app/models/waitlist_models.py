from pydantic import BaseModel, EmailStr, Field
from typing import List
from datetime import datetime


class WaitlistCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr


class WaitlistEntryResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime


class PaginatedWaitlistResponse(BaseModel):
    entries: List[WaitlistEntryResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class WaitlistCountResponse(BaseModel):
    count: int
