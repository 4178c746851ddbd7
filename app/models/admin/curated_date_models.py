from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime
from enum import Enum
from app.models.admin.revenue_models import DateRange

# =====================================
# CURATED DATE MODELS
# =====================================


class CuratedDateStatus(str, Enum):
    SCHEDULED = "scheduled"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class DateType(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class DateParticipant(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    profile_picture: Optional[str] = None
    age: int
    city: str


class DateLocation(BaseModel):
    name: str
    address: str
    city: str


class Genie(BaseModel):
    """Staff coordinator attached to an offline date"""

    id: str
    name: str
    email: str


class ParticipantFeedback(BaseModel):
    rating: int = Field(ge=1, le=5)
    interested: bool
    comments: Optional[str] = None
    submitted_at: datetime


class DateFeedback(BaseModel):
    user1: ParticipantFeedback
    user2: ParticipantFeedback


class CuratedDate(BaseModel):
    """Admin-arranged date between two users"""

    id: str
    date_id: str
    user1: DateParticipant
    user2: DateParticipant
    date_type: DateType
    scheduled_at: datetime
    status: CuratedDateStatus
    location: Optional[DateLocation] = None
    genie: Optional[Genie] = None
    feedback: Optional[DateFeedback] = None
    match_score: int = Field(ge=0, le=100)
    created_at: datetime
    created_by: str
    last_updated_at: datetime
    cancellation_reason: Optional[str] = None
    notes: Optional[str] = None


class DateFilters(BaseModel):
    search: str = ""
    status: Literal["all", "scheduled", "ongoing", "completed", "cancelled", "no_show"] = "all"
    date_type: Literal["all", "online", "offline"] = "all"
    city: Optional[str] = None
    date_range: Optional[DateRange] = None
    has_issues: bool = False


class PaginatedDatesResponse(BaseModel):
    dates: List[CuratedDate]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class DateStats(BaseModel):
    """Status counts plus outcome rates over completed dates"""

    total: int
    scheduled: int
    ongoing: int
    completed: int
    cancelled: int
    no_show: int
    success_rate: int
    average_rating: float


# =====================================
# REQUEST MODELS
# =====================================


class UpdateDateStatusRequest(BaseModel):
    status: CuratedDateStatus
    reason: Optional[str] = Field(default=None, max_length=2000)


class AddDateNoteRequest(BaseModel):
    note: str = Field(min_length=1, max_length=2000)


class DateUpdateResponse(BaseModel):
    success: bool
    date: CuratedDate
