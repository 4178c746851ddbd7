from app.models.admin.revenue_models import DateRange
from app.custom_error import ValidationError
from app.utils.date_utils import as_utc
from datetime import datetime, timezone
from typing import Optional
import re

OPEN_RANGE_START = datetime.min.replace(tzinfo=timezone.utc)
OPEN_RANGE_END = datetime.max.replace(tzinfo=timezone.utc)


def build_date_range(date_from: Optional[datetime], date_to: Optional[datetime]) -> Optional[DateRange]:
    """Turn optional query bounds into an inclusive DateRange; a missing bound stays open"""
    if date_from is None and date_to is None:
        return None

    date_range = DateRange(from_=date_from or OPEN_RANGE_START, to=date_to or OPEN_RANGE_END)
    if as_utc(date_range.from_) > as_utc(date_range.to):
        raise ValidationError("date_from cannot be after date_to")
    return date_range


# record ids travel into PostgREST filter strings, so only plain id characters are accepted
RECORD_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


def ensure_record_id(record_id: str) -> str:
    if not re.fullmatch(RECORD_ID_PATTERN, record_id):
        raise ValidationError("Invalid record id")
    return record_id
