from typing import Iterable, List, Optional
from datetime import datetime
from app.utils.date_utils import as_utc
from app.models.admin.revenue_models import Transaction, RevenueFilters, DateRange
from app.models.admin.curated_date_models import CuratedDate, CuratedDateStatus, DateFilters

# filters always build a new list and never touch the records passed in.
# "all" and empty values mean the criterion is not present.

ALL = "all"
LOW_RATING_THRESHOLD = 3


def _matches_search(search: str, fields: Iterable[str]) -> bool:
    search_lower = search.lower()
    return any(search_lower in field.lower() for field in fields)


def _within_range(value: datetime, date_range: DateRange) -> bool:
    return as_utc(date_range.from_) <= as_utc(value) <= as_utc(date_range.to)


# =====================================
# TRANSACTIONS
# =====================================


def filter_transactions(transactions: List[Transaction], filters: Optional[RevenueFilters]) -> List[Transaction]:
    """Return the transactions that satisfy every criterion present in filters"""
    filtered = list(transactions)
    if filters is None:
        return filtered

    if filters.search:
        filtered = [t for t in filtered if _matches_search(filters.search, (t.user_name, t.user_email, t.transaction_id))]

    if filters.status != ALL:
        filtered = [t for t in filtered if t.status.value == filters.status]

    if filters.type != ALL:
        filtered = [t for t in filtered if t.type.value == filters.type]

    if filters.payment_method != ALL:
        filtered = [t for t in filtered if t.payment_method.value == filters.payment_method]

    if filters.date_range:
        filtered = [t for t in filtered if _within_range(t.created_at, filters.date_range)]

    # amount bounds compare magnitudes so refunds are caught by the same range
    if filters.min_amount is not None:
        filtered = [t for t in filtered if abs(t.amount) >= filters.min_amount]
    if filters.max_amount is not None:
        filtered = [t for t in filtered if abs(t.amount) <= filters.max_amount]

    return filtered


# =====================================
# CURATED DATES
# =====================================


def has_issues(curated_date: CuratedDate) -> bool:
    """Cancelled, no-show, or rated below 3 by either participant"""
    if curated_date.status in (CuratedDateStatus.CANCELLED, CuratedDateStatus.NO_SHOW):
        return True
    feedback = curated_date.feedback
    if feedback is None:
        return False
    return feedback.user1.rating < LOW_RATING_THRESHOLD or feedback.user2.rating < LOW_RATING_THRESHOLD


def filter_curated_dates(dates: List[CuratedDate], filters: Optional[DateFilters]) -> List[CuratedDate]:
    """Return the curated dates that satisfy every criterion present in filters"""
    filtered = list(dates)
    if filters is None:
        return filtered

    if filters.search:
        filtered = [
            d
            for d in filtered
            if _matches_search(
                filters.search,
                (d.user1.first_name, d.user1.last_name, d.user2.first_name, d.user2.last_name, d.date_id),
            )
        ]

    if filters.status != ALL:
        filtered = [d for d in filtered if d.status.value == filters.status]

    if filters.date_type != ALL:
        filtered = [d for d in filtered if d.date_type.value == filters.date_type]

    if filters.city:
        filtered = [d for d in filtered if d.user1.city == filters.city]

    if filters.date_range:
        filtered = [d for d in filtered if _within_range(d.scheduled_at, filters.date_range)]

    if filters.has_issues:
        filtered = [d for d in filtered if has_issues(d)]

    return filtered
