from app.models.admin.curated_date_models import CuratedDate, CuratedDateStatus, DateStats
from app.services.admin.revenue_aggregations import percentage, round_half_up
from typing import List


def compute_success_rate(dates: List[CuratedDate]) -> int:
    """Share of completed dates where at least one participant wants to meet again"""
    completed = [d for d in dates if d.status == CuratedDateStatus.COMPLETED]
    interested = [d for d in completed if d.feedback and (d.feedback.user1.interested or d.feedback.user2.interested)]
    return percentage(len(interested), len(completed))


def compute_average_rating(dates: List[CuratedDate]) -> float:
    """Mean of both participants' ratings over completed dates, one decimal"""
    ratings = []
    for d in dates:
        if d.status == CuratedDateStatus.COMPLETED and d.feedback:
            ratings.extend([d.feedback.user1.rating, d.feedback.user2.rating])

    if not ratings:
        return 0.0
    return round_half_up(sum(ratings) / len(ratings), 1)


def compute_date_stats(dates: List[CuratedDate]) -> DateStats:
    counts = {status: 0 for status in CuratedDateStatus}
    for d in dates:
        counts[d.status] += 1

    return DateStats(
        total=len(dates),
        scheduled=counts[CuratedDateStatus.SCHEDULED],
        ongoing=counts[CuratedDateStatus.ONGOING],
        completed=counts[CuratedDateStatus.COMPLETED],
        cancelled=counts[CuratedDateStatus.CANCELLED],
        no_show=counts[CuratedDateStatus.NO_SHOW],
        success_rate=compute_success_rate(dates),
        average_rating=compute_average_rating(dates),
    )
