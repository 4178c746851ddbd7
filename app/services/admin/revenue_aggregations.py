from app.models.admin.revenue_models import (
    Transaction,
    TransactionType,
    TransactionStatus,
    PaymentMethod,
    RevenueMetrics,
    RevenueByPeriod,
    RevenueByCategory,
    TopUser,
    PaymentMethodStats,
    SubscriptionMetrics,
)
from app.utils.date_utils import as_utc, start_of_day, days_ago_start
from datetime import datetime, timedelta
from typing import List, Dict, Optional
import math

# Pure reducers over transaction lists. Callers pass `now` so windows are reproducible.

REVENUE_CATEGORIES = [TransactionType.PURCHASE, TransactionType.SUBSCRIPTION, TransactionType.BONUS]
SUBSCRIPTION_PRICE = 999
SUBSCRIPTION_CHURN_ESTIMATE = 0.1


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: float, whole: float) -> int:
    """Integer share of whole in [0, 100]; 0 when whole is empty"""
    if whole <= 0:
        return 0
    return int(min(100, max(0, round_half_up(part / whole * 100))))


def _completed(transactions: List[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.status == TransactionStatus.COMPLETED]


def _completed_income(transactions: List[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.status == TransactionStatus.COMPLETED and t.amount > 0]


def _positive_sum(transactions: List[Transaction]) -> int:
    return sum(t.amount for t in transactions if t.amount > 0)


def _since(transactions: List[Transaction], start: datetime) -> List[Transaction]:
    return [t for t in transactions if as_utc(t.created_at) >= start]


# =====================================
# OVERVIEW
# =====================================


def compute_growth_rate(transactions: List[Transaction], now: datetime, window_days: int = 30) -> float:
    """Change of completed revenue in the last window against the window before it, in percent"""
    current_start = days_ago_start(now, window_days)
    previous_start = days_ago_start(now, window_days * 2)

    completed = _completed(transactions)
    current = _positive_sum(_since(completed, current_start))
    previous = _positive_sum([t for t in completed if previous_start <= as_utc(t.created_at) < current_start])

    if previous == 0:
        return 0.0
    return round_half_up((current - previous) / previous * 100, 1)


def compute_revenue_metrics(transactions: List[Transaction], now: datetime) -> RevenueMetrics:
    completed = _completed(transactions)

    purchases = [t for t in completed if t.type == TransactionType.PURCHASE]
    average_transaction_value = int(round_half_up(sum(t.amount for t in purchases) / len(purchases))) if purchases else 0

    return RevenueMetrics(
        total_revenue=_positive_sum(completed),
        monthly_revenue=_positive_sum(_since(completed, days_ago_start(now, 30))),
        weekly_revenue=_positive_sum(_since(completed, days_ago_start(now, 7))),
        daily_revenue=_positive_sum(_since(completed, start_of_day(now))),
        average_transaction_value=average_transaction_value,
        total_transactions=len(transactions),
        successful_transactions=len(completed),
        failed_transactions=len([t for t in transactions if t.status == TransactionStatus.FAILED]),
        refunded_amount=sum(abs(t.amount) for t in transactions if t.status == TransactionStatus.REFUNDED),
        growth_rate=compute_growth_rate(transactions, now),
    )


# =====================================
# BREAKDOWNS
# =====================================


def compute_revenue_by_period(transactions: List[Transaction], now: datetime, days: int = 30) -> List[RevenueByPeriod]:
    """One row per day, oldest first, covering the last `days` days including today"""
    today = start_of_day(now).date()
    daily: Dict[str, List[Transaction]] = {}
    for offset in range(days - 1, -1, -1):
        daily[(today - timedelta(days=offset)).isoformat()] = []

    for transaction in _completed(transactions):
        day = as_utc(transaction.created_at).date().isoformat()
        if day in daily:
            daily[day].append(transaction)

    return [
        RevenueByPeriod(
            date=day,
            revenue=_positive_sum(day_transactions),
            transactions=len([t for t in day_transactions if t.amount > 0]),
            refunds=len([t for t in day_transactions if t.type == TransactionType.REFUND]),
        )
        for day, day_transactions in daily.items()
    ]


def compute_revenue_by_category(transactions: List[Transaction]) -> List[RevenueByCategory]:
    income = _completed_income(transactions)
    total_revenue = sum(t.amount for t in income)

    breakdown = []
    for category in REVENUE_CATEGORIES:
        category_transactions = [t for t in income if t.type == category]
        category_revenue = sum(t.amount for t in category_transactions)
        breakdown.append(
            RevenueByCategory(
                category=category.value.capitalize(),
                revenue=category_revenue,
                percentage=percentage(category_revenue, total_revenue),
                transactions=len(category_transactions),
            )
        )
    return breakdown


def compute_payment_method_stats(transactions: List[Transaction]) -> List[PaymentMethodStats]:
    income = _completed_income(transactions)
    total_revenue = sum(t.amount for t in income)

    stats = []
    for method in PaymentMethod:
        method_transactions = [t for t in income if t.payment_method == method]
        method_revenue = sum(t.amount for t in method_transactions)
        stats.append(
            PaymentMethodStats(
                method=method,
                revenue=method_revenue,
                transactions=len(method_transactions),
                percentage=percentage(method_revenue, total_revenue),
            )
        )
    return stats


def compute_top_users(transactions: List[Transaction], limit: int = 10) -> List[TopUser]:
    spending: Dict[str, TopUser] = {}

    for t in _completed_income(transactions):
        user: Optional[TopUser] = spending.get(t.user_id)
        if user is None:
            user = TopUser(
                user_id=t.user_id,
                user_name=t.user_name,
                user_email=t.user_email,
                total_spent=0,
                transaction_count=0,
                last_purchase=t.created_at,
                love_tokens_purchased=0,
            )
            spending[t.user_id] = user

        user.total_spent += t.amount
        user.transaction_count += 1
        user.love_tokens_purchased += t.love_tokens or 0
        if as_utc(t.created_at) > as_utc(user.last_purchase):
            user.last_purchase = t.created_at

    ranked = sorted(spending.values(), key=lambda u: u.total_spent, reverse=True)
    return ranked[:limit]


def compute_subscription_metrics(transactions: List[Transaction], now: datetime) -> SubscriptionMetrics:
    subscriptions = [t for t in transactions if t.type == TransactionType.SUBSCRIPTION and t.status == TransactionStatus.COMPLETED]
    active = len(subscriptions)
    new = len(_since(subscriptions, days_ago_start(now, 30)))
    # no cancellation events are recorded yet, churn is estimated from the active base
    cancelled = math.floor(active * SUBSCRIPTION_CHURN_ESTIMATE)

    return SubscriptionMetrics(
        active_subscriptions=active,
        new_subscriptions=new,
        cancelled_subscriptions=cancelled,
        monthly_recurring_revenue=active * SUBSCRIPTION_PRICE,
        churn_rate=percentage(cancelled, active),
    )
