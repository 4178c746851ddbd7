from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime
from enum import Enum

# =====================================
# TRANSACTION MODELS
# =====================================


class TransactionType(str, Enum):
    PURCHASE = "purchase"
    REFUND = "refund"
    SUBSCRIPTION = "subscription"
    BONUS = "bonus"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"
    WALLET = "wallet"


class TransactionMetadata(BaseModel):
    order_id: Optional[str] = None
    subscription_plan: Optional[str] = None
    promo_code: Optional[str] = None
    referral_code: Optional[str] = None


class Transaction(BaseModel):
    """Single payment record; amount is negative for refunds"""

    id: str
    transaction_id: str
    user_id: str
    user_name: str
    user_email: str
    type: TransactionType
    amount: int
    currency: Literal["INR"] = "INR"
    status: TransactionStatus
    payment_method: PaymentMethod
    description: str
    love_tokens: Optional[int] = None
    created_at: datetime
    completed_at: Optional[datetime] = None
    refunded_at: Optional[datetime] = None
    metadata: TransactionMetadata = Field(default_factory=TransactionMetadata)


class DateRange(BaseModel):
    """Inclusive on both bounds"""

    from_: datetime = Field(alias="from")
    to: datetime

    model_config = {"populate_by_name": True}


class RevenueFilters(BaseModel):
    search: str = ""
    status: Literal["all", "pending", "completed", "failed", "refunded"] = "all"
    type: Literal["all", "purchase", "refund", "subscription", "bonus"] = "all"
    payment_method: Literal["all", "card", "upi", "netbanking", "wallet"] = "all"
    date_range: Optional[DateRange] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None


class PaginatedTransactionsResponse(BaseModel):
    transactions: List[Transaction]
    total_count: int
    page: int
    page_size: int
    total_pages: int


# =====================================
# REVENUE ANALYTICS RESPONSE MODELS
# =====================================


class RevenueMetrics(BaseModel):
    """Revenue overview for the admin dashboard"""

    total_revenue: int
    monthly_revenue: int
    weekly_revenue: int
    daily_revenue: int
    average_transaction_value: int
    total_transactions: int
    successful_transactions: int
    failed_transactions: int
    refunded_amount: int
    growth_rate: float


class RevenueByPeriod(BaseModel):
    date: str  # Format: "YYYY-MM-DD" for charting
    revenue: int
    transactions: int
    refunds: int


class RevenueByCategory(BaseModel):
    category: str
    revenue: int
    percentage: int
    transactions: int


class TopUser(BaseModel):
    user_id: str
    user_name: str
    user_email: str
    total_spent: int
    transaction_count: int
    last_purchase: datetime
    love_tokens_purchased: int


class PaymentMethodStats(BaseModel):
    method: PaymentMethod
    revenue: int
    transactions: int
    percentage: int


class SubscriptionMetrics(BaseModel):
    active_subscriptions: int
    new_subscriptions: int
    cancelled_subscriptions: int
    monthly_recurring_revenue: int
    churn_rate: int
