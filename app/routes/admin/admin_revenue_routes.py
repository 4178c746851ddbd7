from fastapi import APIRouter, Depends, Path, Query
from app.data_sources.base import RevenueDataSource
from app.data_sources.providers import get_revenue_data_source
from app.services.admin.admin_revenue_services import AdminRevenueService
from app.utils.admin_auth import get_current_admin_user_id
from app.utils.query_params import build_date_range, RECORD_ID_PATTERN
from app.custom_error import ValidationError
from app.models.admin.revenue_models import (
    Transaction,
    RevenueFilters,
    PaginatedTransactionsResponse,
    RevenueMetrics,
    RevenueByPeriod,
    RevenueByCategory,
    TopUser,
    PaymentMethodStats,
    SubscriptionMetrics,
)
from datetime import datetime
from typing import List, Literal, Optional

admin_revenue_router = APIRouter(prefix="/admin/revenue", tags=["Admin"], dependencies=[Depends(get_current_admin_user_id)])


async def get_admin_revenue_service(data_source: RevenueDataSource = Depends(get_revenue_data_source)) -> AdminRevenueService:
    """Dependency to get AdminRevenueService instance"""
    return AdminRevenueService(data_source)


async def get_revenue_filters(
    search: str = Query("", max_length=100, description="Matches user name, email or transaction id"),
    status: Literal["all", "pending", "completed", "failed", "refunded"] = Query("all"),
    type: Literal["all", "purchase", "refund", "subscription", "bonus"] = Query("all"),
    payment_method: Literal["all", "card", "upi", "netbanking", "wallet"] = Query("all"),
    date_from: Optional[datetime] = Query(None, description="Inclusive lower bound on created_at"),
    date_to: Optional[datetime] = Query(None, description="Inclusive upper bound on created_at"),
    min_amount: Optional[float] = Query(None, ge=0),
    max_amount: Optional[float] = Query(None, ge=0),
) -> RevenueFilters:
    """Collect transaction filters from the query string"""
    if min_amount is not None and max_amount is not None and min_amount > max_amount:
        raise ValidationError("min_amount cannot be greater than max_amount")

    return RevenueFilters(
        search=search.strip(),
        status=status,
        type=type,
        payment_method=payment_method,
        date_range=build_date_range(date_from, date_to),
        min_amount=min_amount,
        max_amount=max_amount,
    )


# =====================================
# TRANSACTION ENDPOINTS
# =====================================


@admin_revenue_router.get("/transactions", response_model=PaginatedTransactionsResponse)
async def get_transactions(
    filters: RevenueFilters = Depends(get_revenue_filters),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
    revenue_service: AdminRevenueService = Depends(get_admin_revenue_service),
):
    """Get filtered transactions, newest first, with pagination"""
    return await revenue_service.get_transactions(filters, page, page_size)


# --------------------------------------------------------------


@admin_revenue_router.get("/transactions/{transaction_id}", response_model=Transaction)
async def get_transaction(
    transaction_id: str = Path(..., pattern=RECORD_ID_PATTERN),
    revenue_service: AdminRevenueService = Depends(get_admin_revenue_service),
):
    """Get a single transaction by id or TXN number"""
    return await revenue_service.get_transaction(transaction_id)


# =====================================
# ANALYTICS ENDPOINTS
# =====================================


@admin_revenue_router.get("/overview", response_model=RevenueMetrics)
async def get_revenue_overview(revenue_service: AdminRevenueService = Depends(get_admin_revenue_service)):
    """Get revenue totals, transaction counts and growth rate"""
    return await revenue_service.get_revenue_metrics()


@admin_revenue_router.get("/analytics/trends", response_model=List[RevenueByPeriod])
async def get_revenue_trends(
    days: int = Query(30, ge=1, le=365, description="Number of days to chart"),
    revenue_service: AdminRevenueService = Depends(get_admin_revenue_service),
):
    """Get daily revenue for the last `days` days"""
    return await revenue_service.get_revenue_by_period(days)


@admin_revenue_router.get("/analytics/by-category", response_model=List[RevenueByCategory])
async def get_revenue_by_category(revenue_service: AdminRevenueService = Depends(get_admin_revenue_service)):
    return await revenue_service.get_revenue_by_category()


@admin_revenue_router.get("/analytics/top-users", response_model=List[TopUser])
async def get_top_users(
    limit: int = Query(10, ge=1, le=100),
    revenue_service: AdminRevenueService = Depends(get_admin_revenue_service),
):
    return await revenue_service.get_top_users(limit)


@admin_revenue_router.get("/analytics/payment-methods", response_model=List[PaymentMethodStats])
async def get_payment_method_stats(revenue_service: AdminRevenueService = Depends(get_admin_revenue_service)):
    return await revenue_service.get_payment_method_stats()


@admin_revenue_router.get("/analytics/subscriptions", response_model=SubscriptionMetrics)
async def get_subscription_metrics(revenue_service: AdminRevenueService = Depends(get_admin_revenue_service)):
    return await revenue_service.get_subscription_metrics()
