from app.data_sources.base import RevenueDataSource
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
from app.services.admin.revenue_aggregations import (
    compute_revenue_metrics,
    compute_revenue_by_period,
    compute_revenue_by_category,
    compute_top_users,
    compute_payment_method_stats,
    compute_subscription_metrics,
)
from app.utils.record_filters import filter_transactions
from app.utils.pagination import sort_newest_first, paginate, count_pages
from app.utils.date_utils import utc_now, as_utc
from app.custom_error import ServerError, ValidationError, TransactionNotFoundError
from datetime import datetime
from typing import Callable, List, Optional
import logging

logger = logging.getLogger(__name__)


class AdminRevenueService:
    def __init__(self, data_source: RevenueDataSource, clock: Callable[[], datetime] = utc_now):
        self.data_source = data_source
        self.clock = clock

    # =====================================
    # TRANSACTIONS
    # =====================================

    async def get_transactions(self, filters: Optional[RevenueFilters] = None, page: int = 1, page_size: int = 10) -> PaginatedTransactionsResponse:
        """Filtered, newest-first page of transactions"""
        try:
            transactions = await self.data_source.list_transactions()

            filtered = filter_transactions(transactions, filters)
            ordered = sort_newest_first(filtered, key=lambda t: as_utc(t.created_at))
            page_items, total = paginate(ordered, page, page_size)

            return PaginatedTransactionsResponse(
                transactions=page_items,
                total_count=total,
                page=page,
                page_size=page_size,
                total_pages=count_pages(total, page_size),
            )

        except Exception as e:
            logger.error(f"Error fetching transactions: {str(e)}")
            raise ServerError(f"Failed to fetch transactions: {str(e)}")

    # --------------------------------------------------------------

    async def get_transaction(self, transaction_id: str) -> Transaction:
        try:
            transaction = await self.data_source.get_transaction(transaction_id)
            if transaction is None:
                raise TransactionNotFoundError()
            return transaction

        except Exception as e:
            logger.error(f"Error fetching transaction {transaction_id}: {str(e)}")
            if isinstance(e, (TransactionNotFoundError, ValidationError)):
                raise e
            raise ServerError(f"Failed to fetch transaction: {str(e)}")

    # =====================================
    # ANALYTICS
    # =====================================

    async def get_revenue_metrics(self) -> RevenueMetrics:
        try:
            transactions = await self.data_source.list_transactions()
            return compute_revenue_metrics(transactions, self.clock())

        except Exception as e:
            logger.error(f"Error calculating revenue metrics: {str(e)}")
            raise ServerError(f"Failed to fetch revenue metrics: {str(e)}")

    async def get_revenue_by_period(self, days: int = 30) -> List[RevenueByPeriod]:
        try:
            transactions = await self.data_source.list_transactions()
            return compute_revenue_by_period(transactions, self.clock(), days)

        except Exception as e:
            logger.error(f"Error calculating revenue trends: {str(e)}")
            raise ServerError(f"Failed to fetch revenue trends: {str(e)}")

    async def get_revenue_by_category(self) -> List[RevenueByCategory]:
        try:
            transactions = await self.data_source.list_transactions()
            return compute_revenue_by_category(transactions)

        except Exception as e:
            logger.error(f"Error calculating revenue by category: {str(e)}")
            raise ServerError(f"Failed to fetch revenue by category: {str(e)}")

    async def get_top_users(self, limit: int = 10) -> List[TopUser]:
        try:
            transactions = await self.data_source.list_transactions()
            return compute_top_users(transactions, limit)

        except Exception as e:
            logger.error(f"Error calculating top users: {str(e)}")
            raise ServerError(f"Failed to fetch top users: {str(e)}")

    async def get_payment_method_stats(self) -> List[PaymentMethodStats]:
        try:
            transactions = await self.data_source.list_transactions()
            return compute_payment_method_stats(transactions)

        except Exception as e:
            logger.error(f"Error calculating payment method stats: {str(e)}")
            raise ServerError(f"Failed to fetch payment method stats: {str(e)}")

    async def get_subscription_metrics(self) -> SubscriptionMetrics:
        try:
            transactions = await self.data_source.list_transactions()
            return compute_subscription_metrics(transactions, self.clock())

        except Exception as e:
            logger.error(f"Error calculating subscription metrics: {str(e)}")
            raise ServerError(f"Failed to fetch subscription metrics: {str(e)}")
