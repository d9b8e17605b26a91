"""Ledger aggregation domain service.

Builds ``CashRegisterStats`` for a register from scratch by querying the
store for the register's day. Sales and expenses are attributed to the
register by date; recharge transactions by their owning register id.
"""

import logging
from collections import defaultdict
from datetime import timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from tillbook.database.base import Database
from tillbook.domain.entities import (
    ZERO,
    CashRegister,
    CashRegisterStats,
    Expense,
    ItemType,
    PaymentMethod,
    RechargeTransaction,
    Sale,
    SaleType,
)

logger = logging.getLogger(__name__)

# Sales without items are bucketed by their sale type; mixed falls back to product.
_SALE_TYPE_BUCKET = {
    SaleType.PRODUCT: ItemType.PRODUCT,
    SaleType.SERVICE: ItemType.SERVICE,
    SaleType.SUBLIMATION: ItemType.SUBLIMATION,
    SaleType.MIXED: ItemType.PRODUCT,
}


class LedgerAggregator:
    """Service computing daily register statistics."""

    def __init__(self, db: Database):
        """Initialize aggregator.

        Args:
            db: Database instance
        """
        self.db = db

    def compute_stats(self, register: CashRegister) -> CashRegisterStats:
        """Compute stats for a register from the store.

        Args:
            register: Register whose day and opening balance anchor the stats

        Returns:
            CashRegisterStats with current balance
            ``opening + sales - expenses - recharges``

        Raises:
            StoreError: If any of the underlying queries fail
        """
        day = register.date
        sales = self.db.list_sales(start_date=day, end_date=day + timedelta(days=1))
        expenses = self.db.list_expenses(start_date=day, end_date=day)
        recharges = self.db.list_recharge_transactions(register.id)

        stats = self.build_stats(register, sales, expenses, recharges)
        logger.debug(
            "Register %s stats: %d sales, %d expenses, %d recharges, balance %s",
            register.id,
            len(sales),
            len(expenses),
            len(recharges),
            stats.current_balance,
        )
        return stats

    def build_stats(
        self,
        register: CashRegister,
        sales: Sequence[Sale],
        expenses: Sequence[Expense],
        recharges: Sequence[RechargeTransaction],
    ) -> CashRegisterStats:
        """Aggregate already-loaded records into stats."""
        sales_by_type = self.sum_sales_by_item_type(sales)
        recharges_by_method = self.sum_recharges_by_method(recharges)

        total_sales = _sum(sale.total for sale in sales)
        cash_sales = _sum(sale.total for sale in sales if sale.payment_method == PaymentMethod.CASH)
        total_expenses = _sum(expense.amount for expense in expenses)
        total_recharges = sum(recharges_by_method.values(), ZERO)

        opening_balance = register.opening_balance
        return CashRegisterStats(
            total_sales=total_sales,
            total_expenses=total_expenses,
            total_recharges=total_recharges,
            opening_balance=opening_balance,
            current_balance=opening_balance + total_sales - total_expenses - total_recharges,
            closing_balance=register.closing_balance,
            product_sales=sales_by_type[ItemType.PRODUCT],
            service_sales=sales_by_type[ItemType.SERVICE],
            sublimation_sales=sales_by_type[ItemType.SUBLIMATION],
            cash_sales=cash_sales,
            cash_recharges=recharges_by_method[PaymentMethod.CASH],
            transfer_recharges=recharges_by_method[PaymentMethod.TRANSFER],
            other_recharges=sum(
                (
                    amount
                    for method, amount in recharges_by_method.items()
                    if method not in (PaymentMethod.CASH, PaymentMethod.TRANSFER)
                ),
                ZERO,
            ),
        )

    def sum_sales_by_item_type(self, sales: Iterable[Sale]) -> dict[ItemType, Decimal]:
        """Sum item subtotals per item type."""
        totals: dict[ItemType, Decimal] = defaultdict(lambda: ZERO)
        for sale in sales:
            if not sale.items:
                totals[_SALE_TYPE_BUCKET[sale.sale_type]] += sale.total
                continue
            for item in sale.items:
                totals[item.item_type] += item.subtotal
        return totals

    def sum_recharges_by_method(
        self, recharges: Iterable[RechargeTransaction]
    ) -> dict[PaymentMethod, Decimal]:
        """Sum recharge amounts per payment method."""
        totals: dict[PaymentMethod, Decimal] = defaultdict(lambda: ZERO)
        for recharge in recharges:
            totals[recharge.payment_method] += recharge.amount
        return totals


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)
