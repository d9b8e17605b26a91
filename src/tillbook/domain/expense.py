"""Expense domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.entities import Expense as ExpenseEntity, is_whole_cents

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self, db: Database, register_service: Optional[CashRegisterService] = None):
        """Initialize expense service.

        Args:
            db: Database instance
            register_service: Optional register service whose stats are
                refreshed after every expense mutation
        """
        self.db = db
        self.register_service = register_service

    def add_expense(
        self,
        date: date,
        description: str,
        amount: Decimal,
        category: Optional[str] = None,
    ) -> int:
        """Record an expense.

        Args:
            date: Expense date (attributes the expense to that day's register)
            description: What the money was spent on
            amount: Amount spent
            category: Optional free-text category

        Returns:
            Expense ID

        Raises:
            ValidationError: If description is empty or amount is not positive whole cents
        """
        description = self._validate(description, amount)
        expense_id = self.db.create_expense(
            date=date, description=description, amount=amount, category=category
        )
        logger.info("Recorded expense %s on %s: %s", expense_id, date, amount)
        self._refresh_register()
        return expense_id

    def get_expense(self, expense_id: int) -> Optional[ExpenseEntity]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def update_expense(
        self,
        expense_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
    ) -> None:
        """Update expense fields.

        Raises:
            NotFoundError: If expense doesn't exist
            ValidationError: If the new description or amount is invalid
        """
        expense = self.db.get_expense(expense_id)
        if expense is None:
            raise errors.NotFoundError(errors.expense_not_found(expense_id))

        self._validate(
            description if description is not None else expense.description,
            amount if amount is not None else expense.amount,
        )
        self.db.update_expense(
            expense_id=expense_id,
            date=date,
            description=description.strip() if description is not None else None,
            amount=amount,
            category=category,
        )
        self._refresh_register()

    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense.

        Raises:
            NotFoundError: If expense doesn't exist
        """
        if self.db.get_expense(expense_id) is None:
            raise errors.NotFoundError(errors.expense_not_found(expense_id))

        self.db.delete_expense(expense_id)
        logger.info("Deleted expense %s", expense_id)
        self._refresh_register()

    def list_expenses(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[ExpenseEntity]:
        """List expenses between two dates (both inclusive)."""
        return self.db.list_expenses(start_date=start_date, end_date=end_date)

    def _validate(self, description: Optional[str], amount: Decimal) -> str:
        description = (description or "").strip()
        if not description:
            raise errors.ValidationError("Expense description cannot be empty")
        if amount <= 0:
            raise errors.ValidationError(errors.non_positive_amount("Expense amount", amount))
        if not is_whole_cents(amount):
            raise errors.ValidationError(errors.fractional_cents("Expense amount", amount))
        return description

    def _refresh_register(self) -> None:
        if self.register_service is not None:
            self.register_service.sync_stats()
