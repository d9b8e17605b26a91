"""Abstract record store interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from tillbook.domain.entities import (
    CashRegister,
    RechargeTransaction,
    Sale,
    SaleItemInput,
    Expense,
    PaymentMethod,
    SaleType,
)


class Database(ABC):
    """Abstract record store for tillbook.

    Implementations raise ``StoreError`` when the underlying store rejects a
    read or write, and ``ConflictError`` when a write violates a uniqueness
    rule.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Cash register operations
    @abstractmethod
    def create_cash_register(self, day: date, opening_balance: Decimal) -> CashRegister:
        """Insert an open register for a day."""
        pass

    @abstractmethod
    def get_cash_register(self, register_id: int) -> Optional[CashRegister]:
        """Get register by ID."""
        pass

    @abstractmethod
    def find_cash_register_for_date(self, day: date) -> Optional[CashRegister]:
        """Get the register for a day, or None (at most one exists per day)."""
        pass

    @abstractmethod
    def close_cash_register(self, register_id: int, closing_balance: Decimal) -> CashRegister:
        """Set the closing balance of a register. Returns the updated register."""
        pass

    @abstractmethod
    def list_cash_registers(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[CashRegister]:
        """List registers, newest day first."""
        pass

    # Recharge transaction operations
    @abstractmethod
    def create_recharge_transaction(
        self,
        cash_register_id: int,
        description: str,
        amount: Decimal,
        payment_method: PaymentMethod = PaymentMethod.CASH,
    ) -> RechargeTransaction:
        """Insert a recharge transaction."""
        pass

    @abstractmethod
    def list_recharge_transactions(self, cash_register_id: int) -> list[RechargeTransaction]:
        """List recharge transactions of a register, most recent first."""
        pass

    # Sale operations
    @abstractmethod
    def create_sale(
        self,
        date: date,
        sale_type: SaleType,
        items: Sequence[SaleItemInput],
        payment_method: PaymentMethod,
        discount: Decimal = Decimal("0"),
        tax: Decimal = Decimal("0"),
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
        cash_register_id: Optional[int] = None,
    ) -> int:
        """Create a sale with its items. Returns sale ID."""
        pass

    @abstractmethod
    def get_sale(self, sale_id: int) -> Optional[Sale]:
        """Get sale (with items) by ID."""
        pass

    @abstractmethod
    def update_sale(
        self,
        sale_id: int,
        date: Optional[date] = None,
        payment_method: Optional[PaymentMethod] = None,
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update sale header fields."""
        pass

    @abstractmethod
    def delete_sale(self, sale_id: int) -> None:
        """Delete a sale and its items."""
        pass

    @abstractmethod
    def list_sales(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        payment_method: Optional[PaymentMethod] = None,
    ) -> list[Sale]:
        """List sales with optional filters.

        Args:
            start_date: Optional inclusive lower bound on sale date
            end_date: Optional exclusive upper bound on sale date
            payment_method: Optional payment method filter
        """
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self, date: date, description: str, amount: Decimal, category: Optional[str] = None
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: int,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
    ) -> None:
        """Update expense fields."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    @abstractmethod
    def list_expenses(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Expense]:
        """List expenses between two dates (both inclusive)."""
        pass
