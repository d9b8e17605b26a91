"""Domain model entities for tillbook.

These are pure data classes representing business concepts, independent of
database schema. Store implementations convert their rows into these
entities so the ledger logic never sees ORM objects.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0")
CENT = Decimal("0.01")


def is_whole_cents(amount: Decimal) -> bool:
    """True when ``amount`` fits the two decimal places the store keeps."""
    return amount == amount.quantize(CENT)


class PaymentMethod(str, Enum):
    """How a sale or recharge was paid."""

    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    TRANSFER = "transfer"
    OTHER = "other"


class ItemType(str, Enum):
    """Category discriminator for sale items."""

    PRODUCT = "product"
    SERVICE = "service"
    SUBLIMATION = "sublimation"


class SaleType(str, Enum):
    """Category discriminator for a whole sale."""

    PRODUCT = "product"
    SERVICE = "service"
    SUBLIMATION = "sublimation"
    MIXED = "mixed"


class RegisterState(str, Enum):
    """Observable lifecycle states of the daily register."""

    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class CashRegister:
    """One business day's till."""

    id: int
    date: date
    opening_balance: Decimal
    closing_balance: Optional[Decimal]
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.closing_balance is None


@dataclass(frozen=True)
class RechargeTransaction:
    """Manual cash-ledger entry against a register."""

    id: int
    cash_register_id: int
    description: str
    amount: Decimal
    payment_method: PaymentMethod
    created_at: datetime


@dataclass(frozen=True)
class SaleItem:
    """Line item of a sale."""

    id: int
    sale_id: int
    item_type: ItemType
    item_name: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Sale:
    """Sale domain entity."""

    id: int
    date: date
    sale_type: SaleType
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    total: Decimal
    payment_method: PaymentMethod
    customer_name: Optional[str]
    notes: Optional[str]
    cash_register_id: Optional[int]
    created_at: datetime
    items: tuple[SaleItem, ...] = ()


@dataclass(frozen=True)
class Expense:
    """Expense domain entity."""

    id: int
    date: date
    description: str
    amount: Decimal
    category: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class SaleItemInput:
    """Item data supplied when recording a sale."""

    item_type: ItemType
    item_name: str
    quantity: int
    unit_price: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CashRegisterStats:
    """Daily financial summary derived from the store.

    ``current_balance`` always equals
    ``opening_balance + total_sales - total_expenses - total_recharges``
    for stats produced by the aggregator.
    """

    total_sales: Decimal = ZERO
    total_expenses: Decimal = ZERO
    total_recharges: Decimal = ZERO
    opening_balance: Decimal = ZERO
    current_balance: Decimal = ZERO
    closing_balance: Optional[Decimal] = None
    product_sales: Decimal = ZERO
    service_sales: Decimal = ZERO
    sublimation_sales: Decimal = ZERO
    cash_sales: Decimal = ZERO
    cash_recharges: Decimal = ZERO
    transfer_recharges: Decimal = ZERO
    other_recharges: Decimal = ZERO

    @classmethod
    def empty(cls) -> "CashRegisterStats":
        return cls()

    @classmethod
    def opened_with(cls, opening_balance: Decimal) -> "CashRegisterStats":
        """Stats for a register that has just been opened."""
        return cls(opening_balance=opening_balance, current_balance=opening_balance)

    @property
    def general_sales(self) -> Decimal:
        return self.product_sales + self.service_sales

    @property
    def variance(self) -> Optional[Decimal]:
        """Counted closing balance minus the computed balance."""
        if self.closing_balance is None:
            return None
        return self.closing_balance - self.current_balance

    def with_closing_balance(self, closing_balance: Decimal) -> "CashRegisterStats":
        return replace(self, closing_balance=closing_balance)


@dataclass(frozen=True)
class RegisterSnapshot:
    """Read-only view of the lifecycle manager's state."""

    state: RegisterState
    register: Optional[CashRegister] = None
    stats: CashRegisterStats = field(default_factory=CashRegisterStats.empty)
    transactions: tuple[RechargeTransaction, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.state is RegisterState.OPEN
