"""Sale domain service."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.entities import (
    CashRegister,
    PaymentMethod,
    Sale as SaleEntity,
    SaleItemInput,
    SaleType,
    is_whole_cents,
)

logger = logging.getLogger(__name__)


def infer_sale_type(items: Sequence[SaleItemInput]) -> SaleType:
    """Derive the sale type from its item types (``mixed`` when they differ)."""
    item_types = {item.item_type for item in items}
    if len(item_types) == 1:
        return SaleType(item_types.pop().value)
    return SaleType.MIXED


class SaleService:
    """Service for recording sales that feed the daily register."""

    def __init__(self, db: Database, register_service: Optional[CashRegisterService] = None):
        """Initialize sale service.

        Args:
            db: Database instance
            register_service: Optional register service whose stats are
                refreshed after every sale mutation
        """
        self.db = db
        self.register_service = register_service

    def add_sale(
        self,
        date: date,
        items: Sequence[SaleItemInput],
        payment_method: PaymentMethod = PaymentMethod.CASH,
        discount: Decimal = Decimal("0"),
        tax: Decimal = Decimal("0"),
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
        sale_type: Optional[SaleType] = None,
    ) -> int:
        """Record a sale with its items.

        Args:
            date: Sale date (attributes the sale to that day's register)
            items: Sale items, at least one
            payment_method: How the sale was paid
            discount: Amount subtracted from the item subtotal
            tax: Amount added to the item subtotal
            customer_name: Optional customer name
            notes: Optional notes
            sale_type: Optional sale type (inferred from items if omitted)

        Returns:
            Sale ID

        Raises:
            ValidationError: If items or amounts are invalid
            InvalidTransitionError: If a cash sale is dated on a day whose
                register is not the open one
        """
        self._validate_items(items)
        self._validate_adjustment("Discount", discount)
        self._validate_adjustment("Tax", tax)
        subtotal = sum((item.subtotal for item in items), Decimal("0"))
        if discount > subtotal:
            raise errors.ValidationError(
                f"Discount {discount} exceeds sale subtotal {subtotal}"
            )

        if payment_method == PaymentMethod.CASH:
            self._require_register_for(date)
        register = self._open_register_for(date)
        register_id = register.id if register is not None else None

        sale_id = self.db.create_sale(
            date=date,
            sale_type=sale_type or infer_sale_type(items),
            items=items,
            payment_method=payment_method,
            discount=discount,
            tax=tax,
            customer_name=customer_name,
            notes=notes,
            cash_register_id=register_id,
        )
        logger.info("Recorded sale %s on %s (%s)", sale_id, date, payment_method.value)
        self._refresh_register()
        return sale_id

    def get_sale(self, sale_id: int) -> Optional[SaleEntity]:
        """Get sale by ID."""
        return self.db.get_sale(sale_id)

    def update_sale(
        self,
        sale_id: int,
        date: Optional[date] = None,
        payment_method: Optional[PaymentMethod] = None,
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update sale header fields.

        A cash sale can only be moved or re-tendered while the register of
        every day it touches is open.

        Raises:
            NotFoundError: If sale doesn't exist
            InvalidTransitionError: If the change touches a cash sale outside
                the open register's day
        """
        sale = self.db.get_sale(sale_id)
        if sale is None:
            raise errors.NotFoundError(errors.sale_not_found(sale_id))

        new_date = date if date is not None else sale.date
        new_method = payment_method if payment_method is not None else sale.payment_method
        if new_date != sale.date or new_method != sale.payment_method:
            if sale.payment_method == PaymentMethod.CASH:
                self._require_register_for(sale.date)
            if new_method == PaymentMethod.CASH:
                self._require_register_for(new_date)

        self.db.update_sale(
            sale_id=sale_id,
            date=date,
            payment_method=payment_method,
            customer_name=customer_name,
            notes=notes,
        )
        self._refresh_register()

    def delete_sale(self, sale_id: int) -> None:
        """Delete a sale and its items.

        Raises:
            NotFoundError: If sale doesn't exist
            InvalidTransitionError: If a cash sale's day has no open register
        """
        sale = self.db.get_sale(sale_id)
        if sale is None:
            raise errors.NotFoundError(errors.sale_not_found(sale_id))
        if sale.payment_method == PaymentMethod.CASH:
            self._require_register_for(sale.date)

        self.db.delete_sale(sale_id)
        logger.info("Deleted sale %s", sale_id)
        self._refresh_register()

    def list_sales(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        payment_method: Optional[PaymentMethod] = None,
    ) -> list[SaleEntity]:
        """List sales between two dates (both inclusive)."""
        exclusive_end = end_date + timedelta(days=1) if end_date is not None else None
        return self.db.list_sales(
            start_date=start_date, end_date=exclusive_end, payment_method=payment_method
        )

    def _validate_items(self, items: Sequence[SaleItemInput]) -> None:
        if not items:
            raise errors.ValidationError("A sale needs at least one item")
        for item in items:
            if not item.item_name or not item.item_name.strip():
                raise errors.ValidationError("Sale item name cannot be empty")
            if item.quantity <= 0:
                raise errors.ValidationError(
                    f"Quantity for '{item.item_name}' must be greater than zero"
                )
            if item.unit_price < 0:
                raise errors.ValidationError(
                    errors.negative_amount(f"Unit price for '{item.item_name}'", item.unit_price)
                )
            if not is_whole_cents(item.unit_price):
                raise errors.ValidationError(
                    errors.fractional_cents(f"Unit price for '{item.item_name}'", item.unit_price)
                )

    def _validate_adjustment(self, field: str, amount: Decimal) -> None:
        if amount < 0:
            raise errors.ValidationError(errors.negative_amount(field, amount))
        if not is_whole_cents(amount):
            raise errors.ValidationError(errors.fractional_cents(field, amount))

    def _open_register_for(self, day: date) -> Optional[CashRegister]:
        """The attached open register when it covers ``day``."""
        if self.register_service is None:
            return None
        register = self.register_service.active_register
        if register is None or register.date != day:
            return None
        return register

    def _require_register_for(self, day: date) -> None:
        # Detached services record without register checks
        if self.register_service is None:
            return
        if self._open_register_for(day) is None:
            raise errors.InvalidTransitionError(errors.cash_sale_needs_register(day))

    def _refresh_register(self) -> None:
        if self.register_service is not None:
            self.register_service.sync_stats()
