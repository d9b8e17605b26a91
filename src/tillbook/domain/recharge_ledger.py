"""Recharge transaction ledger domain service."""

import logging
from decimal import Decimal

from tillbook.database.base import Database
from tillbook.domain.entities import PaymentMethod, RechargeTransaction

logger = logging.getLogger(__name__)


class RechargeLedger:
    """Append-only list of manual cash movements per register.

    Entries are never updated or deleted. Whether the register is open is
    checked by the caller, not here.
    """

    def __init__(self, db: Database):
        """Initialize recharge ledger.

        Args:
            db: Database instance
        """
        self.db = db

    def list(self, register_id: int) -> list[RechargeTransaction]:
        """List a register's transactions, most recent first."""
        return self.db.list_recharge_transactions(register_id)

    def append(
        self,
        register_id: int,
        description: str,
        amount: Decimal,
        payment_method: PaymentMethod = PaymentMethod.CASH,
    ) -> RechargeTransaction:
        """Record a new transaction against a register."""
        transaction = self.db.create_recharge_transaction(
            cash_register_id=register_id,
            description=description,
            amount=amount,
            payment_method=payment_method,
        )
        logger.info(
            "Recorded recharge %s on register %s: %s (%s)",
            transaction.id,
            register_id,
            amount,
            payment_method.value,
        )
        return transaction
