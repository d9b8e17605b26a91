"""Daily cash register lifecycle domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.aggregator import LedgerAggregator
from tillbook.domain.entities import (
    CashRegister,
    CashRegisterStats,
    PaymentMethod,
    RechargeTransaction,
    RegisterSnapshot,
    RegisterState,
    is_whole_cents,
)
from tillbook.domain.recharge_ledger import RechargeLedger

logger = logging.getLogger(__name__)


class CashRegisterService:
    """Service owning the open/closed state of today's cash register.

    The service keeps the active register, its stats and its recharge
    transactions in memory. Every store write happens before the in-memory
    state changes, so a failed write leaves the service as it was. Stats are
    always recomputed from the store after a mutation.
    """

    def __init__(
        self,
        db: Database,
        today: Callable[[], date] = date.today,
        aggregator: Optional[LedgerAggregator] = None,
        ledger: Optional[RechargeLedger] = None,
    ):
        """Initialize cash register service.

        Args:
            db: Database instance
            today: Callable returning the current business day
            aggregator: Optional aggregator (defaults to one over ``db``)
            ledger: Optional recharge ledger (defaults to one over ``db``)
        """
        self.db = db
        self.today = today
        self.aggregator = aggregator or LedgerAggregator(db)
        self.ledger = ledger or RechargeLedger(db)
        self._reset()

    def _reset(self) -> None:
        self._state = RegisterState.CLOSED
        self._register: Optional[CashRegister] = None
        self._stats = CashRegisterStats.empty()
        self._transactions: list[RechargeTransaction] = []

    @property
    def is_open(self) -> bool:
        return self._state is RegisterState.OPEN

    @property
    def active_register(self) -> Optional[CashRegister]:
        """The open register, or None when closed."""
        return self._register if self.is_open else None

    @property
    def stats(self) -> CashRegisterStats:
        return self._stats

    def initialize(self) -> RegisterSnapshot:
        """Load today's register from the store.

        Returns:
            Snapshot of the loaded state

        Raises:
            StoreError: If the store cannot be read (state stays CLOSED)
        """
        self._reset()
        register = self.db.find_cash_register_for_date(self.today())
        if register is None:
            logger.debug("No cash register for %s", self.today())
            return self.get_state()

        stats = self.aggregator.compute_stats(register)
        transactions = self.ledger.list(register.id)

        self._register = register
        self._stats = stats
        self._transactions = transactions
        if register.is_open:
            self._state = RegisterState.OPEN
        logger.info("Loaded cash register %s (%s)", register.id, self._state.value)
        return self.get_state()

    def teardown(self) -> None:
        """Drop in-memory register state."""
        self._reset()

    def get_state(self) -> RegisterSnapshot:
        """Return the current register snapshot."""
        return RegisterSnapshot(
            state=self._state,
            register=self._register,
            stats=self._stats,
            transactions=tuple(self._transactions),
        )

    def open(self, opening_balance: Decimal) -> CashRegister:
        """Open today's register.

        Args:
            opening_balance: Cash in the till at open time

        Returns:
            The new register

        Raises:
            ValidationError: If the opening balance is negative or not in whole cents
            ConflictError: If a register already exists for today
            StoreError: If the insert fails
        """
        if opening_balance < 0:
            raise errors.ValidationError(errors.negative_amount("Opening balance", opening_balance))
        if not is_whole_cents(opening_balance):
            raise errors.ValidationError(errors.fractional_cents("Opening balance", opening_balance))

        day = self.today()
        if self.is_open:
            raise errors.ConflictError(errors.register_already_open(day))

        existing = self.db.find_cash_register_for_date(day)
        if existing is not None:
            if existing.is_open:
                raise errors.ConflictError(errors.register_already_open(day))
            raise errors.ConflictError(errors.register_already_closed(day))

        register = self.db.create_cash_register(day=day, opening_balance=opening_balance)

        self._register = register
        self._state = RegisterState.OPEN
        self._transactions = []
        self._stats = CashRegisterStats.opened_with(register.opening_balance)
        logger.info("Opened cash register %s for %s with %s", register.id, day, opening_balance)

        # Sales or expenses already recorded today belong to this register
        self.sync_stats()
        return register

    def close(self, closing_balance: Decimal) -> CashRegister:
        """Close the open register.

        The closing balance is the counted cash; it is not required to match
        the computed balance. A mismatch is logged and exposed as
        ``stats.variance``.

        Raises:
            InvalidTransitionError: If no register is open
            ValidationError: If the closing balance is negative or not in whole cents
            StoreError: If the update fails
        """
        register = self._require_open()
        if closing_balance < 0:
            raise errors.ValidationError(errors.negative_amount("Closing balance", closing_balance))
        if not is_whole_cents(closing_balance):
            raise errors.ValidationError(errors.fractional_cents("Closing balance", closing_balance))

        closed = self.db.close_cash_register(register.id, closing_balance)

        self._register = closed
        self._state = RegisterState.CLOSED
        self._stats = self._stats.with_closing_balance(closed.closing_balance)
        self._refresh_closed(closed)

        variance = self._stats.variance
        if variance:
            logger.warning(
                "Cash register %s closed with variance %s (counted %s, computed %s)",
                closed.id,
                variance,
                closed.closing_balance,
                self._stats.current_balance,
            )
        logger.info("Closed cash register %s with %s", closed.id, closing_balance)
        return closed

    def add_recharge_transaction(
        self,
        description: str,
        amount: Decimal,
        payment_method: PaymentMethod = PaymentMethod.CASH,
    ) -> RechargeTransaction:
        """Record a recharge transaction against the open register.

        Raises:
            InvalidTransitionError: If no register is open
            ValidationError: If description is empty or amount is not positive whole cents
            StoreError: If the insert fails
        """
        register = self._require_open()
        description = (description or "").strip()
        if not description:
            raise errors.ValidationError("Recharge description cannot be empty")
        if amount <= 0:
            raise errors.ValidationError(errors.non_positive_amount("Recharge amount", amount))
        if not is_whole_cents(amount):
            raise errors.ValidationError(errors.fractional_cents("Recharge amount", amount))

        transaction = self.ledger.append(register.id, description, amount, payment_method)
        self._transactions.insert(0, transaction)
        self.sync_stats()
        return transaction

    def refresh_stats(self) -> CashRegisterStats:
        """Recompute stats for the open register from the store.

        Does nothing when no register is open.

        Raises:
            StoreError: If the store cannot be read
        """
        register = self.active_register
        if register is None:
            logger.debug("No open cash register to refresh")
            return self._stats
        self._stats = self.aggregator.compute_stats(register)
        return self._stats

    def list_registers(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[CashRegister]:
        """List registers between two dates, newest first."""
        return self.db.list_cash_registers(start_date=start_date, end_date=end_date)

    def get_register_stats(self, register_id: int) -> CashRegisterStats:
        """Compute stats for any register, open or closed.

        Raises:
            NotFoundError: If the register doesn't exist
        """
        register = self.db.get_cash_register(register_id)
        if register is None:
            raise errors.NotFoundError(errors.register_not_found(register_id))
        return self.aggregator.compute_stats(register)

    def _require_open(self) -> CashRegister:
        register = self.active_register
        if register is None:
            raise errors.InvalidTransitionError(errors.no_open_register())
        return register

    def sync_stats(self) -> None:
        """Refresh stats after a write, logging store failures instead of raising."""
        try:
            self.refresh_stats()
        except errors.StoreError:
            logger.exception("Failed to refresh cash register stats after write")

    def _refresh_closed(self, register: CashRegister) -> None:
        try:
            self._stats = self.aggregator.compute_stats(register)
        except errors.StoreError:
            logger.exception("Failed to compute closing stats for register %s", register.id)
