"""Tests for the recharge transaction ledger."""

from datetime import date
from decimal import Decimal

from tillbook.domain.entities import PaymentMethod
from tillbook.domain.recharge_ledger import RechargeLedger


def test_append_and_list(temp_db):
    """Test appending transactions and listing them newest first."""
    register = temp_db.create_cash_register(day=date(2024, 3, 15), opening_balance=Decimal("0"))
    ledger = RechargeLedger(temp_db)

    first = ledger.append(register.id, "Recarga Claro", Decimal("10000"))
    second = ledger.append(register.id, "Recarga Tigo", Decimal("5000"), PaymentMethod.TRANSFER)

    assert first.cash_register_id == register.id
    assert first.payment_method is PaymentMethod.CASH
    assert [t.id for t in ledger.list(register.id)] == [second.id, first.id]


def test_list_empty_register(temp_db):
    """Test listing a register with no transactions."""
    register = temp_db.create_cash_register(day=date(2024, 3, 15), opening_balance=Decimal("0"))

    assert RechargeLedger(temp_db).list(register.id) == []
