"""Tests for the sale service."""

import pytest
from datetime import timedelta
from decimal import Decimal

from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.entities import ItemType, PaymentMethod, SaleType
from tillbook.domain.errors import InvalidTransitionError, NotFoundError, ValidationError
from tillbook.domain.sale import SaleService, infer_sale_type


def test_infer_sale_type(product_item):
    """Test that the sale type follows the item types."""
    assert infer_sale_type([product_item()]) is SaleType.PRODUCT
    assert infer_sale_type([product_item(item_type=ItemType.SERVICE)]) is SaleType.SERVICE
    assert (
        infer_sale_type([product_item(), product_item(item_type=ItemType.SUBLIMATION)])
        is SaleType.MIXED
    )


def test_add_sale_updates_register(open_register, sale_service, today, product_item):
    """Test that a cash sale raises the open register balance."""
    sale_id = sale_service.add_sale(
        date=today,
        items=[product_item(quantity=2, unit_price="5000"), product_item("Lapiz", 1, "10000")],
    )

    sale = sale_service.get_sale(sale_id)
    assert sale.total == Decimal("20000")
    assert sale.cash_register_id == open_register.active_register.id
    assert open_register.stats.total_sales == Decimal("20000")
    assert open_register.stats.cash_sales == Decimal("20000")
    assert open_register.stats.current_balance == Decimal("70000")


def test_add_sale_with_discount_and_tax(open_register, sale_service, today, product_item):
    """Test that discount and tax flow into the total."""
    sale_id = sale_service.add_sale(
        date=today,
        items=[product_item(unit_price="10000")],
        discount=Decimal("1000"),
        tax=Decimal("500"),
    )

    assert sale_service.get_sale(sale_id).total == Decimal("9500")
    assert open_register.stats.current_balance == Decimal("59500")


def test_cash_sale_requires_open_register(sale_service, today, product_item):
    """Test that cash sales are refused while the register is closed."""
    with pytest.raises(InvalidTransitionError):
        sale_service.add_sale(date=today, items=[product_item()])

    assert sale_service.list_sales() == []


def test_non_cash_sale_without_register(sale_service, today, product_item):
    """Test that card sales can be recorded with no open register."""
    sale_id = sale_service.add_sale(
        date=today, items=[product_item()], payment_method=PaymentMethod.CREDIT_CARD
    )

    assert sale_service.get_sale(sale_id).cash_register_id is None


def test_sale_without_register_service(temp_db, today, product_item):
    """Test that a detached service records sales without register checks."""
    service = SaleService(temp_db)

    sale_id = service.add_sale(date=today, items=[product_item()])

    assert service.get_sale(sale_id).cash_register_id is None


def test_card_sale_counts_in_total_but_not_cash(open_register, sale_service, today, product_item):
    """Test that non-cash sales are excluded from cash_sales."""
    sale_service.add_sale(
        date=today, items=[product_item(unit_price="8000")], payment_method=PaymentMethod.DEBIT_CARD
    )

    assert open_register.stats.total_sales == Decimal("8000")
    assert open_register.stats.cash_sales == Decimal("0")


def test_add_sale_validation(open_register, sale_service, today, product_item):
    """Test sale validation errors."""
    with pytest.raises(ValidationError):
        sale_service.add_sale(date=today, items=[])
    with pytest.raises(ValidationError):
        sale_service.add_sale(date=today, items=[product_item(quantity=0)])
    with pytest.raises(ValidationError):
        sale_service.add_sale(date=today, items=[product_item(name="  ")])
    with pytest.raises(ValidationError):
        sale_service.add_sale(date=today, items=[product_item(unit_price="-1")])
    with pytest.raises(ValidationError):
        sale_service.add_sale(
            date=today, items=[product_item(unit_price="100")], discount=Decimal("200")
        )
    with pytest.raises(ValidationError):
        sale_service.add_sale(date=today, items=[product_item()], tax=Decimal("-1"))

    assert open_register.stats.total_sales == Decimal("0")


def test_sale_on_other_day_not_counted(open_register, sale_service, today, product_item):
    """Test that sales are attributed to the register by date."""
    sale_service.add_sale(
        date=today - timedelta(days=1), items=[product_item()], payment_method=PaymentMethod.TRANSFER
    )

    assert open_register.stats.total_sales == Decimal("0")


def test_update_sale_moves_it_out_of_today(open_register, sale_service, today, product_item):
    """Test that changing a sale's date refreshes the register."""
    sale_id = sale_service.add_sale(
        date=today, items=[product_item(unit_price="20000")], payment_method=PaymentMethod.TRANSFER
    )

    sale_service.update_sale(sale_id, date=today - timedelta(days=1))

    assert open_register.stats.total_sales == Decimal("0")
    assert open_register.stats.current_balance == Decimal("50000")


def test_delete_sale(open_register, sale_service, today, product_item):
    """Test that deleting a sale lowers the balance."""
    sale_id = sale_service.add_sale(date=today, items=[product_item(unit_price="20000")])

    sale_service.delete_sale(sale_id)

    assert sale_service.get_sale(sale_id) is None
    assert open_register.stats.current_balance == Decimal("50000")


def test_missing_sale(sale_service):
    """Test update and delete of unknown sales."""
    with pytest.raises(NotFoundError):
        sale_service.update_sale(999, notes="x")
    with pytest.raises(NotFoundError):
        sale_service.delete_sale(999)


def test_list_sales_end_date_inclusive(open_register, sale_service, today, product_item):
    """Test that list_sales includes the end date."""
    sale_service.add_sale(date=today, items=[product_item()])
    sale_service.add_sale(
        date=today - timedelta(days=1), items=[product_item()], payment_method=PaymentMethod.OTHER
    )

    sales = sale_service.list_sales(start_date=today - timedelta(days=1), end_date=today)
    assert len(sales) == 2

    sales = sale_service.list_sales(end_date=today - timedelta(days=1))
    assert len(sales) == 1


def test_cash_sale_dated_on_closed_day_is_refused(temp_db, today, sale_service, product_item):
    """Test that a cash sale for a past, closed day is not booked into it."""
    yesterday = today - timedelta(days=1)
    closed = temp_db.create_cash_register(day=yesterday, opening_balance=Decimal("100"))
    temp_db.close_cash_register(closed.id, Decimal("100"))
    sale_service.register_service.open(Decimal("50000"))

    with pytest.raises(InvalidTransitionError, match=yesterday.isoformat()):
        sale_service.add_sale(date=yesterday, items=[product_item(unit_price="20000")])

    assert sale_service.list_sales() == []
    stats = sale_service.register_service.get_register_stats(closed.id)
    assert stats.total_sales == Decimal("0")
    assert stats.variance == Decimal("0")


def test_non_cash_sale_on_other_day_is_not_stamped(open_register, sale_service, today, product_item):
    """Test that only sales dated on the open register's day carry its id."""
    sale_id = sale_service.add_sale(
        date=today - timedelta(days=1),
        items=[product_item()],
        payment_method=PaymentMethod.TRANSFER,
    )

    assert sale_service.get_sale(sale_id).cash_register_id is None


def test_cash_sale_needs_register_of_its_own_day(temp_db, today, product_item):
    """Test that an open register for another day does not accept today's cash sales."""
    yesterday = today - timedelta(days=1)
    register_service = CashRegisterService(temp_db, today=lambda: yesterday)
    register_service.initialize()
    register_service.open(Decimal("100"))
    service = SaleService(temp_db, register_service=register_service)

    with pytest.raises(InvalidTransitionError):
        service.add_sale(date=today, items=[product_item()])

    sale_id = service.add_sale(date=yesterday, items=[product_item()])
    assert service.get_sale(sale_id).cash_register_id == register_service.active_register.id


def test_update_to_cash_while_closed_is_refused(sale_service, today, product_item):
    """Test that re-tendering a sale as cash needs the open register."""
    sale_id = sale_service.add_sale(
        date=today, items=[product_item()], payment_method=PaymentMethod.TRANSFER
    )

    with pytest.raises(InvalidTransitionError):
        sale_service.update_sale(sale_id, payment_method=PaymentMethod.CASH)

    assert sale_service.get_sale(sale_id).payment_method is PaymentMethod.TRANSFER


def test_update_cash_sale_date_out_of_open_day_is_refused(
    open_register, sale_service, today, product_item
):
    """Test that a cash sale cannot be moved onto a day without an open register."""
    sale_id = sale_service.add_sale(date=today, items=[product_item(unit_price="20000")])

    with pytest.raises(InvalidTransitionError):
        sale_service.update_sale(sale_id, date=today - timedelta(days=1))

    assert sale_service.get_sale(sale_id).date == today
    assert open_register.stats.total_sales == Decimal("20000")


def test_update_cash_sale_after_close_is_refused(open_register, sale_service, today, product_item):
    """Test that a closed day's cash sale cannot be switched to another method."""
    sale_id = sale_service.add_sale(date=today, items=[product_item()])
    open_register.close(Decimal("70000"))

    with pytest.raises(InvalidTransitionError):
        sale_service.update_sale(sale_id, payment_method=PaymentMethod.CREDIT_CARD)

    # Header notes don't move money and stay editable
    sale_service.update_sale(sale_id, notes="Factura 7")
    assert sale_service.get_sale(sale_id).notes == "Factura 7"


def test_update_to_cash_on_open_day(open_register, sale_service, today, product_item):
    """Test that switching to cash on the open day updates cash_sales."""
    sale_id = sale_service.add_sale(
        date=today, items=[product_item()], payment_method=PaymentMethod.DEBIT_CARD
    )

    sale_service.update_sale(sale_id, payment_method=PaymentMethod.CASH)

    assert open_register.stats.cash_sales == Decimal("20000")


def test_sale_amounts_must_be_whole_cents(open_register, sale_service, today, product_item):
    """Test that prices, discount and tax with fractions of a cent are refused."""
    with pytest.raises(ValidationError, match="fractions of a cent"):
        sale_service.add_sale(date=today, items=[product_item(unit_price="10.005")])
    with pytest.raises(ValidationError, match="fractions of a cent"):
        sale_service.add_sale(date=today, items=[product_item()], discount=Decimal("0.001"))
    with pytest.raises(ValidationError, match="fractions of a cent"):
        sale_service.add_sale(date=today, items=[product_item()], tax=Decimal("1.999"))

    assert sale_service.list_sales() == []


def test_delete_cash_sale_after_close_is_refused(open_register, sale_service, today, product_item):
    """Test that a closed day's cash sales cannot be removed."""
    sale_id = sale_service.add_sale(date=today, items=[product_item()])
    open_register.close(Decimal("70000"))

    with pytest.raises(InvalidTransitionError):
        sale_service.delete_sale(sale_id)

    assert sale_service.get_sale(sale_id) is not None
