"""Shared pytest fixtures for tillbook tests."""

import logging
import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from tillbook.database.factories import create_sqlite_database
from tillbook.domain.cash_register import CashRegisterService
from tillbook.domain.entities import ItemType, SaleItemInput
from tillbook.domain.expense import ExpenseService
from tillbook.domain.sale import SaleService

BUSINESS_DAY = date(2024, 3, 15)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture(autouse=True)
def reset_tillbook_logging():
    """Drop handlers installed by configure_logging between tests."""
    yield
    logger = logging.getLogger("tillbook")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def today():
    """Fixed business day used by the register service."""
    return BUSINESS_DAY


@pytest.fixture
def register_service(temp_db, today):
    """Create an initialized CashRegisterService pinned to the business day."""
    service = CashRegisterService(temp_db, today=lambda: today)
    service.initialize()
    return service


@pytest.fixture
def open_register(register_service):
    """Open the business day's register with a 50,000 opening balance."""
    register_service.open(Decimal("50000"))
    return register_service


@pytest.fixture
def sale_service(temp_db, register_service):
    """Create a SaleService attached to the register service."""
    return SaleService(temp_db, register_service=register_service)


@pytest.fixture
def expense_service(temp_db, register_service):
    """Create an ExpenseService attached to the register service."""
    return ExpenseService(temp_db, register_service=register_service)


@pytest.fixture
def product_item():
    """Factory for a single product line item."""

    def make(name="Cuaderno", quantity=1, unit_price="20000", item_type=ItemType.PRODUCT):
        return SaleItemInput(
            item_type=item_type,
            item_name=name,
            quantity=quantity,
            unit_price=Decimal(unit_price),
        )

    return make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
