"""Tests for sale and expense commands."""

from datetime import date, timedelta

from tillbook.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_add_cash_sale(cli_runner, temp_db):
    """Test recording a cash sale on the open register."""
    _invoke(cli_runner, temp_db, "register", "open", "50000")

    result = _invoke(
        cli_runner,
        temp_db,
        "sale",
        "add",
        "--item",
        "product",
        "Cuaderno",
        "2",
        "5000",
        "--item",
        "service",
        "Fotocopia",
        "10",
        "1000",
    )

    assert result.exit_code == 0
    assert "Created sale 1" in result.output
    assert "Type: mixed" in result.output
    assert "Total: $20,000.00" in result.output
    assert "Current balance: $70,000.00" in result.output


def test_cash_sale_needs_open_register(cli_runner, temp_db):
    """Test that cash sales fail while the register is closed."""
    result = _invoke(cli_runner, temp_db, "sale", "add", "--item", "product", "Lapiz", "1", "1000")

    assert result.exit_code == 1
    assert "must be open" in result.output


def test_card_sale_without_register(cli_runner, temp_db):
    """Test that non-cash sales work without an open register."""
    result = _invoke(
        cli_runner,
        temp_db,
        "sale",
        "add",
        "--item",
        "sublimation",
        "Taza",
        "1",
        "25000",
        "--payment-method",
        "credit_card",
        "--customer",
        "Ana",
    )

    assert result.exit_code == 0
    assert "Type: sublimation" in result.output
    assert "Current balance" not in result.output


def test_sale_invalid_price(cli_runner, temp_db):
    """Test that an unparseable item price fails."""
    _invoke(cli_runner, temp_db, "register", "open", "50000")

    result = _invoke(cli_runner, temp_db, "sale", "add", "--item", "product", "Lapiz", "1", "abc")

    assert result.exit_code == 1
    assert "Invalid price for 'Lapiz'" in result.output


def test_sale_discount_too_large(cli_runner, temp_db):
    """Test discount validation through the CLI."""
    _invoke(cli_runner, temp_db, "register", "open", "50000")

    result = _invoke(
        cli_runner,
        temp_db,
        "sale",
        "add",
        "--item",
        "product",
        "Lapiz",
        "1",
        "1000",
        "--discount",
        "2000",
    )

    assert result.exit_code == 1
    assert "exceeds sale subtotal" in result.output


def test_list_and_delete_sales(cli_runner, temp_db):
    """Test listing sales and deleting one."""
    _invoke(cli_runner, temp_db, "register", "open", "50000")
    _invoke(cli_runner, temp_db, "sale", "add", "--item", "product", "Lapiz", "2", "1000")

    result = _invoke(cli_runner, temp_db, "sale", "list", "--today", "-v")
    assert result.exit_code == 0
    assert "Found 1 sale(s)" in result.output
    assert "Lapiz" in result.output
    assert "Total: $2,000.00" in result.output

    result = _invoke(cli_runner, temp_db, "sale", "delete", "1", input="n\n")
    assert "Deletion cancelled." in result.output

    result = _invoke(cli_runner, temp_db, "sale", "delete", "1", "--yes")
    assert result.exit_code == 0
    assert "Deleted sale 1" in result.output

    result = _invoke(cli_runner, temp_db, "sale", "list")
    assert "No sales found." in result.output


def test_delete_missing_sale(cli_runner, temp_db):
    """Test deleting an unknown sale."""
    result = _invoke(cli_runner, temp_db, "sale", "delete", "42", "--yes")

    assert result.exit_code == 1
    assert "Sale 42 not found" in result.output


def test_add_expense(cli_runner, temp_db):
    """Test recording an expense lowers the balance."""
    _invoke(cli_runner, temp_db, "register", "open", "50000")

    result = _invoke(
        cli_runner, temp_db, "expense", "add", "Resma de papel", "18000", "--category", "Supplies"
    )

    assert result.exit_code == 0
    assert "Created expense 1: Resma de papel $18,000.00" in result.output
    assert "Current balance: $32,000.00" in result.output


def test_add_expense_other_day(cli_runner, temp_db):
    """Test that an expense dated yesterday does not touch today's register."""
    _invoke(cli_runner, temp_db, "register", "open", "50000")

    _invoke(cli_runner, temp_db, "expense", "add", "Almuerzo", "12000", "--date", "yesterday")
    status = _invoke(cli_runner, temp_db, "register", "status")

    assert "$50,000.00" in status.output
    assert "$12,000.00" not in status.output

    result = _invoke(cli_runner, temp_db, "expense", "list", "--start-date", "yesterday", "--end-date", "yesterday")
    assert "Almuerzo" in result.output
    assert str(date.today() - timedelta(days=1)) in result.output


def test_add_expense_invalid(cli_runner, temp_db):
    """Test expense validation through the CLI."""
    result = _invoke(cli_runner, temp_db, "expense", "add", "Aseo", "0")

    assert result.exit_code == 1
    assert "must be greater than zero" in result.output


def test_delete_expense(cli_runner, temp_db):
    """Test deleting an expense."""
    _invoke(cli_runner, temp_db, "expense", "add", "Aseo", "1000")

    result = _invoke(cli_runner, temp_db, "expense", "delete", "1", "--yes")

    assert result.exit_code == 0
    assert "Deleted expense 1" in result.output
    assert "No expenses found." in _invoke(cli_runner, temp_db, "expense", "list").output
