"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic, so the ledger keeps working with
frozen entities when the schema changes.
"""

from tillbook.domain import entities as domain
from tillbook.database.models import (
    CashRegister as ORMCashRegister,
    RechargeTransaction as ORMRechargeTransaction,
    Sale as ORMSale,
    SaleItem as ORMSaleItem,
    Expense as ORMExpense,
)


def cash_register_to_domain(orm_register: ORMCashRegister) -> domain.CashRegister:
    """Convert SQLAlchemy CashRegister model to domain CashRegister entity."""
    return domain.CashRegister(
        id=orm_register.id,
        date=orm_register.date,
        opening_balance=orm_register.opening_balance,
        closing_balance=orm_register.closing_balance,
        created_at=orm_register.created_at,
        updated_at=orm_register.updated_at,
    )


def recharge_transaction_to_domain(
    orm_transaction: ORMRechargeTransaction,
) -> domain.RechargeTransaction:
    """Convert SQLAlchemy RechargeTransaction model to domain entity."""
    return domain.RechargeTransaction(
        id=orm_transaction.id,
        cash_register_id=orm_transaction.cash_register_id,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        payment_method=domain.PaymentMethod(orm_transaction.payment_method),
        created_at=orm_transaction.created_at,
    )


def sale_item_to_domain(orm_item: ORMSaleItem) -> domain.SaleItem:
    """Convert SQLAlchemy SaleItem model to domain SaleItem entity."""
    return domain.SaleItem(
        id=orm_item.id,
        sale_id=orm_item.sale_id,
        item_type=domain.ItemType(orm_item.item_type),
        item_name=orm_item.item_name,
        quantity=orm_item.quantity,
        unit_price=orm_item.unit_price,
    )


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model (with items) to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        date=orm_sale.date,
        sale_type=domain.SaleType(orm_sale.sale_type),
        subtotal=orm_sale.subtotal,
        discount=orm_sale.discount,
        tax=orm_sale.tax,
        total=orm_sale.total,
        payment_method=domain.PaymentMethod(orm_sale.payment_method),
        customer_name=orm_sale.customer_name,
        notes=orm_sale.notes,
        cash_register_id=orm_sale.cash_register_id,
        created_at=orm_sale.created_at,
        items=tuple(sale_item_to_domain(item) for item in orm_sale.items),
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        date=orm_expense.date,
        description=orm_expense.description,
        amount=orm_expense.amount,
        category=orm_expense.category,
        created_at=orm_expense.created_at,
    )
