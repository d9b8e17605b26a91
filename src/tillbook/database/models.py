"""SQLAlchemy models for tillbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CashRegister(Base):
    """Daily cash register model."""

    __tablename__ = "cash_registers"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    opening_balance = Column(Numeric(12, 2), nullable=False)
    closing_balance = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    # One register per business day
    __table_args__ = (UniqueConstraint("date", name="uq_cash_register_date"),)

    # Relationships
    recharge_transactions = relationship(
        "RechargeTransaction", back_populates="cash_register", cascade="all, delete-orphan"
    )


class RechargeTransaction(Base):
    """Recharge transaction model."""

    __tablename__ = "recharge_transactions"

    id = Column(Integer, primary_key=True)
    cash_register_id = Column(Integer, ForeignKey("cash_registers.id"), nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False, default="cash")
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    cash_register = relationship("CashRegister", back_populates="recharge_transactions")


class Sale(Base):
    """Sale model."""

    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    sale_type = Column(String, nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    tax = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False)
    customer_name = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    # Informational only; aggregation attributes sales by date
    cash_register_id = Column(Integer, ForeignKey("cash_registers.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    items = relationship(
        "SaleItem", back_populates="sale", cascade="all, delete-orphan", order_by="SaleItem.id"
    )


class SaleItem(Base):
    """Sale line item model."""

    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False)
    item_type = Column(String, nullable=False)
    item_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)

    # Relationships
    sale = relationship("Sale", back_populates="items")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
