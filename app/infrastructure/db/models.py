"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, Date, ForeignKey, Enum as SQLEnum,
    Index, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship

from app.domain.models.invoice import InvoiceStatus
from app.domain.models.user import LicenseStatus

from .database import Base


# Scales follow the billing rules so stored amounts are exactly the computed ones.
MONEY = Numeric(14, 2)
AMOUNT = Numeric(16, 4)
TAX = Numeric(22, 10)
RATE = Numeric(9, 4)


class UserModel(Base):
    """User (tenant) table"""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255))
    name = Column(String(255), nullable=False)

    # Business profile
    business_name = Column(String(255))
    business_logo = Column(String(1000))
    business_address = Column(Text)
    business_phone = Column(String(30))
    business_email = Column(String(255))

    is_google_user = Column(Boolean, nullable=False, default=False)
    has_password = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    settings = relationship(
        "UserSettingsModel", back_populates="user", uselist=False,
        cascade="all, delete-orphan"
    )
    customers = relationship("CustomerModel", back_populates="user")
    invoices = relationship("InvoiceModel", back_populates="user")


class UserSettingsModel(Base):
    """Per-user invoice settings and licence; the row locked during numbering"""
    __tablename__ = 'user_settings'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    invoice_prefix = Column(String(10), nullable=False, default='INV')
    next_invoice_number = Column(Integer, nullable=False, default=1)
    tax_rate = Column(RATE, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default='IDR')
    license_key = Column(String(64), nullable=False, unique=True)
    license_status = Column(SQLEnum(LicenseStatus), nullable=False, default=LicenseStatus.ACTIVE)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("UserModel", back_populates="settings")

    __table_args__ = (
        CheckConstraint('next_invoice_number >= 1', name='check_next_invoice_number_positive'),
    )


class CustomerModel(Base):
    """Customer table"""
    __tablename__ = 'customers'

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    phone = Column(String(30))
    address = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("UserModel", back_populates="customers")
    invoices = relationship("InvoiceModel", back_populates="customer")

    __table_args__ = (
        Index('idx_customers_user_name', 'user_id', 'name'),
    )


class InvoiceModel(Base):
    """Invoice table"""
    __tablename__ = 'invoices'

    id = Column(String(36), primary_key=True)
    number = Column(String(50), nullable=False)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    customer_id = Column(String(36), ForeignKey('customers.id'), nullable=False)

    date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(SQLEnum(InvoiceStatus), nullable=False, default=InvoiceStatus.UNPAID)

    # Amounts
    subtotal = Column(AMOUNT, nullable=False)
    tax = Column(TAX, nullable=False)
    total = Column(MONEY, nullable=False)
    tax_rate = Column(RATE, nullable=False)

    notes = Column(Text)
    payment_proof = Column(String(1000))
    paid_at = Column(DateTime(timezone=True))

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    user = relationship("UserModel", back_populates="invoices")
    customer = relationship("CustomerModel", back_populates="invoices")
    items = relationship(
        "InvoiceItemModel", back_populates="invoice",
        cascade="all, delete-orphan", order_by="InvoiceItemModel.position"
    )

    # Indexes
    __table_args__ = (
        UniqueConstraint('user_id', 'number', name='unique_invoice_number_per_user'),
        Index('idx_invoices_user_status', 'user_id', 'status'),
        Index('idx_invoices_user_date', 'user_id', 'date'),
    )


class InvoiceItemModel(Base):
    """Invoice line item table"""
    __tablename__ = 'invoice_items'

    id = Column(String(36), primary_key=True)
    invoice_id = Column(String(36), ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    description = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(AMOUNT, nullable=False)
    amount = Column(AMOUNT, nullable=False)

    invoice = relationship("InvoiceModel", back_populates="items")

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_item_quantity_positive'),
        CheckConstraint('price >= 0', name='check_item_price_non_negative'),
    )
