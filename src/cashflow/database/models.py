"""SQLAlchemy models for cashflow database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Organization(Base):
    """Organization model."""

    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    invoices = relationship("Invoice", back_populates="organization", cascade="all, delete-orphan")
    bills = relationship("Bill", back_populates="organization", cascade="all, delete-orphan")
    templates = relationship(
        "RecurringTemplate", back_populates="organization", cascade="all, delete-orphan"
    )
    cash_snapshots = relationship(
        "CashSnapshot", back_populates="organization", cascade="all, delete-orphan"
    )


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    pk = Column(Integer, primary_key=True)
    id = Column(String, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    client = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date_sent = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="Sent")
    paid_on = Column(Date, nullable=True)
    # Weak reference: no foreign key, templates can be deleted freely
    template_id = Column(String, nullable=True)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("org_id", "id", name="uq_invoice_org_id"),)

    organization = relationship("Organization", back_populates="invoices")


class Bill(Base):
    """Bill model."""

    __tablename__ = "bills"

    pk = Column(Integer, primary_key=True)
    id = Column(String, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    vendor = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="Unpaid")
    priority = Column(String, nullable=False, default="Medium")
    category = Column(String, nullable=True)
    paid_on = Column(Date, nullable=True)
    template_id = Column(String, nullable=True)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("org_id", "id", name="uq_bill_org_id"),)

    organization = relationship("Organization", back_populates="bills")


class RecurringTemplate(Base):
    """Recurring invoice/bill template model."""

    __tablename__ = "recurring_templates"

    pk = Column(Integer, primary_key=True)
    id = Column(String, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    type = Column(String, nullable=False)
    name = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    frequency = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (UniqueConstraint("org_id", "id", name="uq_template_org_id"),)

    organization = relationship("Organization", back_populates="templates")


class CashSnapshot(Base):
    """Recorded cash balance model."""

    __tablename__ = "cash_snapshots"

    id = Column(Integer, primary_key=True)
    org_id = Column(Integer, ForeignKey("organizations.id"), nullable=False)
    balance = Column(Numeric(12, 2), nullable=False)
    recorded_at = Column(DateTime, nullable=False)

    organization = relationship("Organization", back_populates="cash_snapshots")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
