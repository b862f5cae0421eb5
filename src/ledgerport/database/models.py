"""SQLAlchemy models for ledgerport database."""

from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    bank_name = Column(String, nullable=False)
    currency_code = Column(String(3), nullable=False, default="USD")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    csv_formats = relationship("CSVFormat", back_populates="account", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="account", cascade="all, delete-orphan")


class CSVFormat(Base):
    """Saved column mapping model."""

    __tablename__ = "csv_formats"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date_column = Column(String, nullable=False)
    description_column = Column(String, nullable=False)
    amount_column = Column(String, nullable=True)
    debit_column = Column(String, nullable=True)
    credit_column = Column(String, nullable=True)
    date_format = Column(String, nullable=False)
    delimiter = Column(String(1), nullable=False, default=",")
    has_header = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    account = relationship("Account", back_populates="csv_formats")


class Transaction(Base):
    """Transaction model. Amounts are stored as integer minor units."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    amount_minor = Column(BigInteger, nullable=False)
    currency_code = Column(String(3), nullable=False)
    merchant = Column(String, nullable=False)
    memo = Column(String, nullable=True)
    category_id = Column(String, nullable=True)
    status = Column(String, nullable=False)
    cleared_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
