"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: money travels as integer minor
units plus a currency code, column mappings as one row per saved format.
"""

from ledgerport.domain import entities as domain
from ledgerport.domain.column_mapping import ColumnMapping
from ledgerport.domain.money import Currency, Money
from ledgerport.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    CSVFormat as ORMCSVFormat,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        bank_name=orm_account.bank_name,
        currency=Currency.from_code(orm_account.currency_code),
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        amount=Money(
            int(orm_transaction.amount_minor),
            Currency.from_code(orm_transaction.currency_code),
        ),
        merchant=orm_transaction.merchant,
        memo=orm_transaction.memo,
        category_id=orm_transaction.category_id,
        status=domain.TransactionStatus(orm_transaction.status),
        cleared_at=orm_transaction.cleared_at,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert domain Transaction entity to a new SQLAlchemy Transaction row."""
    return ORMTransaction(
        id=transaction.id,
        account_id=transaction.account_id,
        date=transaction.date,
        amount_minor=transaction.amount.minor_units,
        currency_code=transaction.amount.currency.code,
        merchant=transaction.merchant,
        memo=transaction.memo,
        category_id=transaction.category_id,
        status=transaction.status.value,
        cleared_at=transaction.cleared_at,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )


def column_mapping_to_domain(orm_format: ORMCSVFormat) -> ColumnMapping:
    """Rebuild the immutable ColumnMapping stored on a CSVFormat row."""
    return ColumnMapping(
        date_column=orm_format.date_column,
        description_column=orm_format.description_column,
        amount_column=orm_format.amount_column,
        debit_column=orm_format.debit_column,
        credit_column=orm_format.credit_column,
        date_format=orm_format.date_format,
        delimiter=orm_format.delimiter,
        has_header=orm_format.has_header,
    )


def csv_format_to_domain(orm_format: ORMCSVFormat) -> domain.CSVFormat:
    """Convert SQLAlchemy CSVFormat model to domain CSVFormat entity."""
    return domain.CSVFormat(
        id=orm_format.id,
        name=orm_format.name,
        account_id=orm_format.account_id,
        mapping=column_mapping_to_domain(orm_format),
        created_at=orm_format.created_at,
    )
