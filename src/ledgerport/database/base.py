"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly, the domain package itself has no eager imports
from ledgerport.domain.column_mapping import ColumnMapping
from ledgerport.domain.entities import (
    Account,
    Transaction,
    CSVFormat,
)


class Database(ABC):
    """Abstract database interface for ledgerport."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, bank_name: str, currency_code: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Saved CSV format operations
    @abstractmethod
    def create_csv_format(self, name: str, account_id: int, mapping: ColumnMapping) -> int:
        """Save a column mapping under a name. Returns format ID."""
        pass

    @abstractmethod
    def get_csv_format_by_name(self, name: str) -> Optional[CSVFormat]:
        """Get saved CSV format by name."""
        pass

    @abstractmethod
    def list_csv_formats(self, account_id: Optional[int] = None) -> list[CSVFormat]:
        """List saved CSV formats, optionally filtered by account."""
        pass

    # Transaction operations
    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transactions_by_account(self, account_id: int) -> list[Transaction]:
        """Get every transaction stored for an account."""
        pass

    @abstractmethod
    def save_transactions(self, transactions: list[Transaction]) -> None:
        """Insert a batch of transactions. All are stored or none are."""
        pass
