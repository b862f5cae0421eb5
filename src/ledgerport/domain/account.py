"""Account domain service."""

from typing import Optional
from ledgerport.database.base import Database
from ledgerport.domain.entities import Account as AccountEntity
from ledgerport.domain.errors import ConflictError, NotFoundError, account_not_found
from ledgerport.domain.money import Currency


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, bank_name: str, currency: str = "USD") -> int:
        """Create a new account.

        Args:
            name: Account name
            bank_name: Bank name
            currency: ISO currency code of the account

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
            ValidationError: If currency is unknown
        """
        currency_code = Currency.from_code(currency).code

        # Check if account with same name exists
        accounts = self.db.list_accounts()
        for acc in accounts:
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(name=name, bank_name=bank_name, currency_code=currency_code)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID, raising NotFoundError if it does not exist."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def resolve_account(self, account: str | int) -> AccountEntity:
        """Find an account by numeric ID or exact name.

        A value that parses as an integer is always treated as an ID.

        Raises:
            NotFoundError: If no account matches
        """
        try:
            account_id = int(account)
        except (TypeError, ValueError):
            account_id = None

        if account_id is not None:
            return self.require_account(account_id)

        for acc in self.db.list_accounts():
            if acc.name == account:
                return acc
        raise NotFoundError(f"Account '{account}' not found")

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()
