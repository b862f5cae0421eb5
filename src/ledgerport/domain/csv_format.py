"""Saved CSV format domain service."""

from typing import Optional
from ledgerport.database.base import Database
from ledgerport.domain.column_mapping import ColumnMapping, get_preset
from ledgerport.domain.entities import CSVFormat as CSVFormatEntity
from ledgerport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_format_name,
    format_not_found,
)


class CSVFormatService:
    """Service for saving and resolving column mappings."""

    def __init__(self, db: Database):
        """Initialize CSV format service.

        Args:
            db: Database instance
        """
        self.db = db

    def save_format(self, name: str, account_id: int, mapping: ColumnMapping) -> int:
        """Save a column mapping under a unique name.

        Args:
            name: Format name
            account_id: Associated account ID
            mapping: Column mapping to store

        Returns:
            Format ID

        Raises:
            NotFoundError: If the account doesn't exist
            ConflictError: If a format with that name already exists
        """
        if not name or not name.strip():
            raise ValidationError("Format name cannot be blank")

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        if self.db.get_csv_format_by_name(name) is not None:
            raise ConflictError(duplicate_format_name(name))

        return self.db.create_csv_format(name=name, account_id=account_id, mapping=mapping)

    def get_format_by_name(self, name: str) -> Optional[CSVFormatEntity]:
        """Get saved format by name.

        Args:
            name: Format name

        Returns:
            Format entity or None if not found
        """
        return self.db.get_csv_format_by_name(name)

    def list_formats(self, account_id: Optional[int] = None) -> list[CSVFormatEntity]:
        """List saved formats.

        Args:
            account_id: Optional account ID to filter by

        Returns:
            List of format entities
        """
        return self.db.list_csv_formats(account_id=account_id)

    def resolve_mapping(
        self, format_name: Optional[str] = None, preset: Optional[str] = None
    ) -> Optional[ColumnMapping]:
        """Resolve a saved format name or bank preset to a mapping.

        Returns None when neither is given, meaning "auto-detect".

        Raises:
            ValidationError: If both are given or the preset is unknown
            NotFoundError: If the saved format doesn't exist
        """
        if format_name and preset:
            raise ValidationError("Use either a saved format or a preset, not both")

        if preset:
            return get_preset(preset)

        if format_name:
            fmt = self.db.get_csv_format_by_name(format_name)
            if fmt is None:
                raise NotFoundError(format_not_found(format_name))
            return fmt.mapping

        return None
