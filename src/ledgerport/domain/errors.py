"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class FormatDetectionError(DomainError):
    """Column roles could not be inferred from a file's header row.

    Fatal to the import attempt: no rows are parsed and the caller must
    supply an explicit column mapping.
    """


class CurrencyMismatchError(DomainError):
    """Two money values with different currencies were combined or compared."""


class InvalidStateError(DomainError):
    """An import session operation was called in the wrong state."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def format_not_found(name: str) -> str:
    """Return message for missing saved CSV format."""
    return f"CSV format '{name}' not found"


def preset_not_found(name: str, available: list[str]) -> str:
    """Return message for an unknown bank preset."""
    return f"Unknown preset '{name}'. Available presets: {', '.join(available)}"


def duplicate_format_name(name: str) -> str:
    """Return message for a saved format name collision."""
    return f"CSV format with name '{name}' already exists"


def currency_mismatch(left: str, right: str) -> str:
    """Return message for operations across currencies."""
    return f"Cannot operate on different currencies: {left} and {right}"


def undetectable_columns(missing: list[str], headers: list[str]) -> str:
    """Return message when header detection cannot find required roles."""
    return (
        f"Could not detect {' and '.join(missing)} column(s) from headers "
        f"{headers}. Supply an explicit column mapping instead."
    )
