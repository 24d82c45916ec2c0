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


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class UnknownCurrencyError(ValidationError):
    """Rate table has no entry for a currency."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"No exchange rate for currency '{currency}'")


class InvalidAccountTypeError(DomainError):
    """An account type outside the closed set reached an aggregation branch."""

    def __init__(self, account_type: object):
        self.account_type = account_type
        super().__init__(f"Invalid account type: {account_type!r}")


class AtomicityViolationError(DomainError):
    """A transfer could not write or remove both of its ledger entries."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing ledger entry."""
    return f"Ledger entry {entry_id} not found"


def transfer_not_found(transfer_id: int) -> str:
    """Return message for missing transfer."""
    return f"Transfer {transfer_id} not found"


def recurring_not_found(template_id: int) -> str:
    """Return message for missing recurring template."""
    return f"Recurring transaction {template_id} not found"


def trade_not_found(trade_id: int) -> str:
    """Return message for missing stock transaction."""
    return f"Stock transaction {trade_id} not found"


def entry_linked_to_transfer(entry_id: int, transfer_id: int) -> str:
    """Return message when a transfer leg is modified on its own."""
    return (
        f"Ledger entry {entry_id} belongs to transfer {transfer_id}. "
        "Delete the transfer instead."
    )


def account_delete_blocked(
    account_id: int, entry_count: int, trade_count: int
) -> str:
    """Return message when account has dependent ledger entries or trades."""
    parts = []
    if entry_count > 0:
        parts.append(f"{entry_count} ledger entr{'ies' if entry_count != 1 else 'y'}")
    if trade_count > 0:
        parts.append(f"{trade_count} stock transaction{'s' if trade_count != 1 else ''}")
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Please delete them first."
    )


def dividend_not_found(dividend_id: int) -> str:
    """Return message for missing dividend."""
    return f"Dividend {dividend_id} not found"
