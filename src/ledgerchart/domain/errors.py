"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account or ledger entity does not exist."""


class LedgerParseError(DomainError):
    """Ledger text could not be turned into transactions."""

    def __init__(self, line_number: int, message: str):
        self.line_number = line_number
        self.message = message
        super().__init__(f"line {line_number}: {message}")


def account_not_found(account: str) -> str:
    """Return message for an account missing from the ledger."""
    return f"Account '{account}' not found in ledger"


def invalid_setting(name: str, value: str) -> str:
    """Return message for an unusable configuration value."""
    return f"Invalid value for {name}: '{value}'"


def multiple_elided_amounts() -> str:
    """Return message when more than one posting omits its amount."""
    return "Only one posting per transaction may omit its amount"


def unknown_calendar(name: str) -> str:
    """Return message for an unsupported calendar name."""
    return f"Unknown calendar '{name}'. Supported calendars: gregorian, traveller"
