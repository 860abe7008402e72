"""Custom exceptions for carb ledger."""


class CarbLedgerError(Exception):
    """Base exception for all carb ledger errors."""

    pass


class ConfigurationError(CarbLedgerError):
    """Raised when there is a configuration error."""

    pass


class DecodingError(CarbLedgerError):
    """Raised when a raw value cannot be decoded into a carb entry."""

    pass
