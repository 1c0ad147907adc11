"""Custom exceptions for the invoicing engine."""


class InvoicingError(Exception):
    """Base exception for the invoicing engine."""

    pass


class ValidationError(InvoicingError):
    """Raised when input is malformed, inconsistent, or a transition is illegal."""

    pass


class NotFoundError(InvoicingError):
    """Raised when an invoice or task is not found."""

    pass


class ForbiddenError(InvoicingError):
    """Raised when an invoice's status disallows the requested operation."""

    pass


class ConfigurationError(InvoicingError):
    """Raised when configuration is invalid."""

    pass
