"""Domain-specific exceptions for the finance tracker."""


class ValidationError(ValueError):
    """Raised when submitted data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when a transaction, budget or goal cannot be located."""


class StoreFailureError(IOError):
    """Raised when the record store fails to complete a request."""
