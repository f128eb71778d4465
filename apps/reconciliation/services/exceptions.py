"""Domain-specific exceptions for reconciliation services."""


class ReconciliationError(Exception):
    """Raised when a single project cannot be reconciled."""
    pass
