"""Services for financial reconciliation."""

from .exceptions import ReconciliationError
from .audit import record_audit_entry
from .sweep import (
    ProjectReconciliation,
    reconcile_project,
    reconcile_all,
    get_reconciliation_stats,
)
from .consistency import (
    orphaned_incomes,
    orphaned_expenses,
    validate_consistency,
    perform_automated_corrections,
)

__all__ = [
    # Exceptions
    'ReconciliationError',
    # Audit
    'record_audit_entry',
    # Sweep
    'ProjectReconciliation',
    'reconcile_project',
    'reconcile_all',
    'get_reconciliation_stats',
    # Consistency
    'orphaned_incomes',
    'orphaned_expenses',
    'validate_consistency',
    'perform_automated_corrections',
]
