"""Services for projects business logic."""

from .exceptions import (
    ProjectsServiceError,
    ProjectNotFoundError,
    ProjectHasFinancialRecordsError,
    ForceDeleteDisabledError,
    InvalidPaymentStatusError,
)
from .financials import (
    ProjectFinancials,
    derive_financials,
    calculate_project_financials,
    recompute_project_financials,
    recompute_projects,
)
from .project_management import (
    create_project,
    update_project,
    delete_project,
    get_project_by_id,
    get_project_by_code,
    search_projects,
    get_project_codes,
    get_projects_by_payment_status,
    get_project_stats,
)
from .project_completion import (
    CompletionCheck,
    evaluate_completion,
    check_completion_criteria,
    mark_project_complete,
    auto_complete_projects,
    get_completion_stats,
)

__all__ = [
    # Exceptions
    'ProjectsServiceError',
    'ProjectNotFoundError',
    'ProjectHasFinancialRecordsError',
    'ForceDeleteDisabledError',
    'InvalidPaymentStatusError',
    # Financial Aggregation
    'ProjectFinancials',
    'derive_financials',
    'calculate_project_financials',
    'recompute_project_financials',
    'recompute_projects',
    # Project Management
    'create_project',
    'update_project',
    'delete_project',
    'get_project_by_id',
    'get_project_by_code',
    'search_projects',
    'get_project_codes',
    'get_projects_by_payment_status',
    'get_project_stats',
    # Completion
    'CompletionCheck',
    'evaluate_completion',
    'check_completion_criteria',
    'mark_project_complete',
    'auto_complete_projects',
    'get_completion_stats',
]
