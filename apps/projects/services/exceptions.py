"""Domain-specific exceptions for projects services."""
from rest_framework.exceptions import APIException


class ProjectsServiceError(Exception):
    """Base exception for projects services."""
    pass


class ProjectNotFoundError(APIException):
    """Project does not exist."""
    status_code = 404
    default_detail = 'Project not found.'
    default_code = 'project_not_found'


class ProjectHasFinancialRecordsError(APIException):
    """Project still owns income or expense rows."""
    status_code = 409
    default_detail = 'Cannot delete project with existing financial records.'
    default_code = 'project_has_financial_records'


class ForceDeleteDisabledError(APIException):
    """Force deletion was requested but is turned off in settings."""
    status_code = 403
    default_detail = 'Force deletion of projects with financial records is disabled.'
    default_code = 'force_delete_disabled'


class InvalidPaymentStatusError(APIException):
    status_code = 400
    default_detail = "Payment status must be one of 'ongoing', 'pending' or 'completed'."
    default_code = 'invalid_payment_status'
