"""Domain-specific exceptions for finances services."""
from rest_framework.exceptions import APIException


class FinancesServiceError(Exception):
    """Base exception for finances services."""
    pass


class IncomeNotFoundError(APIException):
    status_code = 404
    default_detail = 'Income entry not found.'
    default_code = 'income_not_found'


class ExpenseNotFoundError(APIException):
    status_code = 404
    default_detail = 'Expense entry not found.'
    default_code = 'expense_not_found'


class PaymentNotFoundError(APIException):
    status_code = 404
    default_detail = 'Payment not found.'
    default_code = 'payment_not_found'


class InvalidProjectReferenceError(APIException):
    """A financial row references a project that does not exist."""
    status_code = 400
    default_detail = 'Project not found.'
    default_code = 'invalid_project_reference'


class InvalidIncomeReferenceError(APIException):
    """A payment references a missing income row or one of another project."""
    status_code = 400
    default_detail = 'Income entry not found.'
    default_code = 'invalid_income_reference'


class InvalidAmountError(APIException):
    status_code = 400
    default_detail = 'Amount must be greater than zero.'
    default_code = 'invalid_amount'
