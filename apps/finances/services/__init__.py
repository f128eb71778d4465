"""Services for finances business logic."""

from .exceptions import (
    FinancesServiceError,
    IncomeNotFoundError,
    ExpenseNotFoundError,
    PaymentNotFoundError,
    InvalidProjectReferenceError,
    InvalidIncomeReferenceError,
    InvalidAmountError,
)
from .income_management import (
    create_income,
    update_income,
    delete_income,
    get_income_by_id,
    search_incomes,
)
from .expense_management import (
    create_expense,
    update_expense,
    delete_expense,
    get_expense_by_id,
    search_expenses,
    get_expense_categories,
)
from .payment_management import (
    create_payment,
    update_payment,
    delete_payment,
    get_payment_by_id,
    record_project_payment,
    get_project_payment_history,
)

__all__ = [
    # Exceptions
    'FinancesServiceError',
    'IncomeNotFoundError',
    'ExpenseNotFoundError',
    'PaymentNotFoundError',
    'InvalidProjectReferenceError',
    'InvalidIncomeReferenceError',
    'InvalidAmountError',
    # Income
    'create_income',
    'update_income',
    'delete_income',
    'get_income_by_id',
    'search_incomes',
    # Expense
    'create_expense',
    'update_expense',
    'delete_expense',
    'get_expense_by_id',
    'search_expenses',
    'get_expense_categories',
    # Payments
    'create_payment',
    'update_payment',
    'delete_payment',
    'get_payment_by_id',
    'record_project_payment',
    'get_project_payment_history',
]
