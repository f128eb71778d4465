"""Expense CRUD service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Dict, Any, List

from django.db import transaction
from django.db.models import Q

from apps.projects.services import recompute_projects
from ..models import Expense
from .exceptions import ExpenseNotFoundError
from .validation import validate_amount, validate_project_reference

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = [
    'date', 'category', 'description', 'amount', 'notes', 'project_expense', 'project_id',
]


@transaction.atomic
def create_expense(
    *,
    date: date,
    category: str,
    description: str,
    amount: Decimal,
    notes: str = '',
    project_expense: Optional[bool] = None,
    project_id: Optional[int] = None
) -> Expense:
    """
    Create an expense entry and recompute the project it belongs to.

    Raises:
        InvalidAmountError: If amount is not positive
        InvalidProjectReferenceError: If project_id doesn't exist
    """
    validate_amount(amount)
    validate_project_reference(project_id)

    if project_expense is None:
        project_expense = project_id is not None

    expense = Expense.objects.create(
        date=date,
        category=category,
        description=description,
        amount=amount,
        notes=notes,
        project_expense=project_expense,
        project_id=project_id,
    )
    recompute_projects(project_id)

    logger.info("Expense created: %s %s (%s) project=%s", expense.category, expense.description, expense.amount, project_id)
    return expense


@transaction.atomic
def update_expense(*, expense_id: int, data: Dict[str, Any]) -> Expense:
    """
    Update an expense entry, recomputing the old and new project.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        InvalidAmountError: If amount is not positive
        InvalidProjectReferenceError: If the new project_id doesn't exist
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError()

    if 'amount' in data:
        validate_amount(data['amount'])
    if 'project_id' in data:
        validate_project_reference(data['project_id'])

    old_project_id = expense.project_id

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(expense, field, value)

    expense.save()
    recompute_projects(old_project_id, expense.project_id)

    logger.info("Expense updated: %s (%s)", expense.id, expense.amount)
    return expense


@transaction.atomic
def delete_expense(*, expense_id: int) -> None:
    """
    Delete an expense entry and recompute its project.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError()

    project_id = expense.project_id
    expense.delete()
    recompute_projects(project_id)

    logger.info("Expense deleted: %s project=%s", expense_id, project_id)


def get_expense_by_id(expense_id: int) -> Expense:
    try:
        return Expense.objects.get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError()


def search_expenses(
    *,
    search: Optional[str] = None,
    project_id: Optional[int] = None,
    category: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
):
    queryset = Expense.objects.all()
    if search:
        queryset = queryset.filter(
            Q(description__icontains=search) |
            Q(category__icontains=search) |
            Q(notes__icontains=search)
        )
    if project_id:
        queryset = queryset.filter(project_id=project_id)
    if category:
        queryset = queryset.filter(category__iexact=category)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset


def get_expense_categories() -> List[str]:
    """Distinct expense categories in alphabetical order."""
    return list(
        Expense.objects
        .order_by('category')
        .values_list('category', flat=True)
        .distinct()
    )
