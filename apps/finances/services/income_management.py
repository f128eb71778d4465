"""Income CRUD service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import Q

from apps.projects.services import recompute_projects
from ..models import Income
from .exceptions import IncomeNotFoundError
from .validation import validate_amount, validate_project_reference

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ['date', 'description', 'amount', 'note', 'project_income', 'project_id']


@transaction.atomic
def create_income(
    *,
    date: date,
    description: str,
    amount: Decimal,
    note: str = '',
    project_income: Optional[bool] = None,
    project_id: Optional[int] = None
) -> Income:
    """
    Create an income entry and recompute the project it belongs to.

    ``project_income`` defaults to whether a project is referenced.

    Raises:
        InvalidAmountError: If amount is not positive
        InvalidProjectReferenceError: If project_id doesn't exist
    """
    validate_amount(amount)
    validate_project_reference(project_id)

    if project_income is None:
        project_income = project_id is not None

    income = Income.objects.create(
        date=date,
        description=description,
        amount=amount,
        note=note,
        project_income=project_income,
        project_id=project_id,
    )
    recompute_projects(project_id)

    logger.info("Income created: %s (%s) project=%s", income.description, income.amount, project_id)
    return income


@transaction.atomic
def update_income(*, income_id: int, data: Dict[str, Any]) -> Income:
    """
    Update an income entry.

    When the entry moves between projects both the old and the new project
    are recomputed.

    Raises:
        IncomeNotFoundError: If income doesn't exist
        InvalidAmountError: If amount is not positive
        InvalidProjectReferenceError: If the new project_id doesn't exist
    """
    try:
        income = Income.objects.select_for_update().get(id=income_id)
    except Income.DoesNotExist:
        raise IncomeNotFoundError()

    if 'amount' in data:
        validate_amount(data['amount'])
    if 'project_id' in data:
        validate_project_reference(data['project_id'])

    old_project_id = income.project_id

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(income, field, value)

    income.save()
    recompute_projects(old_project_id, income.project_id)

    logger.info("Income updated: %s (%s)", income.id, income.amount)
    return income


@transaction.atomic
def delete_income(*, income_id: int) -> None:
    """
    Delete an income entry and recompute its project.

    Payments recorded against the income are deleted with it. Reconciliation
    payments are kept and lose their income link.

    Raises:
        IncomeNotFoundError: If income doesn't exist
    """
    try:
        income = Income.objects.select_for_update().get(id=income_id)
    except Income.DoesNotExist:
        raise IncomeNotFoundError()

    project_id = income.project_id
    payments_deleted, _ = income.payments.filter(is_reconciliation=False).delete()
    income.delete()
    recompute_projects(project_id)

    logger.info(
        "Income deleted: %s project=%s payments_deleted=%s",
        income_id, project_id, payments_deleted,
    )


def get_income_by_id(income_id: int) -> Income:
    try:
        return Income.objects.get(id=income_id)
    except Income.DoesNotExist:
        raise IncomeNotFoundError()


def search_incomes(
    *,
    search: Optional[str] = None,
    project_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
):
    queryset = Income.objects.all()
    if search:
        queryset = queryset.filter(
            Q(description__icontains=search) | Q(note__icontains=search)
        )
    if project_id:
        queryset = queryset.filter(project_id=project_id)
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)
    return queryset
