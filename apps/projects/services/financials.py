"""
Project financial aggregation.

A project's ``received_amt``, ``pending_amt`` and ``profit`` are stored on the
row for cheap reads but are fully determined by its child rows::

    received_amt = sum(income.amount)
    pending_amt  = amount - received_amt
    profit       = received_amt - (outsourcing_amt + sum(expense.amount))

``derive_financials`` is the only place that formula lives. Both the
per-mutation path (``recompute_project_financials``) and the reconciliation
sweep call it.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from django.db import transaction

from ..models import Project
from .exceptions import ProjectNotFoundError

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')

DERIVED_FIELDS = ['received_amt', 'pending_amt', 'profit']


@dataclass(frozen=True)
class ProjectFinancials:
    received_amt: Decimal
    pending_amt: Decimal
    profit: Decimal
    payments_total: Decimal = ZERO

    @property
    def payment_shortfall(self) -> Decimal:
        """Income not yet covered by payment history. Negative means surplus."""
        return self.received_amt - self.payments_total

    def as_dict(self):
        return {field: getattr(self, field) for field in DERIVED_FIELDS}


def _to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _total(values: Iterable) -> Decimal:
    return sum((_to_decimal(v) for v in values), ZERO)


def derive_financials(
    *,
    amount,
    outsourcing_amt,
    income_amounts: Iterable,
    expense_amounts: Iterable,
    payment_amounts: Iterable = ()
) -> ProjectFinancials:
    """
    Compute derived project financials from raw amounts.

    Pure function; empty iterables yield zero totals, so a project without
    child rows has ``received_amt=0``, ``pending_amt=amount`` and
    ``profit=-outsourcing_amt``.
    """
    received = _total(income_amounts)
    expenses = _total(expense_amounts)

    return ProjectFinancials(
        received_amt=received,
        pending_amt=_to_decimal(amount) - received,
        profit=received - (_to_decimal(outsourcing_amt) + expenses),
        payments_total=_total(payment_amounts),
    )


def calculate_project_financials(project: Project) -> ProjectFinancials:
    """Load the project's child rows and derive its expected financials."""
    return derive_financials(
        amount=project.amount,
        outsourcing_amt=project.outsourcing_amt,
        income_amounts=project.incomes.values_list('amount', flat=True),
        expense_amounts=project.expenses.values_list('amount', flat=True),
        payment_amounts=project.payments.values_list('amount', flat=True),
    )


@transaction.atomic
def recompute_project_financials(*, project_id: int) -> Project:
    """
    Recompute and persist a project's derived financial fields.

    The project row is locked for the duration of the recomputation.
    Idempotent: running it twice without intervening writes stores the
    same values.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")

    financials = calculate_project_financials(project)

    for field, value in financials.as_dict().items():
        setattr(project, field, value)
    project.save(update_fields=DERIVED_FIELDS + ['updated_at'])

    logger.debug(
        "Updated finances for project %s: received=%s, pending=%s, profit=%s",
        project.code,
        financials.received_amt,
        financials.pending_amt,
        financials.profit,
    )
    return project


def recompute_projects(*project_ids) -> None:
    """
    Recompute every distinct project id given.

    ``None`` and ids of projects that no longer exist (orphaned references)
    are skipped.
    """
    ids = {pid for pid in project_ids if pid is not None}
    if not ids:
        return
    existing = Project.objects.filter(id__in=ids).values_list('id', flat=True)
    for project_id in sorted(existing):
        recompute_project_financials(project_id=project_id)
