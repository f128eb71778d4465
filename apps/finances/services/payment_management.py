"""Project payment history service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.projects.models import Project
from apps.projects.services import ProjectNotFoundError, recompute_projects
from ..models import Income, ProjectPayment, PaymentType
from .exceptions import (
    PaymentNotFoundError,
    InvalidProjectReferenceError,
    InvalidIncomeReferenceError,
)
from .validation import validate_amount, validate_project_reference

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = [
    'project_id', 'income_id', 'amount', 'payment_date', 'description', 'payment_type',
]


def _validate_income_reference(income_id: Optional[int], project_id: int) -> None:
    """A linked income must exist and belong to the payment's project."""
    if income_id is None:
        return

    income = Income.objects.filter(id=income_id).only('project_id').first()
    if income is None:
        raise InvalidIncomeReferenceError(f"Income {income_id} not found.")
    if income.project_id != project_id:
        raise InvalidIncomeReferenceError(
            f"Income {income_id} does not belong to project {project_id}."
        )


@transaction.atomic
def create_payment(
    *,
    project_id: int,
    amount: Decimal,
    payment_date: date,
    description: str = '',
    payment_type: str = PaymentType.PARTIAL,
    income_id: Optional[int] = None,
    is_reconciliation: bool = False
) -> ProjectPayment:
    """
    Add a payment to a project's payment history.

    Raises:
        InvalidAmountError: If amount is not positive
        InvalidProjectReferenceError: If project_id doesn't exist
        InvalidIncomeReferenceError: If income_id is missing or belongs to another project
    """
    validate_amount(amount)
    if project_id is None:
        raise InvalidProjectReferenceError('A payment must reference a project.')
    validate_project_reference(project_id)
    _validate_income_reference(income_id, project_id)

    payment = ProjectPayment.objects.create(
        project_id=project_id,
        income_id=income_id,
        amount=amount,
        payment_date=payment_date,
        description=description,
        payment_type=payment_type,
        is_reconciliation=is_reconciliation,
    )
    recompute_projects(project_id)

    logger.info("Payment created: project=%s amount=%s type=%s", project_id, amount, payment_type)
    return payment


@transaction.atomic
def update_payment(*, payment_id: int, data: Dict[str, Any]) -> ProjectPayment:
    """
    Update a payment, recomputing the old and new project.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
        InvalidAmountError: If amount is not positive
        InvalidProjectReferenceError: If the new project_id doesn't exist
        InvalidIncomeReferenceError: If the linked income is missing or belongs to another project
    """
    try:
        payment = ProjectPayment.objects.select_for_update().get(id=payment_id)
    except ProjectPayment.DoesNotExist:
        raise PaymentNotFoundError()

    if 'amount' in data:
        validate_amount(data['amount'])
    if 'project_id' in data:
        if data['project_id'] is None:
            raise InvalidProjectReferenceError('A payment must reference a project.')
        validate_project_reference(data['project_id'])
    if 'income_id' in data or 'project_id' in data:
        _validate_income_reference(
            data.get('income_id', payment.income_id),
            data.get('project_id', payment.project_id),
        )

    old_project_id = payment.project_id

    for field, value in data.items():
        if field in UPDATABLE_FIELDS:
            setattr(payment, field, value)

    payment.save()
    recompute_projects(old_project_id, payment.project_id)

    logger.info("Payment updated: %s (%s)", payment.id, payment.amount)
    return payment


@transaction.atomic
def delete_payment(*, payment_id: int) -> None:
    """
    Delete a payment and recompute its project.

    Raises:
        PaymentNotFoundError: If payment doesn't exist
    """
    try:
        payment = ProjectPayment.objects.select_for_update().get(id=payment_id)
    except ProjectPayment.DoesNotExist:
        raise PaymentNotFoundError()

    project_id = payment.project_id
    payment.delete()
    recompute_projects(project_id)

    logger.info("Payment deleted: %s project=%s", payment_id, project_id)


def get_payment_by_id(payment_id: int) -> ProjectPayment:
    try:
        return ProjectPayment.objects.get(id=payment_id)
    except ProjectPayment.DoesNotExist:
        raise PaymentNotFoundError()


@transaction.atomic
def record_project_payment(
    *,
    project_id: int,
    amount: Decimal,
    description: str = '',
    payment_date: Optional[date] = None
) -> ProjectPayment:
    """
    Record money received for a project.

    Creates a project income entry and a payment linked to it, so income and
    payment history grow together. The payment is ``full`` when the amount
    covers the project's contract value, ``partial`` otherwise.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        InvalidAmountError: If amount is not positive
    """
    validate_amount(amount)

    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")

    payment_date = payment_date or timezone.localdate()
    label = project.name or project.code

    income = Income.objects.create(
        date=payment_date,
        description=description or f"Project Payment - {label}",
        amount=amount,
        project_income=True,
        project_id=project.id,
    )
    payment = ProjectPayment.objects.create(
        project_id=project.id,
        income=income,
        amount=amount,
        payment_date=payment_date,
        description=description or f"Payment for {label}",
        payment_type=PaymentType.FULL if amount >= project.amount else PaymentType.PARTIAL,
    )
    recompute_projects(project.id)

    logger.info("Project payment recorded: %s - %s", project.code, amount)
    return payment


def get_project_payment_history(project_id: int) -> Dict[str, Any]:
    """
    Payment history of a project.

    Returns:
        Dict with payments (newest first), total_received (sum of payments),
        total_amount and pending_amount

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")

    payments = project.payments.order_by('-payment_date', '-created_at')
    total_received = payments.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')

    return {
        'project_id': project.id,
        'project_code': project.code,
        'payments': list(payments),
        'total_received': total_received,
        'total_amount': project.amount,
        'pending_amount': project.amount - total_received,
    }
