"""Project CRUD, lookup and statistics service."""

import logging
from decimal import Decimal
from datetime import date
from typing import Optional, Dict, Any, List

from django.conf import settings
from django.db import transaction
from django.db.models import Avg, Count, Q, Sum

from ..models import Project, ProjectStatus, PaymentStatus
from .exceptions import (
    ProjectNotFoundError,
    ProjectHasFinancialRecordsError,
    ForceDeleteDisabledError,
    InvalidPaymentStatusError,
)
from .financials import recompute_project_financials

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = [
    'name', 'company', 'type', 'status',
    'shoot_start_date', 'shoot_end_date', 'location', 'address', 'reference',
    'client', 'amount',
    'outsourcing', 'outsourcing_amt', 'out_for', 'out_client', 'outsourcing_paid',
]

PAYMENT_STATUS_FILTERS = {
    PaymentStatus.COMPLETED: Q(status=ProjectStatus.COMPLETED) | Q(pending_amt__lte=0),
    PaymentStatus.ONGOING: (
        Q(status=ProjectStatus.ACTIVE) & Q(pending_amt__gt=0)
    ),
    PaymentStatus.PENDING: (
        ~Q(status=ProjectStatus.COMPLETED) & ~Q(status=ProjectStatus.ACTIVE) & Q(pending_amt__gt=0)
    ),
}


def _get_locked(project_id: int) -> Project:
    try:
        return Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")


@transaction.atomic
def create_project(
    *,
    amount: Decimal,
    name: str = '',
    company: str = '',
    type: str = '',
    status: str = ProjectStatus.PENDING,
    shoot_start_date: Optional[date] = None,
    shoot_end_date: Optional[date] = None,
    location: str = '',
    address: str = '',
    reference: str = '',
    client=None,
    outsourcing: bool = False,
    outsourcing_amt: Decimal = Decimal('0.00'),
    out_for: str = '',
    out_client: str = '',
    outsourcing_paid: bool = False
) -> Project:
    """
    Create a project, assign its code and initialise derived financials.

    The code is derived from the database id, so it is written in a second
    step right after the insert.

    Returns:
        Created Project with received_amt=0, pending_amt=amount and
        profit=-outsourcing_amt
    """
    project = Project.objects.create(
        name=name,
        company=company,
        type=type,
        status=status.upper(),
        shoot_start_date=shoot_start_date,
        shoot_end_date=shoot_end_date,
        location=location,
        address=address,
        reference=reference,
        client=client,
        amount=amount,
        outsourcing=outsourcing,
        outsourcing_amt=outsourcing_amt,
        out_for=out_for,
        out_client=out_client,
        outsourcing_paid=outsourcing_paid,
    )
    project.code = Project.generate_code(project.id)
    project.save(update_fields=['code'])

    project = recompute_project_financials(project_id=project.id)

    logger.info("Project created: %s - %s", project.code, project.name)
    return project


@transaction.atomic
def update_project(*, project_id: int, data: Dict[str, Any]) -> Project:
    """
    Update project fields and recompute derived financials.

    Derived fields and the code are not writable here.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    project = _get_locked(project_id)

    for field, value in data.items():
        if field not in UPDATABLE_FIELDS:
            continue
        if field == 'status' and value:
            value = value.upper()
        setattr(project, field, value)

    project.save()
    project = recompute_project_financials(project_id=project.id)

    logger.info("Project updated: %s - %s", project.code, project.name)
    return project


@transaction.atomic
def delete_project(*, project_id: int, force: bool = False) -> None:
    """
    Delete a project.

    A project owning income or expense rows can only be removed with
    ``force=True`` and only when ``PROJECT_FORCE_DELETE_ENABLED`` is on; the
    income and expense rows are then deleted with it. Payments always
    cascade.

    Raises:
        ProjectNotFoundError: If project doesn't exist
        ProjectHasFinancialRecordsError: If it has financial rows and force is off
        ForceDeleteDisabledError: If force is requested but disabled in settings
    """
    project = _get_locked(project_id)

    income_count = project.incomes.count()
    expense_count = project.expenses.count()

    if income_count or expense_count:
        if not force:
            raise ProjectHasFinancialRecordsError()
        if not settings.PROJECT_FORCE_DELETE_ENABLED:
            raise ForceDeleteDisabledError()

        project.incomes.all().delete()
        project.expenses.all().delete()
        logger.warning(
            "Force deleting project %s with %d income and %d expense rows",
            project.code,
            income_count,
            expense_count,
        )

    code, name = project.code, project.name
    project.delete()
    logger.info("Project deleted: %s - %s", code, name)


def get_project_by_id(project_id: int) -> Project:
    try:
        return Project.objects.select_related('client').get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")


def get_project_by_code(code: str) -> Project:
    try:
        return Project.objects.select_related('client').get(code__iexact=code)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {code} not found.")


def search_projects(
    *,
    search: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[str] = None,
    company: Optional[str] = None,
    client_id: Optional[int] = None
):
    """
    Filter projects.

    ``status`` accepts a comma separated list, matched case-insensitively.
    """
    queryset = Project.objects.select_related('client')

    if search:
        queryset = queryset.filter(
            Q(code__icontains=search) |
            Q(name__icontains=search) |
            Q(company__icontains=search) |
            Q(type__icontains=search) |
            Q(location__icontains=search) |
            Q(client__name__icontains=search)
        )
    if type:
        queryset = queryset.filter(type__iexact=type)
    if status:
        statuses = [s.strip().upper() for s in status.split(',') if s.strip()]
        queryset = queryset.filter(status__in=statuses)
    if company:
        queryset = queryset.filter(company__icontains=company)
    if client_id:
        queryset = queryset.filter(client_id=client_id)

    return queryset


def get_project_codes() -> List[Dict[str, Any]]:
    """Return code and name of every project, newest first."""
    return list(
        Project.objects
        .order_by('-created_at')
        .values('id', 'code', 'name')
    )


def get_projects_by_payment_status(status: str) -> List[Dict[str, Any]]:
    """
    List projects in a payment status bucket.

    Buckets are disjoint:
        completed - status COMPLETED or nothing left to collect
        ongoing   - status ACTIVE with money still pending
        pending   - everything else

    Raises:
        InvalidPaymentStatusError: If status is not a known bucket
    """
    status = (status or '').lower()
    if status not in PaymentStatus.values:
        raise InvalidPaymentStatusError()

    projects = (
        Project.objects
        .select_related('client')
        .filter(PAYMENT_STATUS_FILTERS[status])
        .order_by('-updated_at')
    )

    results = []
    for project in projects:
        client_name = 'Unknown'
        if project.client:
            client_name = project.client.name or project.client.company or 'Unknown'
        results.append({
            'id': project.id,
            'code': project.code,
            'name': project.name or f"Project {project.code}",
            'amount': project.amount,
            'pending_amt': project.pending_amt,
            'status': project.payment_status,
            'client_name': client_name,
            'client_initial': client_name[:1].upper(),
            'updated_at': project.updated_at,
        })
    return results


def get_project_stats() -> Dict[str, Any]:
    """Portfolio-wide project statistics."""
    totals = Project.objects.aggregate(
        total_projects=Count('id'),
        total_revenue=Sum('amount'),
        total_profit=Sum('profit'),
        total_pending=Sum('pending_amt'),
        average_project_value=Avg('amount'),
    )

    status_breakdown = (
        Project.objects
        .values('status')
        .annotate(count=Count('id'))
        .order_by('status')
    )
    type_breakdown = (
        Project.objects
        .exclude(type='')
        .values('type')
        .annotate(count=Count('id'))
        .order_by('-count', 'type')
    )

    zero = Decimal('0.00')
    average = totals['average_project_value']

    return {
        'total_projects': totals['total_projects'],
        'total_revenue': totals['total_revenue'] or zero,
        'total_profit': totals['total_profit'] or zero,
        'total_pending': totals['total_pending'] or zero,
        'average_project_value': Decimal(average).quantize(Decimal('0.01')) if average is not None else zero,
        'status_breakdown': list(status_breakdown),
        'type_breakdown': list(type_breakdown),
    }
