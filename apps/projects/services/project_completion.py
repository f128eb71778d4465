"""
Project completion.

An open project qualifies for completion when it is fully paid, or when its
shoot has ended and at least ``PROJECT_COMPLETION_THRESHOLD`` of its value
has been received. The received amount is derived from the project's income
rows, so a project with stale stored financials is judged on its real
income.

Completed and cancelled projects are never auto-completed.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from ..models import Project, ProjectStatus
from .exceptions import ProjectNotFoundError
from .financials import calculate_project_financials

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_THRESHOLD = Decimal('0.80')

CLOSED_STATUSES = [ProjectStatus.COMPLETED, ProjectStatus.CANCELLED]


def _completion_threshold() -> Decimal:
    return Decimal(str(getattr(settings, 'PROJECT_COMPLETION_THRESHOLD', DEFAULT_COMPLETION_THRESHOLD)))


@dataclass
class CompletionCheck:
    """Completion criteria of one project and the verdict."""

    project_id: int
    project_code: Optional[str]
    status: str
    amount: Decimal
    received_amt: Decimal
    shoot_end_date: Optional[date]
    fully_paid: bool
    shoot_ended_with_partial_payment: bool
    should_complete: bool
    reason: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def evaluate_completion(project: Project, today: Optional[date] = None) -> CompletionCheck:
    """Apply the completion rules to a loaded project."""
    today = today or timezone.localdate()
    received = calculate_project_financials(project).received_amt
    threshold = _completion_threshold()

    billable = project.amount > 0
    fully_paid = billable and received >= project.amount
    shoot_ended = project.shoot_end_date is not None and project.shoot_end_date < today
    partially_paid = billable and received >= project.amount * threshold

    if project.status == ProjectStatus.COMPLETED:
        should_complete, reason = False, 'Project already completed'
    elif project.status == ProjectStatus.CANCELLED:
        should_complete, reason = False, 'Project cancelled'
    elif fully_paid:
        should_complete, reason = True, 'Project fully paid'
    elif shoot_ended and partially_paid:
        should_complete = True
        reason = f'Shoot end date passed with {threshold * 100:.0f}% payment received'
    else:
        should_complete, reason = False, 'Completion criteria not met'

    return CompletionCheck(
        project_id=project.id,
        project_code=project.code,
        status=project.status,
        amount=project.amount,
        received_amt=received,
        shoot_end_date=project.shoot_end_date,
        fully_paid=fully_paid,
        shoot_ended_with_partial_payment=shoot_ended and partially_paid,
        should_complete=should_complete,
        reason=reason,
    )


def check_completion_criteria(project_id: int, today: Optional[date] = None) -> CompletionCheck:
    """
    Evaluate whether a project should be completed.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")

    return evaluate_completion(project, today)


@transaction.atomic
def mark_project_complete(*, project_id: int, reason: str, admin_override: bool = False) -> Project:
    """
    Set a project's status to completed.

    Completing an already completed project is a no-op.

    Raises:
        ProjectNotFoundError: If project doesn't exist
    """
    try:
        project = Project.objects.select_for_update().get(id=project_id)
    except Project.DoesNotExist:
        raise ProjectNotFoundError(f"Project {project_id} not found.")

    if project.status == ProjectStatus.COMPLETED:
        logger.info("Project %s is already completed", project.code)
        return project

    previous_status = project.status
    project.status = ProjectStatus.COMPLETED
    project.save(update_fields=['status', 'updated_at'])

    logger.info(
        "Project %s marked as complete (was %s): %s, admin_override=%s",
        project.code, previous_status, reason, admin_override,
    )
    return project


def auto_complete_projects(*, today: Optional[date] = None, dry_run: bool = False) -> Dict[str, Any]:
    """
    Complete every open project that meets the completion criteria.

    Each project is handled in its own transaction; a failure is logged,
    counted and the run moves on. With ``dry_run`` nothing is written and
    ``completed`` counts the projects that would be completed.

    Returns:
        Dict with checked, completed, errors, dry_run and details
        (``{project_id, project_code, reason, success}`` per project acted on)
    """
    today = today or timezone.localdate()
    open_projects = (
        Project.objects
        .exclude(status__in=CLOSED_STATUSES)
        .order_by('id')
        .values_list('id', 'code')
    )

    checked = 0
    completed = 0
    errors = 0
    details: List[Dict[str, Any]] = []

    for project_id, project_code in open_projects:
        checked += 1
        try:
            with transaction.atomic():
                check = check_completion_criteria(project_id, today)
                if not check.should_complete:
                    continue
                if not dry_run:
                    mark_project_complete(project_id=project_id, reason=check.reason)
        except Exception as e:
            logger.exception("Auto-completion failed for project %s", project_code or project_id)
            errors += 1
            details.append({
                'project_id': project_id,
                'project_code': project_code,
                'reason': f'Error: {str(e) or e.__class__.__name__}',
                'success': False,
            })
            continue

        completed += 1
        details.append({
            'project_id': project_id,
            'project_code': project_code,
            'reason': check.reason,
            'success': True,
        })

    logger.info(
        "Auto-completion finished: %d checked, %d completed, %d errors%s",
        checked, completed, errors, ' (dry run)' if dry_run else '',
    )
    return {
        'checked': checked,
        'completed': completed,
        'errors': errors,
        'dry_run': dry_run,
        'details': details,
    }


def get_completion_stats(today: Optional[date] = None) -> Dict[str, Any]:
    """
    Project counts by completion.

    ``completed_this_month`` counts completed projects last updated since the
    first of the current month.
    """
    today = today or timezone.localdate()
    month_start = timezone.make_aware(datetime.combine(today.replace(day=1), time.min))

    completed = Project.objects.filter(status=ProjectStatus.COMPLETED)

    return {
        'total_projects': Project.objects.count(),
        'completed_projects': completed.count(),
        'open_projects': Project.objects.exclude(status__in=CLOSED_STATUSES).count(),
        'cancelled_projects': Project.objects.filter(status=ProjectStatus.CANCELLED).count(),
        'completed_this_month': completed.filter(updated_at__gte=month_start).count(),
    }
