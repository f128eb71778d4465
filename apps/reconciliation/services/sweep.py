"""
Reconciliation sweep.

Compares every project's stored derived financials with the values derived
from its child rows, writes the expected values back, and back-fills payment
history that falls short of recorded income.

Each project is reconciled in its own transaction. A failure on one project
is recorded on that project's result and the sweep moves on.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.finances.models import ProjectPayment, PaymentType
from apps.projects.models import Project
from apps.projects.services import calculate_project_financials
from ..models import ReconciliationRun
from .audit import record_audit_entry
from .exceptions import ReconciliationError

logger = logging.getLogger(__name__)

CHECKED_FIELDS = [
    ('received_amt', 'Received amount'),
    ('pending_amt', 'Pending amount'),
    ('profit', 'Profit'),
]


@dataclass
class ProjectReconciliation:
    """Outcome of reconciling one project."""

    project_id: int
    project_code: Optional[str]
    issues: List[str] = field(default_factory=list)
    corrections: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_consistent(self) -> bool:
        return not self.issues and self.error is None

    def as_dict(self) -> Dict[str, Any]:
        return {
            'project_id': self.project_id,
            'project_code': self.project_code,
            'issues': self.issues,
            'corrections': self.corrections,
            'is_consistent': self.is_consistent,
            'error': self.error,
        }


def _create_shortfall_payment(project: Project, shortfall: Decimal) -> ProjectPayment:
    """
    Back-fill payment history with one synthetic payment.

    The payment is dated with the most recent income of the project. That
    date is a guess, which the description says. When linking is enabled the
    payment is attached to the most recent income that has no payment yet, so
    no (project, income) pair is ever doubled; if every income is already
    paid the payment stays unlinked.
    """
    incomes = project.incomes.order_by('-date', '-id')
    latest_income = incomes.first()
    if latest_income is None:
        raise ReconciliationError(
            f"Project {project.code} has a payment shortfall but no income rows"
        )

    linked_income = None
    if getattr(settings, 'RECONCILIATION_LINK_SYNTHETIC_PAYMENTS', False):
        linked_income = incomes.filter(payments__isnull=True).first()

    return ProjectPayment.objects.create(
        project=project,
        income=linked_income,
        amount=shortfall,
        payment_date=latest_income.date,
        description=(
            f"Reconciliation adjustment for {project.name or project.code}: "
            f"date approximated from latest income ({latest_income.date})"
        ),
        payment_type=PaymentType.PARTIAL,
        is_reconciliation=True,
    )


def reconcile_project(project_id: int) -> ProjectReconciliation:
    """
    Reconcile a single project inside its own transaction.

    Raises:
        Project.DoesNotExist: If the project vanished since it was listed
        ReconciliationError: If payment history cannot be back-filled
    """
    with transaction.atomic():
        project = Project.objects.select_for_update().get(id=project_id)
        result = ProjectReconciliation(project_id=project.id, project_code=project.code)

        expected = calculate_project_financials(project)

        changed = []
        for field_name, label in CHECKED_FIELDS:
            stored = getattr(project, field_name)
            calculated = getattr(expected, field_name)
            if stored != calculated:
                result.issues.append(f"{label} mismatch: stored={stored}, calculated={calculated}")
                result.corrections.append(f"Updated {label.lower()} from {stored} to {calculated}")
                setattr(project, field_name, calculated)
                changed.append(field_name)

        if changed:
            project.save(update_fields=changed + ['updated_at'])

        shortfall = expected.payment_shortfall
        if shortfall != 0:
            result.issues.append(
                f"Payment history mismatch: payments={expected.payments_total}, "
                f"income={expected.received_amt}"
            )
            # A surplus cannot be fixed without deleting payments; report only
            if shortfall > 0:
                _create_shortfall_payment(project, shortfall)
                result.corrections.append(f"Created missing payment record for amount {shortfall}")

    if result.issues:
        logger.warning(
            "Drift detected on project %s: %s",
            result.project_code,
            '; '.join(result.issues),
        )
    return result


def reconcile_all(*, triggered_by=None) -> Dict[str, Any]:
    """
    Reconcile every project and persist the report.

    Returns:
        Dict with total_projects, consistent_projects, inconsistent_projects,
        total_issues, total_corrections, errors and per-project details
    """
    started_at = timezone.now()
    results: List[ProjectReconciliation] = []

    for project_id, project_code in Project.objects.order_by('id').values_list('id', 'code'):
        try:
            result = reconcile_project(project_id)
        except Exception as e:
            logger.exception("Reconciliation failed for project %s", project_code or project_id)
            result = ProjectReconciliation(
                project_id=project_id,
                project_code=project_code,
                error=str(e) or e.__class__.__name__,
            )
        results.append(result)

    report = {
        'total_projects': len(results),
        'consistent_projects': sum(1 for r in results if r.is_consistent),
        'inconsistent_projects': sum(1 for r in results if not r.is_consistent),
        'total_issues': sum(len(r.issues) for r in results),
        'total_corrections': sum(len(r.corrections) for r in results),
        'errors': sum(1 for r in results if r.error is not None),
        'details': [r.as_dict() for r in results],
    }

    run = ReconciliationRun.objects.create(
        started_at=started_at,
        finished_at=timezone.now(),
        triggered_by=triggered_by,
        **report
    )
    report['run_id'] = run.id

    logger.info(
        "Reconciliation finished: %d projects, %d issues, %d corrections, %d errors",
        report['total_projects'],
        report['total_issues'],
        report['total_corrections'],
        report['errors'],
    )
    record_audit_entry(
        operation='reconcile_all',
        details={k: v for k, v in report.items() if k != 'details'},
        user=triggered_by,
    )
    return report


def get_reconciliation_stats() -> Dict[str, Any]:
    """Project count and the summary of the latest reconciliation run."""
    last_run = ReconciliationRun.objects.order_by('-started_at', '-id').first()

    stats = {
        'total_projects': Project.objects.count(),
        'total_runs': ReconciliationRun.objects.count(),
        'last_reconciliation': None,
        'consistent_projects': 0,
        'inconsistent_projects': 0,
        'total_issues': 0,
        'total_corrections': 0,
        'errors': 0,
    }
    if last_run is not None:
        stats.update({
            'last_reconciliation': last_run.finished_at or last_run.started_at,
            'consistent_projects': last_run.consistent_projects,
            'inconsistent_projects': last_run.inconsistent_projects,
            'total_issues': last_run.total_issues,
            'total_corrections': last_run.total_corrections,
            'errors': last_run.errors,
        })
    return stats
