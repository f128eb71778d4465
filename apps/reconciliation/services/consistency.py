"""Read-only consistency checks and safe automated corrections."""

import logging
from decimal import Decimal
from typing import Any, Dict, List

from django.db import transaction
from django.db.models import Count

from apps.finances.models import Income, Expense, ProjectPayment
from apps.projects.models import Project
from apps.projects.services import calculate_project_financials
from .sweep import CHECKED_FIELDS

logger = logging.getLogger(__name__)


def orphaned_incomes():
    """Income rows whose project id points at a missing project."""
    return (
        Income.objects
        .filter(project_id__isnull=False)
        .exclude(project_id__in=Project.objects.values('id'))
    )


def orphaned_expenses():
    """Expense rows whose project id points at a missing project."""
    return (
        Expense.objects
        .filter(project_id__isnull=False)
        .exclude(project_id__in=Project.objects.values('id'))
    )


def _derived_drift():
    """Ids of projects with stale derived fields and with payment history drift."""
    stale, mismatched = [], []
    for project in Project.objects.order_by('id'):
        expected = calculate_project_financials(project)
        if any(getattr(project, f) != getattr(expected, f) for f, _ in CHECKED_FIELDS):
            stale.append(project.id)
        if expected.payment_shortfall != 0:
            mismatched.append(project.id)
    return stale, mismatched


def _duplicate_payment_ids() -> List[int]:
    pairs = (
        ProjectPayment.objects
        .filter(income__isnull=False)
        .order_by()
        .values('project_id', 'income_id')
        .annotate(count=Count('id'))
        .filter(count__gt=1)
    )
    ids = []
    for pair in pairs:
        ids.extend(
            ProjectPayment.objects
            .filter(project_id=pair['project_id'], income_id=pair['income_id'])
            .order_by('id')
            .values_list('id', flat=True)
        )
    return ids


def validate_consistency() -> Dict[str, Any]:
    """
    Report consistency problems without changing anything.

    Returns:
        Dict with is_valid, issues, recommendations and findings; each
        finding carries check, count, record_ids and recommendation
    """
    stale_ids, mismatched_ids = _derived_drift()

    checks = [
        (
            'orphaned_income',
            list(orphaned_incomes().values_list('id', flat=True)),
            'Found {count} orphaned income records',
            'Review and clean up orphaned income records',
        ),
        (
            'orphaned_expenses',
            list(orphaned_expenses().values_list('id', flat=True)),
            'Found {count} orphaned expense records',
            'Review and clean up orphaned expense records',
        ),
        (
            'stale_financials',
            stale_ids,
            'Found {count} projects with stale derived financials',
            'Run the reconciliation sweep to recompute derived financials',
        ),
        (
            'payment_history_mismatch',
            mismatched_ids,
            'Found {count} projects whose payment history does not match income',
            'Run the reconciliation sweep to back-fill missing payments. Surplus payments '
            'are never removed automatically, review payments without a linked income manually',
        ),
        (
            'negative_pending',
            list(Project.objects.filter(pending_amt__lt=0).values_list('id', flat=True)),
            'Found {count} projects with negative pending amounts',
            'Review projects with negative pending amounts',
        ),
        (
            'negative_profit',
            list(Project.objects.filter(profit__lt=0).values_list('id', flat=True)),
            'Found {count} projects with negative profit',
            'Review projects with negative profit',
        ),
        (
            'duplicate_payments',
            _duplicate_payment_ids(),
            'Found {count} duplicate payment records',
            'Remove duplicate payment records',
        ),
    ]

    issues, recommendations, findings = [], [], []
    for check, record_ids, issue, recommendation in checks:
        if not record_ids:
            continue
        issues.append(issue.format(count=len(record_ids)))
        recommendations.append(recommendation)
        findings.append({
            'check': check,
            'count': len(record_ids),
            'record_ids': record_ids,
            'recommendation': recommendation,
        })

    if issues:
        logger.warning("Consistency check found %d problem(s): %s", len(issues), '; '.join(issues))

    return {
        'is_valid': not issues,
        'issues': issues,
        'recommendations': recommendations,
        'findings': findings,
    }


def _detach_orphans(queryset, label: str) -> List[str]:
    details = []
    for record_id in list(queryset.values_list('id', flat=True)):
        queryset.model.objects.filter(id=record_id).update(project_id=None)
        details.append(f"Removed orphaned {label} record {record_id}")
    return details


def _clamp_negative_pending() -> List[str]:
    details = []
    for project in Project.objects.filter(pending_amt__lt=0).order_by('id'):
        Project.objects.filter(id=project.id).update(pending_amt=Decimal('0.00'))
        details.append(f"Fixed negative pending amount for project {project.code}")
    return details


def perform_automated_corrections() -> Dict[str, Any]:
    """
    Apply the unambiguous fixes.

    Orphaned income and expense rows lose their project reference and
    negative pending amounts are clamped to zero. Each category runs in its
    own transaction so one failing category does not block the others.

    Returns:
        Dict with corrections_applied, errors and details
    """
    corrections = [
        ('orphaned income', lambda: _detach_orphans(orphaned_incomes(), 'income')),
        ('orphaned expenses', lambda: _detach_orphans(orphaned_expenses(), 'expense')),
        ('negative pending amounts', _clamp_negative_pending),
    ]

    details: List[str] = []
    applied = 0
    errors = 0

    for label, correct in corrections:
        try:
            with transaction.atomic():
                category_details = correct()
        except Exception as e:
            logger.exception("Automated correction failed for %s", label)
            errors += 1
            details.append(f"Error fixing {label}: {e}")
            continue
        applied += len(category_details)
        details.extend(category_details)

    logger.info("Automated corrections: %d applied, %d errors", applied, errors)
    return {
        'corrections_applied': applied,
        'errors': errors,
        'details': details,
    }
