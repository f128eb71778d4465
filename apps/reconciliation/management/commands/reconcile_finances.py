"""
Management command to reconcile project financials.

Intended for operator cron jobs.

Usage:
    python manage.py reconcile_finances
    python manage.py reconcile_finances --validate-only
    python manage.py reconcile_finances --correct
"""

from django.core.management.base import BaseCommand
from apps.reconciliation.services import (
    reconcile_all,
    validate_consistency,
    perform_automated_corrections,
    record_audit_entry,
)


class Command(BaseCommand):
    help = 'Reconcile stored project financials with income, expense and payment rows'

    def add_arguments(self, parser):
        parser.add_argument(
            '--validate-only',
            action='store_true',
            help='Only report consistency problems, change nothing',
        )
        parser.add_argument(
            '--correct',
            action='store_true',
            help='Apply safe automated corrections before the sweep',
        )

    def handle(self, *args, **options):
        if options['validate_only']:
            self._validate()
            return

        if options['correct']:
            result = perform_automated_corrections()
            record_audit_entry(operation='automated_corrections', details=result)
            for line in result['details']:
                self.stdout.write(f'  - {line}')
            self.stdout.write(
                f"Corrections applied: {result['corrections_applied']}, errors: {result['errors']}"
            )

        report = reconcile_all()

        for detail in report['details']:
            if detail['is_consistent']:
                continue
            self.stdout.write(f"\n{detail['project_code'] or detail['project_id']}:")
            for issue in detail['issues']:
                self.stdout.write(f'  ! {issue}')
            for correction in detail['corrections']:
                self.stdout.write(f'  + {correction}')
            if detail['error']:
                self.stdout.write(self.style.ERROR(f"  x {detail['error']}"))

        summary = (
            f"\nReconciled {report['total_projects']} project(s): "
            f"{report['consistent_projects']} consistent, "
            f"{report['inconsistent_projects']} inconsistent, "
            f"{report['total_corrections']} correction(s), "
            f"{report['errors']} error(s)"
        )
        if report['errors']:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))

    def _validate(self):
        result = validate_consistency()
        if result['is_valid']:
            self.stdout.write(self.style.SUCCESS('No consistency problems found.'))
            return

        for issue, recommendation in zip(result['issues'], result['recommendations']):
            self.stdout.write(self.style.WARNING(f'  ! {issue}'))
            self.stdout.write(f'    {recommendation}')
