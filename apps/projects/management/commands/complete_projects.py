"""
Management command to complete projects that meet the completion criteria.

Runs next to reconcile_finances in operator cron jobs.

Usage:
    python manage.py complete_projects
    python manage.py complete_projects --dry-run
"""

from django.core.management.base import BaseCommand
from apps.projects.services import auto_complete_projects
from apps.reconciliation.services import record_audit_entry


class Command(BaseCommand):
    help = 'Mark fully paid projects, and paid-enough projects whose shoot has ended, as completed'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only list projects that would be completed',
        )

    def handle(self, *args, **options):
        result = auto_complete_projects(dry_run=options['dry_run'])

        for detail in result['details']:
            label = detail['project_code'] or detail['project_id']
            if detail['success']:
                self.stdout.write(f"  + {label}: {detail['reason']}")
            else:
                self.stdout.write(self.style.ERROR(f"  x {label}: {detail['reason']}"))

        if result['dry_run']:
            self.stdout.write(
                f"\nDry run: {result['completed']} of {result['checked']} open project(s) would be completed"
            )
            return

        record_audit_entry(operation='auto_complete_projects', details=result)

        summary = (
            f"\nChecked {result['checked']} open project(s): "
            f"{result['completed']} completed, {result['errors']} error(s)"
        )
        if result['errors']:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
