from django.conf import settings
from django.db import models
from django.utils import timezone


class ReconciliationRun(models.Model):
    """Persisted report of one reconciliation sweep."""

    started_at = models.DateTimeField(default=timezone.now)
    finished_at = models.DateTimeField(null=True, blank=True)
    triggered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reconciliation_runs'
    )

    total_projects = models.PositiveIntegerField(default=0)
    consistent_projects = models.PositiveIntegerField(default=0)
    inconsistent_projects = models.PositiveIntegerField(default=0)
    total_issues = models.PositiveIntegerField(default=0)
    total_corrections = models.PositiveIntegerField(default=0)
    errors = models.PositiveIntegerField(default=0)
    details = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'reconciliation_runs'
        ordering = ['-started_at']

    def __str__(self):
        return f"Reconciliation {self.started_at:%Y-%m-%d %H:%M} ({self.total_issues} issues)"
