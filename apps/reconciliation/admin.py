from django.contrib import admin
from .models import ReconciliationRun


@admin.register(ReconciliationRun)
class ReconciliationRunAdmin(admin.ModelAdmin):
    list_display = [
        'started_at',
        'triggered_by',
        'total_projects',
        'inconsistent_projects',
        'total_issues',
        'total_corrections',
        'errors',
    ]
    list_filter = ['started_at']
    readonly_fields = [
        'started_at', 'finished_at', 'triggered_by',
        'total_projects', 'consistent_projects', 'inconsistent_projects',
        'total_issues', 'total_corrections', 'errors', 'details',
    ]

    def has_add_permission(self, request):
        return False
