from django.contrib import admin
from .models import Project
from .services import recompute_project_financials


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = [
        'code',
        'name',
        'client',
        'status',
        'amount',
        'received_amt',
        'pending_amt',
        'profit',
        'shoot_start_date',
    ]
    list_filter = ['status', 'type', 'outsourcing', 'outsourcing_paid']
    search_fields = ['code', 'name', 'company', 'client__name']
    raw_id_fields = ['client']
    readonly_fields = ['code', 'received_amt', 'pending_amt', 'profit', 'created_at', 'updated_at']
    date_hierarchy = 'shoot_start_date'

    fieldsets = (
        ('Project', {
            'fields': ('code', 'name', 'company', 'type', 'status', 'client'),
        }),
        ('Shoot', {
            'fields': ('shoot_start_date', 'shoot_end_date', 'location', 'address', 'reference'),
        }),
        ('Outsourcing', {
            'fields': ('outsourcing', 'outsourcing_amt', 'out_for', 'out_client', 'outsourcing_paid'),
            'classes': ('collapse',),
        }),
        ('Financials', {
            'fields': ('amount', 'received_amt', 'pending_amt', 'profit'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    actions = ['recompute_financials']

    @admin.action(description='Recompute financials for selected projects')
    def recompute_financials(self, request, queryset):
        count = 0
        for project_id in queryset.values_list('id', flat=True):
            recompute_project_financials(project_id=project_id)
            count += 1
        self.message_user(request, f'Recomputed {count} project(s).')
