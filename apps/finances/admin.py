from django.contrib import admin
from .models import Income, Expense, ProjectPayment


@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    # project_id rather than project: orphaned rows point at missing projects
    list_display = ['date', 'description', 'amount', 'project_income', 'project_id']
    list_filter = ['project_income', 'date']
    search_fields = ['description', 'note']
    raw_id_fields = ['project']
    date_hierarchy = 'date'


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['date', 'category', 'description', 'amount', 'project_expense', 'project_id']
    list_filter = ['category', 'project_expense', 'date']
    search_fields = ['description', 'category', 'notes']
    raw_id_fields = ['project']
    date_hierarchy = 'date'


@admin.register(ProjectPayment)
class ProjectPaymentAdmin(admin.ModelAdmin):
    list_display = ['payment_date', 'project', 'amount', 'payment_type', 'is_reconciliation']
    list_filter = ['payment_type', 'is_reconciliation']
    search_fields = ['project__code', 'description']
    raw_id_fields = ['project', 'income']
