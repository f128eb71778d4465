from django.contrib import admin
from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'number', 'email', 'project_count', 'created_at']
    search_fields = ['name', 'company', 'number', 'email']
    ordering = ['name']

    def project_count(self, obj):
        return obj.projects.count()
    project_count.short_description = 'Projects'
