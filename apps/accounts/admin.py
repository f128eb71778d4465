from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLOURS = {
    UserRole.ADMIN: '#B85C5C',
    UserRole.MANAGER: '#A47449',
    UserRole.USER: '#6B8E5E',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for studio accounts with role management."""

    list_display = [
        'email',
        'display_name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
    ]

    search_fields = [
        'email',
        'display_name',
    ]

    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Role', {
            'fields': ('role',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']

    filter_horizontal = ['groups', 'user_permissions']

    actions = ['promote_to_manager', 'demote_to_user']

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLOURS.get(obj.role, '#ccc'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    @admin.action(description='Promote selected users to manager')
    def promote_to_manager(self, request, queryset):
        count = queryset.filter(role=UserRole.USER).update(role=UserRole.MANAGER)
        self.message_user(request, f'Promoted {count} user(s).')

    @admin.action(description='Demote selected managers to user')
    def demote_to_user(self, request, queryset):
        count = queryset.filter(role=UserRole.MANAGER).update(role=UserRole.USER)
        self.message_user(request, f'Demoted {count} user(s).')
