"""
Role-based permission classes shared by all business apps.

Roles:
    admin   - everything, including reconciliation endpoints
    manager - read and write projects, clients and financial records
    user    - read only

Usage:
    class ProjectViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, IsManagerOrReadOnly]
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role."""

    message = 'Insufficient permissions. Admin role required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin_role)


class IsManagerOrAdmin(BasePermission):
    """Allow access to managers and admins."""

    message = 'Insufficient permissions. Manager or admin role required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.can_manage)


class IsManagerOrReadOnly(BasePermission):
    """
    Read access for any authenticated user, write access for managers and admins.
    """

    message = 'Insufficient permissions. Manager or admin role required to modify records.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.can_manage
