"""
Permission classes for role administration.
"""
from django.conf import settings
from rest_framework.permissions import BasePermission


def is_system_admin(user) -> bool:
    if not (user and user.is_authenticated):
        return False
    if user.is_superuser or user.is_staff:
        return True
    role = getattr(user, 'role', None)
    return bool(role and role.is_active and role.name in settings.ADMIN_ROLE_NAMES)


class IsSystemAdmin(BasePermission):
    """Allow access only to users allowed to configure roles."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return is_system_admin(getattr(request, "user", None))
