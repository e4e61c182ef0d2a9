"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission

from .services.audit import log_action

ADMIN_ROLES = {"admin"}


class IsAdminRole(BasePermission):
    """Allow access only to callers whose token carries an administrative role."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if getattr(user, "is_admin", False):
            return True
        log_action(user=user, action="admin_denied", detail={"path": request.path, "role": user.role})
        return False
