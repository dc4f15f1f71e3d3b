"""
The authorization gate.

Views declare which operation each action performs; ``RoleGate`` resolves the
allowed roles from ``accounts.roles.OPERATION_ROLES`` and rejects the call
before any handler runs.
"""
import logging

from rest_framework.permissions import BasePermission

from accounts.roles import roles_for
from logistics_core.exceptions import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)


class RoleGate(BasePermission):
    """
    Admit an authenticated, active user whose role may perform the view's
    operation. Views without an operation (e.g. the health check) must set
    their own ``permission_classes``.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            raise Unauthenticated()

        if not user.is_active:
            logger.warning(f"Inactive user {user.pk} rejected")
            raise Forbidden('User not found or inactive')

        operation = view.get_operation(request) if hasattr(view, 'get_operation') else None
        allowed = roles_for(operation)
        if user.role not in allowed:
            logger.warning(f"User {user.pk} with role '{user.role}' denied '{operation}'")
            raise Forbidden(f"Access denied. Required roles: {', '.join(sorted(allowed))}")
        return True


class OperationMixin:
    """
    Map view actions (viewset action name or HTTP method) to operation names.

    ``operations`` is a dict keyed by action name or lower-case HTTP method;
    ``operation`` is the fallback for single-purpose views.
    """
    operation = None
    operations = {}

    def get_operation(self, request):
        action = getattr(self, 'action', None)
        if action and action in self.operations:
            return self.operations[action]
        method = request.method.lower()
        if method in self.operations:
            return self.operations[method]
        return self.operation
