import logging

from drf_yasg.utils import swagger_auto_schema
from rest_framework.views import APIView

from accounts.serializers import UserSerializer
from dashboards.services import reports
from fleet.serializers import DriverProfileSerializer
from logistics_core.responses import envelope
from notifications.serializers import NotificationSerializer
from truck_requests.serializers import TruckRequestSerializer
from yard.serializers import YardMovementSerializer

logger = logging.getLogger(__name__)

BUILDERS = {
    'loader': reports.loader_dashboard,
    'dispatcher': reports.dispatcher_dashboard,
    'switcher': reports.switcher_dashboard,
    'driver': reports.driver_dashboard,
    'admin': reports.admin_dashboard,
}

# Keys holding model instances, and how to render them.
RENDERERS = {
    'recentRequests': TruckRequestSerializer,
    'pendingRequests': TruckRequestSerializer,
    'inProgressRequests': TruckRequestSerializer,
    'urgentRequests': TruckRequestSerializer,
    'assignedRequests': TruckRequestSerializer,
    'currentTrip': TruckRequestSerializer,
    'recentMovements': YardMovementSerializer,
    'recentUsers': UserSerializer,
    'profile': DriverProfileSerializer,
}


def _render(data):
    rendered = {}
    for key, value in data.items():
        serializer = RENDERERS.get(key)
        if serializer is not None:
            if value is None:
                rendered[key] = None
            else:
                rendered[key] = serializer(value, many=isinstance(value, list)).data
        elif key == 'notifications':
            rendered[key] = {
                'unreadCount': value['unreadCount'],
                'recent': NotificationSerializer(value['recent'], many=True).data,
            }
        else:
            rendered[key] = value
    return rendered


class DashboardView(APIView):
    """
    Read-only dashboard for one role, e.g. /api/dashboard/loader/.
    """

    def get_operation(self, request):
        return f"dashboard.{self.kwargs.get('role')}"

    @swagger_auto_schema(tags=['Dashboards'])
    def get(self, request, role, format=None):
        data = BUILDERS[role](request.user)
        payload = {'user': UserSerializer(request.user).data}
        payload.update(_render(data))
        return envelope(payload, f"{role.title()} dashboard data retrieved successfully")
