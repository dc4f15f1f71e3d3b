import logging

from drf_yasg.utils import swagger_auto_schema
from rest_framework.views import APIView

from accounts.permissions import OperationMixin
from logistics_core.pagination import paginate
from logistics_core.responses import created, envelope
from notifications.filters import NotificationFilter
from notifications.models import Notification
from notifications.serializers import NotificationCreateSerializer, NotificationSerializer
from notifications.services import inbox

logger = logging.getLogger(__name__)


class NotificationListView(OperationMixin, APIView):
    """
    The caller's notifications, newest first, plus staff-authored messages.
    """
    operations = {
        'get': 'notification.list',
        'post': 'notification.create',
    }

    @swagger_auto_schema(responses={200: NotificationSerializer(many=True)}, tags=['Notifications'])
    def get(self, request, format=None):
        queryset = NotificationFilter(
            request.query_params,
            queryset=Notification.objects.filter(recipient=request.user).select_related('sender'),
        ).qs
        notifications, pagination = paginate(queryset, request)
        return envelope(
            {
                'notifications': NotificationSerializer(notifications, many=True).data,
                'pagination': pagination,
                'unreadCount': inbox.unread_count(request.user),
            },
            'Notifications retrieved successfully',
        )

    @swagger_auto_schema(request_body=NotificationCreateSerializer, responses={201: NotificationSerializer}, tags=['Notifications'])
    def post(self, request, format=None):
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification = inbox.send_notification(request.user, **serializer.validated_data)
        return created(NotificationSerializer(notification).data, 'Notification created successfully')


class NotificationDetailView(OperationMixin, APIView):
    operations = {
        'put': 'notification.read',
        'delete': 'notification.delete',
    }

    @swagger_auto_schema(responses={200: NotificationSerializer}, tags=['Notifications'])
    def put(self, request, pk, format=None):
        notification = inbox.mark_read(request.user, pk)
        return envelope(NotificationSerializer(notification).data, 'Notification marked as read')

    @swagger_auto_schema(tags=['Notifications'])
    def delete(self, request, pk, format=None):
        inbox.delete_notification(request.user, pk)
        return envelope(None, 'Notification deleted successfully')


class MarkAllReadView(OperationMixin, APIView):
    operation = 'notification.read_all'

    @swagger_auto_schema(tags=['Notifications'])
    def put(self, request, format=None):
        modified = inbox.mark_all_read(request.user)
        return envelope({'modifiedCount': modified}, 'All notifications marked as read')
