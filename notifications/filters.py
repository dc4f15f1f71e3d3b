from django_filters import rest_framework as filters

from notifications.models import Notification


class NotificationFilter(filters.FilterSet):
    isRead = filters.BooleanFilter(field_name='is_read')
    type = filters.ChoiceFilter(field_name='notification_type', choices=Notification.TYPE_CHOICES)

    class Meta:
        model = Notification
        fields = ['isRead', 'type']
