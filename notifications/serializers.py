from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)
    recipientId = serializers.IntegerField(source='recipient_id', read_only=True)
    type = serializers.CharField(source='notification_type', read_only=True)
    isRead = serializers.BooleanField(source='is_read', read_only=True)
    readAt = serializers.DateTimeField(source='read_at', read_only=True)
    pushSent = serializers.BooleanField(source='push_sent', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Notification
        fields = [
            'id',
            'recipientId',
            'sender',
            'type',
            'title',
            'message',
            'data',
            'isRead',
            'readAt',
            'pushSent',
            'createdAt',
        ]
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    recipientId = serializers.IntegerField(source='recipient_id')
    type = serializers.ChoiceField(source='notification_type', choices=Notification.TYPE_CHOICES)
    title = serializers.CharField(max_length=200)
    message = serializers.CharField()
    data = serializers.DictField(required=False)
