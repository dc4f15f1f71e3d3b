from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public user payload. Device tokens are never exposed."""
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    notificationPreferences = serializers.JSONField(source='notification_preferences', read_only=True)
    lastLogin = serializers.DateTimeField(source='last_login', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'role',
            'department',
            'phone',
            'isActive',
            'notificationPreferences',
            'lastLogin',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role']
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    notificationPreferences = serializers.DictField(
        source='notification_preferences', child=serializers.BooleanField(), required=False
    )


class DeviceTokenSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=512)


class AdminUserUpdateSerializer(serializers.Serializer):
    # Unknown role/department values are dropped by the service, not rejected here.
    role = serializers.CharField(required=False)
    department = serializers.CharField(required=False)
    isActive = serializers.BooleanField(source='is_active', required=False)
