import logging

from django.contrib.auth import get_user_model, logout
from django_filters import rest_framework as filters
from drf_yasg.utils import swagger_auto_schema
from rest_framework.views import APIView

from accounts import services
from accounts.permissions import OperationMixin
from accounts.serializers import (
    AdminUserUpdateSerializer,
    DeviceTokenSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
)
from logistics_core.pagination import paginate
from logistics_core.responses import envelope

logger = logging.getLogger(__name__)

User = get_user_model()


class UserFilter(filters.FilterSet):
    isActive = filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = User
        fields = ['role', 'department']


class ProfileView(OperationMixin, APIView):
    """
    The caller's own profile.
    """
    operation = 'user.profile'

    @swagger_auto_schema(responses={200: UserSerializer}, tags=['Users'])
    def get(self, request, format=None):
        return envelope(UserSerializer(request.user).data, 'Profile retrieved successfully')

    @swagger_auto_schema(request_body=ProfileUpdateSerializer, responses={200: UserSerializer}, tags=['Users'])
    def put(self, request, format=None):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.update_profile(request.user, serializer.validated_data)
        return envelope(UserSerializer(user).data, 'Profile updated successfully')


class DeviceTokenView(OperationMixin, APIView):
    operation = 'user.device_token'

    @swagger_auto_schema(request_body=DeviceTokenSerializer, tags=['Users'])
    def post(self, request, format=None):
        serializer = DeviceTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        count = services.add_device_token(request.user, serializer.validated_data['token'])
        return envelope({'tokenCount': count}, 'Device token registered successfully')

    @swagger_auto_schema(request_body=DeviceTokenSerializer, tags=['Users'])
    def delete(self, request, format=None):
        serializer = DeviceTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        count = services.remove_device_token(request.user, serializer.validated_data['token'])
        return envelope({'tokenCount': count}, 'Device token removed successfully')


class LogoutView(OperationMixin, APIView):
    operation = 'user.logout'

    @swagger_auto_schema(tags=['Auth'])
    def post(self, request, format=None):
        services.clear_device_tokens(request.user)
        logger.info(f"User {request.user.pk} signed out")
        logout(request)
        return envelope(None, 'Logged out successfully')


class AdminUserListView(OperationMixin, APIView):
    operation = 'admin.user.list'

    @swagger_auto_schema(responses={200: UserSerializer(many=True)}, tags=['Admin'])
    def get(self, request, format=None):
        queryset = UserFilter(request.query_params, queryset=User.objects.all()).qs
        users, pagination = paginate(queryset, request)
        return envelope(
            {'users': UserSerializer(users, many=True).data, 'pagination': pagination},
            'Users retrieved successfully',
        )


class AdminUserDetailView(OperationMixin, APIView):
    operation = 'admin.user.update'

    @swagger_auto_schema(request_body=AdminUserUpdateSerializer, responses={200: UserSerializer}, tags=['Admin'])
    def put(self, request, pk, format=None):
        serializer = AdminUserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.admin_update_user(request.user, pk, serializer.validated_data)
        return envelope(UserSerializer(user).data, 'User updated successfully')
