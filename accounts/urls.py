from django.urls import path

from accounts.views import (
    AdminUserDetailView,
    AdminUserListView,
    DeviceTokenView,
    LogoutView,
    ProfileView,
)

app_name = 'accounts'

urlpatterns = [
    path('user/profile/', ProfileView.as_view(), name='profile'),
    path('user/device-token/', DeviceTokenView.as_view(), name='device_token'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),
    path('admin/users/', AdminUserListView.as_view(), name='admin_user_list'),
    path('admin/users/<int:pk>/', AdminUserDetailView.as_view(), name='admin_user_update'),
]
