from django.urls import path

from notifications.views import MarkAllReadView, NotificationDetailView, NotificationListView

app_name = 'notifications'

urlpatterns = [
    path('', NotificationListView.as_view(), name='notification_list'),
    path('mark-all-read/', MarkAllReadView.as_view(), name='notification_mark_all_read'),
    path('<int:pk>/', NotificationDetailView.as_view(), name='notification_detail'),
]
