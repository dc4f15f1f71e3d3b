from django.urls import path

from dashboards.views import DashboardView

app_name = 'dashboards'

urlpatterns = [
    path('<str:role>/', DashboardView.as_view(), name='dashboard'),
]
