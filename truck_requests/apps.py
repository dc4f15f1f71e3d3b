from django.apps import AppConfig


class TruckRequestsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'truck_requests'
