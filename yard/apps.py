from django.apps import AppConfig


class YardConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'yard'
