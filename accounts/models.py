from django.contrib.auth.models import AbstractUser
from django.db import models

from accounts import roles


def default_notification_preferences():
    return {'email': True, 'sms': False, 'push': True}


class User(AbstractUser):
    """
    Application user. Created on first sign-in as a loader; role, department
    and the active flag are only changed by an admin. Users are never deleted.
    """
    ROLE_CHOICES = roles.ROLE_CHOICES
    DEPARTMENT_CHOICES = roles.DEPARTMENT_CHOICES

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=roles.LOADER)
    department = models.CharField(max_length=20, choices=DEPARTMENT_CHOICES, default='loading')
    phone = models.CharField(max_length=32, blank=True)

    # Push delivery is out of scope; tokens are only stored.
    device_tokens = models.JSONField(default=list, blank=True)
    notification_preferences = models.JSONField(default=default_notification_preferences, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.email

    def has_role(self, *role_names):
        return self.role in role_names

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['role'], name='accounts_user_role_idx'),
            models.Index(fields=['is_active'], name='accounts_user_active_idx'),
        ]
