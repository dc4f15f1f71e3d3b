import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from accounts import roles
from logistics_core.exceptions import InvalidInput, NotFound

logger = logging.getLogger(__name__)

User = get_user_model()

PROFILE_FIELDS = ('name', 'phone')
VALID_ROLES = {value for value, _ in roles.ROLE_CHOICES}
VALID_DEPARTMENTS = {value for value, _ in roles.DEPARTMENT_CHOICES}


def record_sign_in(email, name=''):
    """
    Sign-in bookkeeping: create the user as a loader in the loading
    department on first sign-in, then stamp ``last_login``.

    Returns ``(user, created)``.
    """
    if not email:
        raise InvalidInput('Email is required')

    email = email.strip().lower()
    with transaction.atomic():
        user, created = User.objects.select_for_update().get_or_create(
            email=email,
            defaults={
                'username': email,
                'name': name or '',
                'role': roles.LOADER,
                'department': 'loading',
            },
        )
        if created:
            user.set_unusable_password()
            logger.info(f"Created user {user.pk} on first sign-in")
        user.last_login = timezone.now()
        user.save()
    return user, created


def update_profile(user, data):
    """Update name/phone and merge notification preferences."""
    changed = []
    for field in PROFILE_FIELDS:
        if field in data and data[field] is not None:
            setattr(user, field, data[field])
            changed.append(field)

    preferences = data.get('notification_preferences')
    if preferences is not None:
        if not isinstance(preferences, dict):
            raise InvalidInput('notificationPreferences must be an object')
        merged = dict(user.notification_preferences or {})
        merged.update({key: bool(value) for key, value in preferences.items()})
        user.notification_preferences = merged
        changed.append('notification_preferences')

    if changed:
        user.save(update_fields=changed + ['updated_at'])
    return user


def add_device_token(user, token):
    if not token:
        raise InvalidInput('Device token is required')
    tokens = list(user.device_tokens or [])
    if token not in tokens:
        tokens.append(token)
        user.device_tokens = tokens
        user.save(update_fields=['device_tokens', 'updated_at'])
    return len(tokens)


def remove_device_token(user, token):
    if not token:
        raise InvalidInput('Device token is required')
    tokens = [t for t in (user.device_tokens or []) if t != token]
    if len(tokens) != len(user.device_tokens or []):
        user.device_tokens = tokens
        user.save(update_fields=['device_tokens', 'updated_at'])
    return len(tokens)


def clear_device_tokens(user):
    if user.device_tokens:
        user.device_tokens = []
        user.save(update_fields=['device_tokens', 'updated_at'])


def admin_update_user(actor, user_id, data):
    """
    Change role, department or the active flag. Values outside the enums are
    ignored rather than rejected.
    """
    try:
        user = User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFound('User not found')

    changed = []
    role = data.get('role')
    if role in VALID_ROLES:
        user.role = role
        changed.append('role')

    department = data.get('department')
    if department in VALID_DEPARTMENTS:
        user.department = department
        changed.append('department')

    is_active = data.get('is_active')
    if isinstance(is_active, bool):
        user.is_active = is_active
        changed.append('is_active')

    if changed:
        user.save(update_fields=changed + ['updated_at'])
        logger.info(f"Admin {actor.pk} updated user {user.pk}: {', '.join(changed)}")
    return user
