"""
Best-effort notification fan-out.

Callers invoke these helpers after their own transaction has committed. Each
recipient's notification is written in its own savepoint, and a failed write
is logged and skipped, so one bad recipient never affects the others or the
operation that triggered the fan-out.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from notifications.models import Notification

logger = logging.getLogger(__name__)

User = get_user_model()


def notify(recipients, notification_type, title, message, data=None, sender=None):
    """
    Persist one notification per recipient.

    Args:
        recipients: Iterable of users; ``None`` entries are skipped.
        notification_type: One of ``Notification.TYPE_CHOICES``.
        title: Short heading.
        message: Body text.
        data: JSON payload with related ids and ``actionUrl``.
        sender: Acting user, if any.

    Returns:
        List of notifications that were stored.
    """
    stored = []
    for recipient in recipients:
        if recipient is None:
            continue
        try:
            with transaction.atomic():
                notification = Notification.objects.create(
                    recipient=recipient,
                    sender=sender,
                    notification_type=notification_type,
                    title=title,
                    message=message,
                    data=dict(data or {}),
                )
        except Exception:
            logger.exception(f"Failed to store '{notification_type}' notification for user {recipient.pk}")
            continue
        stored.append(notification)

    logger.debug(f"Stored {len(stored)} '{notification_type}' notification(s)")
    return stored


def notify_roles(roles, notification_type, title, message, data=None, sender=None):
    """Notify every active user holding one of ``roles``."""
    recipients = User.objects.filter(role__in=list(roles), is_active=True)
    return notify(recipients, notification_type, title, message, data=data, sender=sender)


def notify_user(recipient, notification_type, title, message, data=None, sender=None):
    return notify([recipient], notification_type, title, message, data=data, sender=sender)
