import logging

from django.contrib.auth import get_user_model
from django.utils import timezone

from logistics_core.exceptions import NotFound
from notifications.models import Notification

logger = logging.getLogger(__name__)

User = get_user_model()


def _own_notification(user, notification_id):
    notification = Notification.objects.filter(pk=notification_id, recipient=user).first()
    if notification is None:
        raise NotFound('Notification not found')
    return notification


def send_notification(sender, recipient_id, notification_type, title, message, data=None):
    """Staff-authored notification for a single user."""
    recipient = User.objects.filter(pk=recipient_id).first()
    if recipient is None:
        raise NotFound('Recipient not found')
    notification = Notification.objects.create(
        recipient=recipient,
        sender=sender,
        notification_type=notification_type,
        title=title,
        message=message,
        data=dict(data or {}),
    )
    logger.info(f"User {sender.pk} sent notification {notification.pk} to user {recipient.pk}")
    return notification


def mark_read(user, notification_id):
    notification = _own_notification(user, notification_id)
    notification.mark_read()
    return notification


def delete_notification(user, notification_id):
    notification = _own_notification(user, notification_id)
    notification.delete()
    logger.info(f"User {user.pk} deleted notification {notification_id}")


def mark_all_read(user):
    """Returns the number of notifications that changed."""
    return Notification.objects.filter(recipient=user, is_read=False).update(
        is_read=True, read_at=timezone.now(), updated_at=timezone.now()
    )


def unread_count(user):
    return Notification.objects.filter(recipient=user, is_read=False).count()
