from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from notifications.models import Notification
from notifications.services.fanout import notify, notify_roles
from logistics_core.tests.helpers import create_user


class FanoutTest(TestCase):

    def setUp(self):
        self.dispatcher = create_user('dispatcher')
        self.supervisor = create_user('supervisor')
        self.admin = create_user('admin')
        self.inactive_admin = create_user('admin', is_active=False)
        self.loader = create_user('loader')

    def test_notify_roles_reaches_active_users_only(self):
        stored = notify_roles({'dispatcher', 'supervisor', 'admin'}, 'truck_request', 'New', 'Body', data={'x': 1})

        self.assertEqual(len(stored), 3)
        recipients = set(Notification.objects.values_list('recipient_id', flat=True))
        self.assertEqual(recipients, {self.dispatcher.pk, self.supervisor.pk, self.admin.pk})
        self.assertEqual(Notification.objects.first().data, {'x': 1})

    def test_one_failed_write_does_not_stop_the_others(self):
        original_save = Notification.save
        calls = []

        def flaky_save(instance, *args, **kwargs):
            calls.append(instance.recipient_id)
            if instance.recipient_id == self.supervisor.pk:
                raise DatabaseError('disk full')
            return original_save(instance, *args, **kwargs)

        with patch.object(Notification, 'save', autospec=True, side_effect=flaky_save):
            with self.assertLogs('notifications.services.fanout', level='ERROR'):
                stored = notify([self.dispatcher, self.supervisor, self.admin], 'general', 'T', 'M')

        self.assertEqual(len(calls), 3)
        self.assertEqual(len(stored), 2)
        self.assertEqual(Notification.objects.count(), 2)
        self.assertFalse(Notification.objects.filter(recipient=self.supervisor).exists())

    def test_total_failure_returns_empty_list(self):
        with patch.object(Notification, 'save', side_effect=DatabaseError('down')):
            with self.assertLogs('notifications.services.fanout', level='ERROR'):
                stored = notify([self.loader], 'general', 'T', 'M')
        self.assertEqual(stored, [])

    def test_none_recipients_are_skipped(self):
        stored = notify([None, self.loader], 'general', 'T', 'M')
        self.assertEqual(len(stored), 1)
