from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from logistics_core.exceptions import Forbidden, InvalidInput, InvalidTransition, NotFound
from logistics_core.tests.helpers import create_driver, create_truck, create_user
from notifications.models import Notification
from truck_requests.models import TruckRequest
from truck_requests.services import lifecycle

LOAD = {
    'load_id': 'LD1',
    'load_description': 'Steel coils',
    'pickup_location': 'Dock A',
    'delivery_location': 'Plant B',
}


class CreateTruckRequestTest(TestCase):

    def setUp(self):
        self.loader = create_user('loader')
        self.dispatcher = create_user('dispatcher')
        self.supervisor = create_user('supervisor')
        self.admin = create_user('admin')
        self.switcher = create_user('switcher')

    def test_create_defaults_and_fans_out_to_dispatch_roles(self):
        truck_request = lifecycle.create_truck_request(self.loader, dict(LOAD))

        self.assertEqual(truck_request.status, 'pending')
        self.assertEqual(truck_request.priority, 'normal')
        self.assertEqual(truck_request.requester, self.loader)

        notified = set(
            Notification.objects.filter(notification_type='truck_request').values_list('recipient_id', flat=True)
        )
        self.assertEqual(notified, {self.dispatcher.pk, self.supervisor.pk, self.admin.pk})
        self.assertEqual(
            Notification.objects.filter(recipient=self.dispatcher).get().data['truckRequestId'],
            truck_request.pk,
        )

    def test_missing_fields(self):
        with self.assertRaises(InvalidInput):
            lifecycle.create_truck_request(self.loader, {'load_id': 'LD1'})
        self.assertFalse(TruckRequest.objects.exists())

    def test_invalid_priority(self):
        with self.assertRaises(InvalidInput):
            lifecycle.create_truck_request(self.loader, dict(LOAD, priority='asap'))

    def test_notification_failure_does_not_fail_creation(self):
        with patch.object(Notification, 'save', side_effect=DatabaseError('down')):
            with self.assertLogs('notifications.services.fanout', level='ERROR'):
                truck_request = lifecycle.create_truck_request(self.loader, dict(LOAD))

        self.assertTrue(TruckRequest.objects.filter(pk=truck_request.pk).exists())
        self.assertFalse(Notification.objects.exists())


class AssignTruckTest(TestCase):

    def setUp(self):
        self.loader = create_user('loader')
        self.dispatcher = create_user('dispatcher')
        self.truck = create_truck()
        self.driver = create_driver()
        self.request = lifecycle.create_truck_request(self.loader, dict(LOAD))
        Notification.objects.all().delete()

    def test_assign_updates_request_truck_and_driver(self):
        lifecycle.assign_truck(self.dispatcher, self.request.pk, self.truck.pk, self.driver.pk)

        self.request.refresh_from_db()
        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.request.status, 'assigned')
        self.assertEqual(self.request.assigned_truck_id, self.truck.pk)
        self.assertEqual(self.request.assigned_by, self.dispatcher)
        self.assertEqual(self.truck.status, 'assigned')
        self.assertEqual(self.truck.current_request_id, self.request.pk)
        self.assertEqual(self.truck.assigned_driver_id, self.driver.pk)
        self.assertEqual(self.driver.status, 'assigned')
        self.assertEqual(self.driver.current_truck_id, self.truck.pk)

        titles = dict(Notification.objects.values_list('recipient_id', 'title'))
        self.assertEqual(titles, {
            self.loader.pk: 'Truck Assigned to Your Request',
            self.driver.user_id: 'New Truck Assignment',
        })

    def test_missing_ids(self):
        with self.assertRaises(InvalidInput):
            lifecycle.assign_truck(self.dispatcher, self.request.pk, None, self.driver.pk)

    def test_unknown_request_truck_or_driver(self):
        with self.assertRaises(NotFound):
            lifecycle.assign_truck(self.dispatcher, 99999, self.truck.pk, self.driver.pk)
        with self.assertRaises(NotFound):
            lifecycle.assign_truck(self.dispatcher, self.request.pk, 99999, self.driver.pk)
        with self.assertRaises(NotFound):
            lifecycle.assign_truck(self.dispatcher, self.request.pk, self.truck.pk, 99999)

    def test_unavailable_truck_leaves_everything_unchanged(self):
        self.truck.status = 'maintenance'
        self.truck.save()

        with self.assertRaises(InvalidTransition):
            lifecycle.assign_truck(self.dispatcher, self.request.pk, self.truck.pk, self.driver.pk)

        self.request.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.request.status, 'pending')
        self.assertEqual(self.driver.status, 'available')
        self.assertFalse(Notification.objects.exists())

    def test_unavailable_driver_rolls_back(self):
        self.driver.status = 'on_leave'
        self.driver.save()

        with self.assertRaises(InvalidTransition):
            lifecycle.assign_truck(self.dispatcher, self.request.pk, self.truck.pk, self.driver.pk)

        self.truck.refresh_from_db()
        self.assertEqual(self.truck.status, 'available')
        self.assertIsNone(self.truck.current_request_id)

    def test_second_assignment_is_rejected(self):
        lifecycle.assign_truck(self.dispatcher, self.request.pk, self.truck.pk, self.driver.pk)
        other_truck = create_truck()
        other_driver = create_driver()

        with self.assertRaises(InvalidTransition):
            lifecycle.assign_truck(self.dispatcher, self.request.pk, other_truck.pk, other_driver.pk)

        self.request.refresh_from_db()
        other_truck.refresh_from_db()
        self.assertEqual(self.request.assigned_truck_id, self.truck.pk)
        self.assertEqual(other_truck.status, 'available')


class UpdateStatusTest(TestCase):

    def setUp(self):
        self.loader = create_user('loader')
        self.other_loader = create_user('loader')
        self.dispatcher = create_user('dispatcher')
        self.truck = create_truck()
        self.driver = create_driver()
        self.request = lifecycle.create_truck_request(self.loader, dict(LOAD))

    def assign(self):
        lifecycle.assign_truck(self.dispatcher, self.request.pk, self.truck.pk, self.driver.pk)

    def test_invalid_status(self):
        with self.assertRaises(InvalidInput):
            lifecycle.update_status(self.dispatcher, self.request.pk, 'delivered')
        with self.assertRaises(InvalidInput):
            lifecycle.update_status(self.dispatcher, self.request.pk, '')

    def test_unknown_request(self):
        with self.assertRaises(NotFound):
            lifecycle.update_status(self.dispatcher, 99999, 'cancelled')

    def test_loader_can_only_update_own_request(self):
        with self.assertRaises(Forbidden):
            lifecycle.update_status(self.other_loader, self.request.pk, 'cancelled')
        self.request.refresh_from_db()
        self.assertEqual(self.request.status, 'pending')

    def test_loader_cancels_own_request(self):
        truck_request, old_status = lifecycle.update_status(self.loader, self.request.pk, 'cancelled')
        self.assertEqual(old_status, 'pending')
        self.assertEqual(truck_request.status, 'cancelled')

    def test_in_progress_requires_assignment(self):
        with self.assertRaises(InvalidTransition):
            lifecycle.update_status(self.dispatcher, self.request.pk, 'in_progress')

    def test_in_progress_puts_driver_on_trip(self):
        self.assign()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'in_progress')

        self.driver.refresh_from_db()
        self.truck.refresh_from_db()
        self.assertEqual(self.driver.status, 'on_trip')
        self.assertEqual(self.truck.status, 'assigned')

    def test_completed_releases_resources_but_keeps_assignment(self):
        self.assign()
        truck_request, old_status = lifecycle.update_status(self.dispatcher, self.request.pk, 'completed')

        self.assertEqual(old_status, 'assigned')
        self.assertEqual(truck_request.assigned_truck_id, self.truck.pk)
        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.status, 'available')
        self.assertIsNone(self.truck.current_request_id)
        self.assertEqual(self.driver.status, 'available')

    def test_cancel_clears_assignment_and_releases(self):
        self.assign()
        truck_request, _ = lifecycle.update_status(self.dispatcher, self.request.pk, 'cancelled', notes='No load')

        self.assertFalse(truck_request.has_assignment)
        self.assertEqual(truck_request.notes, 'No load')
        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.status, 'available')
        self.assertIsNone(self.driver.current_truck_id)

    def test_back_to_pending_allows_reassignment(self):
        self.assign()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'pending')
        self.assign()

        self.request.refresh_from_db()
        self.assertEqual(self.request.status, 'assigned')

    def test_cancelling_old_request_leaves_resources_reused_by_another(self):
        self.assign()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'completed')
        follow_up = lifecycle.create_truck_request(self.loader, dict(LOAD, load_id='LD2'))
        lifecycle.assign_truck(self.dispatcher, follow_up.pk, self.truck.pk, self.driver.pk)

        lifecycle.update_status(self.dispatcher, self.request.pk, 'cancelled')

        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.status, 'assigned')
        self.assertEqual(self.truck.current_request_id, follow_up.pk)
        self.assertEqual(self.driver.status, 'assigned')
        self.assertEqual(self.driver.current_truck_id, self.truck.pk)

    def test_reopening_completed_request_reclaims_truck_and_driver(self):
        self.assign()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'completed')

        truck_request, old_status = lifecycle.update_status(self.dispatcher, self.request.pk, 'in_progress')

        self.assertEqual(old_status, 'completed')
        self.assertEqual(truck_request.status, 'in_progress')
        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.status, 'assigned')
        self.assertEqual(self.truck.current_request_id, self.request.pk)
        self.assertEqual(self.driver.status, 'on_trip')
        self.assertEqual(self.driver.current_truck_id, self.truck.pk)

    def test_reopening_completed_request_fails_when_truck_is_taken(self):
        self.assign()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'completed')
        follow_up = lifecycle.create_truck_request(self.loader, dict(LOAD, load_id='LD2'))
        lifecycle.assign_truck(self.dispatcher, follow_up.pk, self.truck.pk, create_driver().pk)

        with self.assertRaises(InvalidTransition):
            lifecycle.update_status(self.dispatcher, self.request.pk, 'assigned')

        self.request.refresh_from_db()
        self.truck.refresh_from_db()
        self.assertEqual(self.request.status, 'completed')
        self.assertEqual(self.truck.current_request_id, follow_up.pk)

    def test_reopening_completed_request_fails_when_driver_is_taken(self):
        self.assign()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'completed')
        follow_up = lifecycle.create_truck_request(self.loader, dict(LOAD, load_id='LD2'))
        lifecycle.assign_truck(self.dispatcher, follow_up.pk, create_truck().pk, self.driver.pk)

        with self.assertRaises(InvalidTransition):
            lifecycle.update_status(self.dispatcher, self.request.pk, 'assigned')

        self.request.refresh_from_db()
        self.truck.refresh_from_db()
        self.assertEqual(self.request.status, 'completed')
        self.assertEqual(self.truck.status, 'available')
        self.assertIsNone(self.truck.current_request_id)

    def test_status_update_notifies_requester(self):
        Notification.objects.all().delete()
        lifecycle.update_status(self.dispatcher, self.request.pk, 'cancelled')

        notification = Notification.objects.get()
        self.assertEqual(notification.recipient, self.loader)
        self.assertEqual(notification.notification_type, 'status_update')
        self.assertEqual(notification.data['oldStatus'], 'pending')
        self.assertEqual(notification.data['newStatus'], 'cancelled')
