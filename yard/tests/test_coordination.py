from django.test import TestCase

from logistics_core.exceptions import Conflict, InvalidInput, InvalidTransition, NotFound
from logistics_core.tests.helpers import create_driver, create_truck, create_user
from notifications.models import Notification
from truck_requests.models import TruckRequest
from truck_requests.services import lifecycle
from yard.models import LoadingBay, YardMovement
from yard.services import coordination


def new_request(requester, **kwargs):
    fields = {
        'load_id': 'LD1',
        'load_description': 'Steel coils',
        'pickup_location': 'Dock A',
        'delivery_location': 'Plant B',
    }
    fields.update(kwargs)
    return TruckRequest.objects.create(requester=requester, **fields)


class YardTestCase(TestCase):

    def setUp(self):
        self.loader = create_user('loader')
        self.dispatcher = create_user('dispatcher')
        self.switcher = create_user('switcher')
        self.truck = create_truck()
        self.driver = create_driver()
        self.truck_request = new_request(self.loader)
        lifecycle.assign_truck(self.dispatcher, self.truck_request.pk, self.truck.pk, self.driver.pk)
        self.bay = coordination.create_bay(
            self.dispatcher, {'bay_number': 'B1', 'bay_name': 'North Bay', 'location': 'North yard'}
        )
        Notification.objects.all().delete()

    def assign_bay(self, bay=None):
        return coordination.assign_truck_to_bay(
            self.switcher, (bay or self.bay).pk, self.truck_request.pk, self.truck.pk, self.driver.pk
        )


class CreateBayTest(YardTestCase):

    def test_duplicate_bay_number(self):
        with self.assertRaises(Conflict) as ctx:
            coordination.create_bay(self.dispatcher, {'bay_number': 'B1', 'bay_name': 'Copy', 'location': 'X'})
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertEqual(LoadingBay.objects.count(), 1)


class AssignTruckToBayTest(YardTestCase):

    def test_assign_occupies_bay_and_logs_movement(self):
        bay, movement = self.assign_bay()

        bay.refresh_from_db()
        self.assertEqual(bay.status, 'occupied')
        self.assertEqual(bay.current_truck, self.truck)
        self.assertEqual(bay.current_request, self.truck_request)
        self.assertEqual(bay.assigned_by, self.switcher)
        self.assertEqual(movement.movement_type, 'bay_assigned')
        self.assertEqual(movement.to_location, 'Bay B1')
        self.assertEqual(movement.loading_bay, bay)
        self.assertEqual(
            set(Notification.objects.values_list('recipient_id', flat=True)),
            {self.loader.pk, self.driver.user_id},
        )

    def test_occupied_bay_is_rejected_and_unchanged(self):
        self.assign_bay()
        other_truck = create_truck()
        other_request = new_request(self.loader, load_id='LD2')

        with self.assertRaises(Conflict) as ctx:
            coordination.assign_truck_to_bay(
                self.switcher, self.bay.pk, other_request.pk, other_truck.pk, self.driver.pk
            )

        self.assertEqual(ctx.exception.status_code, 400)
        self.bay.refresh_from_db()
        self.assertEqual(self.bay.current_truck, self.truck)
        self.assertEqual(YardMovement.objects.count(), 1)

    def test_missing_ids(self):
        with self.assertRaises(InvalidInput):
            coordination.assign_truck_to_bay(self.switcher, self.bay.pk, self.truck_request.pk, None, self.driver.pk)

    def test_unknown_bay(self):
        with self.assertRaises(NotFound):
            coordination.assign_truck_to_bay(
                self.switcher, 99999, self.truck_request.pk, self.truck.pk, self.driver.pk
            )

    def test_unknown_truck_leaves_bay_free(self):
        with self.assertRaises(NotFound):
            coordination.assign_truck_to_bay(
                self.switcher, self.bay.pk, self.truck_request.pk, 99999, self.driver.pk
            )
        self.bay.refresh_from_db()
        self.assertEqual(self.bay.status, 'available')


class RecordMovementTest(YardTestCase):

    def test_entry_movement_is_logged_and_notifies_requester(self):
        movement = coordination.record_movement(
            self.switcher, self.truck_request.pk, self.truck.pk, self.driver.pk, 'entry', 'Gate 1'
        )

        self.assertEqual(movement.switcher, self.switcher)
        self.assertEqual(movement.from_location, '')
        notification = Notification.objects.get()
        self.assertEqual(notification.recipient, self.loader)
        self.assertEqual(notification.title, 'Truck Movement Update')
        self.assertEqual(notification.data['movementType'], 'entry')

    def test_invalid_movement_type(self):
        with self.assertRaises(InvalidInput):
            coordination.record_movement(
                self.switcher, self.truck_request.pk, self.truck.pk, self.driver.pk, 'teleport', 'Gate 1'
            )
        self.assertFalse(YardMovement.objects.exists())

    def test_departure_frees_bay_and_completes_request(self):
        self.assign_bay()

        coordination.record_movement(
            self.switcher, self.truck_request.pk, self.truck.pk, self.driver.pk, 'departure', 'Exit gate',
            loading_bay_id=self.bay.pk,
        )

        self.bay.refresh_from_db()
        self.truck_request.refresh_from_db()
        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.bay.status, 'available')
        self.assertIsNone(self.bay.current_truck)
        self.assertEqual(self.truck_request.status, 'completed')
        self.assertEqual(self.truck_request.assigned_truck, self.truck)
        self.assertEqual(self.truck.status, 'available')
        self.assertEqual(self.driver.status, 'available')

    def test_departure_leaves_bay_held_by_another_truck(self):
        other_truck = create_truck()
        other_request = new_request(self.loader, load_id='LD2')
        coordination.assign_truck_to_bay(
            self.switcher, self.bay.pk, other_request.pk, other_truck.pk, self.driver.pk
        )

        coordination.record_movement(
            self.switcher, self.truck_request.pk, self.truck.pk, self.driver.pk, 'departure', 'Exit gate',
            loading_bay_id=self.bay.pk,
        )

        self.bay.refresh_from_db()
        self.assertEqual(self.bay.status, 'occupied')
        self.assertEqual(self.bay.current_truck, other_truck)

    def test_repeated_departure_leaves_resources_reused_by_another_request(self):
        coordination.record_movement(
            self.switcher, self.truck_request.pk, self.truck.pk, self.driver.pk, 'departure', 'Exit gate'
        )
        follow_up = new_request(self.loader, load_id='LD2')
        lifecycle.assign_truck(self.dispatcher, follow_up.pk, self.truck.pk, self.driver.pk)

        coordination.record_movement(
            self.switcher, self.truck_request.pk, self.truck.pk, self.driver.pk, 'departure', 'Exit gate'
        )

        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.current_request_id, follow_up.pk)
        self.assertEqual(self.driver.status, 'assigned')
        self.assertEqual(self.driver.current_truck_id, self.truck.pk)

    def test_departure_of_unassigned_request_rolls_back(self):
        pending = new_request(self.loader, load_id='LD3')

        with self.assertRaises(InvalidTransition):
            coordination.record_movement(
                self.switcher, pending.pk, self.truck.pk, self.driver.pk, 'departure', 'Exit gate'
            )

        pending.refresh_from_db()
        self.assertEqual(pending.status, 'pending')
        self.assertFalse(YardMovement.objects.filter(truck_request=pending).exists())


class QueueTest(YardTestCase):

    def test_snapshot_orders_by_priority_then_age(self):
        requests = {}
        for priority in ('low', 'urgent', 'normal', 'high'):
            truck_request = new_request(self.loader, load_id=f"Q-{priority}", priority=priority)
            lifecycle.assign_truck(self.dispatcher, truck_request.pk, create_truck().pk, create_driver().pk)
            requests[priority] = truck_request.pk

        snapshot = coordination.queue_snapshot()

        order = [r.pk for r in snapshot['queued']]
        self.assertEqual(
            order,
            [requests['urgent'], requests['high'], self.truck_request.pk, requests['normal'], requests['low']],
        )
        self.assertEqual(snapshot['stats']['totalInQueue'], 5)
        self.assertEqual(snapshot['stats']['urgentRequests'], 1)
        self.assertEqual(snapshot['stats']['availableBays'], 1)

    def test_snapshot_separates_loading_and_bays(self):
        self.assign_bay()
        lifecycle.update_status(self.dispatcher, self.truck_request.pk, 'in_progress')

        snapshot = coordination.queue_snapshot()

        self.assertEqual(snapshot['queued'], [])
        self.assertEqual([r.pk for r in snapshot['in_loading']], [self.truck_request.pk])
        self.assertEqual([b.pk for b in snapshot['occupied_bays']], [self.bay.pk])
        self.assertEqual(snapshot['available_bays'], [])
        self.assertEqual(snapshot['stats']['occupiedBays'], 1)

    def test_update_priority_records_queue_movement(self):
        truck_request, movement = coordination.update_queue_priority(
            self.switcher, self.truck_request.pk, new_priority='urgent', position=1
        )

        self.assertEqual(truck_request.priority, 'urgent')
        self.assertEqual(movement.movement_type, 'queue')
        self.assertEqual(movement.to_location, 'Queue Position 1')
        self.assertEqual(movement.notes, 'Priority updated to urgent')
        self.assertEqual(movement.truck, self.truck)

    def test_update_without_changes_still_records_movement(self):
        pending = new_request(self.loader, load_id='LD9')

        truck_request, movement = coordination.update_queue_priority(self.switcher, pending.pk)

        self.assertEqual(truck_request.priority, 'normal')
        self.assertEqual(movement.to_location, 'Queue Position Updated')
        self.assertIsNone(movement.truck)
        self.assertEqual(YardMovement.objects.filter(truck_request=pending).count(), 1)

    def test_invalid_priority(self):
        with self.assertRaises(InvalidInput):
            coordination.update_queue_priority(self.switcher, self.truck_request.pk, new_priority='asap')
        self.assertFalse(YardMovement.objects.exists())
