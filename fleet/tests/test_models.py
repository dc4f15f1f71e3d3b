from django.test import TestCase

from fleet.models import Truck
from fleet.services.status_services import (
    mark_driver_assigned,
    mark_truck_assigned,
    release_driver,
    release_truck,
)
from logistics_core.tests.helpers import create_driver, create_truck


class TruckModelTest(TestCase):
    """Unit tests for the Truck model."""

    def setUp(self):
        self.truck = create_truck('TRK100', plate_number='ab-123')

    def test_defaults(self):
        t = self.truck
        self.assertEqual(t.status, 'available')
        self.assertEqual(t.fuel_type, 'diesel')
        self.assertTrue(t.is_available)
        self.assertIsNone(t.assigned_driver_id)
        self.assertIsNone(t.current_request_id)
        self.assertIsNone(t.current_location)

    def test_plate_number_is_stored_upper_case(self):
        self.truck.refresh_from_db()
        self.assertEqual(self.truck.plate_number, 'AB-123')

    def test_inactive_truck_is_not_available(self):
        self.truck.is_active = False
        self.assertFalse(self.truck.is_available)

    def test_current_location(self):
        self.truck.current_latitude = 6.9271
        self.truck.current_longitude = 79.8612
        self.truck.current_address = 'Gate 2'

        self.assertEqual(self.truck.current_location, {'lat': 6.9271, 'lng': 79.8612, 'address': 'Gate 2'})


class ReleaseTest(TestCase):
    """Releasing only touches rows whose back-reference still matches."""

    def setUp(self):
        self.truck = create_truck()
        self.driver = create_driver()
        mark_truck_assigned(self.truck, request_id=7, driver_id=self.driver.pk)
        mark_driver_assigned(self.driver, truck_id=self.truck.pk)

    def test_release_matching_reference(self):
        self.assertTrue(release_truck(self.truck, 7))
        self.assertTrue(release_driver(self.driver, self.truck.pk))

        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.status, 'available')
        self.assertIsNone(self.truck.current_request_id)
        self.assertIsNone(self.truck.assigned_driver_id)
        self.assertEqual(self.driver.status, 'available')
        self.assertIsNone(self.driver.current_truck_id)

    def test_release_ignores_stale_reference(self):
        self.assertFalse(release_truck(self.truck, 8))
        self.assertFalse(release_driver(self.driver, self.truck.pk + 1))

        self.truck.refresh_from_db()
        self.driver.refresh_from_db()
        self.assertEqual(self.truck.status, 'assigned')
        self.assertEqual(self.driver.status, 'assigned')
        self.assertEqual(Truck.objects.get(pk=self.truck.pk).current_request_id, 7)
