from rest_framework import status
from rest_framework.test import APITestCase

from logistics_core.tests.helpers import create_driver, create_truck, create_user
from notifications.services.fanout import notify_user
from truck_requests.models import TruckRequest
from truck_requests.services import lifecycle
from yard.models import LoadingBay


def dashboard_url(role):
    return f"/api/dashboard/{role}/"


class DashboardAPITest(APITestCase):

    def setUp(self):
        self.loader = create_user('loader')
        self.dispatcher = create_user('dispatcher')
        self.switcher = create_user('switcher')
        self.admin = create_user('admin')
        self.driver = create_driver()
        self.truck = create_truck()
        LoadingBay.objects.create(bay_number='B1', bay_name='North Bay', location='North yard')

        self.pending = TruckRequest.objects.create(
            requester=self.loader, load_id='LD1', load_description='Steel coils',
            pickup_location='Dock A', delivery_location='Plant B', priority='urgent',
        )
        self.assigned = TruckRequest.objects.create(
            requester=self.loader, load_id='LD2', load_description='Pipes',
            pickup_location='Dock A', delivery_location='Plant C',
        )
        lifecycle.assign_truck(self.dispatcher, self.assigned.pk, self.truck.pk, self.driver.pk)

    def get(self, user, role):
        self.client.force_authenticate(user)
        return self.client.get(dashboard_url(role))

    def test_loader_dashboard(self):
        response = self.get(self.loader, 'loader')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['user']['id'], self.loader.pk)
        self.assertEqual(data['stats']['totalRequests'], 2)
        self.assertEqual(data['stats']['pendingRequests'], 1)
        self.assertEqual(data['statusBreakdown'], {'pending': 1, 'assigned': 1})
        self.assertEqual(data['priorityBreakdown'], {'urgent': 1, 'normal': 1})
        self.assertEqual(len(data['recentRequests']), 2)
        self.assertEqual(data['notifications']['unreadCount'], 1)

    def test_dispatcher_dashboard(self):
        response = self.get(self.dispatcher, 'dispatcher')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual([r['id'] for r in data['pendingRequests']], [self.pending.pk])
        self.assertEqual([r['id'] for r in data['urgentRequests']], [self.pending.pk])
        self.assertEqual(data['stats']['assignedByMe'], 1)
        self.assertEqual(data['stats']['availableTrucksCount'], 0)

    def test_supervisor_uses_dispatcher_dashboard(self):
        response = self.get(create_user('supervisor'), 'dispatcher')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_switcher_dashboard(self):
        response = self.get(self.switcher, 'switcher')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['queueStats']['totalInQueue'], 1)
        self.assertEqual(data['queueStats']['availableBays'], 1)
        self.assertEqual(data['todayStats']['movementsToday'], 0)
        self.assertEqual(data['recentMovements'], [])

    def test_driver_dashboard(self):
        response = self.get(self.driver.user, 'driver')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['currentTrip']['id'], self.assigned.pk)
        self.assertEqual(data['stats']['totalTrips'], 1)
        self.assertEqual(data['stats']['pendingTrips'], 1)
        self.assertEqual(len(data['weeklyTrend']), 1)

    def test_driver_without_profile(self):
        response = self.get(create_user('driver'), 'driver')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['message'], 'Driver profile not found')

    def test_admin_dashboard(self):
        notify_user(self.admin, 'general', 'Maintenance window', 'Tonight at 22:00')

        response = self.get(self.admin, 'admin')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['stats']['totalRequests'], 2)
        self.assertEqual(data['stats']['completionRate'], 0)
        self.assertEqual(data['usersByRole']['loader'], 1)
        self.assertEqual(data['notifications']['unreadCount'], 1)

    def test_wrong_role_is_forbidden(self):
        response = self.get(self.loader, 'admin')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_dashboard_is_forbidden(self):
        response = self.get(self.admin, 'auditor')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_requires_authentication(self):
        response = self.client.get(dashboard_url('loader'))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
