import logging

from fleet.models import DriverProfile, Truck
from fleet.services import status_services
from logistics_core.exceptions import InvalidTransition

logger = logging.getLogger(__name__)


class FleetClient:
    """
    Fleet access used by the request lifecycle. The ``lock_*`` helpers must be
    called inside ``transaction.atomic()``.
    """

    @staticmethod
    def get_available_trucks():
        """
        Fetch trucks that can take a new assignment.

        Returns:
            QuerySet of Truck objects
        """
        return Truck.objects.filter(status='available', is_active=True)

    @staticmethod
    def lock_truck(truck_id):
        return Truck.objects.select_for_update().filter(id=truck_id).first()

    @staticmethod
    def lock_driver(driver_id):
        return DriverProfile.objects.select_for_update().select_related('user').filter(id=driver_id).first()

    @staticmethod
    def mark_assigned(truck, driver, truck_request):
        status_services.mark_truck_assigned(truck, request_id=truck_request.pk, driver_id=driver.pk)
        status_services.mark_driver_assigned(driver, truck_id=truck.pk)

    @classmethod
    def holds_resources(cls, truck_request):
        """True while the request's truck still serves it."""
        truck = cls.lock_truck(truck_request.assigned_truck_id)
        return truck is not None and truck.current_request_id == truck_request.pk

    @classmethod
    def reclaim(cls, truck_request):
        """
        Take the request's recorded truck and driver back after they were
        released, e.g. when a completed request is reopened. Raises
        ``InvalidTransition`` if either has moved on to other work.
        """
        truck = cls.lock_truck(truck_request.assigned_truck_id)
        if truck is None or not truck.is_available:
            raise InvalidTransition('Truck is not available')
        driver = cls.lock_driver(truck_request.assigned_driver_id)
        if driver is None or not driver.is_available:
            raise InvalidTransition('Driver is not available')
        cls.mark_assigned(truck, driver, truck_request)

    @classmethod
    def mark_on_trip(cls, truck_request):
        if not cls.holds_resources(truck_request):
            return
        driver = cls.lock_driver(truck_request.assigned_driver_id)
        if driver is not None and driver.current_truck_id == truck_request.assigned_truck_id:
            status_services.mark_driver_on_trip(driver)

    @classmethod
    def release(cls, truck_request):
        """
        Free the truck and driver held by ``truck_request``. The driver is
        only released together with the truck, so rows that have already
        moved on to another request are left alone.
        """
        truck_id = truck_request.assigned_truck_id
        if truck_id is None:
            return False
        truck = cls.lock_truck(truck_id)
        if truck is None or not status_services.release_truck(truck, truck_request.pk):
            logger.info(f"Truck {truck_id} no longer serves request {truck_request.pk}; nothing released")
            return False
        driver = cls.lock_driver(truck_request.assigned_driver_id)
        if driver is not None:
            status_services.release_driver(driver, truck_id)
        return True
