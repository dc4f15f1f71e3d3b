"""
Status bookkeeping for trucks and drivers.

The ``mark_*`` / ``release_*`` helpers are called by the request lifecycle and
yard engines on rows they have already locked; ``change_*_status`` are the
manual overrides available to supervisors and admins.
"""
import logging

from django.db import transaction

from fleet.models import DriverProfile, Truck
from logistics_core.exceptions import Conflict, InvalidInput, InvalidTransition, NotFound

logger = logging.getLogger(__name__)

# Statuses only the request lifecycle may set or clear.
LIFECYCLE_TRUCK_STATUSES = {'assigned'}
LIFECYCLE_DRIVER_STATUSES = {'assigned', 'on_trip'}
UNSERVICEABLE_TRUCK_STATUSES = {'maintenance', 'out_of_service'}


def update_truck_status(truck: Truck, new_status: str):
    truck.status = new_status
    truck.save(update_fields=['status', 'updated_at'])


def mark_truck_assigned(truck: Truck, request_id, driver_id):
    truck.status = 'assigned'
    truck.current_request_id = request_id
    truck.assigned_driver_id = driver_id
    truck.save(update_fields=['status', 'current_request_id', 'assigned_driver_id', 'updated_at'])


def release_truck(truck: Truck, request_id):
    """
    Make the truck available again, but only while it still serves
    ``request_id``. Returns True when the truck was released.
    """
    if truck.current_request_id != request_id:
        return False
    truck.status = 'available'
    truck.current_request_id = None
    truck.assigned_driver_id = None
    truck.save(update_fields=['status', 'current_request_id', 'assigned_driver_id', 'updated_at'])
    return True


def update_driver_status(driver: DriverProfile, new_status: str):
    driver.status = new_status
    driver.save(update_fields=['status', 'updated_at'])


def mark_driver_assigned(driver: DriverProfile, truck_id):
    driver.status = 'assigned'
    driver.current_truck_id = truck_id
    driver.save(update_fields=['status', 'current_truck_id', 'updated_at'])


def mark_driver_on_trip(driver: DriverProfile):
    update_driver_status(driver, 'on_trip')


def release_driver(driver: DriverProfile, truck_id):
    """Counterpart of ``release_truck`` keyed on the driver's current truck."""
    if driver.current_truck_id != truck_id:
        return False
    driver.status = 'available'
    driver.current_truck_id = None
    driver.save(update_fields=['status', 'current_truck_id', 'updated_at'])
    return True


def change_truck_status(actor, truck_id, new_status):
    valid_statuses = dict(Truck.STATUS_CHOICES)
    if new_status not in valid_statuses:
        raise InvalidInput(f"Invalid status. Must be one of {list(valid_statuses)}")

    with transaction.atomic():
        truck = Truck.objects.select_for_update().filter(pk=truck_id).first()
        if truck is None:
            raise NotFound('Truck not found')

        if truck.current_request_id and new_status in UNSERVICEABLE_TRUCK_STATUSES:
            raise Conflict(f"Truck {truck.truck_number} is serving request {truck.current_request_id}")
        if new_status in LIFECYCLE_TRUCK_STATUSES or truck.status in LIFECYCLE_TRUCK_STATUSES:
            raise InvalidTransition("Assignment status is managed by truck requests")

        old_status = truck.status
        update_truck_status(truck, new_status)

    logger.info(f"Truck {truck.truck_number} status {old_status} -> {new_status} by user {actor.pk}")
    return truck


def change_driver_status(actor, driver_id, new_status):
    valid_statuses = dict(DriverProfile.STATUS_CHOICES)
    if new_status not in valid_statuses:
        raise InvalidInput(f"Invalid status. Must be one of {list(valid_statuses)}")

    with transaction.atomic():
        driver = DriverProfile.objects.select_for_update().filter(pk=driver_id).first()
        if driver is None:
            raise NotFound('Driver not found')

        if new_status in LIFECYCLE_DRIVER_STATUSES or driver.status in LIFECYCLE_DRIVER_STATUSES:
            raise InvalidTransition("Assignment status is managed by truck requests")

        old_status = driver.status
        update_driver_status(driver, new_status)

    logger.info(f"Driver {driver.pk} status {old_status} -> {new_status} by user {actor.pk}")
    return driver
