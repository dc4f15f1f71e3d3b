"""
Truck request lifecycle: create, assign, explicit status changes and
completion.

Multi-row transitions lock the request, truck and driver rows (in that
order) and re-check the request status after the lock, so concurrent callers
get exactly one winner. Notifications are sent after the transaction closes.
"""
import logging

from django.db import transaction

from accounts.roles import DISPATCH_ROLES, LOADER
from logistics_core.exceptions import Forbidden, InvalidInput, InvalidTransition, NotFound
from notifications.services.fanout import notify_roles, notify_user
from truck_requests.clients.fleet_client import FleetClient
from truck_requests.models import TruckRequest

logger = logging.getLogger(__name__)

VALID_STATUSES = dict(TruckRequest.STATUS_CHOICES)
VALID_PRIORITIES = dict(TruckRequest.PRIORITY_CHOICES)
REQUIRED_FIELDS = ('load_id', 'load_description', 'pickup_location', 'delivery_location')


def request_url(truck_request):
    return f"/truck-requests/{truck_request.pk}"


def get_truck_request(request_id, actor=None):
    """
    Fetch a request, enforcing that loaders only see their own.
    """
    truck_request = (
        TruckRequest.objects
        .select_related('requester', 'assigned_truck', 'assigned_driver__user', 'assigned_by')
        .filter(pk=request_id)
        .first()
    )
    if truck_request is None:
        raise NotFound('Truck request not found')
    if actor is not None and actor.role == LOADER and truck_request.requester_id != actor.pk:
        raise Forbidden('Access denied. You can only access your own truck requests')
    return truck_request


def _lock_request(request_id):
    truck_request = TruckRequest.objects.select_for_update().filter(pk=request_id).first()
    if truck_request is None:
        raise NotFound('Truck request not found')
    return truck_request


def create_truck_request(actor, data):
    """
    Create a pending request and tell dispatchers, supervisors and admins.
    """
    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        raise InvalidInput(f"Missing required fields: {', '.join(missing)}")

    priority = data.get('priority') or 'normal'
    if priority not in VALID_PRIORITIES:
        raise InvalidInput(f"Invalid priority. Must be one of {list(VALID_PRIORITIES)}")

    fields = dict(data)
    fields['priority'] = priority
    truck_request = TruckRequest.objects.create(requester=actor, status='pending', **fields)
    logger.info(f"Truck request {truck_request.pk} created by user {actor.pk} for load {truck_request.load_id}")

    notify_roles(
        DISPATCH_ROLES,
        'truck_request',
        'New Truck Request',
        f"New {truck_request.priority} priority truck request for load {truck_request.load_id} "
        f"from {truck_request.pickup_location} to {truck_request.delivery_location}",
        data={'truckRequestId': truck_request.pk, 'actionUrl': request_url(truck_request)},
        sender=actor,
    )
    return truck_request


def assign_truck(actor, request_id, truck_id, driver_id):
    """
    Assign an available truck and driver to a pending request.

    Returns the updated request.
    """
    if not truck_id or not driver_id:
        raise InvalidInput('Truck ID and Driver ID are required')

    with transaction.atomic():
        truck_request = _lock_request(request_id)
        if truck_request.status != 'pending':
            logger.warning(f"Assign rejected: request {request_id} is {truck_request.status}")
            raise InvalidTransition('Truck request is not in pending status')

        truck = FleetClient.lock_truck(truck_id)
        if truck is None:
            raise NotFound('Truck not found')
        if not truck.is_available:
            raise InvalidTransition('Truck is not available')

        driver = FleetClient.lock_driver(driver_id)
        if driver is None:
            raise NotFound('Driver not found')
        if not driver.is_available:
            raise InvalidTransition('Driver is not available')

        truck_request.mark_assigned(truck, driver, actor)
        FleetClient.mark_assigned(truck, driver, truck_request)

    logger.info(
        f"Truck request {truck_request.pk} assigned truck {truck.truck_number} "
        f"and driver {driver.pk} by user {actor.pk}"
    )

    payload = {
        'truckRequestId': truck_request.pk,
        'truckId': truck.pk,
        'driverId': driver.pk,
        'actionUrl': request_url(truck_request),
    }
    notify_user(
        truck_request.requester,
        'assignment',
        'Truck Assigned to Your Request',
        f"Truck {truck.truck_number} has been assigned to your request for load {truck_request.load_id}",
        data=payload,
        sender=actor,
    )
    notify_user(
        driver.user,
        'assignment',
        'New Truck Assignment',
        f"You have been assigned truck {truck.truck_number} for load {truck_request.load_id} "
        f"from {truck_request.pickup_location} to {truck_request.delivery_location}",
        data=payload,
        sender=actor,
    )
    return truck_request


def complete_request(truck_request):
    """
    Complete a locked request and release its truck and driver. The assignment
    group is kept as the record of who did the work. Must run inside the
    caller's transaction.
    """
    truck_request.mark_completed()
    FleetClient.release(truck_request)
    logger.info(f"Truck request {truck_request.pk} completed")
    return truck_request


def _apply_status(truck_request, new_status):
    if new_status == 'completed':
        complete_request(truck_request)
        return

    if new_status in ('pending', 'cancelled'):
        # Release before the assignment group is cleared.
        FleetClient.release(truck_request)
    elif truck_request.has_assignment and not FleetClient.holds_resources(truck_request):
        # Reopening a completed request: its truck and driver were released.
        FleetClient.reclaim(truck_request)
    truck_request.mark_status(new_status)

    if new_status == 'in_progress':
        FleetClient.mark_on_trip(truck_request)


def update_status(actor, request_id, new_status, notes=None):
    """
    Explicitly change a request's status.

    Returns ``(truck_request, old_status)``.
    """
    if not new_status:
        raise InvalidInput('Status is required')
    if new_status not in VALID_STATUSES:
        raise InvalidInput(f"Invalid status. Must be one of {list(VALID_STATUSES)}")

    # Existence and ownership are checked before taking any lock.
    get_truck_request(request_id, actor=actor)

    with transaction.atomic():
        truck_request = _lock_request(request_id)
        old_status = truck_request.status
        if notes:
            truck_request.notes = notes
        _apply_status(truck_request, new_status)

    logger.info(f"Truck request {truck_request.pk} status {old_status} -> {new_status} by user {actor.pk}")

    truck_request = get_truck_request(truck_request.pk)
    notify_user(
        truck_request.requester,
        'status_update',
        'Truck Request Status Updated',
        f"Your truck request for load {truck_request.load_id} is now {new_status.replace('_', ' ')}",
        data={
            'truckRequestId': truck_request.pk,
            'oldStatus': old_status,
            'newStatus': new_status,
            'actionUrl': request_url(truck_request),
        },
        sender=actor,
    )
    return truck_request, old_status
