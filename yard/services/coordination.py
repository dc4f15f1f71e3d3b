"""
Yard coordination: loading bays, the movement log, departures and the
loading queue.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Case, IntegerField, Value, When
from rest_framework import status

from fleet.models import DriverProfile, Truck
from logistics_core.exceptions import Conflict, InvalidInput, NotFound
from notifications.services.fanout import notify_user
from truck_requests.models import TruckRequest
from truck_requests.services.lifecycle import complete_request, request_url
from yard.models import LoadingBay, YardMovement

logger = logging.getLogger(__name__)

VALID_MOVEMENT_TYPES = dict(YardMovement.MOVEMENT_TYPE_CHOICES)
VALID_PRIORITIES = dict(TruckRequest.PRIORITY_CHOICES)

PRIORITY_RANK = Case(
    When(priority='urgent', then=Value(4)),
    When(priority='high', then=Value(3)),
    When(priority='normal', then=Value(2)),
    When(priority='low', then=Value(1)),
    default=Value(0),
    output_field=IntegerField(),
)


def _get_or_404(model, pk, label, lock=False):
    queryset = model.objects.select_for_update() if lock else model.objects
    obj = queryset.filter(pk=pk).first() if pk is not None else None
    if obj is None:
        raise NotFound(f"{label} not found")
    return obj


def create_bay(actor, data):
    bay_number = data['bay_number']
    if LoadingBay.objects.filter(bay_number=bay_number).exists():
        raise Conflict(f"Loading bay {bay_number} already exists")
    try:
        with transaction.atomic():
            bay = LoadingBay.objects.create(assigned_by=None, **data)
    except IntegrityError:
        raise Conflict(f"Loading bay {bay_number} already exists")
    logger.info(f"Loading bay {bay.bay_number} created by user {actor.pk}")
    return bay


def assign_truck_to_bay(actor, bay_id, truck_request_id, truck_id, driver_id, estimated_departure=None, notes=''):
    """
    Put a truck into a free bay and log a ``bay_assigned`` movement.

    Returns ``(bay, movement)``.
    """
    if not truck_request_id or not truck_id or not driver_id:
        raise InvalidInput('Truck request ID, truck ID, and driver ID are required')

    with transaction.atomic():
        bay = _get_or_404(LoadingBay, bay_id, 'Loading bay', lock=True)
        if bay.is_occupied:
            logger.warning(f"Bay {bay.bay_number} assignment rejected: already occupied")
            raise Conflict('Loading bay is already occupied', status_code=status.HTTP_400_BAD_REQUEST)

        truck_request = _get_or_404(TruckRequest, truck_request_id, 'Truck request')
        truck = _get_or_404(Truck, truck_id, 'Truck')
        driver = _get_or_404(DriverProfile, driver_id, 'Driver')

        bay.occupy(truck, driver, truck_request, actor, estimated_departure=estimated_departure)
        movement = YardMovement.objects.create(
            truck_request=truck_request,
            truck=truck,
            driver=driver,
            movement_type='bay_assigned',
            to_location=f"Bay {bay.bay_number}",
            loading_bay=bay,
            switcher=actor,
            notes=notes or '',
            estimated_time=estimated_departure,
        )

    logger.info(f"Truck {truck.truck_number} assigned to bay {bay.bay_number} by user {actor.pk}")

    payload = {
        'truckRequestId': truck_request.pk,
        'bayId': bay.pk,
        'bayNumber': bay.bay_number,
        'actionUrl': request_url(truck_request),
    }
    notify_user(
        truck_request.requester,
        'assignment',
        'Truck Assigned to Loading Bay',
        f"Your truck request for load {truck_request.load_id} has been assigned to "
        f"{bay.bay_name} (Bay {bay.bay_number})",
        data=payload,
        sender=actor,
    )
    notify_user(
        driver.user,
        'assignment',
        'Loading Bay Assignment',
        f"You have been assigned to {bay.bay_name} (Bay {bay.bay_number}) for load {truck_request.load_id}",
        data=dict(payload, actionUrl=f"/yard/bays/{bay.pk}"),
        sender=actor,
    )
    return bay, movement


def _release_bay(bay, truck):
    if bay.current_truck_id != truck.pk:
        logger.warning(f"Departure of truck {truck.truck_number} left bay {bay.bay_number} untouched")
        return False
    bay.release()
    return True


def record_movement(actor, truck_request_id, truck_id, driver_id, movement_type, to_location,
                    from_location='', loading_bay_id=None, notes='', estimated_time=None):
    """
    Append a movement to the yard log. A departure also frees the bay and
    completes the request in the same transaction.
    """
    if not (truck_request_id and truck_id and driver_id and movement_type and to_location):
        raise InvalidInput(
            'Truck request ID, truck ID, driver ID, movement type, and to location are required'
        )
    if movement_type not in VALID_MOVEMENT_TYPES:
        raise InvalidInput(f"Invalid movement type. Must be one of {list(VALID_MOVEMENT_TYPES)}")

    departure = movement_type == 'departure'
    with transaction.atomic():
        truck_request = _get_or_404(TruckRequest, truck_request_id, 'Truck request', lock=departure)
        truck = _get_or_404(Truck, truck_id, 'Truck')
        driver = _get_or_404(DriverProfile, driver_id, 'Driver')
        bay = None
        if loading_bay_id:
            bay = _get_or_404(LoadingBay, loading_bay_id, 'Loading bay', lock=departure)

        movement = YardMovement.objects.create(
            truck_request=truck_request,
            truck=truck,
            driver=driver,
            movement_type=movement_type,
            from_location=from_location or '',
            to_location=to_location,
            loading_bay=bay,
            switcher=actor,
            notes=notes or '',
            estimated_time=estimated_time,
        )

        if departure:
            if bay is not None:
                _release_bay(bay, truck)
            complete_request(truck_request)

    logger.info(f"Recorded {movement_type} of truck {truck.truck_number} to {to_location} by user {actor.pk}")

    notify_user(
        truck_request.requester,
        'status_update',
        'Truck Movement Update',
        f"Truck {truck.truck_number} has moved to {to_location} ({movement_type.replace('_', ' ')})",
        data={
            'truckRequestId': truck_request.pk,
            'truckId': truck.pk,
            'movementType': movement_type,
            'location': to_location,
            'actionUrl': request_url(truck_request),
        },
        sender=actor,
    )
    return movement


def queue_snapshot():
    """Everything the yard queue screen needs in one read."""
    queued = list(
        TruckRequest.objects
        .filter(status='assigned')
        .select_related('requester', 'assigned_truck', 'assigned_driver__user', 'assigned_by')
        .annotate(priority_rank=PRIORITY_RANK)
        .order_by('-priority_rank', 'created_at', 'id')
    )
    in_loading = list(
        TruckRequest.objects
        .filter(status='in_progress')
        .select_related('requester', 'assigned_truck', 'assigned_driver__user', 'assigned_by')
        .order_by('created_at', 'id')
    )
    occupied_bays = list(
        LoadingBay.objects.filter(status='occupied')
        .select_related('current_truck', 'current_driver__user', 'assigned_by')
    )
    available_bays = list(LoadingBay.objects.filter(status='available', is_active=True).order_by('bay_number'))
    recent_movements = list(
        YardMovement.objects
        .select_related('truck_request', 'truck', 'driver__user', 'switcher', 'loading_bay')
        .order_by('-created_at', '-id')[:10]
    )
    return {
        'queued': queued,
        'in_loading': in_loading,
        'occupied_bays': occupied_bays,
        'available_bays': available_bays,
        'recent_movements': recent_movements,
        'stats': {
            'totalInQueue': len(queued),
            'totalInLoading': len(in_loading),
            'availableBays': len(available_bays),
            'occupiedBays': len(occupied_bays),
            'urgentRequests': sum(1 for r in queued if r.priority == 'urgent'),
        },
    }


def update_queue_priority(actor, truck_request_id, new_priority=None, position=None):
    """
    Reprioritise a request in the loading queue. A ``queue`` movement is
    logged on every call, even when the priority is unchanged.

    Returns ``(truck_request, movement)``.
    """
    if not truck_request_id:
        raise InvalidInput('Truck request ID is required')
    if new_priority is not None and new_priority not in VALID_PRIORITIES:
        raise InvalidInput(f"Invalid priority. Must be one of {list(VALID_PRIORITIES)}")

    with transaction.atomic():
        truck_request = _get_or_404(TruckRequest, truck_request_id, 'Truck request', lock=True)
        if new_priority is not None:
            truck_request.priority = new_priority
            truck_request.save(update_fields=['priority', 'updated_at'])

        movement = YardMovement.objects.create(
            truck_request=truck_request,
            truck_id=truck_request.assigned_truck_id,
            driver_id=truck_request.assigned_driver_id,
            movement_type='queue',
            to_location=f"Queue Position {position or 'Updated'}",
            switcher=actor,
            notes=f"Priority updated to {truck_request.priority}",
        )

    logger.info(
        f"Queue priority of request {truck_request.pk} set to {truck_request.priority} by user {actor.pk}"
    )
    return truck_request, movement
