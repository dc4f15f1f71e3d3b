import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from accounts.roles import DRIVER
from fleet.models import DriverProfile, Truck
from logistics_core.exceptions import Conflict, InvalidInput

logger = logging.getLogger(__name__)

User = get_user_model()


def register_truck(actor, data):
    """
    Create a truck from validated serializer data. Duplicate truck or plate
    numbers are conflicts.
    """
    data = dict(data)
    data['plate_number'] = data['plate_number'].upper()

    if Truck.objects.filter(truck_number=data['truck_number']).exists():
        raise Conflict(f"Truck number {data['truck_number']} already exists")
    if Truck.objects.filter(plate_number=data['plate_number']).exists():
        raise Conflict(f"Plate number {data['plate_number']} already exists")

    try:
        with transaction.atomic():
            truck = Truck.objects.create(**data)
    except IntegrityError:
        raise Conflict('Truck number or plate number already exists')

    logger.info(f"Truck {truck.truck_number} registered by user {actor.pk}")
    return truck


def register_driver(actor, data):
    """
    Create a driver profile for an existing user whose role is driver.
    """
    data = dict(data)
    user_id = data.pop('user_id')

    user = User.objects.filter(pk=user_id).first()
    if user is None or user.role != DRIVER:
        raise InvalidInput('User must exist and have the driver role')
    if DriverProfile.objects.filter(user=user).exists():
        raise Conflict('Driver profile already exists for this user')
    if DriverProfile.objects.filter(license_number=data['license_number']).exists():
        raise Conflict(f"License number {data['license_number']} already exists")

    try:
        with transaction.atomic():
            driver = DriverProfile.objects.create(user=user, **data)
    except IntegrityError:
        raise Conflict('Driver profile or license number already exists')

    logger.info(f"Driver profile {driver.pk} registered for user {user.pk} by user {actor.pk}")
    return driver
