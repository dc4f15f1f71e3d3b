"""
Object builders shared by the app test suites.
"""
import datetime
import itertools

from django.contrib.auth import get_user_model
from django.utils import timezone

from fleet.models import DriverProfile, Truck

_sequence = itertools.count(1)


def create_user(role='loader', email=None, **kwargs):
    n = next(_sequence)
    email = email or f"{role}{n}@yard.test"
    kwargs.setdefault('name', f"{role.title()} {n}")
    return get_user_model().objects.create_user(
        username=email, email=email, password='pass1234', role=role, **kwargs
    )


def create_truck(truck_number=None, **kwargs):
    n = next(_sequence)
    kwargs.setdefault('plate_number', f"PL{n:04d}")
    kwargs.setdefault('capacity', 10000)
    kwargs.setdefault('truck_type', 'container')
    return Truck.objects.create(truck_number=truck_number or f"TRK{n:03d}", **kwargs)


def create_driver(user=None, **kwargs):
    n = next(_sequence)
    user = user or create_user('driver')
    kwargs.setdefault('license_number', f"DL{n:06d}")
    kwargs.setdefault('license_expiry', timezone.localdate() + datetime.timedelta(days=365))
    kwargs.setdefault('license_type', 'HMV')
    kwargs.setdefault('phone', '555-0100')
    return DriverProfile.objects.create(user=user, **kwargs)
