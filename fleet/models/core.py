from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class LocationMixin(models.Model):
    """Last reported position, shared by trucks and drivers."""
    current_latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    current_longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    current_address = models.CharField(max_length=255, blank=True)
    last_location_update = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    @property
    def current_location(self):
        if self.current_latitude is None and not self.current_address:
            return None
        return {
            'lat': float(self.current_latitude) if self.current_latitude is not None else None,
            'lng': float(self.current_longitude) if self.current_longitude is not None else None,
            'address': self.current_address,
        }


class Truck(LocationMixin):
    """
    A truck in the fleet. ``assigned_driver_id`` and ``current_request_id`` are
    weak references maintained by the request lifecycle.
    """
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('assigned', 'Assigned'),
        ('maintenance', 'Maintenance'),
        ('out_of_service', 'Out of Service')
    ]

    TYPE_CHOICES = [
        ('container', 'Container'),
        ('flatbed', 'Flatbed'),
        ('refrigerated', 'Refrigerated'),
        ('tanker', 'Tanker'),
        ('van', 'Van'),
    ]

    FUEL_TYPE_CHOICES = [
        ('diesel', 'Diesel'),
        ('petrol', 'Petrol'),
        ('electric', 'Electric'),
        ('hybrid', 'Hybrid'),
    ]

    truck_number = models.CharField(max_length=20, unique=True)
    plate_number = models.CharField(max_length=20, unique=True)
    capacity = models.PositiveIntegerField(help_text="Capacity in kilograms")
    truck_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='available')

    assigned_driver_id = models.PositiveBigIntegerField(null=True, blank=True)
    current_request_id = models.PositiveBigIntegerField(null=True, blank=True)

    # Specifications (metres)
    length = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    width = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    height = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    fuel_type = models.CharField(max_length=20, choices=FUEL_TYPE_CHOICES, default='diesel')

    # Maintenance
    last_service = models.DateField(null=True, blank=True)
    next_service = models.DateField(null=True, blank=True)
    mileage = models.PositiveIntegerField(default=0, help_text="Odometer reading in km")

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.truck_number} ({self.status})"

    def save(self, *args, **kwargs):
        if self.plate_number:
            self.plate_number = self.plate_number.upper()
        super().save(*args, **kwargs)

    @property
    def is_available(self):
        """Check if the truck can take a new request."""
        return self.status == 'available' and self.is_active

    class Meta:
        ordering = ['truck_number']
        indexes = [
            models.Index(fields=['status'], name='fleet_truck_status_idx'),
            models.Index(fields=['truck_type'], name='fleet_truck_type_idx'),
        ]


def default_emergency_contact():
    return {'name': '', 'phone': '', 'relation': ''}


def default_address():
    return {'street': '', 'city': '', 'state': '', 'pincode': ''}


class DriverProfile(LocationMixin):
    """
    Driver-specific data for a user whose role is ``driver``.
    """
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('assigned', 'Assigned'),
        ('on_trip', 'On Trip'),
        ('on_leave', 'On Leave'),
        ('off_duty', 'Off Duty'),
    ]

    LICENSE_TYPE_CHOICES = [
        ('LMV', 'Light Motor Vehicle'),
        ('HMV', 'Heavy Motor Vehicle'),
        ('TRANSPORT', 'Transport'),
    ]

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='driver_profile')
    license_number = models.CharField(max_length=32, unique=True)
    license_expiry = models.DateField()
    license_type = models.CharField(max_length=10, choices=LICENSE_TYPE_CHOICES)
    phone = models.CharField(max_length=32)
    emergency_contact = models.JSONField(default=default_emergency_contact, blank=True)
    address = models.JSONField(default=default_address, blank=True)
    experience_years = models.PositiveSmallIntegerField(default=0)
    previous_companies = models.JSONField(default=list, blank=True)

    current_truck_id = models.PositiveBigIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='available')

    average_rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)]
    )
    total_ratings = models.PositiveIntegerField(default=0)
    join_date = models.DateField(default=timezone.localdate)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.email} [{self.license_number}] ({self.status})"

    @property
    def is_available(self):
        return self.status == 'available' and self.is_active

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='fleet_driver_status_idx'),
        ]
