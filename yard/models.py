from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

OCCUPANT_FIELDS = ('current_truck', 'current_driver', 'current_request', 'occupied_at')


def _occupant_present(present):
    return Q(**{f'{field}__isnull': not present for field in OCCUPANT_FIELDS})


class LoadingBay(models.Model):
    """
    A loading bay in the yard. At most one truck occupies it; the occupant
    fields are filled exactly while the bay is occupied.
    """
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('occupied', 'Occupied'),
        ('maintenance', 'Maintenance'),
        ('reserved', 'Reserved'),
    ]

    bay_number = models.CharField(max_length=20, unique=True)
    bay_name = models.CharField(max_length=100)
    location = models.CharField(max_length=255)
    capacity = models.PositiveSmallIntegerField(default=1)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='available')

    # Current occupant
    current_truck = models.ForeignKey(
        'fleet.Truck', on_delete=models.PROTECT, null=True, blank=True, related_name='occupied_bays'
    )
    current_driver = models.ForeignKey(
        'fleet.DriverProfile', on_delete=models.PROTECT, null=True, blank=True, related_name='occupied_bays'
    )
    current_request = models.ForeignKey(
        'truck_requests.TruckRequest', on_delete=models.PROTECT, null=True, blank=True, related_name='occupied_bays'
    )
    occupied_at = models.DateTimeField(null=True, blank=True)
    estimated_departure = models.DateTimeField(null=True, blank=True)

    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name='assigned_bays'
    )
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Bay {self.bay_number} - {self.bay_name} ({self.status})"

    @property
    def is_occupied(self):
        return self.status == 'occupied'

    def occupy(self, truck, driver, truck_request, assigned_by, estimated_departure=None):
        self.status = 'occupied'
        self.current_truck = truck
        self.current_driver = driver
        self.current_request = truck_request
        self.occupied_at = timezone.now()
        self.estimated_departure = estimated_departure
        self.assigned_by = assigned_by
        self.save()

    def release(self):
        self.status = 'available'
        self.current_truck = None
        self.current_driver = None
        self.current_request = None
        self.occupied_at = None
        self.estimated_departure = None
        self.save()

    class Meta:
        ordering = ['bay_number']
        indexes = [
            models.Index(fields=['status', 'is_active'], name='yard_bay_status_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    (Q(status='occupied') & _occupant_present(True))
                    | (~Q(status='occupied') & _occupant_present(False) & Q(estimated_departure__isnull=True))
                ),
                name='loading_bay_occupant_matches_status',
            ),
        ]


class YardMovement(models.Model):
    """
    One entry in the append-only yard movement log.
    """
    MOVEMENT_TYPE_CHOICES = [
        ('entry', 'Entry'),
        ('queue', 'Queue'),
        ('bay_assigned', 'Bay Assigned'),
        ('loading', 'Loading'),
        ('departure', 'Departure'),
    ]

    truck_request = models.ForeignKey(
        'truck_requests.TruckRequest', on_delete=models.PROTECT, related_name='yard_movements'
    )
    # Empty for queue updates on requests that have no truck yet.
    truck = models.ForeignKey(
        'fleet.Truck', on_delete=models.PROTECT, null=True, blank=True, related_name='yard_movements'
    )
    driver = models.ForeignKey(
        'fleet.DriverProfile', on_delete=models.PROTECT, null=True, blank=True, related_name='yard_movements'
    )
    movement_type = models.CharField(max_length=20, choices=MOVEMENT_TYPE_CHOICES)
    from_location = models.CharField(max_length=255, blank=True)
    to_location = models.CharField(max_length=255)
    loading_bay = models.ForeignKey(
        LoadingBay, on_delete=models.PROTECT, null=True, blank=True, related_name='movements'
    )
    switcher = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='yard_movements')
    notes = models.TextField(blank=True)
    estimated_time = models.DateTimeField(null=True, blank=True)
    actual_time = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.movement_type} -> {self.to_location} (request {self.truck_request_id})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Yard movements are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Yard movements are append-only")

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['truck_request', 'created_at'], name='yard_mv_request_idx'),
            models.Index(fields=['truck', 'created_at'], name='yard_mv_truck_idx'),
            models.Index(fields=['switcher', 'created_at'], name='yard_mv_switcher_idx'),
            models.Index(fields=['movement_type', 'created_at'], name='yard_mv_type_idx'),
        ]
