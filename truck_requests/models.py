from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from logistics_core.exceptions import InvalidTransition

ASSIGNED_STATUSES = ('assigned', 'in_progress', 'completed')
UNASSIGNED_STATUSES = ('pending', 'cancelled')

ASSIGNMENT_FIELDS = ('assigned_truck', 'assigned_driver', 'assigned_at', 'assigned_by')


def _assignment_present(present):
    return Q(**{f'{field}__isnull': not present for field in ASSIGNMENT_FIELDS})


class TruckRequest(models.Model):
    """
    A loader's request to move a load.

    The assignment group (truck, driver, time, assigning user) is set and
    cleared as a unit and is present exactly when the status is assigned,
    in_progress or completed.
    """
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('assigned', 'Assigned'),
        ('in_progress', 'In Progress'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('normal', 'Normal'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    requester = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='truck_requests')
    load_id = models.CharField(max_length=64)
    load_description = models.TextField()
    estimated_weight = models.PositiveIntegerField(null=True, blank=True, help_text="Estimated weight in kilograms")
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='normal')
    pickup_location = models.CharField(max_length=255)
    delivery_location = models.CharField(max_length=255)
    requested_time = models.DateTimeField(default=timezone.now)
    required_time = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')

    # Assignment group
    assigned_truck = models.ForeignKey(
        'fleet.Truck', on_delete=models.PROTECT, null=True, blank=True, related_name='truck_requests'
    )
    assigned_driver = models.ForeignKey(
        'fleet.DriverProfile', on_delete=models.PROTECT, null=True, blank=True, related_name='truck_requests'
    )
    assigned_at = models.DateTimeField(null=True, blank=True)
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='assigned_truck_requests'
    )

    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Request {self.pk} for load {self.load_id} ({self.status})"

    @property
    def has_assignment(self):
        return self.assigned_truck_id is not None

    def mark_assigned(self, truck, driver, assigned_by):
        if self.status != 'pending':
            raise InvalidTransition(f"Cannot assign a truck request that is {self.status}")
        self.assigned_truck = truck
        self.assigned_driver = driver
        self.assigned_at = timezone.now()
        self.assigned_by = assigned_by
        self.status = 'assigned'
        self.save()

    def mark_status(self, new_status):
        """
        Move to ``new_status`` while keeping the assignment group consistent:
        assigned statuses need an existing assignment, unassigned ones drop it.
        """
        if new_status in ASSIGNED_STATUSES and not self.has_assignment:
            raise InvalidTransition(f"Cannot set status to {new_status} without an assigned truck")
        if new_status in UNASSIGNED_STATUSES:
            self.clear_assignment()
        self.status = new_status
        self.save()

    def mark_completed(self):
        if not self.has_assignment:
            raise InvalidTransition("Cannot complete a truck request without an assigned truck")
        self.mark_status('completed')

    def clear_assignment(self):
        self.assigned_truck = None
        self.assigned_driver = None
        self.assigned_at = None
        self.assigned_by = None

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status'], name='truck_req_status_idx'),
            models.Index(fields=['requester', 'status'], name='truck_req_requester_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    (Q(status__in=ASSIGNED_STATUSES) & _assignment_present(True))
                    | (Q(status__in=UNASSIGNED_STATUSES) & _assignment_present(False))
                ),
                name='truck_request_assignment_matches_status',
            ),
        ]
