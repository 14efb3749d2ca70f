from django.db import models
from django.conf import settings
from django.utils import timezone

class Ride(models.Model):
    """A single trip from request to completion or cancellation"""

    REQUESTED = 'requested'
    ACCEPTED = 'accepted'
    DRIVER_EN_ROUTE = 'driver_en_route'
    DRIVER_ARRIVED = 'driver_arrived'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (REQUESTED, 'Requested'),
        (ACCEPTED, 'Accepted'),
        (DRIVER_EN_ROUTE, 'Driver En Route'),
        (DRIVER_ARRIVED, 'Driver Arrived'),
        (IN_PROGRESS, 'In Progress'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    TERMINAL_STATUSES = (COMPLETED, CANCELLED)

    # Foreign keys
    rider = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='rides_as_rider'
    )

    driver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='rides_as_driver'
    )

    # Pickup location
    pickup_address = models.TextField()
    pickup_latitude = models.FloatField(null=True, blank=True)
    pickup_longitude = models.FloatField(null=True, blank=True)

    # Destination
    destination_address = models.TextField()
    destination_latitude = models.FloatField(null=True, blank=True)
    destination_longitude = models.FloatField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=REQUESTED)

    # Supplied externally, never computed here
    fare = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    distance = models.FloatField(null=True, blank=True)
    duration = models.IntegerField(null=True, blank=True)

    # Lifecycle timestamps (write-once)
    requested_at = models.DateTimeField(default=timezone.now)
    accepted_at = models.DateTimeField(null=True, blank=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rides'
        ordering = ['-requested_at', '-id']
        indexes = [
            models.Index(fields=['status', '-requested_at'], name='rides_status_requested_idx'),
        ]

    def __str__(self):
        return f"Ride #{self.id} - {self.rider} - {self.status}"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
