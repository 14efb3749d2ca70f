from django.db import models
from django.conf import settings

User = settings.AUTH_USER_MODEL

class DriverProfile(models.Model):
    """Driver-specific details and availability status"""
    AVAILABLE = 'available'
    UNAVAILABLE = 'unavailable'
    BUSY = 'busy'

    STATUS_CHOICES = [
        (AVAILABLE, 'Available'),
        (UNAVAILABLE, 'Unavailable'),
        (BUSY, 'Busy'),
    ]
    
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='driver_profile')
    
    # Vehicle details
    license_number = models.CharField(max_length=50)
    vehicle_make = models.CharField(max_length=50)
    vehicle_model = models.CharField(max_length=50)
    vehicle_year = models.PositiveIntegerField()
    vehicle_plate = models.CharField(max_length=20)
    
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=UNAVAILABLE)

    # Maintained by rating and completion jobs, never by ride transitions
    rating = models.FloatField(null=True, blank=True)
    total_rides = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'driver_profiles'
        
    def __str__(self):
        return f"{self.user.username} - {self.vehicle_plate}"
