"""Tells what to show in the Django admin interface for rides app"""

from django.contrib import admin
from .models import Ride

@admin.register(Ride)
class RideAdmin(admin.ModelAdmin):
    """Ride admin"""
    list_display = ['id', 'rider', 'driver', 'status', 'fare', 'requested_at', 'accepted_at', 'completed_at']
    list_filter = ['status', 'requested_at']
    search_fields = ['rider__username', 'driver__username', 'pickup_address', 'destination_address']
    readonly_fields = ['requested_at', 'accepted_at', 'started_at', 'completed_at', 'created_at', 'updated_at']
    date_hierarchy = 'requested_at'
