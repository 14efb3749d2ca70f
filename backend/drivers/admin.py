from django.contrib import admin
from drivers.models import DriverProfile


@admin.register(DriverProfile)
class DriverProfileAdmin(admin.ModelAdmin):
    """Admin panel for managing Driver Profiles"""

    list_display = [
        "user",
        "vehicle_plate",
        "vehicle_make",
        "vehicle_model",
        "status",
        "rating",
        "total_rides",
    ]

    list_filter = [
        "status",
        "vehicle_make",
    ]

    search_fields = [
        "user__username",
        "vehicle_plate",
        "license_number",
    ]

    readonly_fields = [
        "created_at",
        "updated_at",
    ]

    ordering = ("user__username",)
