from django.utils import timezone
from rest_framework import serializers
from drivers.models import DriverProfile


class DriverProfileSerializer(serializers.ModelSerializer):
    """
    Full driver profile serializer
    """
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = DriverProfile
        fields = [
            "id",
            "user_id",
            "license_number",
            "vehicle_make",
            "vehicle_model",
            "vehicle_year",
            "vehicle_plate",
            "status",
            "rating",
            "total_rides",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class DriverProfileCreateSerializer(serializers.Serializer):
    """
    Input for creating a driver profile.
    """
    user_id = serializers.IntegerField()
    license_number = serializers.CharField(max_length=50)
    vehicle_make = serializers.CharField(max_length=50)
    vehicle_model = serializers.CharField(max_length=50)
    vehicle_year = serializers.IntegerField(min_value=1900)
    vehicle_plate = serializers.CharField(max_length=20)

    def validate_vehicle_year(self, value):
        latest = timezone.now().year + 1
        if value > latest:
            raise serializers.ValidationError(f"Vehicle year cannot be later than {latest}.")
        return value


class DriverStatusSerializer(serializers.Serializer):
    """
    Serializer for updating driver availability.
    """
    driver_id = serializers.IntegerField()
    status = serializers.ChoiceField(choices=DriverProfile.STATUS_CHOICES)
