from decimal import Decimal

from rest_framework import serializers
from .models import Ride

from services.ride_management.queries import DEFAULT_PAGE_SIZE


class RideSerializer(serializers.ModelSerializer):
    """Serializer for Rides"""
    rider_id = serializers.IntegerField(read_only=True)
    driver_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Ride
        fields = ['id', 'rider_id', 'driver_id',
                  'pickup_address', 'pickup_latitude', 'pickup_longitude',
                  'destination_address', 'destination_latitude', 'destination_longitude',
                  'status', 'fare', 'distance', 'duration',
                  'requested_at', 'accepted_at', 'started_at', 'completed_at',
                  'created_at', 'updated_at']
        read_only_fields = fields


class RideCreateSerializer(serializers.Serializer):
    """Serializer for creating ride requests"""
    rider_id = serializers.IntegerField()
    pickup_address = serializers.CharField()
    destination_address = serializers.CharField()
    pickup_latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    pickup_longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)
    destination_latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    destination_longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)


class RideAcceptSerializer(serializers.Serializer):
    """Serializer for a driver accepting a ride"""
    driver_id = serializers.IntegerField()


class RideStatusUpdateSerializer(serializers.Serializer):
    """Serializer for ride status changes; fare only travels with completion"""
    status = serializers.ChoiceField(choices=Ride.STATUS_CHOICES)
    fare = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=False,
    )


class RideListQuerySerializer(serializers.Serializer):
    """Pagination parameters for ride listings"""
    limit = serializers.IntegerField(min_value=1, default=DEFAULT_PAGE_SIZE)
    offset = serializers.IntegerField(min_value=0, default=0)


class AvailableRidesQuerySerializer(RideListQuerySerializer):
    driver_id = serializers.IntegerField(required=False)
