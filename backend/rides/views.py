from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from .serializers import (
    RideSerializer,
    RideCreateSerializer,
    RideAcceptSerializer,
    RideStatusUpdateSerializer,
    RideListQuerySerializer,
    AvailableRidesQuerySerializer,
)

# Import from services layer
from services.ride_management import (
    create_ride,
    accept_ride,
    transition_status,
    get_ride,
    list_available_rides,
    list_user_rides,
    RideServiceError,
)
from common.utils import service_error_response


# ==================== Rider APIs ====================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_ride_request(request):
    """Create a new ride request in the 'requested' status"""
    serializer = RideCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        ride = create_ride(**serializer.validated_data)
    except RideServiceError as exc:
        return service_error_response(exc)

    return Response(RideSerializer(ride).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ride_detail(request, ride_id):
    """
    Get a ride's current state (POLLING ENDPOINT)

    Rider and driver apps poll this to follow the ride status
    """
    try:
        ride = get_ride(ride_id)
    except RideServiceError as exc:
        return service_error_response(exc)

    return Response(RideSerializer(ride).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_rides(request, user_id):
    """Ride history for a user, as rider or as driver, newest first"""
    serializer = RideListQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    rides = list_user_rides(user_id, **serializer.validated_data)
    return Response(RideSerializer(rides, many=True).data)


# ==================== Driver APIs ====================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def available_rides(request):
    """
    Open ride requests, newest first (POLLING ENDPOINT)

    Drivers poll this to discover new requests; every driver sees every request
    """
    serializer = AvailableRidesQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    rides = list_available_rides(**serializer.validated_data)
    return Response(RideSerializer(rides, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def accept_ride_request(request, ride_id):
    """Accept a requested ride. At most one driver wins each ride."""
    serializer = RideAcceptSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        ride = accept_ride(ride_id, serializer.validated_data['driver_id'])
    except RideServiceError as exc:
        return service_error_response(exc)

    return Response({
        'success': True,
        'ride': RideSerializer(ride).data,
        'message': 'Ride Accepted Successfully! Navigate to pickup location.'
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_ride_status(request, ride_id):
    """Advance a ride's status; a fare may be sent with 'completed' only"""
    serializer = RideStatusUpdateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        ride = transition_status(
            ride_id,
            serializer.validated_data['status'],
            fare=serializer.validated_data.get('fare'),
        )
    except RideServiceError as exc:
        return service_error_response(exc)

    return Response(RideSerializer(ride).data)
