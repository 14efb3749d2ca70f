"""Read-side ride lookups used by the polling endpoints."""

from django.db.models import Q

from rides.models import Ride
from .exceptions import RideNotFoundError

DEFAULT_PAGE_SIZE = 50


def get_ride(ride_id: int) -> Ride:
    """Get a single ride by ID."""
    try:
        return Ride.objects.get(pk=ride_id)
    except Ride.DoesNotExist:
        raise RideNotFoundError(f"Ride with ID {ride_id} not found")


def list_available_rides(driver_id=None, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0):
    """
    Requested rides, newest first.

    ``driver_id`` is accepted for the polling API but every driver sees
    every open request.
    """
    rides = Ride.objects.filter(status=Ride.REQUESTED).order_by('-requested_at', '-id')
    return list(rides[offset:offset + limit])


def list_user_rides(user_id: int, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0):
    """Rides where the user is the rider or the driver, newest first."""
    rides = (
        Ride.objects.filter(Q(rider_id=user_id) | Q(driver_id=user_id))
        .order_by('-requested_at', '-id')
    )
    return list(rides[offset:offset + limit])
