"""
Core ride lifecycle operations.

This module contains the business logic for moving a ride through its
status graph, kept out of the views layer for testability and reuse:
    - creating ride requests
    - accepting rides (one winner per ride)
    - status transitions with timestamp and fare bookkeeping
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from rides.models import Ride
from drivers.models import DriverProfile
from .exceptions import (
    RideNotFoundError,
    UserNotFoundError,
    InvalidTransitionError,
    InvalidOperationError,
    ConflictOrNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

FARE_QUANTUM = Decimal("0.01")
FARE_MAX_DIGITS = Ride._meta.get_field("fare").max_digits

VALID_TRANSITIONS = {
    Ride.REQUESTED: (Ride.ACCEPTED, Ride.CANCELLED),
    Ride.ACCEPTED: (Ride.DRIVER_EN_ROUTE, Ride.CANCELLED),
    Ride.DRIVER_EN_ROUTE: (Ride.DRIVER_ARRIVED, Ride.CANCELLED),
    Ride.DRIVER_ARRIVED: (Ride.IN_PROGRESS, Ride.CANCELLED),
    Ride.IN_PROGRESS: (Ride.COMPLETED, Ride.CANCELLED),
    Ride.COMPLETED: (),
    Ride.CANCELLED: (),
}

# Target status -> timestamp field stamped on first arrival
TRANSITION_TIMESTAMPS = {
    Ride.DRIVER_EN_ROUTE: "accepted_at",
    Ride.IN_PROGRESS: "started_at",
    Ride.COMPLETED: "completed_at",
}


def validate_status_transition(current_status: str, new_status: str) -> None:
    """Raise InvalidTransitionError unless current -> new is an edge of the graph."""
    if new_status not in VALID_TRANSITIONS.get(current_status, ()):
        raise InvalidTransitionError(current_status, new_status)


def _normalize_fare(fare: Union[Decimal, str, int, float]) -> Decimal:
    try:
        # str() first so floats like 25.5 keep their printed value
        amount = Decimal(str(fare))
        if not amount.is_finite():
            raise InvalidOperationError(f"Invalid fare amount: {fare!r}")
        amount = amount.quantize(FARE_QUANTUM)
    except (InvalidOperation, ValueError):
        raise InvalidOperationError(f"Invalid fare amount: {fare!r}")

    # Must fit the fare column, numeric(10, 2)
    if len(amount.as_tuple().digits) > FARE_MAX_DIGITS:
        raise InvalidOperationError(f"Fare amount out of range: {fare!r}")
    return amount


# ===================== Rider Operations =====================

def create_ride(
    rider_id: int,
    pickup_address: str,
    destination_address: str,
    pickup_latitude: Optional[float] = None,
    pickup_longitude: Optional[float] = None,
    destination_latitude: Optional[float] = None,
    destination_longitude: Optional[float] = None,
) -> Ride:
    """
    Create a new ride request in the ``requested`` status.

    A rider may hold several open requests at the same time; limiting that
    is left to the client.

    Args:
        rider_id: ID of the requesting user
        pickup_address: Human-readable pickup address
        destination_address: Human-readable destination address
        pickup_latitude, pickup_longitude: Optional pickup coordinates
        destination_latitude, destination_longitude: Optional destination coordinates

    Returns:
        The created Ride

    Raises:
        UserNotFoundError: If the rider does not exist
    """
    if not User.objects.filter(pk=rider_id).exists():
        raise UserNotFoundError(f"Rider with id {rider_id} not found")

    ride = Ride.objects.create(
        rider_id=rider_id,
        pickup_address=pickup_address,
        pickup_latitude=pickup_latitude,
        pickup_longitude=pickup_longitude,
        destination_address=destination_address,
        destination_latitude=destination_latitude,
        destination_longitude=destination_longitude,
        status=Ride.REQUESTED,
        requested_at=timezone.now(),
    )

    logger.info("Ride %s requested by rider %s", ride.id, rider_id)
    return ride


# ===================== Driver Operations =====================

def accept_ride(ride_id: int, driver_id: int) -> Ride:
    """
    Assign a requested ride to a driver and mark the driver busy.

    Both records are changed with conditional UPDATEs inside one
    transaction, so of any number of concurrent callers for the same ride
    at most one sees an affected row. If the driver half fails, the
    transaction rolls the ride back to ``requested``.

    Args:
        ride_id: ID of the ride to accept
        driver_id: User ID of the accepting driver

    Returns:
        The accepted Ride

    Raises:
        ConflictOrNotFoundError: If the ride is missing or already taken, or
            the driver is missing, not a driver or not available
    """
    try:
        with transaction.atomic():
            now = timezone.now()

            claimed = Ride.objects.filter(pk=ride_id, status=Ride.REQUESTED).update(
                driver_id=driver_id,
                status=Ride.ACCEPTED,
                accepted_at=now,
                updated_at=now,
            )
            if not claimed:
                raise ConflictOrNotFoundError(
                    "Ride not found or not available for acceptance"
                )

            # Role never changes after registration, so a plain read is race-free
            is_driver = User.objects.filter(pk=driver_id, role=User.DRIVER).exists()
            reserved = 0
            if is_driver:
                reserved = DriverProfile.objects.filter(
                    user_id=driver_id,
                    status=DriverProfile.AVAILABLE,
                ).update(status=DriverProfile.BUSY, updated_at=now)

            if not reserved:
                logger.warning(
                    "Driver %s could not be reserved for ride %s; releasing ride",
                    driver_id, ride_id,
                )
                raise ConflictOrNotFoundError("Driver not found or not available")
    except ConflictOrNotFoundError:
        logger.info("Acceptance of ride %s by driver %s rejected", ride_id, driver_id)
        raise

    logger.info("Ride %s accepted by driver %s", ride_id, driver_id)
    return Ride.objects.get(pk=ride_id)


# ===================== Status Progression =====================

@transaction.atomic
def transition_status(
    ride_id: int,
    new_status: str,
    fare: Optional[Union[Decimal, str, int, float]] = None,
) -> Ride:
    """
    Move a ride along the status graph.

    Stamps ``accepted_at`` on ``driver_en_route``, ``started_at`` on
    ``in_progress`` and ``completed_at`` on ``completed``, each only while
    still empty. A fare may only accompany the move to ``completed``.

    Never assigns a driver: a ride moved to ``accepted`` here keeps
    ``driver_id`` empty. Use accept_ride to claim a ride for a driver.

    Raises:
        RideNotFoundError: If the ride does not exist
        InvalidOperationError: If a fare is given for any other target status,
            or the fare is not a finite amount that fits numeric(10, 2)
        InvalidTransitionError: If the move is not an edge of the graph
    """
    try:
        ride = Ride.objects.select_for_update().get(pk=ride_id)
    except Ride.DoesNotExist:
        raise RideNotFoundError(f"Ride with ID {ride_id} not found")

    if fare is not None and new_status != Ride.COMPLETED:
        raise InvalidOperationError("Fare can only be set when ride status is completed")

    validate_status_transition(ride.status, new_status)

    amount = _normalize_fare(fare) if fare is not None else None

    now = timezone.now()
    previous_status = ride.status
    update_fields = ["status", "updated_at"]

    ride.status = new_status

    timestamp_field = TRANSITION_TIMESTAMPS.get(new_status)
    if timestamp_field and getattr(ride, timestamp_field) is None:
        setattr(ride, timestamp_field, now)
        update_fields.append(timestamp_field)

    if fare is not None:
        ride.fare = amount
        update_fields.append("fare")

    ride.updated_at = now
    ride.save(update_fields=update_fields)

    logger.info("Ride %s moved from %s to %s", ride.id, previous_status, new_status)
    return ride
