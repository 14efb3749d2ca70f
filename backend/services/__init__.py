"""
Services package - Business logic layer.

This package contains the business logic that operates on Django models
but is decoupled from the HTTP layer.

Modules:
    - ride_management: Ride lifecycle, acceptance and ride queries
"""

# Expose commonly used functions at package level
from .ride_management import (
    create_ride,
    accept_ride,
    transition_status,
    get_ride,
    list_available_rides,
    list_user_rides,
    RideServiceError,
    NotFoundError,
    RideNotFoundError,
    UserNotFoundError,
    DriverProfileNotFoundError,
    DriverProfileExistsError,
    PermissionDeniedError,
    InvalidTransitionError,
    InvalidOperationError,
    ConflictOrNotFoundError,
)

__all__ = [
    # Ride management
    "create_ride",
    "accept_ride",
    "transition_status",
    "get_ride",
    "list_available_rides",
    "list_user_rides",
    # Exceptions
    "RideServiceError",
    "NotFoundError",
    "RideNotFoundError",
    "UserNotFoundError",
    "DriverProfileNotFoundError",
    "DriverProfileExistsError",
    "PermissionDeniedError",
    "InvalidTransitionError",
    "InvalidOperationError",
    "ConflictOrNotFoundError",
]
