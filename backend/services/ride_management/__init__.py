"""
Ride management service - Core ride lifecycle operations.

This module handles:
    - Creating ride requests
    - Accepting rides
    - Advancing ride status
    - Querying rides
"""

from .ride_lifecycle import (
    create_ride,
    accept_ride,
    transition_status,
    validate_status_transition,
    VALID_TRANSITIONS,
)

from .queries import (
    get_ride,
    list_available_rides,
    list_user_rides,
)

from .exceptions import (
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
    # Lifecycle operations
    "create_ride",
    "accept_ride",
    "transition_status",
    "validate_status_transition",
    "VALID_TRANSITIONS",
    # Queries
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
