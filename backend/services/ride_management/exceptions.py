"""Custom exceptions for ride management."""


class RideServiceError(Exception):
    """Base class for every failure raised by the ride services."""
    error_code = "ride_service_error"
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(RideServiceError):
    """Raised when a referenced entity does not exist."""
    error_code = "not_found"
    status_code = 404


class RideNotFoundError(NotFoundError):
    """Raised when a ride cannot be found."""
    pass


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""
    pass


class DriverProfileNotFoundError(NotFoundError):
    """Raised when a driver profile cannot be found."""
    pass


class DriverProfileExistsError(RideServiceError):
    """Raised when a user already has a driver profile."""
    error_code = "already_exists"
    status_code = 409


class PermissionDeniedError(RideServiceError):
    """Raised when a user's role does not allow the operation."""
    error_code = "permission_denied"
    status_code = 403


class InvalidTransitionError(RideServiceError):
    """Raised when a status change is not an edge of the ride status graph."""
    error_code = "invalid_transition"

    def __init__(self, current_status: str, new_status: str):
        super().__init__(
            f"Invalid status transition from '{current_status}' to '{new_status}'"
        )
        self.current_status = current_status
        self.new_status = new_status


class InvalidOperationError(RideServiceError):
    """Raised when a valid status comes with an invalid accompanying field."""
    error_code = "invalid_operation"


class ConflictOrNotFoundError(RideServiceError):
    """
    Raised when a ride cannot be accepted.

    Missing rides and rides already taken by another driver produce the same
    error so a losing driver cannot tell a lost race from a bad id.
    """
    error_code = "conflict_or_not_found"
    status_code = 409
