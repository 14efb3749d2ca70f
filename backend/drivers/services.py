import logging

from django.contrib.auth import get_user_model
from django.db import transaction, IntegrityError
from django.utils import timezone

from drivers.models import DriverProfile
from services.ride_management.exceptions import (
    UserNotFoundError,
    DriverProfileNotFoundError,
    DriverProfileExistsError,
    PermissionDeniedError,
    InvalidOperationError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

DRIVER_STATUSES = {choice for choice, _ in DriverProfile.STATUS_CHOICES}


# DRIVER PROFILE
def create_driver_profile(
    user_id: int,
    license_number: str,
    vehicle_make: str,
    vehicle_model: str,
    vehicle_year: int,
    vehicle_plate: str,
) -> DriverProfile:
    """
    Create the driver profile for a user with the driver role.
    New profiles start unavailable, unrated and with no rides.
    """
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise UserNotFoundError("User not found")

    if user.role != User.DRIVER:
        raise PermissionDeniedError("User must have driver role to create driver profile")

    if DriverProfile.objects.filter(user_id=user_id).exists():
        raise DriverProfileExistsError("Driver profile already exists for this user")

    try:
        with transaction.atomic():
            profile = DriverProfile.objects.create(
                user=user,
                license_number=license_number,
                vehicle_make=vehicle_make,
                vehicle_model=vehicle_model,
                vehicle_year=vehicle_year,
                vehicle_plate=vehicle_plate,
                status=DriverProfile.UNAVAILABLE,
                rating=None,
                total_rides=0,
            )
    except IntegrityError:
        # Lost a race with a concurrent create for the same user
        raise DriverProfileExistsError("Driver profile already exists for this user")

    logger.info("Driver profile %s created for user %s", profile.id, user_id)
    return profile


def get_driver_profile(user_id: int):
    """Return the driver profile for a user, or None."""
    return DriverProfile.objects.filter(user_id=user_id).first()


# DRIVER STATUS UPDATE
def update_driver_status(driver_profile_id: int, new_status: str) -> DriverProfile:
    """
    Set driver availability.

    Any status may follow any other. In-flight rides are not checked, so a
    driver can go unavailable mid-ride.
    """
    if new_status not in DRIVER_STATUSES:
        raise InvalidOperationError(f"Unknown driver status '{new_status}'")

    updated = DriverProfile.objects.filter(pk=driver_profile_id).update(
        status=new_status,
        updated_at=timezone.now(),
    )
    if not updated:
        raise DriverProfileNotFoundError(
            f"Driver profile with id {driver_profile_id} not found"
        )

    logger.info("Driver profile %s status set to %s", driver_profile_id, new_status)
    return DriverProfile.objects.get(pk=driver_profile_id)
