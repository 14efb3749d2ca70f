from rest_framework.response import Response

from services.ride_management.exceptions import RideServiceError


def service_error_response(exc: RideServiceError) -> Response:
    """Turn a service-layer failure into the standard error body."""
    return Response(
        {
            'success': False,
            'error': exc.error_code,
            'message': exc.message,
        },
        status=exc.status_code,
    )
