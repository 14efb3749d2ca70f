from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from drivers.serializers import (
    DriverProfileSerializer,
    DriverProfileCreateSerializer,
    DriverStatusSerializer,
)
from drivers import services
from services.ride_management.exceptions import RideServiceError
from common.utils import service_error_response


class DriverProfileCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = DriverProfileCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            profile = services.create_driver_profile(**serializer.validated_data)
        except RideServiceError as exc:
            return service_error_response(exc)

        return Response(DriverProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


class DriverProfileDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id):
        # Users without a profile are not an error
        profile = services.get_driver_profile(user_id)
        if profile is None:
            return Response({"has_profile": False, "profile": None})

        return Response({
            "has_profile": True,
            "profile": DriverProfileSerializer(profile).data,
        })


class DriverStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request):
        serializer = DriverStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            profile = services.update_driver_status(
                serializer.validated_data["driver_id"],
                serializer.validated_data["status"],
            )
        except RideServiceError as exc:
            return service_error_response(exc)

        return Response(DriverProfileSerializer(profile).data)
