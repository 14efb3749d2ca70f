from django.urls import path
from .views import (
    DriverProfileCreateView,
    DriverProfileDetailView,
    DriverStatusView,
)

urlpatterns = [
    path("profile/", DriverProfileCreateView.as_view(), name="driver-profile-create"),
    path("profile/<int:user_id>/", DriverProfileDetailView.as_view(), name="driver-profile"),
    path("status/", DriverStatusView.as_view(), name="driver-status"),
]
