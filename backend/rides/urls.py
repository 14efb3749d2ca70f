from django.urls import path
from . import views

app_name = 'rides'

urlpatterns = [
    # Rider APIs
    path('request/', views.create_ride_request, name='create-ride'),
    path('user/<int:user_id>/', views.user_rides, name='user-rides'),
    path('<int:ride_id>/', views.ride_detail, name='ride-detail'),

    # Driver Ride Actions
    path('available/', views.available_rides, name='available-rides'),
    path('<int:ride_id>/accept/', views.accept_ride_request, name='accept-ride'),
    path('<int:ride_id>/status/', views.update_ride_status, name='update-ride-status'),
]
