import json

from django.test import TestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from accounts.models import User
from rides.models import Ride
from services.ride_management import (
	DriverProfileExistsError,
	DriverProfileNotFoundError,
	InvalidOperationError,
	PermissionDeniedError,
	UserNotFoundError,
	accept_ride,
	create_ride,
)
from .models import DriverProfile
from . import services
from .views import DriverProfileCreateView, DriverProfileDetailView, DriverStatusView

VEHICLE = {
	'license_number': 'DL123456',
	'vehicle_make': 'Honda',
	'vehicle_model': 'Civic',
	'vehicle_year': 2019,
	'vehicle_plate': 'ABC-123',
}


class DriverProfileServiceTests(TestCase):
	def setUp(self):
		self.driver = User.objects.create_user(
			username='driver', password='driver1234', role=User.DRIVER
		)
		self.rider = User.objects.create_user(
			username='rider', password='rider1234', role=User.RIDER
		)

	def test_create_profile_defaults(self):
		profile = services.create_driver_profile(self.driver.id, **VEHICLE)

		self.assertEqual(profile.user_id, self.driver.id)
		self.assertEqual(profile.status, DriverProfile.UNAVAILABLE)
		self.assertIsNone(profile.rating)
		self.assertEqual(profile.total_rides, 0)
		self.assertEqual(profile.vehicle_plate, 'ABC-123')
		self.assertEqual(profile.vehicle_year, 2019)

	def test_create_profile_unknown_user(self):
		with self.assertRaises(UserNotFoundError):
			services.create_driver_profile(99999, **VEHICLE)

	def test_create_profile_for_rider(self):
		with self.assertRaises(PermissionDeniedError):
			services.create_driver_profile(self.rider.id, **VEHICLE)
		self.assertFalse(DriverProfile.objects.exists())

	def test_create_profile_twice(self):
		services.create_driver_profile(self.driver.id, **VEHICLE)

		with self.assertRaises(DriverProfileExistsError):
			services.create_driver_profile(self.driver.id, **VEHICLE)
		self.assertEqual(DriverProfile.objects.filter(user=self.driver).count(), 1)

	def test_get_profile(self):
		self.assertIsNone(services.get_driver_profile(self.driver.id))

		profile = services.create_driver_profile(self.driver.id, **VEHICLE)
		self.assertEqual(services.get_driver_profile(self.driver.id), profile)

	def test_status_may_move_freely(self):
		profile = services.create_driver_profile(self.driver.id, **VEHICLE)
		sequence = [
			DriverProfile.BUSY,
			DriverProfile.AVAILABLE,
			DriverProfile.UNAVAILABLE,
			DriverProfile.BUSY,
			DriverProfile.BUSY,
			DriverProfile.UNAVAILABLE,
			DriverProfile.AVAILABLE,
		]
		for new_status in sequence:
			with self.subTest(new_status=new_status):
				updated = services.update_driver_status(profile.id, new_status)
				self.assertEqual(updated.status, new_status)

	def test_status_update_bumps_updated_at(self):
		profile = services.create_driver_profile(self.driver.id, **VEHICLE)
		updated = services.update_driver_status(profile.id, DriverProfile.AVAILABLE)
		self.assertGreaterEqual(updated.updated_at, profile.updated_at)

	def test_status_update_unknown_profile(self):
		with self.assertRaises(DriverProfileNotFoundError):
			services.update_driver_status(99999, DriverProfile.AVAILABLE)

	def test_status_update_unknown_status(self):
		profile = services.create_driver_profile(self.driver.id, **VEHICLE)
		with self.assertRaises(InvalidOperationError):
			services.update_driver_status(profile.id, 'offline')

	def test_driver_may_go_unavailable_mid_ride(self):
		profile = services.create_driver_profile(self.driver.id, **VEHICLE)
		services.update_driver_status(profile.id, DriverProfile.AVAILABLE)
		ride = create_ride(self.rider.id, '1 A St', '2 B Ave')
		accept_ride(ride.id, self.driver.id)

		updated = services.update_driver_status(profile.id, DriverProfile.UNAVAILABLE)

		self.assertEqual(updated.status, DriverProfile.UNAVAILABLE)
		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.ACCEPTED)
		self.assertEqual(ride.driver_id, self.driver.id)


class DriverApiTests(TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()
		self.driver = User.objects.create_user(
			username='driver', password='driver1234', role=User.DRIVER
		)
		self.rider = User.objects.create_user(
			username='rider', password='rider1234', role=User.RIDER
		)

	def create_profile(self, user_id, **overrides):
		payload = {'user_id': user_id, **VEHICLE, **overrides}
		request = self.factory.post('/api/driver/profile/', payload, format='json')
		force_authenticate(request, user=self.driver)
		return DriverProfileCreateView.as_view()(request)

	def test_create_profile(self):
		response = self.create_profile(self.driver.id)

		self.assertEqual(response.status_code, 201)
		self.assertEqual(response.data['user_id'], self.driver.id)
		self.assertEqual(response.data['status'], 'unavailable')
		self.assertEqual(response.data['total_rides'], 0)
		self.assertIsNone(response.data['rating'])

	def test_create_profile_errors(self):
		self.assertEqual(self.create_profile(99999).status_code, 404)

		forbidden = self.create_profile(self.rider.id)
		self.assertEqual(forbidden.status_code, 403)
		self.assertEqual(forbidden.data['error'], 'permission_denied')

		self.create_profile(self.driver.id)
		duplicate = self.create_profile(self.driver.id)
		self.assertEqual(duplicate.status_code, 409)
		self.assertEqual(duplicate.data['error'], 'already_exists')

	def test_create_profile_rejects_bad_vehicle_year(self):
		for year in (1899, 3000):
			with self.subTest(year=year):
				response = self.create_profile(self.driver.id, vehicle_year=year)
				self.assertEqual(response.status_code, 400)
				self.assertIn('vehicle_year', response.data)

	def test_get_profile(self):
		view = DriverProfileDetailView.as_view()

		request = self.factory.get(f'/api/driver/profile/{self.driver.id}/')
		force_authenticate(request, user=self.driver)
		response = view(request, user_id=self.driver.id)
		self.assertEqual(response.status_code, 200)
		self.assertFalse(response.data['has_profile'])
		self.assertIsNone(response.data['profile'])
		response.render()
		self.assertEqual(json.loads(response.content), {'has_profile': False, 'profile': None})

		self.create_profile(self.driver.id)
		request = self.factory.get(f'/api/driver/profile/{self.driver.id}/')
		force_authenticate(request, user=self.driver)
		response = view(request, user_id=self.driver.id)
		self.assertTrue(response.data['has_profile'])
		self.assertEqual(response.data['profile']['vehicle_plate'], 'ABC-123')

	def test_update_status(self):
		profile_id = self.create_profile(self.driver.id).data['id']
		view = DriverStatusView.as_view()

		request = self.factory.put('/api/driver/status/', {'driver_id': profile_id, 'status': 'available'}, format='json')
		force_authenticate(request, user=self.driver)
		response = view(request)
		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['status'], 'available')

		request = self.factory.put('/api/driver/status/', {'driver_id': 99999, 'status': 'busy'}, format='json')
		force_authenticate(request, user=self.driver)
		self.assertEqual(view(request).status_code, 404)

		request = self.factory.put('/api/driver/status/', {'driver_id': profile_id, 'status': 'offline'}, format='json')
		force_authenticate(request, user=self.driver)
		response = view(request)
		self.assertEqual(response.status_code, 400)
		self.assertIn('status', response.data)
