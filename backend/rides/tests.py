import threading
import unittest
from datetime import timedelta
from decimal import Decimal

from django.db import connection
from django.test import TestCase, TransactionTestCase
from django.utils import timezone
from rest_framework.test import APIRequestFactory, force_authenticate

from accounts.models import User
from drivers.models import DriverProfile
from services.ride_management import (
	create_ride,
	accept_ride,
	transition_status,
	get_ride,
	list_available_rides,
	list_user_rides,
	VALID_TRANSITIONS,
	ConflictOrNotFoundError,
	InvalidOperationError,
	InvalidTransitionError,
	RideNotFoundError,
	UserNotFoundError,
)
from .models import Ride
from .views import (
	accept_ride_request,
	available_rides,
	create_ride_request,
	ride_detail,
	update_ride_status,
	user_rides,
)

ALL_STATUSES = [choice for choice, _ in Ride.STATUS_CHOICES]


def make_user(username, role):
	return User.objects.create_user(
		username=username,
		password='pass12345',
		email=f'{username}@example.com',
		role=role,
		phone_number='9000000000'
	)


def make_driver(username, status=DriverProfile.AVAILABLE):
	user = make_user(username, User.DRIVER)
	DriverProfile.objects.create(
		user=user,
		license_number=f'LIC-{username}',
		vehicle_make='Toyota',
		vehicle_model='Prius',
		vehicle_year=2020,
		vehicle_plate=f'PL-{username}'[:20],
		status=status
	)
	return user


class RideTestMixin:
	def make_ride(self, status=Ride.REQUESTED, driver=None, requested_at=None, **extra):
		if driver is None and status not in (Ride.REQUESTED, Ride.CANCELLED):
			driver = self.driver
		return Ride.objects.create(
			rider=self.rider,
			driver=driver,
			pickup_address='1 A St',
			destination_address='2 B Ave',
			status=status,
			requested_at=requested_at or timezone.now(),
			**extra
		)


class RideLifecycleTests(RideTestMixin, TestCase):
	def setUp(self):
		self.rider = make_user('rider', User.RIDER)
		self.driver = make_driver('driver')

	def test_create_ride_starts_requested(self):
		ride = create_ride(self.rider.id, '1 A St', '2 B Ave')

		self.assertEqual(ride.status, Ride.REQUESTED)
		self.assertEqual(ride.rider_id, self.rider.id)
		self.assertIsNone(ride.driver_id)
		self.assertIsNone(ride.fare)
		self.assertIsNone(ride.distance)
		self.assertIsNone(ride.duration)
		self.assertIsNotNone(ride.requested_at)
		self.assertIsNone(ride.accepted_at)
		self.assertIsNone(ride.started_at)
		self.assertIsNone(ride.completed_at)

	def test_create_ride_keeps_coordinates(self):
		ride = create_ride(
			self.rider.id, '1 A St', '2 B Ave',
			pickup_latitude=40.7128, pickup_longitude=-74.0060,
			destination_latitude=40.7589, destination_longitude=-73.9851
		)
		ride.refresh_from_db()

		self.assertAlmostEqual(ride.pickup_latitude, 40.7128)
		self.assertAlmostEqual(ride.pickup_longitude, -74.0060)
		self.assertAlmostEqual(ride.destination_latitude, 40.7589)
		self.assertAlmostEqual(ride.destination_longitude, -73.9851)

	def test_create_ride_for_unknown_rider(self):
		with self.assertRaises(UserNotFoundError):
			create_ride(99999, '1 A St', '2 B Ave')
		self.assertFalse(Ride.objects.exists())

	def test_rider_may_hold_several_open_requests(self):
		# One active ride per rider is a client concern, not a server rule
		first = create_ride(self.rider.id, '1 A St', '2 B Ave')
		second = create_ride(self.rider.id, '3 C Rd', '4 D Ln')

		self.assertNotEqual(first.id, second.id)
		self.assertEqual(
			Ride.objects.filter(rider=self.rider, status=Ride.REQUESTED).count(), 2
		)

	def test_transition_matrix(self):
		for current in ALL_STATUSES:
			for target in ALL_STATUSES:
				with self.subTest(current=current, target=target):
					ride = self.make_ride(status=current)
					if target in VALID_TRANSITIONS[current]:
						updated = transition_status(ride.id, target)
						self.assertEqual(updated.status, target)
					else:
						with self.assertRaises(InvalidTransitionError):
							transition_status(ride.id, target)
						ride.refresh_from_db()
						self.assertEqual(ride.status, current)

	def test_terminal_statuses_admit_nothing(self):
		for terminal in Ride.TERMINAL_STATUSES:
			ride = self.make_ride(status=terminal)
			for target in ALL_STATUSES:
				with self.subTest(terminal=terminal, target=target):
					with self.assertRaises(InvalidTransitionError):
						transition_status(ride.id, target)

	def test_invalid_transition_names_both_statuses(self):
		ride = self.make_ride(status=Ride.REQUESTED)

		with self.assertRaises(InvalidTransitionError) as ctx:
			transition_status(ride.id, Ride.COMPLETED)

		self.assertEqual(ctx.exception.current_status, Ride.REQUESTED)
		self.assertEqual(ctx.exception.new_status, Ride.COMPLETED)
		self.assertIn("'requested'", str(ctx.exception))
		self.assertIn("'completed'", str(ctx.exception))

	def test_plain_accepted_transition_assigns_no_driver(self):
		ride = self.make_ride(status=Ride.REQUESTED)
		updated = transition_status(ride.id, Ride.ACCEPTED)

		self.assertEqual(updated.status, Ride.ACCEPTED)
		self.assertIsNone(updated.driver_id)
		self.assertIsNone(updated.accepted_at)

	def test_unknown_target_status_is_invalid_transition(self):
		ride = self.make_ride(status=Ride.REQUESTED)
		with self.assertRaises(InvalidTransitionError):
			transition_status(ride.id, 'teleported')

	def test_transition_for_missing_ride(self):
		with self.assertRaises(RideNotFoundError):
			transition_status(99999, Ride.CANCELLED)

	def test_fare_only_with_completed_from_any_source(self):
		for current in ALL_STATUSES:
			for target in ALL_STATUSES:
				if target == Ride.COMPLETED:
					continue
				with self.subTest(current=current, target=target):
					ride = self.make_ride(status=current)
					with self.assertRaises(InvalidOperationError):
						transition_status(ride.id, target, fare=Decimal('10.00'))
					ride.refresh_from_db()
					self.assertEqual(ride.status, current)
					self.assertIsNone(ride.fare)

	def test_fare_round_trips_exactly(self):
		for supplied, expected in [
			(Decimal('25.50'), '25.50'),
			('15.75', '15.75'),
			(15.75, '15.75'),
			(25.5, '25.50'),
		]:
			with self.subTest(supplied=supplied):
				ride = self.make_ride(status=Ride.IN_PROGRESS)
				transition_status(ride.id, Ride.COMPLETED, fare=supplied)
				ride.refresh_from_db()
				self.assertEqual(ride.fare, Decimal(expected))
				self.assertEqual(str(ride.fare), expected)

	def test_unstorable_fare_is_rejected_without_completing(self):
		for fare in (Decimal('1e30'), Decimal('1e9'), '123456789.00', 'abc', float('inf')):
			with self.subTest(fare=fare):
				ride = self.make_ride(status=Ride.IN_PROGRESS)
				with self.assertRaises(InvalidOperationError):
					transition_status(ride.id, Ride.COMPLETED, fare=fare)
				ride.refresh_from_db()
				self.assertEqual(ride.status, Ride.IN_PROGRESS)
				self.assertIsNone(ride.fare)
				self.assertIsNone(ride.completed_at)

	def test_largest_storable_fare_is_accepted(self):
		ride = self.make_ride(status=Ride.IN_PROGRESS)
		transition_status(ride.id, Ride.COMPLETED, fare='99999999.99')
		ride.refresh_from_db()
		self.assertEqual(ride.fare, Decimal('99999999.99'))

	def test_completion_without_fare_leaves_fare_empty(self):
		ride = self.make_ride(status=Ride.IN_PROGRESS)
		completed = transition_status(ride.id, Ride.COMPLETED)

		self.assertEqual(completed.status, Ride.COMPLETED)
		self.assertIsNone(completed.fare)

	def test_timestamps_stamped_on_first_arrival(self):
		ride = self.make_ride(status=Ride.ACCEPTED)
		self.assertIsNone(ride.accepted_at)

		ride = transition_status(ride.id, Ride.DRIVER_EN_ROUTE)
		self.assertIsNotNone(ride.accepted_at)
		self.assertIsNone(ride.started_at)

		ride = transition_status(ride.id, Ride.DRIVER_ARRIVED)
		self.assertIsNone(ride.started_at)

		ride = transition_status(ride.id, Ride.IN_PROGRESS)
		self.assertIsNotNone(ride.started_at)
		self.assertIsNone(ride.completed_at)

		ride = transition_status(ride.id, Ride.COMPLETED)
		self.assertIsNotNone(ride.completed_at)

	def test_existing_timestamps_are_not_overwritten(self):
		earlier = timezone.now() - timedelta(hours=1)
		ride = self.make_ride(status=Ride.ACCEPTED, accepted_at=earlier)
		transition_status(ride.id, Ride.DRIVER_EN_ROUTE)
		ride.refresh_from_db()
		self.assertEqual(ride.accepted_at, earlier)

		ride = self.make_ride(status=Ride.DRIVER_ARRIVED, started_at=earlier)
		transition_status(ride.id, Ride.IN_PROGRESS)
		ride.refresh_from_db()
		self.assertEqual(ride.started_at, earlier)

		ride = self.make_ride(status=Ride.IN_PROGRESS, completed_at=earlier)
		transition_status(ride.id, Ride.COMPLETED)
		ride.refresh_from_db()
		self.assertEqual(ride.completed_at, earlier)

	def test_cancel_does_not_stamp_lifecycle_timestamps(self):
		ride = self.make_ride(status=Ride.ACCEPTED)
		transition_status(ride.id, Ride.CANCELLED)
		ride.refresh_from_db()

		self.assertEqual(ride.status, Ride.CANCELLED)
		self.assertIsNone(ride.started_at)
		self.assertIsNone(ride.completed_at)

	def test_successful_transition_bumps_updated_at(self):
		ride = self.make_ride(status=Ride.REQUESTED)
		before = ride.updated_at

		updated = transition_status(ride.id, Ride.CANCELLED)
		self.assertGreaterEqual(updated.updated_at, before)

	def test_transitions_leave_driver_profile_alone(self):
		ride = self.make_ride(status=Ride.IN_PROGRESS)
		profile = self.driver.driver_profile
		profile.status = DriverProfile.BUSY
		profile.save()

		transition_status(ride.id, Ride.COMPLETED, fare='12.00')
		profile.refresh_from_db()

		self.assertEqual(profile.status, DriverProfile.BUSY)
		self.assertEqual(profile.total_rides, 0)

	def test_full_ride_scenario(self):
		ride = create_ride(self.rider.id, '1 A St', '2 B Ave')
		self.assertEqual(ride.status, Ride.REQUESTED)
		self.assertIsNone(ride.driver_id)
		self.assertIsNone(ride.fare)

		ride = accept_ride(ride.id, self.driver.id)
		self.assertEqual(ride.status, Ride.ACCEPTED)
		self.assertEqual(ride.driver_id, self.driver.id)
		self.driver.driver_profile.refresh_from_db()
		self.assertEqual(self.driver.driver_profile.status, DriverProfile.BUSY)

		ride = transition_status(ride.id, Ride.DRIVER_EN_ROUTE)
		self.assertIsNotNone(ride.accepted_at)

		ride = transition_status(ride.id, Ride.DRIVER_ARRIVED)
		ride = transition_status(ride.id, Ride.IN_PROGRESS)
		self.assertIsNotNone(ride.started_at)

		ride = transition_status(ride.id, Ride.COMPLETED, fare=Decimal('25.50'))
		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.COMPLETED)
		self.assertIsNotNone(ride.completed_at)
		self.assertEqual(ride.fare, Decimal('25.50'))


class RideAcceptanceTests(RideTestMixin, TestCase):
	def setUp(self):
		self.rider = make_user('rider', User.RIDER)
		self.driver = make_driver('driver_one')
		self.other_driver = make_driver('driver_two')
		self.ride = create_ride(self.rider.id, 'Connaught Place', 'India Gate')

	def test_accept_assigns_driver_and_marks_busy(self):
		ride = accept_ride(self.ride.id, self.driver.id)

		self.assertEqual(ride.status, Ride.ACCEPTED)
		self.assertEqual(ride.driver_id, self.driver.id)
		self.assertIsNotNone(ride.accepted_at)

		self.driver.driver_profile.refresh_from_db()
		self.assertEqual(self.driver.driver_profile.status, DriverProfile.BUSY)

	def test_accepted_at_kept_when_driver_sets_off(self):
		ride = accept_ride(self.ride.id, self.driver.id)
		accepted_at = ride.accepted_at

		ride = transition_status(ride.id, Ride.DRIVER_EN_ROUTE)
		self.assertEqual(ride.accepted_at, accepted_at)

	def test_second_driver_loses(self):
		accept_ride(self.ride.id, self.driver.id)

		with self.assertRaises(ConflictOrNotFoundError) as ctx:
			accept_ride(self.ride.id, self.other_driver.id)
		self.assertEqual(str(ctx.exception), 'Ride not found or not available for acceptance')

		self.ride.refresh_from_db()
		self.other_driver.driver_profile.refresh_from_db()
		self.assertEqual(self.ride.driver_id, self.driver.id)
		self.assertEqual(self.other_driver.driver_profile.status, DriverProfile.AVAILABLE)

	def test_missing_and_taken_rides_fail_identically(self):
		accept_ride(self.ride.id, self.driver.id)

		with self.assertRaises(ConflictOrNotFoundError) as taken:
			accept_ride(self.ride.id, self.other_driver.id)
		with self.assertRaises(ConflictOrNotFoundError) as missing:
			accept_ride(99999, self.other_driver.id)

		self.assertEqual(str(taken.exception), str(missing.exception))
		self.assertEqual(taken.exception.error_code, missing.exception.error_code)

	def test_accept_non_requested_ride_always_fails(self):
		for status in ALL_STATUSES:
			if status == Ride.REQUESTED:
				continue
			with self.subTest(status=status):
				ride = self.make_ride(status=status, driver=None)
				with self.assertRaises(ConflictOrNotFoundError):
					accept_ride(ride.id, self.other_driver.id)
				ride.refresh_from_db()
				self.assertEqual(ride.status, status)
		self.other_driver.driver_profile.refresh_from_db()
		self.assertEqual(self.other_driver.driver_profile.status, DriverProfile.AVAILABLE)

	def assert_ride_untouched(self):
		self.ride.refresh_from_db()
		self.assertEqual(self.ride.status, Ride.REQUESTED)
		self.assertIsNone(self.ride.driver_id)
		self.assertIsNone(self.ride.accepted_at)

	def test_unavailable_driver_is_rejected_and_ride_released(self):
		for status in (DriverProfile.UNAVAILABLE, DriverProfile.BUSY):
			with self.subTest(status=status):
				DriverProfile.objects.filter(user=self.driver).update(status=status)
				with self.assertRaises(ConflictOrNotFoundError) as ctx:
					accept_ride(self.ride.id, self.driver.id)
				self.assertEqual(str(ctx.exception), 'Driver not found or not available')
				self.assert_ride_untouched()

	def test_rider_cannot_accept(self):
		with self.assertRaises(ConflictOrNotFoundError):
			accept_ride(self.ride.id, self.rider.id)
		self.assert_ride_untouched()

	def test_driver_without_profile_cannot_accept(self):
		newcomer = make_user('newcomer', User.DRIVER)
		with self.assertRaises(ConflictOrNotFoundError):
			accept_ride(self.ride.id, newcomer.id)
		self.assert_ride_untouched()

	def test_unknown_driver_cannot_accept(self):
		with self.assertRaises(ConflictOrNotFoundError):
			accept_ride(self.ride.id, 99999)
		self.assert_ride_untouched()

	def test_busy_driver_cannot_take_a_second_ride(self):
		second = create_ride(self.rider.id, '3 C Rd', '4 D Ln')
		accept_ride(self.ride.id, self.driver.id)

		with self.assertRaises(ConflictOrNotFoundError):
			accept_ride(second.id, self.driver.id)

		second.refresh_from_db()
		self.assertEqual(second.status, Ride.REQUESTED)
		self.assertIsNone(second.driver_id)


@unittest.skipUnless(
	connection.vendor == 'postgresql',
	'needs row-level locking; run with DB_ENGINE=postgres'
)
class ConcurrentAcceptanceTests(TransactionTestCase):
	def test_only_one_of_many_racing_drivers_wins(self):
		rider = make_user('rider', User.RIDER)
		drivers = [make_driver(f'racer_{i}') for i in range(5)]
		ride = create_ride(rider.id, '1 A St', '2 B Ave')

		barrier = threading.Barrier(len(drivers))
		winners, losers = [], []

		def attempt(driver):
			try:
				barrier.wait()
				accept_ride(ride.id, driver.id)
				winners.append(driver.id)
			except ConflictOrNotFoundError:
				losers.append(driver.id)
			finally:
				connection.close()

		threads = [threading.Thread(target=attempt, args=(d,)) for d in drivers]
		for thread in threads:
			thread.start()
		for thread in threads:
			thread.join()

		self.assertEqual(len(winners), 1)
		self.assertEqual(len(losers), len(drivers) - 1)

		ride.refresh_from_db()
		self.assertEqual(ride.driver_id, winners[0])
		self.assertEqual(
			DriverProfile.objects.filter(status=DriverProfile.BUSY).count(), 1
		)
		self.assertEqual(
			DriverProfile.objects.filter(
				user_id__in=losers, status=DriverProfile.AVAILABLE
			).count(),
			len(losers)
		)


class RideQueryTests(RideTestMixin, TestCase):
	def setUp(self):
		self.rider = make_user('rider', User.RIDER)
		self.other_rider = make_user('other_rider', User.RIDER)
		self.driver = make_driver('driver')
		self.now = timezone.now()

	def ride_at(self, minutes_ago, status=Ride.REQUESTED, rider=None, driver=None):
		ride = self.make_ride(
			status=status,
			driver=driver,
			requested_at=self.now - timedelta(minutes=minutes_ago)
		)
		if rider is not None:
			ride.rider = rider
			ride.save(update_fields=['rider'])
		return ride

	def test_available_rides_are_requested_newest_first(self):
		old = self.ride_at(30)
		new = self.ride_at(5)
		middle = self.ride_at(10, rider=self.other_rider)
		self.ride_at(1, status=Ride.ACCEPTED)
		self.ride_at(2, status=Ride.CANCELLED)

		rides = list_available_rides(self.driver.id)

		self.assertEqual([r.id for r in rides], [new.id, middle.id, old.id])

	def test_available_rides_ignore_driver(self):
		for minutes in range(3):
			self.ride_at(minutes)

		self.assertEqual(
			[r.id for r in list_available_rides(self.driver.id)],
			[r.id for r in list_available_rides()]
		)

	def test_available_rides_pages_do_not_overlap(self):
		rides = [self.ride_at(minutes) for minutes in range(5)]
		# Two rides with the same request time still page deterministically
		tie = self.make_ride(requested_at=rides[2].requested_at)

		seen = []
		for offset in range(0, 6, 2):
			page = list_available_rides(self.driver.id, limit=2, offset=offset)
			self.assertLessEqual(len(page), 2)
			seen.extend(r.id for r in page)

		self.assertEqual(len(seen), len(set(seen)))
		self.assertEqual(set(seen), {r.id for r in rides} | {tie.id})

	def test_available_rides_default_page_size(self):
		for minutes in range(55):
			self.ride_at(minutes)

		self.assertEqual(len(list_available_rides()), 50)
		self.assertEqual(len(list_available_rides(offset=50)), 5)

	def test_user_rides_cover_rider_and_driver(self):
		as_rider = self.ride_at(20)
		as_driver = self.ride_at(10, status=Ride.ACCEPTED, rider=self.other_rider, driver=self.driver)
		self.ride_at(5, rider=self.other_rider)

		rider_ids = [r.id for r in list_user_rides(self.rider.id)]
		driver_ids = [r.id for r in list_user_rides(self.driver.id)]

		self.assertEqual(rider_ids, [as_rider.id])
		self.assertEqual(driver_ids, [as_driver.id])

	def test_user_rides_union_newest_first_with_pagination(self):
		# A driver who also rode once
		rides = []
		for minutes in range(6):
			if minutes % 2:
				rides.append(self.ride_at(minutes, rider=self.driver))
			else:
				rides.append(self.ride_at(minutes, status=Ride.COMPLETED, driver=self.driver))

		first = list_user_rides(self.driver.id, limit=4, offset=0)
		second = list_user_rides(self.driver.id, limit=4, offset=4)

		ids = [r.id for r in first] + [r.id for r in second]
		self.assertEqual(ids, [r.id for r in rides])

	def test_user_with_no_rides(self):
		self.assertEqual(list_user_rides(self.other_rider.id), [])

	def test_get_ride(self):
		ride = self.ride_at(1)
		self.assertEqual(get_ride(ride.id), ride)

		with self.assertRaises(RideNotFoundError):
			get_ride(99999)


class RideApiTests(RideTestMixin, TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()
		self.rider = make_user('rider', User.RIDER)
		self.driver = make_driver('driver_one')
		self.other_driver = make_driver('driver_two')

	def post(self, view, path, data, user, **kwargs):
		request = self.factory.post(path, data, format='json')
		force_authenticate(request, user=user)
		return view(request, **kwargs)

	def get(self, view, path, user, params=None, **kwargs):
		request = self.factory.get(path, params or {})
		force_authenticate(request, user=user)
		return view(request, **kwargs)

	def test_create_ride(self):
		response = self.post(create_ride_request, '/api/rides/request/', {
			'rider_id': self.rider.id,
			'pickup_address': '1 A St',
			'destination_address': '2 B Ave',
			'pickup_latitude': 28.6139,
			'pickup_longitude': 77.2090,
		}, self.rider)

		self.assertEqual(response.status_code, 201)
		self.assertEqual(response.data['status'], 'requested')
		self.assertIsNone(response.data['driver_id'])
		self.assertIsNone(response.data['fare'])
		self.assertEqual(response.data['rider_id'], self.rider.id)

	def test_create_ride_validates_input(self):
		response = self.post(create_ride_request, '/api/rides/request/', {
			'rider_id': self.rider.id,
			'destination_address': '2 B Ave',
			'pickup_latitude': 120,
		}, self.rider)

		self.assertEqual(response.status_code, 400)
		self.assertIn('pickup_address', response.data)
		self.assertIn('pickup_latitude', response.data)

	def test_create_ride_unknown_rider(self):
		response = self.post(create_ride_request, '/api/rides/request/', {
			'rider_id': 99999,
			'pickup_address': '1 A St',
			'destination_address': '2 B Ave',
		}, self.rider)

		self.assertEqual(response.status_code, 404)
		self.assertEqual(response.data['error'], 'not_found')
		self.assertFalse(response.data['success'])

	def test_requires_authentication(self):
		request = self.factory.get('/api/rides/available/')
		response = available_rides(request)
		self.assertEqual(response.status_code, 401)

	def test_accept_race_over_http(self):
		ride = self.make_ride()

		won = self.post(accept_ride_request, f'/api/rides/{ride.id}/accept/',
						{'driver_id': self.driver.id}, self.driver, ride_id=ride.id)
		lost = self.post(accept_ride_request, f'/api/rides/{ride.id}/accept/',
						 {'driver_id': self.other_driver.id}, self.other_driver, ride_id=ride.id)

		self.assertEqual(won.status_code, 200)
		self.assertTrue(won.data['success'])
		self.assertEqual(won.data['ride']['status'], 'accepted')
		self.assertEqual(won.data['ride']['driver_id'], self.driver.id)

		self.assertEqual(lost.status_code, 409)
		self.assertEqual(lost.data['error'], 'conflict_or_not_found')

	def test_accept_missing_ride_looks_like_taken_ride(self):
		response = self.post(accept_ride_request, '/api/rides/99999/accept/',
							 {'driver_id': self.driver.id}, self.driver, ride_id=99999)

		self.assertEqual(response.status_code, 409)
		self.assertEqual(response.data['error'], 'conflict_or_not_found')

	def test_complete_with_fare(self):
		ride = self.make_ride(status=Ride.IN_PROGRESS)

		response = self.post(update_ride_status, f'/api/rides/{ride.id}/status/',
							 {'status': 'completed', 'fare': '25.50'}, self.driver, ride_id=ride.id)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['status'], 'completed')
		self.assertEqual(response.data['fare'], '25.50')
		self.assertIsNotNone(response.data['completed_at'])

	def test_fare_with_other_status(self):
		ride = self.make_ride(status=Ride.ACCEPTED)

		response = self.post(update_ride_status, f'/api/rides/{ride.id}/status/',
							 {'status': 'driver_en_route', 'fare': '15.75'}, self.driver, ride_id=ride.id)

		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.data['error'], 'invalid_operation')

	def test_invalid_transition(self):
		ride = self.make_ride(status=Ride.COMPLETED)

		response = self.post(update_ride_status, f'/api/rides/{ride.id}/status/',
							 {'status': 'cancelled'}, self.driver, ride_id=ride.id)

		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.data['error'], 'invalid_transition')

	def test_non_positive_fare_rejected_at_boundary(self):
		ride = self.make_ride(status=Ride.IN_PROGRESS)

		response = self.post(update_ride_status, f'/api/rides/{ride.id}/status/',
							 {'status': 'completed', 'fare': '-5.00'}, self.driver, ride_id=ride.id)

		self.assertEqual(response.status_code, 400)
		self.assertIn('fare', response.data)
		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.IN_PROGRESS)

	def test_status_for_missing_ride(self):
		response = self.post(update_ride_status, '/api/rides/99999/status/',
							 {'status': 'cancelled'}, self.driver, ride_id=99999)
		self.assertEqual(response.status_code, 404)

	def test_ride_detail(self):
		ride = self.make_ride()

		response = self.get(ride_detail, f'/api/rides/{ride.id}/', self.rider, ride_id=ride.id)
		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['id'], ride.id)

		missing = self.get(ride_detail, '/api/rides/99999/', self.rider, ride_id=99999)
		self.assertEqual(missing.status_code, 404)

	def test_available_rides_paginates(self):
		now = timezone.now()
		for minutes in range(3):
			self.make_ride(requested_at=now - timedelta(minutes=minutes))
		self.make_ride(status=Ride.ACCEPTED)

		response = self.get(available_rides, '/api/rides/available/', self.driver,
							{'driver_id': self.driver.id, 'limit': 2})

		self.assertEqual(response.status_code, 200)
		self.assertEqual(len(response.data), 2)
		self.assertTrue(all(r['status'] == 'requested' for r in response.data))

	def test_available_rides_rejects_bad_paging(self):
		response = self.get(available_rides, '/api/rides/available/', self.driver,
							{'limit': 0, 'offset': -1})

		self.assertEqual(response.status_code, 400)
		self.assertIn('limit', response.data)
		self.assertIn('offset', response.data)

	def test_user_rides(self):
		ride = self.make_ride(status=Ride.ACCEPTED)

		response = self.get(user_rides, f'/api/rides/user/{self.driver.id}/', self.driver,
							user_id=self.driver.id)

		self.assertEqual(response.status_code, 200)
		self.assertEqual([r['id'] for r in response.data], [ride.id])
