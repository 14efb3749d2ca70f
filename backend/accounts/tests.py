from django.test import TestCase
from rest_framework.test import APIRequestFactory

from .models import User
from .views import LoginView, RefreshTokenView, RegisterView


class AuthFlowTests(TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()

	def register(self, **overrides):
		payload = {
			'username': 'john_doe',
			'email': 'john@example.com',
			'password': 'password123',
			'role': 'rider',
			'phone_number': '+1234567890',
		}
		payload.update(overrides)
		request = self.factory.post('/api/auth/register/', payload, format='json')
		return RegisterView.as_view()(request)

	def test_register_returns_user_and_tokens(self):
		response = self.register()

		self.assertEqual(response.status_code, 201)
		self.assertEqual(response.data['user']['role'], 'rider')
		self.assertIn('access', response.data['tokens'])
		self.assertIn('refresh', response.data['tokens'])

		user = User.objects.get(username='john_doe')
		self.assertTrue(user.check_password('password123'))
		self.assertNotEqual(user.password, 'password123')

	def test_register_rejects_unknown_role_and_short_password(self):
		response = self.register(role='admin', password='short')

		self.assertEqual(response.status_code, 400)
		self.assertIn('role', response.data)
		self.assertIn('password', response.data)

	def test_register_rejects_duplicate_email(self):
		self.register()
		response = self.register(username='jane_doe')

		self.assertEqual(response.status_code, 400)
		self.assertIn('email', response.data)

	def test_login_and_refresh(self):
		self.register(role='driver')

		request = self.factory.post('/api/auth/login/', {
			'username': 'john_doe',
			'password': 'password123',
		}, format='json')
		response = LoginView.as_view()(request)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['user']['role'], 'driver')

		request = self.factory.post('/api/auth/refresh/', {
			'refresh': response.data['tokens']['refresh'],
		}, format='json')
		refreshed = RefreshTokenView.as_view()(request)
		self.assertEqual(refreshed.status_code, 200)
		self.assertIn('access', refreshed.data)

	def test_login_with_wrong_password(self):
		self.register()

		request = self.factory.post('/api/auth/login/', {
			'username': 'john_doe',
			'password': 'wrong-password',
		}, format='json')
		response = LoginView.as_view()(request)

		self.assertEqual(response.status_code, 400)

	def test_refresh_with_garbage_token(self):
		request = self.factory.post('/api/auth/refresh/', {'refresh': 'not-a-token'}, format='json')
		response = RefreshTokenView.as_view()(request)

		self.assertEqual(response.status_code, 401)
