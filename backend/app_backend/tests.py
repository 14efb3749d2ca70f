from django.test import TestCase
from rest_framework.test import APIRequestFactory

from .views import health_check


class HealthCheckTests(TestCase):
	def test_healthy_database(self):
		request = APIRequestFactory().get('/health/')
		response = health_check(request)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['status'], 'healthy')
		self.assertEqual(response.data['services']['database'], 'healthy')
