from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class HealthViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_health_requires_no_token(self):
        """Health check answers without an Authorization header"""
        response = self.client.get(reverse('health'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"status": "ok", "message": "SERVON API is running"})
