import jwt
from django.conf import settings
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from servon.jwt_utils import JWTManager, generate_token, validate_jwt_token
from servon.session import ChatSession


class JWTUtilsTest(TestCase):
    def test_generated_token_round_trips(self):
        """Test a generated token validates and carries sub and role."""
        claims = validate_jwt_token(generate_token('vend1', 'vendor'))

        self.assertEqual(claims['sub'], 'vend1')
        self.assertEqual(claims['role'], 'vendor')
        self.assertEqual(claims['iss'], settings.JWT_ISSUER)

    def test_expired_token_is_rejected(self):
        token = generate_token('vend1', expires_in_hours=-1)

        with self.assertRaises(jwt.InvalidTokenError) as ctx:
            validate_jwt_token(token)
        self.assertIn('expired', str(ctx.exception))

    def test_token_signed_with_other_secret_is_rejected(self):
        token = jwt.encode(
            {'sub': 'vend1', 'iss': settings.JWT_ISSUER, 'aud': settings.JWT_AUDIENCE},
            'not-the-secret',
            algorithm='HS256',
        )

        with self.assertRaises(jwt.InvalidTokenError):
            validate_jwt_token(token)

    def test_wrong_audience_is_rejected(self):
        token = generate_token('vend1')

        with override_settings(JWT_AUDIENCE='someone-else'):
            with self.assertRaises(jwt.InvalidTokenError):
                JWTManager().validate_token(token)

    def test_rotated_secret_rejects_old_tokens(self):
        token = generate_token('vend1')
        validate_jwt_token(token)

        with override_settings(JWT_SECRET='rotated-secret'):
            with self.assertRaises(jwt.InvalidTokenError):
                validate_jwt_token(token)
            self.assertEqual(validate_jwt_token(generate_token('vend1'))['sub'], 'vend1')


class ChatSessionTest(TestCase):
    def test_from_claims(self):
        session = ChatSession.from_claims({'sub': 'admin1', 'role': 'admin'})

        self.assertEqual(session.user_id, 'admin1')
        self.assertTrue(session.is_admin)
        self.assertTrue(session.is_authenticated)

    def test_unknown_role_falls_back_to_customer(self):
        session = ChatSession.from_claims({'sub': 'u1', 'role': 'superuser'})

        self.assertEqual(session.role, 'customer')
        self.assertFalse(session.is_admin)

    def test_missing_subject(self):
        with self.assertRaises(ValueError):
            ChatSession.from_claims({'role': 'vendor'})


class JWTAuthenticationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse('conversations:conversation-list')

    def test_missing_token_returns_401(self):
        """Test chat endpoints reject requests without a bearer token."""
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.json())

    def test_invalid_token_returns_401(self):
        response = self.client.get(self.url, HTTP_AUTHORIZATION='Bearer invalid_token_here')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.json())

    def test_malformed_header_returns_401(self):
        response = self.client.get(self.url, HTTP_AUTHORIZATION='Token abc')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_valid_token_is_accepted(self):
        token = generate_token('cust1')
        response = self.client.get(self.url, HTTP_AUTHORIZATION=f'Bearer {token}')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user_id'], 'cust1')
