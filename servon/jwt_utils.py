"""
JWT utilities for the Servon API.

Tokens are HS256 signed and carry the user id in ``sub`` and the marketplace
role (customer, vendor or admin) in ``role``.
"""

import logging
import time

import jwt
from django.conf import settings

logger = logging.getLogger(__name__)


class JWTManager:
    """
    JWT Manager for token generation and validation.
    """

    def _get_secret(self):
        return settings.JWT_SECRET

    def _get_algorithm(self):
        return getattr(settings, 'JWT_ALGORITHM', 'HS256')

    def generate_token(self, user_id, role='customer', expires_in_hours=None):
        """
        Generate a signed token for a user.

        Args:
            user_id (str): The user ID to include in the token
            role (str): Marketplace role of the user
            expires_in_hours (int): Token lifetime, defaults to JWT_EXPIRATION_HOURS

        Returns:
            str: JWT token string
        """
        if expires_in_hours is None:
            expires_in_hours = getattr(settings, 'JWT_EXPIRATION_HOURS', 24)
        now = int(time.time())
        payload = {
            'sub': str(user_id),
            'role': role,
            'iss': settings.JWT_ISSUER,
            'aud': settings.JWT_AUDIENCE,
            'iat': now,
            'exp': now + int(expires_in_hours * 3600),
        }
        return jwt.encode(payload, self._get_secret(), algorithm=self._get_algorithm())

    def validate_token(self, token):
        """
        Validate a JWT token and return its claims.

        Raises:
            jwt.InvalidTokenError: If the token is invalid or expired
        """
        try:
            return jwt.decode(
                token,
                self._get_secret(),
                algorithms=[self._get_algorithm()],
                audience=settings.JWT_AUDIENCE,
                issuer=settings.JWT_ISSUER,
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise jwt.InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", e)
            raise jwt.InvalidTokenError(f"Invalid token: {e}")


_jwt_manager = None


def _get_jwt_manager():
    global _jwt_manager
    if _jwt_manager is None:
        _jwt_manager = JWTManager()
    return _jwt_manager


def generate_token(user_id, role='customer', expires_in_hours=None):
    """Generate a JWT for the given user."""
    return _get_jwt_manager().generate_token(user_id, role, expires_in_hours)


def validate_jwt_token(token):
    """Validate a JWT token and return the payload."""
    return _get_jwt_manager().validate_token(token)
