import jwt
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from .jwt_utils import validate_jwt_token
from .session import ChatSession


class JWTAuthentication(BaseAuthentication):
    keyword = 'Bearer'

    def authenticate(self, request):
        """
        Authenticate a request using the bearer JWT in the Authorization header.

        Returns ``None`` when no Authorization header is sent, so that the
        permission classes answer with 401. On success the caller's
        ``ChatSession`` becomes ``request.user`` and the raw claims
        ``request.auth``.

        Raises:
            AuthenticationFailed: If the header is malformed or the token does not verify.
        """
        auth_header = request.headers.get('Authorization', '')
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0] != self.keyword:
            raise AuthenticationFailed("Wrong token format. Expected 'Bearer <token>'")

        try:
            claims = validate_jwt_token(parts[1])
            session = ChatSession.from_claims(claims)
        except (jwt.InvalidTokenError, ValueError) as e:
            raise AuthenticationFailed(str(e))

        return (session, claims)

    def authenticate_header(self, request):
        return self.keyword
