import logging
import time
from urllib.parse import parse_qs

import jwt
from channels.middleware import BaseMiddleware
from django.conf import settings
from django.core.cache import cache

from servon.jwt_utils import validate_jwt_token
from servon.session import ChatSession

logger = logging.getLogger(__name__)

CLOSE_UNAUTHENTICATED = 4001
CLOSE_RATE_LIMITED = 4029


class WebSocketAuthMiddleware(BaseMiddleware):
    """
    Middleware for WebSocket authentication and security
    Implements JWT validation, rate limiting, and connection management
    """

    async def __call__(self, scope, receive, send):
        query_string = scope.get('query_string', b'').decode()
        query_params = parse_qs(query_string)

        token = query_params.get('token', [None])[0]

        if not token:
            await self.reject(send, CLOSE_UNAUTHENTICATED, 'Authentication token required')
            return

        session = await self.authenticate(token)
        if session is None:
            await self.reject(send, CLOSE_UNAUTHENTICATED, 'Invalid authentication token')
            return

        if not await self.check_rate_limit(session.user_id):
            logger.info("Websocket rate limit exceeded for %s", session.user_id)
            await self.reject(send, CLOSE_RATE_LIMITED, 'Rate limit exceeded')
            return

        scope['chat_session'] = session
        scope['user_id'] = session.user_id
        scope['authenticated'] = True

        return await super().__call__(scope, receive, send)

    async def reject(self, send, code, reason):
        await send({
            'type': 'websocket.close',
            'code': code,
            'reason': reason,
        })

    async def authenticate(self, token):
        """Validate the JWT and return the caller's ChatSession, or None"""
        try:
            return ChatSession.from_claims(validate_jwt_token(token))
        except (jwt.InvalidTokenError, ValueError) as e:
            logger.warning("Websocket JWT validation failed: %s", e)
            return None

    async def check_rate_limit(self, user_id):
        """Check if user has exceeded rate limit"""
        cache_key = f"websocket_rate_limit:{user_id}"
        current_time = int(time.time())

        rate_data = cache.get(cache_key, {'count': 0, 'window_start': current_time})

        # One minute window
        if current_time - rate_data['window_start'] >= 60:
            rate_data = {'count': 0, 'window_start': current_time}

        if rate_data['count'] >= settings.WEBSOCKET_RATE_LIMIT:
            return False

        rate_data['count'] += 1
        cache.set(cache_key, rate_data, 60)

        return True


class WebSocketSecurityMiddleware(BaseMiddleware):
    """
    Additional security middleware for WebSocket connections
    Publishes the frame size limit and connection timings on the scope
    """

    async def __call__(self, scope, receive, send):
        scope['max_message_size'] = settings.WEBSOCKET_MAX_MESSAGE_SIZE
        scope['connection_timeout'] = settings.WEBSOCKET_CONNECTION_TIMEOUT
        scope['heartbeat_interval'] = settings.WEBSOCKET_HEARTBEAT_INTERVAL

        return await super().__call__(scope, receive, send)
