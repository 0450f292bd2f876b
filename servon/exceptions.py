import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Render DRF exceptions as ``{"error": ...}`` bodies, the same shape the
    views use for hand-written error responses.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and set(data) == {'detail'}:
        response.data = {'error': data['detail']}
    elif isinstance(data, list):
        response.data = {'error': ' '.join(str(item) for item in data)}
    elif isinstance(data, dict):
        response.data = {'error': 'Invalid request', 'fields': data}

    if response.status_code >= 500:
        logger.error("API error in %s: %s", context.get('view').__class__.__name__, exc)
    return response
