from rest_framework.exceptions import NotFound, PermissionDenied


class ConversationLookupError(NotFound):
    """The id does not parse, or the context behind it no longer exists."""
    default_detail = 'Conversation not found'
    default_code = 'conversation_not_found'


class ConversationAccessDenied(PermissionDenied):
    default_detail = 'Not authorized to view this conversation'
    default_code = 'conversation_access_denied'
