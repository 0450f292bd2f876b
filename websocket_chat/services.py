import logging
from typing import Dict, List, Optional

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator

from conversations.resolver import check_access, parse_or_lookup_error
from dmessages.models import Message
from dmessages.serializers import MessageSerializer

logger = logging.getLogger(__name__)


def clamp_page_size(limit) -> int:
    default = getattr(settings, 'CHAT_HISTORY_PAGE_SIZE', 50)
    maximum = getattr(settings, 'CHAT_HISTORY_MAX_PAGE_SIZE', 200)
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return default
    if limit < 1:
        return default
    return min(limit, maximum)


def clamp_page(page) -> int:
    try:
        page = int(page)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


class ChatService:
    """
    Service layer for chat operations including message history and pagination
    """

    @staticmethod
    def get_conversation_messages(conversation_id: str, session, page=1, limit=None, mark_read=False) -> Dict:
        """
        Page through a conversation's history. Pages count back from the newest
        message; each page is returned oldest first for display.
        """
        key = parse_or_lookup_error(conversation_id)
        check_access(key, session)

        page = clamp_page(page)
        limit = clamp_page_size(limit)

        messages = (
            Message.objects
            .in_conversation(key.serialize())
            .select_related('sender')
            .order_by('-created_at', '-id')
        )
        paginator = Paginator(messages, limit)
        try:
            page_obj = paginator.page(page)
            page_messages = list(reversed(page_obj.object_list))
            has_more = page_obj.has_next()
        except EmptyPage:
            page_messages = []
            has_more = False

        marked = 0
        if mark_read:
            marked = ChatService.mark_messages_as_read(conversation_id, session)['messages_marked_read']

        return {
            'conversation_id': key.serialize(),
            'messages': MessageSerializer(page_messages, many=True).data,
            'page': page,
            'limit': limit,
            'has_more': has_more,
            'messages_marked_read': marked,
        }

    @staticmethod
    def mark_messages_as_read(conversation_id: str, session, message_ids: Optional[List] = None) -> Dict:
        """
        Mark messages as read for a user. Only messages addressed to the caller
        that are still unread are touched.
        """
        key = parse_or_lookup_error(conversation_id)
        check_access(key, session)

        updated_count = (
            Message.objects
            .in_conversation(key.serialize())
            .mark_read_for(session.user_id, message_ids)
        )
        if updated_count:
            logger.debug("Marked %s messages read for %s in %s", updated_count, session.user_id, key)

        return {
            'success': True,
            'messages_marked_read': updated_count,
        }

    @staticmethod
    def get_unread_message_count(conversation_id: str, user_id: str) -> int:
        """Count of unread messages addressed to user_id in a conversation"""
        return Message.objects.in_conversation(conversation_id).unread_for(user_id).count()

    @staticmethod
    def get_relayable_message(conversation_id: str, message_id, sender_id) -> Optional[Message]:
        """
        The stored copy of a message a client asks to relay, or None when it
        does not exist, belongs elsewhere or was sent by someone else.
        """
        return (
            Message.objects
            .select_related('sender')
            .filter(pk=message_id, conversation_id=conversation_id, sender_id=sender_id)
            .first()
        )
