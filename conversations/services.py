import logging
from datetime import datetime
from typing import Dict, List

from django.db.models import Q

from dmessages.models import Message
from marketplace.models import AdRequest, Quotation, VendorConnection
from users.models import User
from websocket_chat.services import ChatService

from .identity import ConversationKey, ConversationKind, InvalidConversationId
from .resolver import resolve_conversation

logger = logging.getLogger(__name__)


def last_message_summary(conversation_id, user_id):
    message = Message.objects.in_conversation(conversation_id).order_by('-created_at', '-id').first()
    if message is None:
        return None
    return {
        'content': message.preview(),
        'created_at': message.created_at,
        'is_from_me': message.sender_id == user_id,
    }


def _entry(key: ConversationKey, user_id, other_user: User, title, **extra) -> Dict:
    conversation_id = key.serialize()
    entry = {
        'conversation_id': conversation_id,
        'type': key.kind.value,
        'context_id': key.context_id,
        'title': title,
        'other_user': other_user.as_participant(),
        'last_message': last_message_summary(conversation_id, user_id),
        'unread_count': ChatService.get_unread_message_count(conversation_id, user_id),
    }
    entry.update(extra)
    return entry


def _sort_key(entry):
    last = entry['last_message']
    if last is None:
        return (False, datetime.min)
    return (True, last['created_at'])


class ConversationService:

    @staticmethod
    def list_conversations(session) -> List[Dict]:
        """
        Every conversation the caller takes part in: chats opened by an
        active quotation or an accepted vendor connection, plus ad-inquiry and
        direct chats that exist only in the message store. Newest activity
        first; conversations without messages go last.
        """
        user_id = session.user_id
        conversations = []
        seen = set()

        quotations = (
            Quotation.objects
            .filter(Q(vendor_id=user_id) | Q(customer_id=user_id), status__in=Quotation.CHAT_STATUSES)
            .select_related('vendor', 'customer', 'service_request')
            .order_by('-updated_at')
        )
        for quotation in quotations:
            key = ConversationKey.for_quotation(quotation.vendor_id, quotation.customer_id, quotation.pk)
            other = quotation.customer if quotation.vendor_id == user_id else quotation.vendor
            conversations.append(_entry(
                key, user_id, other, quotation.service_request.title,
                quotation_status=quotation.status,
            ))
            seen.add(key.serialize())

        connections = (
            VendorConnection.objects
            .involving(user_id)
            .connected()
            .select_related('requester', 'receiver')
        )
        for connection in connections:
            key = ConversationKey.for_connection(connection.requester_id, connection.receiver_id, connection.pk)
            other = connection.receiver if connection.requester_id == user_id else connection.requester
            conversations.append(_entry(key, user_id, other, f"Network chat with {other.display_name}"))
            seen.add(key.serialize())

        stored_ids = set(
            Message.objects
            .involving(user_id)
            .filter(kind__in=[ConversationKind.AD_REQUEST, ConversationKind.DIRECT])
            .order_by()
            .values_list('conversation_id', flat=True)
            .distinct()
        )
        for conversation_id in sorted(stored_ids - seen):
            entry = ConversationService._stored_conversation(conversation_id, user_id)
            if entry is not None:
                conversations.append(entry)

        conversations.sort(key=_sort_key, reverse=True)
        return conversations

    @staticmethod
    def _stored_conversation(conversation_id, user_id):
        try:
            key = ConversationKey.parse(conversation_id)
        except InvalidConversationId:
            logger.warning("Skipping malformed stored conversation id %r", conversation_id)
            return None

        other = User.objects.filter(pk=key.other_participant(user_id)).first()
        if other is None:
            return None

        if key.kind == ConversationKind.AD_REQUEST:
            ad_request = AdRequest.objects.select_related('advertisement').filter(pk=key.context_id).first()
            title = ad_request.advertisement.title if ad_request else 'Advertisement'
            return _entry(key, user_id, other, title)
        return _entry(key, user_id, other, other.display_name)

    @staticmethod
    def get_conversation_info(conversation_id, session) -> Dict:
        """Resolved conversation plus the caller's unread count"""
        resolved = resolve_conversation(conversation_id, session)
        info = resolved.to_dict()
        info['unread_count'] = ChatService.get_unread_message_count(resolved.conversation_id, session.user_id)
        return info
