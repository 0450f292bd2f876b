import logging

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from conversations.exceptions import ConversationLookupError
from conversations.identity import ConversationKey, ConversationKind, InvalidConversationId
from marketplace.models import AdRequest, Quotation, VendorConnection
from users.models import User
from websocket_chat.broadcast import notify_new_message

from .models import Message

logger = logging.getLogger(__name__)


class MessageService:
    """
    The three ways a message enters the store. Each variant checks the context
    that authorizes the chat, derives the conversation key and persists the
    message; the stored record is what callers get back and relay.
    """

    @staticmethod
    def send_quotation_message(session, quotation_id, receiver_id, content) -> Message:
        """Customer and vendor chatting about a quotation"""
        denied = 'Chat access requires a valid quotation between both parties'
        quotation = Quotation.objects.filter(pk=quotation_id).first()
        if quotation is None or not quotation.can_chat(session.user_id, receiver_id):
            raise PermissionDenied(denied)

        key = MessageService._build_key(ConversationKey.for_quotation, session.user_id, receiver_id, quotation.pk)
        return MessageService._store(key, session.user_id, receiver_id, content)

    @staticmethod
    def send_connection_message(session, connection_id, receiver_id, content) -> Message:
        """Two vendors chatting over an accepted network connection"""
        connection = VendorConnection.objects.filter(pk=connection_id).first()
        if connection is None or not connection.is_connected:
            raise PermissionDenied('You must be connected with this vendor to chat')

        if session.user_id not in connection.party_ids:
            raise PermissionDenied('Not authorized to send messages in this conversation')

        if str(receiver_id) != connection.other_party(session.user_id):
            raise ValidationError({'receiver_id': ['Receiver is not part of this connection.']})

        key = MessageService._build_key(
            ConversationKey.for_connection, connection.requester_id, connection.receiver_id, connection.pk
        )
        return MessageService._store(key, session.user_id, receiver_id, content)

    @staticmethod
    def send_direct_message(session, conversation_id, receiver_id, content) -> Message:
        """
        Ad-inquiry and direct chats, addressed by a conversation id the
        client derived itself. Both participants must exist as users.
        """
        try:
            key = ConversationKey.parse(conversation_id)
        except InvalidConversationId as e:
            raise ConversationLookupError(str(e))

        if key.kind not in (ConversationKind.AD_REQUEST, ConversationKind.DIRECT):
            raise ValidationError({'conversation_id': [f'{key.kind.label} conversations use their own send endpoint.']})

        if not key.includes(session.user_id):
            raise PermissionDenied('Not authorized to send messages in this conversation')

        if str(receiver_id) != key.other_participant(session.user_id):
            raise ValidationError({'receiver_id': ['Receiver is not part of this conversation.']})

        if key.kind == ConversationKind.AD_REQUEST:
            ad_request = AdRequest.objects.filter(pk=key.context_id).first()
            if ad_request is None or ad_request.party_ids != set(key.participants):
                raise ConversationLookupError('Ad request conversation not found')
        elif User.objects.filter(pk__in=key.participants).count() != 2:
            raise NotFound('User not found')

        return MessageService._store(key, session.user_id, receiver_id, content)

    @staticmethod
    def _build_key(factory, user_a, user_b, context_id):
        try:
            return factory(user_a, user_b, context_id)
        except InvalidConversationId as e:
            raise ValidationError({'conversation_id': [str(e)]})

    @staticmethod
    def _store(key, sender_id, receiver_id, content) -> Message:
        message = Message.create_for_key(key, sender_id, receiver_id, content)
        logger.info("Stored message %s in %s conversation %s", message.pk, key.kind, key)

        # Best effort: the receiver also sees it on the next history fetch
        notify_new_message(message)
        return message
