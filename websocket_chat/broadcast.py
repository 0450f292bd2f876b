"""
Server-side pushes onto the channel layer.

Delivery is fire-and-forget: a client that is not connected when the event is
sent never receives it and has to re-fetch history over REST.
"""
import hashlib
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from dmessages.serializers import MessageSerializer

logger = logging.getLogger(__name__)


def user_group_name(user_id):
    """Personal group every connected socket of a user joins"""
    digest = hashlib.sha1(str(user_id).encode('utf-8')).hexdigest()
    return f"user.{digest}"


def message_payload(message):
    data = dict(MessageSerializer(message).data)
    if data.get('sender') is not None:
        data['sender'] = dict(data['sender'])
    return data


def notify_new_message(message):
    """
    Push a stored message to the receiver's personal group.

    Returns False when the event could not be handed to the channel layer.
    The failure is logged and otherwise ignored.
    """
    try:
        channel_layer = get_channel_layer()
        if channel_layer is None:
            return False
        async_to_sync(channel_layer.group_send)(
            user_group_name(message.receiver_id),
            {
                'type': 'new.message',
                'conversation_id': message.conversation_id,
                'message': message_payload(message),
            }
        )
    except Exception as e:
        logger.warning("Realtime push for message %s failed: %s", message.pk, e)
        return False
    return True
