import asyncio
import json
import logging
import time

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.core.cache import cache

from conversations.identity import ConversationKey, InvalidConversationId

from .broadcast import message_payload, user_group_name
from .services import ChatService

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncWebsocketConsumer):
    """
    WebSocket consumer for real-time chat functionality

    Messages are persisted over REST; the socket only relays them. A client
    may sit in several conversation rooms at once and always listens on its
    personal group for pushes about messages sent to it.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = None
        self.personal_group = None
        self.rooms = {}
        self.typing_tasks = {}
        self.heartbeat_task = None

    async def connect(self):
        """Handle WebSocket connection with authentication"""
        self.session = self.scope.get('chat_session')
        if self.session is None:
            await self.close(code=4001)
            return

        await self.accept()

        self.personal_group = user_group_name(self.session.user_id)
        await self.channel_layer.group_add(self.personal_group, self.channel_name)

        self.heartbeat_task = asyncio.create_task(self.heartbeat_loop())

        await self.store_connection()
        logger.info("Websocket connected for %s", self.session)

    async def disconnect(self, code):
        """Handle WebSocket disconnection and cleanup"""
        if self.heartbeat_task:
            self.heartbeat_task.cancel()

        for conversation_id in list(self.rooms):
            await self.leave_room(conversation_id)

        if self.personal_group:
            await self.channel_layer.group_discard(self.personal_group, self.channel_name)

        if self.session is not None:
            await self.remove_connection()
            logger.info("Websocket disconnected for %s (code %s)", self.session, code)

    async def receive(self, text_data=None, bytes_data=None):
        """Handle incoming WebSocket messages"""
        if text_data is None:
            await self.send_error("Only JSON text frames are supported")
            return

        if len(text_data) > settings.WEBSOCKET_MAX_MESSAGE_SIZE:
            await self.send_error("Message too large")
            return

        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON format")
            return

        if not isinstance(data, dict):
            await self.send_error("Invalid message format")
            return

        message_type = data.get('type')
        try:
            if message_type == 'join_conversation':
                await self.handle_join_conversation(data)
            elif message_type == 'leave_conversation':
                await self.handle_leave_conversation(data)
            elif message_type == 'send_message':
                await self.handle_send_message(data)
            elif message_type == 'typing':
                await self.handle_typing(data)
            elif message_type == 'heartbeat':
                await self.handle_heartbeat()
            else:
                await self.send_error("Unknown message type")
        except Exception:
            logger.exception("Failed to handle %r frame from %s", message_type, self.session)
            await self.send_error("Internal server error")

    async def handle_join_conversation(self, data):
        """Handle joining a conversation room"""
        key = await self.conversation_key(data)
        if key is None:
            return

        if not self.session.is_admin and not key.includes(self.session.user_id):
            await self.send_error("Access denied to conversation")
            return

        conversation_id = key.serialize()
        if conversation_id not in self.rooms:
            await self.channel_layer.group_add(key.room_name, self.channel_name)
            self.rooms[conversation_id] = key

        await self.send_json_frame({
            'type': 'conversation_joined',
            'conversation_id': conversation_id,
        })

    async def handle_leave_conversation(self, data):
        """Handle leaving a conversation room"""
        key = await self.joined_conversation_key(data)
        if key is None:
            return

        conversation_id = key.serialize()
        await self.leave_room(conversation_id)

        await self.send_json_frame({
            'type': 'conversation_left',
            'conversation_id': conversation_id,
        })

    async def handle_send_message(self, data):
        """
        Relay a message that was already stored over REST. The stored record
        is what goes out, never the client's copy.
        """
        key = await self.joined_conversation_key(data)
        if key is None:
            return

        message = data.get('message')
        message_id = message.get('id') if isinstance(message, dict) else data.get('message_id')
        try:
            message_id = int(message_id)
        except (TypeError, ValueError):
            await self.send_error("Message ID required")
            return

        conversation_id = key.serialize()
        payload = await self.get_relayable_payload(conversation_id, message_id)
        if payload is None:
            await self.send_error("Message not found")
            return

        await self.channel_layer.group_send(
            key.room_name,
            {
                'type': 'conversation.message',
                'conversation_id': conversation_id,
                'message': payload,
                'sender_channel': self.channel_name,
            }
        )

    async def handle_typing(self, data):
        """Handle typing indicator; a true signal clears itself after a timeout"""
        key = await self.joined_conversation_key(data)
        if key is None:
            return

        conversation_id = key.serialize()
        is_typing = data.get('is_typing') is True

        self.cancel_typing_task(conversation_id)
        await self.broadcast_typing(conversation_id, is_typing)

        if is_typing:
            self.typing_tasks[conversation_id] = asyncio.create_task(
                self.clear_typing_later(conversation_id)
            )

    async def handle_heartbeat(self):
        """Handle heartbeat messages"""
        await self.send_json_frame({
            'type': 'heartbeat_response',
            'timestamp': time.time(),
        })

    async def conversation_message(self, event):
        """Relay a stored message to everyone in the room except its sender"""
        if event.get('sender_channel') == self.channel_name:
            return

        await self.send_json_frame({
            'type': 'conversation_message',
            'conversation_id': event['conversation_id'],
            'message': event['message'],
        })

    async def new_message(self, event):
        """Push for a message addressed to this user"""
        await self.send_json_frame({
            'type': 'new_message',
            'conversation_id': event['conversation_id'],
            'message': event['message'],
        })

    async def user_typing(self, event):
        if event.get('sender_channel') == self.channel_name:
            return

        await self.send_json_frame({
            'type': 'user_typing',
            'conversation_id': event['conversation_id'],
            'user_id': event['user_id'],
            'is_typing': event['is_typing'],
        })

    async def conversation_key(self, data):
        """Parse the frame's conversation id, replying with an error when it is unusable"""
        conversation_id = data.get('conversation_id')
        if not conversation_id:
            await self.send_error("Conversation ID required")
            return None

        try:
            return ConversationKey.parse(conversation_id)
        except InvalidConversationId:
            await self.send_error("Invalid conversation ID")
            return None

    async def joined_conversation_key(self, data):
        key = await self.conversation_key(data)
        if key is None:
            return None

        if key.serialize() not in self.rooms:
            await self.send_error("Not in a conversation")
            return None
        return key

    async def leave_room(self, conversation_id):
        """Leave a conversation room, clearing this user's typing indicator first"""
        key = self.rooms.pop(conversation_id, None)
        if key is None:
            return

        if self.cancel_typing_task(conversation_id):
            await self.broadcast_typing(conversation_id, False, room_name=key.room_name)

        await self.channel_layer.group_discard(key.room_name, self.channel_name)

    async def broadcast_typing(self, conversation_id, is_typing, room_name=None):
        if room_name is None:
            room_name = self.rooms[conversation_id].room_name

        await self.channel_layer.group_send(
            room_name,
            {
                'type': 'user.typing',
                'conversation_id': conversation_id,
                'user_id': self.session.user_id,
                'is_typing': is_typing,
                'sender_channel': self.channel_name,
            }
        )

    def cancel_typing_task(self, conversation_id):
        """Returns True when a typing indicator was still pending"""
        task = self.typing_tasks.pop(conversation_id, None)
        if task is None:
            return False
        task.cancel()
        return True

    async def clear_typing_later(self, conversation_id):
        await asyncio.sleep(settings.CHAT_TYPING_TIMEOUT)
        self.typing_tasks.pop(conversation_id, None)
        if conversation_id in self.rooms:
            await self.broadcast_typing(conversation_id, False)

    async def heartbeat_loop(self):
        """Send periodic heartbeat to keep connection alive"""
        while True:
            try:
                await asyncio.sleep(settings.WEBSOCKET_HEARTBEAT_INTERVAL)
                await self.send_json_frame({
                    'type': 'heartbeat',
                    'timestamp': time.time(),
                })
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.warning("Heartbeat stopped for %s: %s", self.session, e)
                break

    async def send_json_frame(self, payload):
        await self.send(text_data=json.dumps(payload))

    async def send_error(self, message):
        """Send error message to client"""
        await self.send_json_frame({
            'type': 'error',
            'message': message,
        })

    @database_sync_to_async
    def get_relayable_payload(self, conversation_id, message_id):
        message = ChatService.get_relayable_message(conversation_id, message_id, self.session.user_id)
        if message is None:
            return None
        return message_payload(message)

    def connection_cache_key(self):
        return f"websocket_connection:{self.session.user_id}:{self.channel_name}"

    async def store_connection(self):
        """Store connection information in the cache"""
        cache.set(self.connection_cache_key(), {
            'user_id': self.session.user_id,
            'channel_name': self.channel_name,
            'connected_at': time.time(),
        }, settings.WEBSOCKET_CONNECTION_TIMEOUT)

    async def remove_connection(self):
        cache.delete(self.connection_cache_key())
