from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from conversations.identity import ConversationKey
from dmessages.models import Message
from servon.testing import MarketplaceFixturesMixin, auth_headers


class ConversationMessagesHistoryViewTest(MarketplaceFixturesMixin, APITestCase):
    def setUp(self):
        self.create_marketplace()
        self.key = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk)
        self.url = reverse('websocket_chat:conversation_messages_history', args=[self.key.serialize()])

    def create_messages(self, count):
        return [
            Message.create_for_key(self.key, 'cust1', 'vend1', f'Message {i}')
            for i in range(count)
        ]

    def test_pages_count_back_from_newest(self):
        """Test page 1 holds the newest messages, each page ordered oldest first."""
        messages = self.create_messages(5)

        first = self.client.get(self.url, {'limit': 2}, **auth_headers(self.vendor))
        last = self.client.get(self.url, {'limit': 2, 'page': 3}, **auth_headers(self.vendor))

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual([m['id'] for m in first.data['messages']], [messages[3].pk, messages[4].pk])
        self.assertTrue(first.data['has_more'])
        self.assertEqual([m['id'] for m in last.data['messages']], [messages[0].pk])
        self.assertFalse(last.data['has_more'])

    def test_page_past_the_end_is_empty(self):
        self.create_messages(2)

        response = self.client.get(self.url, {'page': 5}, **auth_headers(self.vendor))

        self.assertEqual(response.data['messages'], [])
        self.assertFalse(response.data['has_more'])

    def test_empty_conversation(self):
        response = self.client.get(self.url, **auth_headers(self.customer))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['messages'], [])

    @override_settings(CHAT_HISTORY_PAGE_SIZE=3, CHAT_HISTORY_MAX_PAGE_SIZE=4)
    def test_limit_defaults_and_is_capped(self):
        self.create_messages(6)

        default = self.client.get(self.url, {'limit': 'abc'}, **auth_headers(self.vendor))
        capped = self.client.get(self.url, {'limit': 500}, **auth_headers(self.vendor))

        self.assertEqual(len(default.data['messages']), 3)
        self.assertEqual(capped.data['limit'], 4)
        self.assertEqual(len(capped.data['messages']), 4)

    def test_fetch_does_not_mark_read_by_default(self):
        self.create_messages(2)

        self.client.get(self.url, **auth_headers(self.vendor))

        self.assertEqual(Message.objects.unread_for('vend1').count(), 2)

    def test_fetch_can_mark_read(self):
        self.create_messages(2)

        response = self.client.get(self.url, {'mark_read': 'true'}, **auth_headers(self.vendor))

        self.assertEqual(response.data['messages_marked_read'], 2)
        self.assertEqual(Message.objects.unread_for('vend1').count(), 0)

    def test_non_participant_is_403(self):
        response = self.client.get(self.url, **auth_headers(self.stranger))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_read_any_conversation(self):
        self.create_messages(1)

        response = self.client.get(self.url, **auth_headers(self.admin))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['messages']), 1)

    def test_unparseable_id_is_404(self):
        url = reverse('websocket_chat:conversation_messages_history', args=['garbage'])

        response = self.client.get(url, **auth_headers(self.customer))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class MarkMessagesAsReadViewTest(MarketplaceFixturesMixin, APITestCase):
    def setUp(self):
        self.create_marketplace()
        self.key = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk)
        self.url = reverse('websocket_chat:mark_messages_read', args=[self.key.serialize()])

    def test_marks_only_messages_addressed_to_caller(self):
        Message.create_for_key(self.key, 'cust1', 'vend1', 'To vendor')
        Message.create_for_key(self.key, 'vend1', 'cust1', 'To customer')

        response = self.client.put(self.url, {}, format='json', **auth_headers(self.vendor))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['messages_marked_read'], 1)
        self.assertEqual(Message.objects.unread_for('cust1').count(), 1)

    def test_message_ids_restrict_the_update(self):
        first = Message.create_for_key(self.key, 'cust1', 'vend1', 'One')
        Message.create_for_key(self.key, 'cust1', 'vend1', 'Two')

        response = self.client.put(self.url, {'message_ids': [first.pk]}, format='json', **auth_headers(self.vendor))

        self.assertEqual(response.data['messages_marked_read'], 1)
        first.refresh_from_db()
        self.assertTrue(first.is_read)

    def test_invalid_message_ids_is_400(self):
        response = self.client.put(self.url, {'message_ids': 'all'}, format='json', **auth_headers(self.vendor))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('message_ids', response.json()['fields'])

    def test_non_participant_is_403(self):
        response = self.client.put(self.url, {}, format='json', **auth_headers(self.stranger))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
