from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from conversations.identity import ConversationKey
from dmessages.models import Message
from servon.testing import MarketplaceFixturesMixin, auth_headers


class ConversationListViewTest(MarketplaceFixturesMixin, APITestCase):
    def setUp(self):
        self.create_marketplace()
        self.url = reverse('conversations:conversation-list')
        self.quotation_key = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk)
        self.ad_key = ConversationKey.for_ad_request('cust1', 'vend1', self.ad_request.pk)

    def test_lists_quotation_and_store_only_conversations(self):
        """Test the list has the quotation chat and the ad chat found in the message store."""
        Message.create_for_key(self.ad_key, 'cust1', 'vend1', 'Is Saturday ok?')

        response = self.client.get(self.url, **auth_headers(self.customer))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [c['conversation_id'] for c in response.data['results']]
        self.assertEqual(ids, [self.ad_key.serialize(), self.quotation_key.serialize()])

    def test_entry_carries_last_message_and_unread_count(self):
        Message.create_for_key(self.quotation_key, 'cust1', 'vend1', 'Hello')
        Message.create_for_key(self.quotation_key, 'vend1', 'cust1', 'Hi, tomorrow works')

        response = self.client.get(self.url, **auth_headers(self.customer))

        entry = response.data['results'][0]
        self.assertEqual(entry['type'], 'quotation')
        self.assertEqual(entry['title'], 'Fix kitchen sink')
        self.assertEqual(entry['other_user']['id'], 'vend1')
        self.assertEqual(entry['last_message']['content'], 'Hi, tomorrow works')
        self.assertFalse(entry['last_message']['is_from_me'])
        self.assertEqual(entry['unread_count'], 1)
        self.assertEqual(entry['quotation_status'], 'sent')

    def test_rejected_quotation_is_not_listed(self):
        self.quotation.status = 'rejected'
        self.quotation.save()

        response = self.client.get(self.url, **auth_headers(self.customer))

        self.assertEqual(response.data['results'], [])

    def test_vendor_sees_connection_conversation(self):
        response = self.client.get(self.url, **auth_headers(self.other_vendor))

        results = response.data['results']
        self.assertEqual(len(results), 1)
        self.assertEqual(results[0]['type'], 'connection')
        self.assertEqual(results[0]['context_id'], self.connection.pk)
        self.assertIsNone(results[0]['last_message'])

    def test_stranger_has_no_conversations(self):
        response = self.client.get(self.url, **auth_headers(self.stranger))

        self.assertEqual(response.data['total_count'], 0)


class ConversationInfoViewTest(MarketplaceFixturesMixin, APITestCase):
    def setUp(self):
        self.create_marketplace()
        self.key = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk)

    def url(self, conversation_id):
        return reverse('conversations:conversation-info', args=[conversation_id])

    def test_info_for_participant(self):
        Message.create_for_key(self.key, 'vend1', 'cust1', 'Quote attached')

        response = self.client.get(self.url(self.key.serialize()), **auth_headers(self.customer))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['type'], 'quotation')
        self.assertEqual(response.data['my_role'], 'customer')
        self.assertEqual(response.data['unread_count'], 1)

    def test_info_for_non_participant_is_403(self):
        response = self.client.get(self.url(self.key.serialize()), **auth_headers(self.stranger))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()['error'], 'Not authorized to view this conversation')

    def test_info_for_admin(self):
        response = self.client.get(self.url(self.key.serialize()), **auth_headers(self.admin))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['my_role'], 'admin')

    def test_unknown_conversation_is_404(self):
        response = self.client.get(self.url('garbage'), **auth_headers(self.customer))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['error'], 'Conversation not found')
