from django.test import TestCase

from conversations.exceptions import ConversationAccessDenied, ConversationLookupError
from conversations.identity import ConversationKey
from conversations.resolver import resolve_conversation
from marketplace.models import VendorConnection
from servon.session import ChatSession
from servon.testing import MarketplaceFixturesMixin


class ResolveConversationTest(MarketplaceFixturesMixin, TestCase):
    def setUp(self):
        self.create_marketplace()
        self.customer_session = ChatSession('cust1', 'customer')
        self.vendor_session = ChatSession('vend1', 'vendor')
        self.admin_session = ChatSession('admin1', 'admin')

    def test_quotation_from_customer_side(self):
        conversation_id = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk).serialize()

        resolved = resolve_conversation(conversation_id, self.customer_session)

        self.assertEqual(resolved.type, 'quotation')
        self.assertEqual(resolved.context_id, self.quotation.pk)
        self.assertEqual(resolved.other_user['id'], 'vend1')
        self.assertEqual(resolved.other_user['name'], 'Victor Plumbing')
        self.assertEqual(resolved.my_role, 'customer')
        self.assertEqual(resolved.title, 'Fix kitchen sink')
        self.assertEqual(resolved.context['quotation']['price'], '2500.00')

    def test_quotation_from_vendor_side(self):
        conversation_id = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk).serialize()

        resolved = resolve_conversation(conversation_id, self.vendor_session)

        self.assertEqual(resolved.other_user['id'], 'cust1')
        self.assertEqual(resolved.other_user['phone'], '0700000001')
        self.assertEqual(resolved.my_role, 'vendor')

    def test_admin_sees_vendor_as_other_user(self):
        conversation_id = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk).serialize()

        resolved = resolve_conversation(conversation_id, self.admin_session)

        self.assertEqual(resolved.other_user['id'], 'vend1')
        self.assertEqual(resolved.my_role, 'admin')

    def test_ad_request(self):
        conversation_id = ConversationKey.for_ad_request('cust1', 'vend1', self.ad_request.pk).serialize()

        resolved = resolve_conversation(conversation_id, self.customer_session)

        self.assertEqual(resolved.type, 'ad_request')
        self.assertEqual(resolved.title, 'Emergency plumbing')
        self.assertEqual(resolved.context['advertisement']['id'], self.advertisement.pk)

    def test_connection_with_and_without_context_id(self):
        with_id = ConversationKey.for_connection('vend1', 'vend2', self.connection.pk).serialize()
        bare = ConversationKey.for_connection('vend1', 'vend2').serialize()

        for conversation_id in (with_id, bare):
            with self.subTest(conversation_id=conversation_id):
                resolved = resolve_conversation(conversation_id, self.vendor_session)
                self.assertEqual(resolved.type, 'connection')
                self.assertEqual(resolved.context_id, self.connection.pk)
                self.assertEqual(resolved.other_user['id'], 'vend2')
                self.assertEqual(resolved.title, 'Network chat with Wanda Wiring')

    def test_bare_connection_id_prefers_the_connected_row(self):
        VendorConnection.objects.create(requester=self.other_vendor, receiver=self.vendor, status='pending')
        bare = ConversationKey.for_connection('vend1', 'vend2').serialize()

        resolved = resolve_conversation(bare, self.vendor_session)

        self.assertEqual(resolved.context_id, self.connection.pk)
        self.assertEqual(resolved.context['status'], 'connected')

    def test_direct(self):
        resolved = resolve_conversation('cust1_vend1_direct', self.customer_session)

        self.assertEqual(resolved.type, 'direct')
        self.assertIsNone(resolved.context_id)
        self.assertEqual(resolved.title, 'Victor Plumbing')

    def test_to_dict(self):
        data = resolve_conversation('cust1_vend1_direct', self.customer_session).to_dict()

        self.assertEqual(data['participants'], ['cust1', 'vend1'])
        self.assertEqual(data['conversation_id'], 'cust1_vend1_direct')

    def test_unparseable_id_is_not_found(self):
        with self.assertRaises(ConversationLookupError):
            resolve_conversation('not-a-conversation', self.customer_session)

    def test_unknown_quotation_is_not_found(self):
        with self.assertRaises(ConversationLookupError):
            resolve_conversation('cust1_vend1_missing', self.customer_session)

    def test_quotation_of_other_parties_is_not_found(self):
        conversation_id = ConversationKey.for_quotation('cust9', 'vend1', self.quotation.pk).serialize()

        with self.assertRaises(ConversationLookupError):
            resolve_conversation(conversation_id, self.vendor_session)

    def test_non_participant_is_denied(self):
        conversation_id = ConversationKey.for_quotation('vend1', 'cust1', self.quotation.pk).serialize()

        with self.assertRaises(ConversationAccessDenied):
            resolve_conversation(conversation_id, ChatSession('cust9', 'customer'))
