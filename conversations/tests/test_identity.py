from django.test import SimpleTestCase

from conversations.identity import (
    ConversationKey,
    ConversationKind,
    InvalidConversationId,
    derive_conversation_id,
    parse_conversation_id,
)


class DeriveConversationIdTest(SimpleTestCase):
    def test_participant_order_does_not_matter(self):
        self.assertEqual(
            derive_conversation_id('u2', 'u1', 'q123'),
            derive_conversation_id('u1', 'u2', 'q123'),
        )
        self.assertEqual(derive_conversation_id('u2', 'u1', 'q123'), 'u1_u2_q123')

    def test_each_kind_has_its_own_shape(self):
        self.assertEqual(ConversationKey.for_quotation('b', 'a', 'q1').serialize(), 'a_b_q1')
        self.assertEqual(ConversationKey.for_ad_request('b', 'a', 'r1').serialize(), 'a_b_ad_r1')
        self.assertEqual(ConversationKey.for_connection('b', 'a', 'c1').serialize(), 'a_b_conn_c1')
        self.assertEqual(ConversationKey.for_connection('b', 'a').serialize(), 'a_b')
        self.assertEqual(ConversationKey.for_direct('b', 'a').serialize(), 'a_b_direct')

    def test_same_participant_twice_is_rejected(self):
        with self.assertRaises(InvalidConversationId):
            derive_conversation_id('u1', 'u1', 'q1')

    def test_components_cannot_contain_separator(self):
        with self.assertRaises(InvalidConversationId):
            derive_conversation_id('u_1', 'u2', 'q1')
        with self.assertRaises(InvalidConversationId):
            derive_conversation_id('u1', 'u2', 'q_1')

    def test_markers_cannot_be_quotation_ids(self):
        for marker in ('ad', 'conn', 'direct'):
            with self.assertRaises(InvalidConversationId):
                ConversationKey.for_quotation('u1', 'u2', marker)

    def test_quotation_needs_a_context_id(self):
        with self.assertRaises(InvalidConversationId):
            derive_conversation_id('u1', 'u2')

    def test_direct_has_no_context_id(self):
        with self.assertRaises(InvalidConversationId):
            ConversationKey(ConversationKind.DIRECT, 'u1', 'u2', 'x')

    def test_unknown_kind(self):
        with self.assertRaises(InvalidConversationId):
            ConversationKey('group', 'u1', 'u2', 'x')

    def test_room_name_fits_channel_layer_limits(self):
        key = ConversationKey.for_ad_request('a' * 24, 'b' * 24, 'c' * 24)

        self.assertTrue(key.room_name.startswith('conversation.'))
        self.assertLess(len(key.room_name), 100)
        self.assertEqual(key.room_name, ConversationKey.for_ad_request('b' * 24, 'a' * 24, 'c' * 24).room_name)


class ParseConversationIdTest(SimpleTestCase):
    def test_quotation(self):
        key = parse_conversation_id('u1_u2_q123')

        self.assertEqual(key.kind, ConversationKind.QUOTATION)
        self.assertEqual(key.participants, ('u1', 'u2'))
        self.assertEqual(key.context_id, 'q123')

    def test_ad_request(self):
        key = parse_conversation_id('u1_u2_ad_a55')

        self.assertEqual(key.kind, ConversationKind.AD_REQUEST)
        self.assertEqual(key.context_id, 'a55')

    def test_connection_with_and_without_context(self):
        with_context = parse_conversation_id('u1_u2_conn_c9')
        bare = parse_conversation_id('u1_u2')

        self.assertEqual(with_context.kind, ConversationKind.CONNECTION)
        self.assertEqual(with_context.context_id, 'c9')
        self.assertEqual(bare.kind, ConversationKind.CONNECTION)
        self.assertIsNone(bare.context_id)

    def test_direct(self):
        key = parse_conversation_id('u1_u2_direct')

        self.assertEqual(key.kind, ConversationKind.DIRECT)
        self.assertIsNone(key.context_id)

    def test_parse_canonicalizes_participant_order(self):
        self.assertEqual(parse_conversation_id('u2_u1_q123').serialize(), 'u1_u2_q123')

    def test_serialize_then_parse_returns_same_key(self):
        key = ConversationKey.for_ad_request('vend1', 'cust1', 'r77')

        self.assertEqual(ConversationKey.parse(key.serialize()), key)

    def test_invalid_ids(self):
        for bad in ('', 'u1', 'u1__q1', 'u1_u2_ad', 'u1_u2_conn', 'u1_u2_x_y', 'u1_u2_ad_a_b', 'u1_u1_q1', None, 42):
            with self.subTest(conversation_id=bad):
                with self.assertRaises(InvalidConversationId):
                    parse_conversation_id(bad)


class ConversationKeyParticipantsTest(SimpleTestCase):
    def setUp(self):
        self.key = ConversationKey.for_direct('u2', 'u1')

    def test_includes(self):
        self.assertTrue(self.key.includes('u1'))
        self.assertFalse(self.key.includes('u3'))

    def test_other_participant(self):
        self.assertEqual(self.key.other_participant('u1'), 'u2')
        self.assertEqual(self.key.other_participant('u2'), 'u1')

        with self.assertRaises(ValueError):
            self.key.other_participant('u3')
