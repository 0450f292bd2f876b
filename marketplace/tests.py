from django.test import TestCase

from servon.testing import MarketplaceFixturesMixin

from .models import VendorConnection


class ChatContextTestCase(MarketplaceFixturesMixin, TestCase):
    def setUp(self):
        self.create_marketplace()

    def test_quotation_can_chat_only_between_its_parties(self):
        self.assertTrue(self.quotation.can_chat(self.vendor.pk, self.customer.pk))
        self.assertTrue(self.quotation.can_chat(self.customer.pk, self.vendor.pk))
        self.assertFalse(self.quotation.can_chat(self.stranger.pk, self.vendor.pk))
        self.assertFalse(self.quotation.can_chat(self.vendor.pk, self.vendor.pk))

    def test_connection_lookup_is_symmetric(self):
        self.assertTrue(VendorConnection.are_connected(self.vendor.pk, self.other_vendor.pk))
        self.assertTrue(VendorConnection.are_connected(self.other_vendor.pk, self.vendor.pk))

    def test_pending_connection_is_not_connected(self):
        self.connection.status = 'pending'
        self.connection.save()

        self.assertFalse(VendorConnection.are_connected(self.vendor.pk, self.other_vendor.pk))
        self.assertFalse(self.connection.is_connected)

    def test_other_party(self):
        self.assertEqual(self.connection.other_party(self.vendor.pk), self.other_vendor.pk)
        self.assertEqual(self.connection.other_party(self.other_vendor.pk), self.vendor.pk)
