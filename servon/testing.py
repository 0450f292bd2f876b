"""
Helpers shared by the test suites: bearer headers for a user and a small
marketplace with one of each chat context.
"""
from decimal import Decimal

from marketplace.models import AdRequest, Advertisement, Quotation, ServiceRequest, VendorConnection
from users.models import User

from .jwt_utils import generate_token


def auth_headers(user, role=None):
    token = generate_token(user.user_id, role or user.role)
    return {'HTTP_AUTHORIZATION': f'Bearer {token}'}


class MarketplaceFixturesMixin:
    """
    Creates a customer, two connected vendors, an unrelated customer and an
    admin, plus a quotation, an ad request and a vendor connection between
    them.
    """

    def create_marketplace(self):
        self.customer = User.objects.create(user_id='cust1', name='Carla Customer', role='customer', phone='0700000001')
        self.vendor = User.objects.create(
            user_id='vend1', name='Victor', role='vendor', business_name='Victor Plumbing', email='victor@example.com'
        )
        self.other_vendor = User.objects.create(
            user_id='vend2', name='Wanda', role='vendor', business_name='Wanda Wiring'
        )
        self.stranger = User.objects.create(user_id='cust9', name='Sam Stranger', role='customer')
        self.admin = User.objects.create(user_id='admin1', name='Ada Admin', role='admin')

        self.service_request = ServiceRequest.objects.create(
            customer=self.customer, title='Fix kitchen sink', category='plumbing', location='Nairobi'
        )
        self.quotation = Quotation.objects.create(
            service_request=self.service_request,
            vendor=self.vendor,
            customer=self.customer,
            price=Decimal('2500.00'),
            message='Can come tomorrow',
            status='sent',
        )
        self.advertisement = Advertisement.objects.create(
            vendor=self.vendor, title='Emergency plumbing', category='plumbing', service_area='Nairobi'
        )
        self.ad_request = AdRequest.objects.create(
            customer=self.customer, vendor=self.vendor, advertisement=self.advertisement, message='Are you free?'
        )
        self.connection = VendorConnection.objects.create(
            requester=self.vendor, receiver=self.other_vendor, status='connected'
        )
