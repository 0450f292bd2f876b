from django.test import TestCase

from .models import User, generate_object_id


class UserModelTestCase(TestCase):
    def test_generated_ids_are_separator_free(self):
        """Generated ids can be used as conversation id components"""
        user = User.objects.create(name="Jane")

        self.assertEqual(len(user.user_id), 24)
        self.assertNotIn('_', user.user_id)
        self.assertNotEqual(generate_object_id(), generate_object_id())

    def test_display_name_prefers_business_name(self):
        vendor = User(user_id='v1', name='Victor', role='vendor', business_name='Victor Plumbing')
        customer = User(user_id='c1', name='Carla', role='customer')

        self.assertEqual(vendor.display_name, 'Victor Plumbing')
        self.assertEqual(customer.display_name, 'Carla')

    def test_as_participant(self):
        user = User(user_id='c1', name='Carla', role='customer', phone='0700', email='carla@example.com')

        self.assertEqual(user.as_participant(), {
            'id': 'c1',
            'name': 'Carla',
            'role': 'customer',
            'phone': '0700',
            'email': 'carla@example.com',
        })
