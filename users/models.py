import uuid

from django.db import models


def generate_object_id():
    """24 hex characters, the shape of the identifiers clients already use."""
    return uuid.uuid4().hex[:24]


class User(models.Model):
    ROLE_CHOICES = [
        ("customer", "Customer"),
        ("vendor", "Vendor"),
        ("admin", "Admin"),
    ]

    user_id = models.CharField(max_length=64, primary_key=True, default=generate_object_id, editable=False)
    name = models.CharField(max_length=50)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default="customer")
    phone = models.CharField(max_length=15, blank=True)
    location = models.CharField(max_length=100, blank=True)
    business_name = models.CharField(max_length=100, blank=True)
    business_category = models.CharField(max_length=50, blank=True)
    is_verified = models.BooleanField(default=False)
    is_banned = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['role'], name='users_role_idx'),
        ]

    @property
    def display_name(self):
        """Vendors are shown by business name when they have one"""
        return self.business_name or self.name

    def as_participant(self):
        return {
            'id': self.user_id,
            'name': self.display_name,
            'role': self.role,
            'phone': self.phone,
            'email': self.email,
        }

    def __str__(self):
        return f"{self.display_name} ({self.user_id})"
