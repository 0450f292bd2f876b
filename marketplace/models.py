"""
Records owned by the service-request, advertisement and vendor-network
subsystems. Chat only reads them: each one supplies the context that
authorizes and scopes a conversation.
"""
from django.db import models
from django.db.models import Q

from users.models import generate_object_id


class ServiceRequest(models.Model):
    STATUS_CHOICES = [
        ("open", "Open"),
        ("in_progress", "In progress"),
        ("closed", "Closed"),
    ]

    id = models.CharField(max_length=64, primary_key=True, default=generate_object_id, editable=False)
    customer = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='service_requests')
    title = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=50, blank=True)
    location = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="open")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title


class Quotation(models.Model):
    STATUS_CHOICES = [
        ("sent", "Sent"),
        ("accepted", "Accepted"),
        ("rejected", "Rejected"),
    ]
    # Quotations in these states keep their chat open
    CHAT_STATUSES = ("sent", "accepted")

    id = models.CharField(max_length=64, primary_key=True, default=generate_object_id, editable=False)
    service_request = models.ForeignKey(ServiceRequest, on_delete=models.CASCADE, related_name='quotations')
    vendor = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='quotations_sent')
    customer = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='quotations_received')
    price = models.DecimalField(max_digits=10, decimal_places=2)
    message = models.CharField(max_length=1000)
    estimated_duration = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="sent")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['service_request', 'vendor'], name='unique_quotation_per_vendor'),
        ]
        indexes = [
            models.Index(fields=['status'], name='quotation_status_idx'),
        ]

    @property
    def party_ids(self):
        return {self.vendor_id, self.customer_id}

    def can_chat(self, user_a, user_b):
        """Both users must be the vendor and customer of this quotation"""
        return user_a != user_b and {str(user_a), str(user_b)} == self.party_ids

    def __str__(self):
        return f"Quotation {self.id} ({self.status})"


class Advertisement(models.Model):
    STATUS_CHOICES = [
        ("active", "Active"),
        ("paused", "Paused"),
        ("completed", "Completed"),
        ("expired", "Expired"),
    ]

    id = models.CharField(max_length=64, primary_key=True, default=generate_object_id, editable=False)
    vendor = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='advertisements')
    title = models.CharField(max_length=100)
    category = models.CharField(max_length=50, blank=True)
    service_area = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="active")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title


class AdRequest(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("accepted", "Accepted"),
        ("declined", "Declined"),
    ]

    id = models.CharField(max_length=64, primary_key=True, default=generate_object_id, editable=False)
    customer = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='ad_requests_sent')
    vendor = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='ad_requests_received')
    advertisement = models.ForeignKey(Advertisement, on_delete=models.CASCADE, related_name='requests')
    message = models.CharField(max_length=1000)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="pending")
    responded_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['customer', 'advertisement'], name='unique_ad_request_per_customer'),
        ]

    @property
    def party_ids(self):
        return {self.vendor_id, self.customer_id}

    def __str__(self):
        return f"Ad request {self.id} ({self.status})"


class VendorConnectionQuerySet(models.QuerySet):
    def between(self, user_a, user_b):
        return self.filter(
            Q(requester_id=user_a, receiver_id=user_b) | Q(requester_id=user_b, receiver_id=user_a)
        )

    def connected(self):
        return self.filter(status="connected")

    def involving(self, user_id):
        return self.filter(Q(requester_id=user_id) | Q(receiver_id=user_id))


class VendorConnection(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("connected", "Connected"),
        ("rejected", "Rejected"),
    ]

    id = models.CharField(max_length=64, primary_key=True, default=generate_object_id, editable=False)
    requester = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='connections_requested')
    receiver = models.ForeignKey('users.User', on_delete=models.CASCADE, related_name='connections_received')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="pending")
    message = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = VendorConnectionQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['requester', 'receiver'], name='unique_vendor_connection'),
        ]

    @property
    def party_ids(self):
        return {self.requester_id, self.receiver_id}

    @property
    def is_connected(self):
        return self.status == "connected"

    def other_party(self, user_id):
        return self.receiver_id if self.requester_id == str(user_id) else self.requester_id

    @classmethod
    def are_connected(cls, user_a, user_b):
        return cls.objects.between(user_a, user_b).connected().exists()

    def __str__(self):
        return f"{self.requester_id} -> {self.receiver_id} ({self.status})"
