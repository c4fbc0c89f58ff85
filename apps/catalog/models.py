from django.db import models
from core.constants import PRICING_TYPE_CHOICES
from apps.users.models import Housekeeper


class Service(models.Model):
    housekeeper = models.ForeignKey(Housekeeper, on_delete=models.CASCADE, related_name='services')
    name = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    tags = models.JSONField(default=list, blank=True)
    description = models.TextField()
    service_location = models.CharField(max_length=200)
    available_days = models.JSONField(default=dict)
    start_time = models.TimeField()
    end_time = models.TimeField()
    estimated_completion_time = models.CharField(max_length=100, blank=True, default='')
    pricing_type = models.CharField(max_length=20, choices=PRICING_TYPE_CHOICES, default='fixed')
    price = models.DecimalField(max_digits=12, decimal_places=2)
    contact_number = models.CharField(max_length=20)
    is_available = models.BooleanField(default=True)
    image = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.name} by {self.housekeeper.user.username}"

    def is_owned_by(self, user):
        return self.housekeeper.user_id == user.pk
