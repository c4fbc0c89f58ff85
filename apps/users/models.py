from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    email = models.EmailField(blank=True, null=True, unique=True)
    phone_number = models.CharField(max_length=15, blank=True, null=True, unique=True)
    # Legacy verification flag kept for older accounts; eligibility ORs it with the document review.
    is_verified = models.BooleanField(default=False)

    @property
    def is_homeowner(self):
        return hasattr(self, 'homeowner')

    @property
    def is_housekeeper(self):
        return hasattr(self, 'housekeeper')

    @property
    def display_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.username


class HomeOwner(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='homeowner')
    address = models.CharField(max_length=255, blank=True, null=True)
    city_municipality = models.CharField(max_length=100, blank=True, null=True)

    def __str__(self):
        return f"HomeOwner: {self.user.username}"


class Housekeeper(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='housekeeper')
    location = models.CharField(max_length=100, blank=True, null=True)
    experience = models.CharField(max_length=100, blank=True, null=True)
    specialties = models.CharField(max_length=255, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    account_active = models.BooleanField(default=True)
    status_notes = models.TextField(blank=True, null=True)
    documents_submitted_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"Housekeeper: {self.user.username}"
