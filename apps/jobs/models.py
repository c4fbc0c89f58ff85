from django.db import models
from django.conf import settings
from django.db.models import Q
from core.constants import (
    JOB_STATUS_CHOICES, JOB_STATUS_ACTIVE, JOB_STATUS_HIRED,
    JOB_APPLICATION_STATUS_CHOICES, APPLICATION_STATUS_PENDING,
    APPLICATION_STATUS_ACCEPTED, APPLICATION_STATUS_REJECTED,
    SCHEDULE_TYPE_CHOICES, FREQUENCY_CHOICES, BUDGET_TYPE_CHOICES, RATE_CHOICES,
)
from apps.users.models import Housekeeper


class JobPost(models.Model):
    homeowner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='job_posts')
    title = models.CharField(max_length=200)
    description = models.TextField()
    location = models.CharField(max_length=200)
    skills = models.JSONField(default=list, blank=True)

    schedule_type = models.CharField(max_length=20, choices=SCHEDULE_TYPE_CHOICES)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    schedule_time = models.CharField(max_length=50, blank=True, default='')
    days = models.JSONField(default=list, blank=True)
    frequency = models.CharField(max_length=20, choices=FREQUENCY_CHOICES, blank=True, default='')

    budget_type = models.CharField(max_length=20, choices=BUDGET_TYPE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    min_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    rate = models.CharField(max_length=20, choices=RATE_CHOICES, default='hourly')

    status = models.CharField(max_length=20, choices=JOB_STATUS_CHOICES, default=JOB_STATUS_ACTIVE)
    hired_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.title} - {self.homeowner.username}"

    def is_owned_by(self, user):
        return self.homeowner_id == user.pk

    @property
    def active_applications(self):
        return self.applications.exclude(status=APPLICATION_STATUS_REJECTED)

    @property
    def hired_application(self):
        """The accepted application, exposed only while the post is hired."""
        if self.status != JOB_STATUS_HIRED:
            return None
        return self.applications.filter(status=APPLICATION_STATUS_ACCEPTED).select_related('housekeeper__user').first()


class JobApplication(models.Model):
    job = models.ForeignKey(JobPost, on_delete=models.CASCADE, related_name='applications')
    housekeeper = models.ForeignKey(Housekeeper, on_delete=models.CASCADE, related_name='applications')
    cover_message = models.TextField()
    proposed_rate = models.DecimalField(max_digits=12, decimal_places=2)
    experience_summary = models.TextField(blank=True, default='')
    availability = models.JSONField(default=dict, blank=True)
    start_date = models.DateField()
    status = models.CharField(max_length=20, choices=JOB_APPLICATION_STATUS_CHOICES, default=APPLICATION_STATUS_PENDING)
    applied_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('job', 'housekeeper')
        ordering = ['applied_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['job'],
                condition=Q(status=APPLICATION_STATUS_ACCEPTED),
                name='one_accepted_application_per_job',
            ),
        ]

    def __str__(self):
        return f"{self.housekeeper.user.username} applied to {self.job.title}"
