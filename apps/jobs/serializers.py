from decimal import Decimal
from rest_framework import serializers
from core.constants import (
    SCHEDULE_TYPE_CHOICES, SCHEDULE_ONE_TIME, SCHEDULE_RECURRING, FREQUENCY_CHOICES,
    BUDGET_TYPE_CHOICES, BUDGET_FIXED, BUDGET_RANGE, RATE_CHOICES, WEEKDAYS,
    JOB_STATUS_CHOICES, APPLICATION_STATUS_ACCEPTED, APPLICATION_STATUS_REJECTED,
)
from apps.users.serializers import PublicHousekeeperSerializer
from apps.matching.utils import JobFilterEngine, SORT_CHOICES, SORT_NEWEST
from .models import JobPost, JobApplication


class FlexibleDateField(serializers.DateField):
    """Accepts ISO dates as well as looser input such as 'Dec 12, 2025'."""

    def to_internal_value(self, value):
        try:
            return super().to_internal_value(value)
        except serializers.ValidationError:
            parsed = JobFilterEngine.parse_start_date(value, fuzzy=False) if isinstance(value, str) else None
            if parsed is None:
                raise
            return parsed


class TagListField(serializers.ListField):
    """A list of tags; a comma separated string is accepted too."""
    child = serializers.CharField(max_length=100)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = [s.strip() for s in data.split(',') if s.strip()]
        return super().to_internal_value(data)


class ScheduleSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=SCHEDULE_TYPE_CHOICES, source='schedule_type')
    start_date = FlexibleDateField(required=False, allow_null=True)
    end_date = FlexibleDateField(required=False, allow_null=True)
    time = serializers.CharField(source='schedule_time', max_length=50, required=False, allow_blank=True)
    days = serializers.ListField(child=serializers.ChoiceField(choices=WEEKDAYS), required=False)
    frequency = serializers.ChoiceField(choices=FREQUENCY_CHOICES, required=False, allow_blank=True)

    def to_internal_value(self, data):
        if isinstance(data, dict) and isinstance(data.get('days'), list):
            data = dict(data, days=[str(day).strip().lower() for day in data['days']])
        return super().to_internal_value(data)

    def validate(self, data):
        errors = {}
        if data['schedule_type'] == SCHEDULE_ONE_TIME:
            if not data.get('start_date'):
                errors['start_date'] = "A one-time job needs a date."
            if not data.get('schedule_time'):
                errors['time'] = "A one-time job needs a time."
            data['days'] = []
            data['frequency'] = ''
        elif data['schedule_type'] == SCHEDULE_RECURRING:
            if not data.get('days'):
                errors['days'] = "Select at least one day for a recurring job."
            if not data.get('frequency'):
                errors['frequency'] = "A recurring job needs a frequency."
            if not data.get('schedule_time'):
                errors['time'] = "A recurring job needs a time."
            # Keep weekday order and drop repeats.
            data['days'] = [day for day in WEEKDAYS if day in set(data.get('days') or [])]
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and end < start:
            errors['end_date'] = "End date cannot be before the start date."
        if errors:
            raise serializers.ValidationError(errors)
        data.setdefault('start_date', None)
        data.setdefault('end_date', None)
        data.setdefault('schedule_time', '')
        return data


class BudgetSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=BUDGET_TYPE_CHOICES, source='budget_type')
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True)
    min_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True)
    max_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'), required=False, allow_null=True)
    rate = serializers.ChoiceField(choices=RATE_CHOICES)

    def validate(self, data):
        errors = {}
        if data['budget_type'] == BUDGET_FIXED:
            if data.get('amount') is None:
                errors['amount'] = "A fixed budget needs an amount."
            data['min_amount'] = None
            data['max_amount'] = None
        elif data['budget_type'] == BUDGET_RANGE:
            if data.get('min_amount') is None:
                errors['min_amount'] = "A budget range needs a minimum."
            if data.get('max_amount') is None:
                errors['max_amount'] = "A budget range needs a maximum."
            if not errors and data['min_amount'] > data['max_amount']:
                errors['max_amount'] = "Maximum must not be less than the minimum."
            data['amount'] = None
        if errors:
            raise serializers.ValidationError(errors)
        return data


class ApplicantSerializer(serializers.ModelSerializer):
    housekeeper = PublicHousekeeperSerializer(read_only=True)

    class Meta:
        model = JobApplication
        fields = [
            'id', 'housekeeper', 'cover_message', 'proposed_rate', 'experience_summary',
            'availability', 'start_date', 'status', 'applied_at'
        ]


class JobPostSerializer(serializers.ModelSerializer):
    """Job post as its homeowner sees it, including active applicants and the hired person."""
    skills = TagListField(required=False, default=list)
    schedule = ScheduleSerializer(source='*')
    budget = BudgetSerializer(source='*')
    homeowner = serializers.ReadOnlyField(source='homeowner.username')
    applicant_count = serializers.SerializerMethodField()
    applications = serializers.SerializerMethodField()
    hired_person = serializers.SerializerMethodField()

    class Meta:
        model = JobPost
        fields = [
            'id', 'homeowner', 'title', 'description', 'location', 'skills', 'schedule',
            'budget', 'status', 'applicant_count', 'applications', 'hired_person',
            'hired_at', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'homeowner', 'status', 'hired_at', 'created_at', 'updated_at']

    def get_applicant_count(self, obj):
        return JobFilterEngine.applicant_count(obj)

    def get_applications(self, obj):
        applications = obj.active_applications.select_related('housekeeper__user')
        return ApplicantSerializer(applications, many=True).data

    def get_hired_person(self, obj):
        application = obj.hired_application
        if application is None:
            return None
        return ApplicantSerializer(application).data


class MyApplicationSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = JobApplication
        fields = ['id', 'status', 'proposed_rate', 'applied_at']


class OpenJobPostSerializer(serializers.ModelSerializer):
    """
    Job post as a housekeeper sees it in the open feed. Other housekeepers'
    applications are never included; `my_application` comes from the
    `my_applications` context mapping of job id to application.
    """
    schedule = ScheduleSerializer(source='*', read_only=True)
    budget = BudgetSerializer(source='*', read_only=True)
    homeowner = serializers.SerializerMethodField()
    applicant_count = serializers.SerializerMethodField()
    my_application = serializers.SerializerMethodField()

    class Meta:
        model = JobPost
        fields = [
            'id', 'homeowner', 'title', 'description', 'location', 'skills', 'schedule',
            'budget', 'status', 'applicant_count', 'my_application', 'created_at'
        ]
        read_only_fields = fields

    def get_homeowner(self, obj):
        return {'id': obj.homeowner_id, 'name': obj.homeowner.display_name}

    def get_applicant_count(self, obj):
        return JobFilterEngine.applicant_count(obj)

    def get_my_application(self, obj):
        application = self.context.get('my_applications', {}).get(obj.id)
        return MyApplicationSummarySerializer(application).data if application else None


class JobApplicationSerializer(serializers.ModelSerializer):
    housekeeper = PublicHousekeeperSerializer(read_only=True)
    proposed_rate = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    availability = serializers.DictField(child=serializers.BooleanField())
    start_date = FlexibleDateField()

    class Meta:
        model = JobApplication
        fields = [
            'id', 'job', 'housekeeper', 'cover_message', 'proposed_rate', 'experience_summary',
            'availability', 'start_date', 'status', 'applied_at'
        ]
        read_only_fields = ['id', 'job', 'housekeeper', 'status', 'applied_at']
        extra_kwargs = {'experience_summary': {'required': False}}

    def validate_cover_message(self, value):
        if not value.strip():
            raise serializers.ValidationError("A cover message is required.")
        return value.strip()

    def validate_availability(self, value):
        availability = {}
        for day, available in value.items():
            day = str(day).strip().lower()
            if day not in WEEKDAYS:
                raise serializers.ValidationError(f"Unknown weekday: {day}")
            availability[day] = available
        if not any(availability.values()):
            raise serializers.ValidationError("Confirm at least one day you are available.")
        return {day: availability.get(day, False) for day in WEEKDAYS}


class MyApplicationSerializer(serializers.ModelSerializer):
    job = serializers.SerializerMethodField()

    class Meta:
        model = JobApplication
        fields = [
            'id', 'job', 'cover_message', 'proposed_rate', 'experience_summary',
            'availability', 'start_date', 'status', 'applied_at', 'updated_at'
        ]

    def get_job(self, obj):
        job = obj.job
        return {
            'id': job.id,
            'title': job.title,
            'location': job.location,
            'status': job.status,
            'homeowner': job.homeowner.display_name,
        }


class JobStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JOB_STATUS_CHOICES)


class ApplicationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[APPLICATION_STATUS_ACCEPTED, APPLICATION_STATUS_REJECTED])


class MyJobPostsQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JOB_STATUS_CHOICES, required=False, allow_blank=True)
    sort = serializers.ChoiceField(choices=SORT_CHOICES, required=False, default=SORT_NEWEST)
