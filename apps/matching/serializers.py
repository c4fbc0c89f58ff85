from decimal import Decimal
from rest_framework import serializers
from core.constants import SCHEDULE_TYPE_CHOICES
from .utils import (
    FilterConstraints, SORT_CHOICES, SORT_NEWEST,
    APPLICATION_FILTER_CHOICES, APPLICATION_FILTER_ALL,
)


class FilterConstraintsSerializer(serializers.Serializer):
    """Reads open-feed query parameters into FilterConstraints."""
    search = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    budget_max = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True)
    schedule_type = serializers.ChoiceField(choices=SCHEDULE_TYPE_CHOICES, required=False, allow_blank=True)
    skills = serializers.CharField(required=False, allow_blank=True, help_text="Comma separated keywords")
    application_status = serializers.ChoiceField(choices=APPLICATION_FILTER_CHOICES, required=False, default=APPLICATION_FILTER_ALL)
    sort = serializers.ChoiceField(choices=SORT_CHOICES, required=False, default=SORT_NEWEST)

    def to_internal_value(self, data):
        # Query strings send empty values for cleared filters.
        data = {key: value for key, value in data.items() if value not in ('', None)}
        return super().to_internal_value(data)

    def to_constraints(self):
        data = self.validated_data
        skills = tuple(s.strip() for s in (data.get('skills') or '').split(',') if s.strip())
        return FilterConstraints(
            search=data.get('search') or None,
            location=data.get('location') or None,
            budget_max=data.get('budget_max'),
            schedule_type=data.get('schedule_type') or None,
            skills=skills,
            application_status=data['application_status'],
            sort=data['sort'],
        )
