from decimal import Decimal
from rest_framework import serializers
from core.constants import WEEKDAYS
from apps.jobs.serializers import TagListField
from apps.users.models import Housekeeper
from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    housekeeper = serializers.ReadOnlyField(source='housekeeper.id')
    tags = TagListField(required=False, default=list)
    available_days = serializers.DictField(child=serializers.BooleanField())
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))

    class Meta:
        model = Service
        fields = [
            'id', 'housekeeper', 'name', 'category', 'tags', 'description', 'service_location',
            'available_days', 'start_time', 'end_time', 'estimated_completion_time',
            'pricing_type', 'price', 'contact_number', 'is_available', 'image',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'housekeeper', 'is_available', 'created_at', 'updated_at']

    def validate_available_days(self, value):
        days = {}
        for day, available in value.items():
            day = str(day).strip().lower()
            if day not in WEEKDAYS:
                raise serializers.ValidationError(f"Unknown weekday: {day}")
            days[day] = available
        if not any(days.values()):
            raise serializers.ValidationError("Select at least one available day.")
        return {day: days.get(day, False) for day in WEEKDAYS}

    def validate(self, data):
        if data['end_time'] <= data['start_time']:
            raise serializers.ValidationError({'end_time': "End time must be after start time."})
        return data


class ServiceAvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()


class BrowseHousekeeperSerializer(serializers.ModelSerializer):
    """A bookable housekeeper and their available services, as listed to homeowners."""
    name = serializers.ReadOnlyField(source='user.display_name')
    services = serializers.SerializerMethodField()

    class Meta:
        model = Housekeeper
        fields = ['id', 'name', 'location', 'experience', 'specialties', 'services']

    def get_services(self, obj):
        return ServiceSerializer(obj.available_services, many=True).data
