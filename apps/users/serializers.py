from rest_framework import serializers
from django.contrib.auth import get_user_model
from .models import HomeOwner, Housekeeper

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    role = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'email', 'phone_number', 'role', 'is_verified']
        read_only_fields = fields

    def get_role(self, obj):
        if obj.is_superuser:
            return 'admin'
        if obj.is_homeowner:
            return 'homeowner'
        if obj.is_housekeeper:
            return 'housekeeper'
        return None


class HomeOwnerProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = HomeOwner
        fields = ['id', 'user', 'address', 'city_municipality']


class HousekeeperProfileSerializer(serializers.ModelSerializer):
    user = UserSerializer(read_only=True)

    class Meta:
        model = Housekeeper
        fields = ['id', 'user', 'location', 'experience', 'specialties', 'bio', 'account_active', 'status_notes']
        read_only_fields = ['account_active', 'status_notes']


class PublicHousekeeperSerializer(serializers.ModelSerializer):
    """Housekeeper details shown to homeowners reviewing applicants."""
    user = serializers.SerializerMethodField()

    class Meta:
        model = Housekeeper
        fields = ['id', 'user', 'location', 'experience', 'specialties']

    def get_user(self, obj):
        user = obj.user
        return {
            'id': user.id,
            'first_name': user.first_name,
            'last_name': user.last_name,
        }
