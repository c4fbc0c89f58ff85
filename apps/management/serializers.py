from rest_framework import serializers
from apps.users.models import Housekeeper
from apps.users.serializers import UserSerializer
from apps.verification.models import document_status_for
from apps.verification.eligibility import evaluate_housekeeper
from .models import ManagementLog


class ManagementLogSerializer(serializers.ModelSerializer):
    admin = UserSerializer(read_only=True)

    class Meta:
        model = ManagementLog
        fields = ['id', 'admin', 'action', 'details', 'timestamp']
        read_only_fields = ['id', 'admin', 'timestamp']


class ManagementHousekeeperSerializer(serializers.ModelSerializer):
    """Housekeeper row in the admin verification queue."""
    user = UserSerializer(read_only=True)
    document_status = serializers.SerializerMethodField()
    eligibility = serializers.SerializerMethodField()

    class Meta:
        model = Housekeeper
        fields = [
            'id', 'user', 'location', 'account_active', 'status_notes',
            'documents_submitted_at', 'document_status', 'eligibility'
        ]

    def get_document_status(self, obj):
        return document_status_for(obj)

    def get_eligibility(self, obj):
        return evaluate_housekeeper(obj).as_dict()
