from rest_framework import serializers
from core.constants import DOCUMENT_TYPE_CHOICES, DEFAULT_DISABLED_REASON
from .models import VerificationDocument, DocumentFile, VerificationReview, document_status_for
from .eligibility import evaluate_housekeeper


class DocumentFileSerializer(serializers.ModelSerializer):
    class Meta:
        model = DocumentFile
        fields = ['id', 'file_name', 'file_url', 'uploaded_at']
        read_only_fields = ['id', 'uploaded_at']


class VerificationDocumentSerializer(serializers.ModelSerializer):
    files = DocumentFileSerializer(many=True, read_only=True)

    class Meta:
        model = VerificationDocument
        fields = ['doc_type', 'files', 'verified', 'notes', 'reviewed_at']


class VerificationReviewSerializer(serializers.ModelSerializer):
    reviewer = serializers.ReadOnlyField(source='reviewer.username')
    status = serializers.SerializerMethodField()

    class Meta:
        model = VerificationReview
        fields = ['id', 'status', 'notes', 'reviewer', 'created_at']

    def get_status(self, obj):
        return 'approved' if obj.approved else 'rejected'


class DocumentReviewSerializer(serializers.Serializer):
    approved = serializers.BooleanField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class HousekeeperReviewSerializer(DocumentReviewSerializer):
    document_review = serializers.DictField(
        child=serializers.DictField(child=serializers.BooleanField()),
        required=False,
        default=dict,
    )

    def validate_document_review(self, value):
        valid_types = {doc_type for doc_type, _ in DOCUMENT_TYPE_CHOICES}
        unknown = set(value) - valid_types
        if unknown:
            raise serializers.ValidationError(f"Unknown document types: {', '.join(sorted(unknown))}")
        return value


class AccountStatusSerializer(serializers.Serializer):
    active = serializers.BooleanField()
    reason = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, data):
        if not data['active'] and not data.get('reason'):
            data['reason'] = DEFAULT_DISABLED_REASON
        if data['active']:
            data['reason'] = None
        return data


def document_status_payload(housekeeper):
    """documentVerificationStatus: overall status, files and notes per type, review history."""
    housekeeper.refresh_from_db()
    documents = {
        doc.doc_type: VerificationDocumentSerializer(doc).data
        for doc in VerificationDocument.objects.filter(housekeeper=housekeeper).prefetch_related('files')
    }
    for doc_type, _ in DOCUMENT_TYPE_CHOICES:
        documents.setdefault(doc_type, {
            'doc_type': doc_type, 'files': [], 'verified': False, 'notes': None, 'reviewed_at': None,
        })
    history = housekeeper.verification_reviews.select_related('reviewer')
    latest = history.first()
    return {
        'housekeeper_id': housekeeper.pk,
        'document_status': document_status_for(housekeeper),
        'submitted_at': housekeeper.documents_submitted_at,
        'documents': documents,
        'notes': latest.notes if latest else None,
        'history': VerificationReviewSerializer(history, many=True).data,
    }


def account_status_payload(housekeeper):
    housekeeper.refresh_from_db()
    return {
        'housekeeper_id': housekeeper.pk,
        'active': housekeeper.account_active,
        'reason': None if housekeeper.account_active else (housekeeper.status_notes or DEFAULT_DISABLED_REASON),
    }


def eligibility_payload(housekeeper):
    verdict = evaluate_housekeeper(housekeeper)
    payload = verdict.as_dict()
    payload['message'] = verdict.message
    return payload
