from django.db import models
from django.conf import settings
from core.constants import (
    DOCUMENT_TYPE_CHOICES, DOC_TYPE_IDENTIFICATION,
    DOCUMENT_STATUS_NOT_SUBMITTED, DOCUMENT_STATUS_PENDING,
    DOCUMENT_STATUS_APPROVED, DOCUMENT_STATUS_REJECTED,
)
from apps.users.models import Housekeeper


class VerificationDocument(models.Model):
    """Review sub-state of one document type for one housekeeper."""
    housekeeper = models.ForeignKey(Housekeeper, on_delete=models.CASCADE, related_name='documents')
    doc_type = models.CharField(max_length=32, choices=DOCUMENT_TYPE_CHOICES)
    verified = models.BooleanField(default=False)
    notes = models.TextField(blank=True, null=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        unique_together = ('housekeeper', 'doc_type')

    def __str__(self):
        return f"{self.doc_type} for {self.housekeeper.user.username}"

    @property
    def is_rejected(self):
        return self.reviewed_at is not None and not self.verified


class DocumentFile(models.Model):
    document = models.ForeignKey(VerificationDocument, on_delete=models.CASCADE, related_name='files')
    file_name = models.CharField(max_length=255)
    file_url = models.CharField(max_length=500)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['uploaded_at', 'id']

    def __str__(self):
        return self.file_name


class VerificationReview(models.Model):
    housekeeper = models.ForeignKey(Housekeeper, on_delete=models.CASCADE, related_name='verification_reviews')
    reviewer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    approved = models.BooleanField()
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{'Approved' if self.approved else 'Rejected'} review for {self.housekeeper.user.username}"


def derive_document_status(submitted_at, documents):
    """
    Collapse per-type document sub-states into one document status.

    `documents` is an iterable of (doc_type, has_files, verified, rejected) tuples.
    """
    if submitted_at is None:
        return DOCUMENT_STATUS_NOT_SUBMITTED
    documents = list(documents)
    if any(rejected for _, _, _, rejected in documents):
        return DOCUMENT_STATUS_REJECTED
    with_files = [doc for doc in documents if doc[1]]
    id_verified = any(
        doc_type == DOC_TYPE_IDENTIFICATION and verified
        for doc_type, _, verified, _ in with_files
    )
    if id_verified and all(verified for _, _, verified, _ in with_files):
        return DOCUMENT_STATUS_APPROVED
    return DOCUMENT_STATUS_PENDING


def document_status_for(housekeeper):
    documents = [
        (doc.doc_type, doc.files.exists(), doc.verified, doc.is_rejected)
        for doc in VerificationDocument.objects.filter(housekeeper=housekeeper)
    ]
    return derive_document_status(housekeeper.documents_submitted_at, documents)
