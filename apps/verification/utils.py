import logging
from django.db import transaction
from django.utils import timezone
from core.constants import (
    DOCUMENT_TYPE_CHOICES, DOC_TYPE_IDENTIFICATION, MAX_FILES_PER_DOCUMENT,
    DOCUMENT_STATUS_NOT_SUBMITTED, DOCUMENT_STATUS_PENDING,
    DOCUMENT_STATUS_APPROVED, DOCUMENT_STATUS_REJECTED, DEFAULT_DISABLED_REASON,
)
from core.exceptions import InvalidStateError, NotFoundError, ValidationFailedError
from apps.users.models import Housekeeper
from .models import VerificationDocument, DocumentFile, VerificationReview, document_status_for

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = [doc_type for doc_type, _ in DOCUMENT_TYPE_CHOICES]
EDITABLE_STATUSES = (DOCUMENT_STATUS_NOT_SUBMITTED, DOCUMENT_STATUS_REJECTED)


def _check_doc_type(doc_type):
    if doc_type not in DOCUMENT_TYPES:
        raise ValidationFailedError(f"Invalid document type: {doc_type}")


def _lock_housekeeper(housekeeper):
    return Housekeeper.objects.select_for_update().select_related('user').get(pk=housekeeper.pk)


def add_document_file(housekeeper, doc_type, file_name, file_url):
    """Record an uploaded file reference; only allowed before submission or after a rejection."""
    _check_doc_type(doc_type)
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        if document_status_for(housekeeper) not in EDITABLE_STATUSES:
            raise InvalidStateError("Documents cannot be changed while under review or after approval.")
        document, _ = VerificationDocument.objects.get_or_create(housekeeper=housekeeper, doc_type=doc_type)
        if document.files.count() >= MAX_FILES_PER_DOCUMENT[doc_type]:
            raise ValidationFailedError(
                f"You can upload at most {MAX_FILES_PER_DOCUMENT[doc_type]} files for {doc_type}."
            )
        document_file = DocumentFile.objects.create(document=document, file_name=file_name, file_url=file_url)
    logger.info(f"Housekeeper {housekeeper.pk} uploaded {doc_type} file {document_file.pk}")
    return document_file


def delete_document_file(housekeeper, doc_type, file_id):
    _check_doc_type(doc_type)
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        if document_status_for(housekeeper) not in EDITABLE_STATUSES:
            raise InvalidStateError("Documents cannot be changed while under review or after approval.")
        try:
            document_file = DocumentFile.objects.get(
                pk=file_id, document__housekeeper=housekeeper, document__doc_type=doc_type
            )
        except DocumentFile.DoesNotExist:
            raise NotFoundError("Document file not found.")
        document_file.delete()
    logger.info(f"Housekeeper {housekeeper.pk} deleted {doc_type} file {file_id}")


def _require_identification(housekeeper):
    has_id = DocumentFile.objects.filter(
        document__housekeeper=housekeeper, document__doc_type=DOC_TYPE_IDENTIFICATION
    ).exists()
    if not has_id:
        raise ValidationFailedError("Upload at least one identification card before submitting.")


def submit_documents(housekeeper):
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        if document_status_for(housekeeper) != DOCUMENT_STATUS_NOT_SUBMITTED:
            raise InvalidStateError("Documents have already been submitted.")
        _require_identification(housekeeper)
        housekeeper.documents_submitted_at = timezone.now()
        housekeeper.save(update_fields=['documents_submitted_at'])
    logger.info(f"Housekeeper {housekeeper.pk} submitted documents for verification")
    return document_status_for(housekeeper)


def resubmit_documents(housekeeper):
    """Send rejected documents back for review."""
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        if document_status_for(housekeeper) != DOCUMENT_STATUS_REJECTED:
            raise InvalidStateError("Only rejected documents can be resubmitted.")
        _require_identification(housekeeper)
        VerificationDocument.objects.filter(
            housekeeper=housekeeper, reviewed_at__isnull=False, verified=False
        ).update(reviewed_at=None, notes=None)
        housekeeper.documents_submitted_at = timezone.now()
        housekeeper.save(update_fields=['documents_submitted_at'])
    logger.info(f"Housekeeper {housekeeper.pk} resubmitted documents for verification")
    return document_status_for(housekeeper)


def _sync_legacy_flag(housekeeper):
    """Keep User.is_verified aligned with the outcome of the document review."""
    status = document_status_for(housekeeper)
    if status in (DOCUMENT_STATUS_APPROVED, DOCUMENT_STATUS_REJECTED):
        user = housekeeper.user
        user.is_verified = status == DOCUMENT_STATUS_APPROVED
        user.save(update_fields=['is_verified'])
    return status


def review_document(reviewer, housekeeper, doc_type, approved, notes=''):
    _check_doc_type(doc_type)
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        if document_status_for(housekeeper) != DOCUMENT_STATUS_PENDING:
            raise InvalidStateError("Only documents awaiting review can be reviewed.")
        try:
            document = VerificationDocument.objects.get(housekeeper=housekeeper, doc_type=doc_type)
        except VerificationDocument.DoesNotExist:
            raise NotFoundError(f"No {doc_type} documents uploaded.")
        if not document.files.exists():
            raise NotFoundError(f"No {doc_type} documents uploaded.")
        document.verified = approved
        document.notes = notes or None
        document.reviewed_at = timezone.now()
        document.save(update_fields=['verified', 'notes', 'reviewed_at'])
        status = _sync_legacy_flag(housekeeper)
    logger.info(f"Reviewer {reviewer.pk} {'approved' if approved else 'rejected'} {doc_type} of housekeeper {housekeeper.pk}")
    return status


def review_housekeeper(reviewer, housekeeper, approved, notes='', document_review=None):
    """
    Record an overall decision for a housekeeper's submission.

    Approval verifies every document holding files. A rejection marks documents
    unverified unless `document_review` keeps a type verified, e.g.
    {'certifications': {'verified': True}}.
    """
    document_review = document_review or {}
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        if document_status_for(housekeeper) != DOCUMENT_STATUS_PENDING:
            raise InvalidStateError("Only submissions awaiting review can be reviewed.")
        now = timezone.now()
        documents = VerificationDocument.objects.filter(housekeeper=housekeeper, files__isnull=False).distinct()
        for document in documents:
            if approved:
                verified = True
            else:
                verified = bool(document_review.get(document.doc_type, {}).get('verified', False))
            document.verified = verified
            document.reviewed_at = now
            document.notes = None if verified else (notes or None)
            document.save(update_fields=['verified', 'notes', 'reviewed_at'])
        if not approved and all(document.verified for document in documents):
            raise ValidationFailedError("A rejection must leave at least one document unverified.")
        VerificationReview.objects.create(
            housekeeper=housekeeper, reviewer=reviewer, approved=approved, notes=notes or None
        )
        status = _sync_legacy_flag(housekeeper)
    logger.info(f"Reviewer {reviewer.pk} {'approved' if approved else 'rejected'} housekeeper {housekeeper.pk}")
    return status


def set_account_status(admin, housekeeper, active, reason=None):
    """Enable or disable a housekeeper account; a disabled account keeps its reason in status_notes."""
    with transaction.atomic():
        housekeeper = _lock_housekeeper(housekeeper)
        housekeeper.account_active = active
        housekeeper.status_notes = None if active else (reason or DEFAULT_DISABLED_REASON)
        housekeeper.save(update_fields=['account_active', 'status_notes'])
    logger.info(f"Admin {admin.pk} {'enabled' if active else 'disabled'} housekeeper {housekeeper.pk}")
    return housekeeper
