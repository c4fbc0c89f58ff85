"""
Eligibility of a housekeeper to publish services and apply to job posts.

Three signals feed the verdict: the administrative account flag, the status
derived from the document review, and the legacy ``User.is_verified`` flag.
``evaluate`` combines them with a fixed precedence and has no side effects;
``evaluate_housekeeper`` reads a fresh snapshot from the database each time it
is called so a gated action never runs on a verdict computed before an admin
changed the account.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from core.constants import (
    DOCUMENT_STATUS_PENDING,
    DOCUMENT_STATUS_APPROVED, DOCUMENT_STATUS_REJECTED,
    DEFAULT_DISABLED_REASON,
)
from core.exceptions import NotEligibleError
from apps.users.models import Housekeeper
from .models import VerificationDocument, document_status_for

logger = logging.getLogger(__name__)

STATUS_VERIFIED = 'verified'
STATUS_PENDING = 'pending'
STATUS_REJECTED = 'rejected'
STATUS_DISABLED = 'disabled'
STATUS_NOT_SUBMITTED = 'not_submitted'

STATUS_MESSAGES = {
    STATUS_VERIFIED: 'Your account is verified.',
    STATUS_PENDING: 'Your documents are under review. You will be able to continue once verified.',
    STATUS_REJECTED: 'Your verification was rejected. Please review the feedback and resubmit your documents.',
    STATUS_DISABLED: DEFAULT_DISABLED_REASON,
    STATUS_NOT_SUBMITTED: 'Please submit your verification documents before continuing.',
}


@dataclass(frozen=True)
class ProviderVerification:
    provider_id: int
    document_status: str
    account_active: bool
    legacy_verified: bool
    disabled_reason: Optional[str] = None
    latest_review_note: Optional[str] = None


@dataclass(frozen=True)
class EligibilityVerdict:
    eligible: bool
    status: str
    reason: Optional[str] = None

    @property
    def message(self):
        if self.status == STATUS_DISABLED and self.reason:
            return self.reason
        return STATUS_MESSAGES[self.status]

    def as_dict(self):
        return {'eligible': self.eligible, 'status': self.status, 'reason': self.reason}


def evaluate(provider):
    """Return the eligibility verdict for a ProviderVerification snapshot; first matching rule wins."""
    if not provider.account_active:
        return EligibilityVerdict(False, STATUS_DISABLED, provider.disabled_reason or DEFAULT_DISABLED_REASON)
    # A stale legacy flag must not bypass a review that is still in progress.
    if provider.document_status == DOCUMENT_STATUS_PENDING:
        return EligibilityVerdict(False, STATUS_PENDING)
    if provider.document_status == DOCUMENT_STATUS_APPROVED or provider.legacy_verified:
        return EligibilityVerdict(True, STATUS_VERIFIED)
    if provider.document_status == DOCUMENT_STATUS_REJECTED:
        return EligibilityVerdict(False, STATUS_REJECTED, provider.latest_review_note or None)
    return EligibilityVerdict(False, STATUS_NOT_SUBMITTED)


def snapshot_for(housekeeper):
    """Build a ProviderVerification from the current database rows."""
    housekeeper = Housekeeper.objects.select_related('user').get(pk=housekeeper.pk)
    document_status = document_status_for(housekeeper)
    latest_note = None
    if document_status == DOCUMENT_STATUS_REJECTED:
        latest_review = housekeeper.verification_reviews.first()
        if latest_review and not latest_review.approved and latest_review.notes:
            latest_note = latest_review.notes
        else:
            document = (
                VerificationDocument.objects
                .filter(housekeeper=housekeeper, reviewed_at__isnull=False, verified=False)
                .exclude(notes__isnull=True).exclude(notes='')
                .order_by('-reviewed_at')
                .first()
            )
            latest_note = document.notes if document else None
    return ProviderVerification(
        provider_id=housekeeper.pk,
        document_status=document_status,
        account_active=housekeeper.account_active,
        legacy_verified=housekeeper.user.is_verified,
        disabled_reason=housekeeper.status_notes,
        latest_review_note=latest_note,
    )


def evaluate_housekeeper(housekeeper):
    return evaluate(snapshot_for(housekeeper))


def require_eligible(housekeeper, action='continue'):
    """Evaluate on demand and raise NotEligibleError carrying the display status when refused."""
    verdict = evaluate_housekeeper(housekeeper)
    if not verdict.eligible:
        logger.info(f"Housekeeper {housekeeper.pk} refused to {action}: {verdict.status}")
        raise NotEligibleError(verdict)
    return verdict
