import pytest

from apps.verification.eligibility import (
    EligibilityVerdict, ProviderVerification, evaluate, evaluate_housekeeper, require_eligible,
    STATUS_DISABLED, STATUS_NOT_SUBMITTED, STATUS_PENDING, STATUS_REJECTED, STATUS_VERIFIED,
)
from apps.verification.models import VerificationDocument, VerificationReview
from core.constants import DEFAULT_DISABLED_REASON
from core.exceptions import NotEligibleError
from django.utils import timezone

from .factories import upload_document


def snapshot(document_status='not_submitted', account_active=True, legacy_verified=False, **extra):
    return ProviderVerification(
        provider_id=1,
        document_status=document_status,
        account_active=account_active,
        legacy_verified=legacy_verified,
        **extra
    )


class TestEvaluate:

    def test_disabled_wins_over_approved_documents(self):
        verdict = evaluate(snapshot('approved', account_active=False, disabled_reason='Fraud report'))
        assert verdict == EligibilityVerdict(False, STATUS_DISABLED, 'Fraud report')

    def test_disabled_without_reason_uses_default(self):
        verdict = evaluate(snapshot('approved', account_active=False))
        assert verdict.status == STATUS_DISABLED
        assert verdict.reason == DEFAULT_DISABLED_REASON

    def test_pending_blocks_even_with_legacy_flag(self):
        verdict = evaluate(snapshot('pending', legacy_verified=True))
        assert verdict.eligible is False
        assert verdict.status == STATUS_PENDING

    @pytest.mark.parametrize('document_status,legacy', [
        ('approved', False),
        ('approved', True),
        ('not_submitted', True),
        ('rejected', True),
    ])
    def test_verified(self, document_status, legacy):
        verdict = evaluate(snapshot(document_status, legacy_verified=legacy))
        assert verdict == EligibilityVerdict(True, STATUS_VERIFIED)

    def test_rejected_carries_review_note(self):
        verdict = evaluate(snapshot('rejected', latest_review_note='ID photo is blurry'))
        assert verdict == EligibilityVerdict(False, STATUS_REJECTED, 'ID photo is blurry')

    def test_rejected_without_note(self):
        assert evaluate(snapshot('rejected')).reason is None

    def test_not_submitted(self):
        verdict = evaluate(snapshot())
        assert verdict == EligibilityVerdict(False, STATUS_NOT_SUBMITTED)

    def test_same_snapshot_same_verdict(self):
        provider = snapshot('rejected', latest_review_note='Expired ID')
        assert evaluate(provider) == evaluate(provider)

    def test_message_for_each_status(self):
        assert 'review' in evaluate(snapshot('pending')).message
        assert evaluate(snapshot(account_active=False, disabled_reason='Spam')).message == 'Spam'


@pytest.mark.django_db
class TestEvaluateHousekeeper:

    def test_reads_fresh_state_after_admin_disables(self, make_housekeeper):
        user = make_housekeeper(verified=True)
        housekeeper = user.housekeeper
        assert evaluate_housekeeper(housekeeper).eligible is True

        type(housekeeper).objects.filter(pk=housekeeper.pk).update(account_active=False, status_notes='Complaints')

        # The in-memory instance is stale; the verdict must not be.
        verdict = evaluate_housekeeper(housekeeper)
        assert verdict.status == STATUS_DISABLED
        assert verdict.reason == 'Complaints'

    def test_pending_submission_blocks_legacy_verified(self, make_housekeeper):
        user = make_housekeeper(verified=True)
        housekeeper = user.housekeeper
        upload_document(housekeeper)
        housekeeper.documents_submitted_at = timezone.now()
        housekeeper.save()
        assert evaluate_housekeeper(housekeeper).status == STATUS_PENDING

    def test_rejected_reason_from_latest_review(self, make_housekeeper, admin_user):
        user = make_housekeeper(verified=False)
        housekeeper = user.housekeeper
        upload_document(housekeeper)
        housekeeper.documents_submitted_at = timezone.now()
        housekeeper.save()
        VerificationDocument.objects.filter(housekeeper=housekeeper).update(
            verified=False, reviewed_at=timezone.now(), notes='Document note'
        )
        VerificationReview.objects.create(
            housekeeper=housekeeper, reviewer=admin_user, approved=False, notes='Please upload the back side'
        )
        verdict = evaluate_housekeeper(housekeeper)
        assert verdict.status == STATUS_REJECTED
        assert verdict.reason == 'Please upload the back side'

    def test_require_eligible_raises_with_status(self, make_housekeeper):
        user = make_housekeeper(verified=False)
        with pytest.raises(NotEligibleError) as excinfo:
            require_eligible(user.housekeeper)
        assert excinfo.value.verdict.status == STATUS_NOT_SUBMITTED
        assert excinfo.value.as_payload()['verification_status'] == STATUS_NOT_SUBMITTED
