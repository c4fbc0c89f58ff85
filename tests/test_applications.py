from unittest.mock import patch

import pytest
from django.db import IntegrityError
from django.urls import reverse

from apps.jobs.lifecycle import ApplicationManager, JobPostManager
from apps.jobs.models import JobPost, JobApplication
from core.exceptions import (
    AlreadyHiredError, DuplicateApplicationError, InvalidStateError, JobClosedError,
    NotEligibleError, NotFoundError, UnauthorizedError,
)

from .factories import application_data, application_payload


@pytest.mark.django_db
class TestApply:

    def test_apply_creates_pending_and_leaves_job_active(self, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        assert application.status == 'pending'
        job.refresh_from_db()
        assert job.status == 'active'

    def test_not_eligible_is_checked_first(self, make_housekeeper):
        unverified = make_housekeeper(verified=False)
        with pytest.raises(NotEligibleError) as excinfo:
            ApplicationManager.apply(unverified, 9999, application_data())
        assert excinfo.value.verdict.status == 'not_submitted'

    def test_disabled_housekeeper_cannot_apply(self, make_housekeeper, job):
        user = make_housekeeper(verified=True)
        user.housekeeper.account_active = False
        user.housekeeper.save()
        with pytest.raises(NotEligibleError) as excinfo:
            ApplicationManager.apply(user, job, application_data())
        assert excinfo.value.verdict.status == 'disabled'

    def test_missing_job(self, housekeeper):
        with pytest.raises(NotFoundError):
            ApplicationManager.apply(housekeeper, 9999, application_data())

    @pytest.mark.parametrize('status', ['paused', 'hired', 'archived'])
    def test_job_closed(self, housekeeper, job, status):
        JobPost.objects.filter(pk=job.pk).update(status=status)
        with pytest.raises(JobClosedError):
            ApplicationManager.apply(housekeeper, job, application_data())

    def test_duplicate_regardless_of_status(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        ApplicationManager.reject(homeowner, job, application.pk)
        with pytest.raises(DuplicateApplicationError):
            ApplicationManager.apply(housekeeper, job, application_data())

    def test_closed_job_reported_before_duplicate(self, homeowner, housekeeper, job):
        ApplicationManager.apply(housekeeper, job, application_data())
        JobPostManager.set_status(homeowner, job, 'paused')
        with pytest.raises(JobClosedError):
            ApplicationManager.apply(housekeeper, job, application_data())

    def test_integrity_error_becomes_duplicate(self, housekeeper, job):
        with patch.object(JobApplication.objects, 'create', side_effect=IntegrityError('unique')):
            with pytest.raises(DuplicateApplicationError):
                ApplicationManager.apply(housekeeper, job, application_data())


@pytest.mark.django_db
class TestAcceptAndReject:

    def test_accept_hires_atomically(self, homeowner, make_housekeeper, job):
        a = ApplicationManager.apply(make_housekeeper('a'), job, application_data())
        b = ApplicationManager.apply(make_housekeeper('b'), job, application_data())

        job, accepted = ApplicationManager.accept(homeowner, job, a.pk)

        assert accepted.status == 'accepted'
        assert job.status == 'hired'
        assert job.hired_at is not None
        assert job.hired_application.pk == a.pk
        b.refresh_from_db()
        assert b.status == 'pending'

    def test_second_accept_is_already_hired(self, homeowner, make_housekeeper, job):
        a = ApplicationManager.apply(make_housekeeper('a'), job, application_data())
        b = ApplicationManager.apply(make_housekeeper('b'), job, application_data())
        ApplicationManager.accept(homeowner, job, a.pk)

        with pytest.raises(AlreadyHiredError):
            ApplicationManager.accept(homeowner, job, b.pk)
        assert JobApplication.objects.filter(job=job, status='accepted').count() == 1

    def test_unrelated_integrity_error_is_not_reported_as_hired(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        with patch.object(JobPost, 'save', side_effect=IntegrityError('NOT NULL constraint failed')):
            with pytest.raises(IntegrityError):
                ApplicationManager.accept(homeowner, job, application.pk)
        application.refresh_from_db()
        job.refresh_from_db()
        assert application.status == 'pending'
        assert job.status == 'active'

    def test_one_accepted_constraint_becomes_already_hired(self, homeowner, make_housekeeper, job):
        a = ApplicationManager.apply(make_housekeeper('a'), job, application_data())
        b = ApplicationManager.apply(make_housekeeper('b'), job, application_data())
        # A competing accept committed its application row before this one locked the post.
        JobApplication.objects.filter(pk=a.pk).update(status='accepted')

        with pytest.raises(AlreadyHiredError):
            ApplicationManager.accept(homeowner, job, b.pk)
        b.refresh_from_db()
        job.refresh_from_db()
        assert b.status == 'pending'
        assert job.status == 'active'

    def test_accept_on_archived_post(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        JobPostManager.set_status(homeowner, job, 'archived')
        with pytest.raises(InvalidStateError):
            ApplicationManager.accept(homeowner, job, application.pk)

    def test_accept_on_paused_post(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        JobPostManager.set_status(homeowner, job, 'paused')
        job, _ = ApplicationManager.accept(homeowner, job, application.pk)
        assert job.status == 'hired'

    def test_accept_rejected_application(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        ApplicationManager.reject(homeowner, job, application.pk)
        with pytest.raises(InvalidStateError):
            ApplicationManager.accept(homeowner, job, application.pk)

    def test_error_order_not_found_before_unauthorized(self, make_homeowner, housekeeper, job):
        stranger = make_homeowner('stranger')
        with pytest.raises(NotFoundError):
            ApplicationManager.accept(stranger, job, 9999)
        application = ApplicationManager.apply(housekeeper, job, application_data())
        with pytest.raises(UnauthorizedError):
            ApplicationManager.accept(stranger, job, application.pk)

    def test_application_from_other_job_is_not_found(self, homeowner, housekeeper, make_job, job):
        other = make_job(title='Other')
        application = ApplicationManager.apply(housekeeper, other, application_data())
        with pytest.raises(NotFoundError):
            ApplicationManager.accept(homeowner, job, application.pk)

    def test_reject_hides_from_active_applicants(self, homeowner, make_housekeeper, job):
        a = ApplicationManager.apply(make_housekeeper('a'), job, application_data())
        b = ApplicationManager.apply(make_housekeeper('b'), job, application_data())
        _, rejected = ApplicationManager.reject(homeowner, job, a.pk)

        assert rejected.status == 'rejected'
        assert [app.pk for app in ApplicationManager.list_active_applicants(homeowner, job)] == [b.pk]
        assert JobApplication.objects.filter(pk=a.pk).exists()

    def test_reject_twice(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        ApplicationManager.reject(homeowner, job, application.pk)
        with pytest.raises(InvalidStateError):
            ApplicationManager.reject(homeowner, job, application.pk)

    def test_list_my_applications(self, housekeeper, make_job):
        first = ApplicationManager.apply(housekeeper, make_job(title='First'), application_data())
        second = ApplicationManager.apply(housekeeper, make_job(title='Second'), application_data())
        assert [app.pk for app in ApplicationManager.list_my_applications(housekeeper)] == [second.pk, first.pk]


@pytest.mark.django_db
class TestApplicationEndpoints:

    def test_apply_endpoint(self, api_client, housekeeper, job):
        api_client.force_authenticate(user=housekeeper)
        response = api_client.post(reverse('job_apply', args=[job.pk]), application_payload(), format='json')
        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        assert response.data['availability']['monday'] is True
        assert response.data['availability']['sunday'] is False

    def test_apply_validation(self, api_client, housekeeper, job):
        api_client.force_authenticate(user=housekeeper)
        payload = application_payload(availability={'monday': False}, proposed_rate='0')
        del payload['start_date']
        response = api_client.post(reverse('job_apply', args=[job.pk]), payload, format='json')
        assert response.status_code == 400
        assert set(response.data) >= {'availability', 'proposed_rate', 'start_date'}

    @pytest.mark.parametrize('start_date', ['I have 3 kids', 'call me at 5'])
    def test_apply_rejects_free_text_start_date(self, api_client, housekeeper, job, start_date):
        api_client.force_authenticate(user=housekeeper)
        response = api_client.post(
            reverse('job_apply', args=[job.pk]), application_payload(start_date=start_date), format='json'
        )
        assert response.status_code == 400
        assert 'start_date' in response.data
        assert not JobApplication.objects.exists()

    def test_apply_accepts_written_out_date(self, api_client, housekeeper, job):
        api_client.force_authenticate(user=housekeeper)
        response = api_client.post(
            reverse('job_apply', args=[job.pk]), application_payload(start_date='Dec 12, 2030'), format='json'
        )
        assert response.status_code == 201
        assert response.data['start_date'] == '2030-12-12'

    def test_apply_not_eligible_payload(self, api_client, make_housekeeper, job):
        api_client.force_authenticate(user=make_housekeeper(verified=False))
        response = api_client.post(reverse('job_apply', args=[job.pk]), application_payload(), format='json')
        assert response.status_code == 403
        assert response.data['code'] == 'not_eligible'
        assert response.data['verification_status'] == 'not_submitted'

    def test_duplicate_apply_conflicts(self, api_client, housekeeper, job):
        api_client.force_authenticate(user=housekeeper)
        api_client.post(reverse('job_apply', args=[job.pk]), application_payload(), format='json')
        response = api_client.post(reverse('job_apply', args=[job.pk]), application_payload(), format='json')
        assert response.status_code == 409
        assert response.data['code'] == 'duplicate_application'

    def test_accept_endpoint_and_owner_view(self, api_client, homeowner, make_housekeeper, job):
        a = ApplicationManager.apply(make_housekeeper('a'), job, application_data())
        b = ApplicationManager.apply(make_housekeeper('b'), job, application_data())
        api_client.force_authenticate(user=homeowner)

        response = api_client.patch(
            reverse('application_status', args=[job.pk, a.pk]), {'status': 'accepted'}, format='json'
        )
        assert response.status_code == 200
        assert response.data['job']['status'] == 'hired'
        assert response.data['job']['hired_person']['id'] == a.pk
        assert response.data['application']['status'] == 'accepted'

        response = api_client.patch(
            reverse('application_status', args=[job.pk, b.pk]), {'status': 'accepted'}, format='json'
        )
        assert response.status_code == 409
        assert response.data['code'] == 'already_hired'

    def test_rejected_applicant_drops_from_list(self, api_client, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        api_client.force_authenticate(user=homeowner)
        api_client.patch(
            reverse('application_status', args=[job.pk, application.pk]), {'status': 'rejected'}, format='json'
        )
        response = api_client.get(reverse('job_applications', args=[job.pk]))
        assert response.status_code == 200
        assert response.data == []

    def test_invalid_application_status(self, api_client, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        api_client.force_authenticate(user=homeowner)
        response = api_client.patch(
            reverse('application_status', args=[job.pk, application.pk]), {'status': 'pending'}, format='json'
        )
        assert response.status_code == 400

    def test_my_applications_endpoint(self, api_client, housekeeper, job):
        ApplicationManager.apply(housekeeper, job, application_data())
        api_client.force_authenticate(user=housekeeper)
        response = api_client.get(reverse('my_applications'))
        assert response.status_code == 200
        assert response.data[0]['job']['id'] == job.pk
