from datetime import date, timedelta

import pytest
from django.urls import reverse

from apps.jobs.lifecycle import JobPostManager, ApplicationManager
from apps.jobs.models import JobPost, JobApplication
from core.exceptions import InvalidStateError, NotFoundError, UnauthorizedError, ValidationFailedError

from .factories import application_data, job_data, job_payload


@pytest.mark.django_db
class TestJobPostManager:

    def test_create_starts_active(self, homeowner):
        job = JobPostManager.create(homeowner, job_data())
        assert job.status == 'active'
        assert job.hired_application is None

    @pytest.mark.parametrize('start,target', [
        ('active', 'paused'),
        ('paused', 'active'),
        ('active', 'archived'),
        ('paused', 'archived'),
    ])
    def test_allowed_transitions(self, homeowner, make_job, start, target):
        job = make_job()
        JobPost.objects.filter(pk=job.pk).update(status=start)
        assert JobPostManager.set_status(homeowner, job, target).status == target

    @pytest.mark.parametrize('start,target', [
        ('archived', 'active'),
        ('archived', 'paused'),
        ('active', 'active'),
        ('hired', 'paused'),
        ('hired', 'active'),
    ])
    def test_rejected_transitions(self, homeowner, make_job, start, target):
        job = make_job()
        JobPost.objects.filter(pk=job.pk).update(status=start)
        with pytest.raises(InvalidStateError):
            JobPostManager.set_status(homeowner, job, target)
        job.refresh_from_db()
        assert job.status == start

    def test_hired_is_not_settable(self, homeowner, job):
        with pytest.raises(ValidationFailedError):
            JobPostManager.set_status(homeowner, job, 'hired')

    def test_unknown_status(self, homeowner, job):
        with pytest.raises(ValidationFailedError):
            JobPostManager.set_status(homeowner, job, 'draft')

    def test_only_owner_changes_status(self, make_homeowner, job):
        stranger = make_homeowner('stranger')
        with pytest.raises(UnauthorizedError):
            JobPostManager.set_status(stranger, job, 'paused')

    def test_update_while_paused(self, homeowner, job):
        JobPostManager.set_status(homeowner, job, 'paused')
        updated = JobPostManager.update(homeowner, job, {'title': 'Laundry only'})
        assert updated.title == 'Laundry only'
        assert updated.status == 'paused'

    @pytest.mark.parametrize('status', ['hired', 'archived'])
    def test_update_refused_when_closed(self, homeowner, job, status):
        JobPost.objects.filter(pk=job.pk).update(status=status)
        with pytest.raises(InvalidStateError):
            JobPostManager.update(homeowner, job, {'title': 'Changed'})

    def test_delete_cascades_to_applications(self, homeowner, housekeeper, job):
        ApplicationManager.apply(housekeeper, job, application_data())
        JobPostManager.delete(homeowner, job)
        assert not JobPost.objects.filter(pk=job.pk).exists()
        assert not JobApplication.objects.filter(job_id=job.pk).exists()

    def test_delete_hired_post(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        ApplicationManager.accept(homeowner, job, application.pk)
        JobPostManager.delete(homeowner, job)
        assert not JobApplication.objects.filter(pk=application.pk).exists()

    def test_delete_missing(self, homeowner):
        with pytest.raises(NotFoundError):
            JobPostManager.delete(homeowner, 9999)

    def test_archiving_hired_post_hides_hired_person(self, homeowner, housekeeper, job):
        application = ApplicationManager.apply(housekeeper, job, application_data())
        job, _ = ApplicationManager.accept(homeowner, job, application.pk)
        assert job.hired_application.pk == application.pk

        job = JobPostManager.set_status(homeowner, job, 'archived')
        assert job.hired_application is None
        application.refresh_from_db()
        assert application.status == 'accepted'

    def test_list_my_posts_filters_and_sorts(self, homeowner, make_homeowner, make_housekeeper, make_job):
        soon = make_job(title='Soon', start_date=date.today() + timedelta(days=1))
        late = make_job(title='Late', start_date=date.today() + timedelta(days=30))
        undated = make_job(title='Recurring', schedule_type='recurring', start_date=None,
                           days=['monday'], frequency='weekly')
        make_job(owner=make_homeowner('other'), title='Not mine')
        JobPostManager.set_status(homeowner, late, 'paused')
        for name in ('a', 'b'):
            ApplicationManager.apply(make_housekeeper(name), undated, application_data())

        assert [p.title for p in JobPostManager.list_my_posts(homeowner)] == ['Recurring', 'Late', 'Soon']
        assert [p.title for p in JobPostManager.list_my_posts(homeowner, status='paused')] == ['Late']
        assert [p.title for p in JobPostManager.list_my_posts(homeowner, sort='soonest_start_date')] == \
            ['Soon', 'Late', 'Recurring']
        by_applicants = JobPostManager.list_my_posts(homeowner, sort='most_applicants')
        assert by_applicants[0].title == 'Recurring'
        assert by_applicants[0].applicant_count == 2
        assert soon in by_applicants


@pytest.mark.django_db
class TestJobPostEndpoints:

    def test_create_with_range_budget(self, api_client, homeowner):
        api_client.force_authenticate(user=homeowner)
        response = api_client.post(reverse('job_create'), job_payload(), format='json')
        assert response.status_code == 201
        assert response.data['status'] == 'active'
        assert response.data['budget']['type'] == 'range'
        assert response.data['budget']['amount'] is None
        assert response.data['applications'] == []
        assert response.data['hired_person'] is None

    def test_create_accepts_loose_date_and_comma_skills(self, api_client, homeowner):
        api_client.force_authenticate(user=homeowner)
        payload = job_payload(
            skills='Cleaning, Ironing',
            schedule={'type': 'one_time', 'start_date': 'December 12, 2030', 'time': '10:00'},
        )
        response = api_client.post(reverse('job_create'), payload, format='json')
        assert response.status_code == 201
        assert response.data['skills'] == ['Cleaning', 'Ironing']
        assert response.data['schedule']['start_date'] == '2030-12-12'

    @pytest.mark.parametrize('start_date', ['I have 3 kids', 'call me at 5', 'whenever works'])
    def test_create_rejects_free_text_date(self, api_client, homeowner, start_date):
        api_client.force_authenticate(user=homeowner)
        payload = job_payload(schedule={'type': 'one_time', 'start_date': start_date, 'time': '10:00'})
        response = api_client.post(reverse('job_create'), payload, format='json')
        assert response.status_code == 400
        assert 'start_date' in response.data['schedule']
        assert not JobPost.objects.exists()

    def test_create_recurring_needs_days(self, api_client, homeowner):
        api_client.force_authenticate(user=homeowner)
        payload = job_payload(schedule={'type': 'recurring', 'frequency': 'weekly', 'time': '09:00'})
        response = api_client.post(reverse('job_create'), payload, format='json')
        assert response.status_code == 400
        assert 'days' in response.data['schedule']

    def test_create_rejects_inverted_range(self, api_client, homeowner):
        api_client.force_authenticate(user=homeowner)
        payload = job_payload(budget={'type': 'range', 'min_amount': '5000', 'max_amount': '1000', 'rate': 'fixed'})
        response = api_client.post(reverse('job_create'), payload, format='json')
        assert response.status_code == 400
        assert 'max_amount' in response.data['budget']

    def test_create_requires_budget(self, api_client, homeowner):
        api_client.force_authenticate(user=homeowner)
        payload = job_payload()
        del payload['budget']
        response = api_client.post(reverse('job_create'), payload, format='json')
        assert response.status_code == 400
        assert 'budget' in response.data

    def test_housekeeper_cannot_create(self, api_client, housekeeper):
        api_client.force_authenticate(user=housekeeper)
        assert api_client.post(reverse('job_create'), job_payload(), format='json').status_code == 403

    def test_status_endpoint(self, api_client, homeowner, job):
        api_client.force_authenticate(user=homeowner)
        response = api_client.patch(reverse('job_status', args=[job.pk]), {'status': 'paused'}, format='json')
        assert response.status_code == 200
        assert response.data['status'] == 'paused'

        response = api_client.patch(reverse('job_status', args=[job.pk]), {'status': 'hired'}, format='json')
        assert response.status_code == 400
        assert response.data['code'] == 'validation'

    def test_update_hired_post_conflicts(self, api_client, homeowner, job):
        JobPost.objects.filter(pk=job.pk).update(status='archived')
        api_client.force_authenticate(user=homeowner)
        response = api_client.put(reverse('job_detail', args=[job.pk]), job_payload(), format='json')
        assert response.status_code == 409
        assert response.data['code'] == 'invalid_state'

    def test_stranger_cannot_delete(self, api_client, make_homeowner, job):
        api_client.force_authenticate(user=make_homeowner('stranger'))
        response = api_client.delete(reverse('job_detail', args=[job.pk]))
        assert response.status_code == 403
        assert response.data['code'] == 'unauthorized'
        assert JobPost.objects.filter(pk=job.pk).exists()

    def test_detail_for_housekeeper_hides_applications(self, api_client, make_housekeeper, job):
        first = make_housekeeper('first')
        ApplicationManager.apply(first, job, application_data())
        api_client.force_authenticate(user=make_housekeeper('second'))
        response = api_client.get(reverse('job_detail', args=[job.pk]))
        assert response.status_code == 200
        assert 'applications' not in response.data
        assert response.data['applicant_count'] == 1
        assert response.data['my_application'] is None

    def test_my_posts_rejects_unknown_sort(self, api_client, homeowner):
        api_client.force_authenticate(user=homeowner)
        assert api_client.get(reverse('my_jobs'), {'sort': 'cheapest'}).status_code == 400
