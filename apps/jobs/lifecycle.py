"""
Job post and application lifecycles.

Every operation takes the acting user explicitly. Writes that touch more than
one row run inside ``transaction.atomic()`` holding a row lock on the job post,
so apply, accept and reject on the same post are serialized. Results are read
back from the database after the transaction commits.
"""
import logging
from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone
from core.constants import (
    JOB_STATUS_ACTIVE, JOB_STATUS_PAUSED, JOB_STATUS_HIRED,
    JOB_STATUS_CHOICES, JOB_STATUS_TRANSITIONS,
    APPLICATION_STATUS_PENDING, APPLICATION_STATUS_ACCEPTED, APPLICATION_STATUS_REJECTED,
)
from core.exceptions import (
    AlreadyHiredError, DuplicateApplicationError, InvalidStateError, JobClosedError,
    NotFoundError, UnauthorizedError, ValidationFailedError,
)
from apps.matching.utils import JobFilterEngine, SORT_NEWEST
from apps.verification.eligibility import require_eligible
from .models import JobPost, JobApplication
from .utils import notify_new_application, notify_application_accepted, notify_application_rejected

logger = logging.getLogger(__name__)

EDITABLE_STATUSES = (JOB_STATUS_ACTIVE, JOB_STATUS_PAUSED)
JOB_STATUSES = {value for value, _ in JOB_STATUS_CHOICES}


def with_applicant_counts(queryset):
    return queryset.annotate(
        applicant_count=Count('applications', filter=~Q(applications__status=APPLICATION_STATUS_REJECTED))
    )


def _get_job(job_id, lock=False):
    queryset = JobPost.objects.select_for_update() if lock else JobPost.objects.all()
    try:
        return queryset.get(pk=job_id)
    except JobPost.DoesNotExist:
        raise NotFoundError("Job post not found.")


def _job_id(job):
    return job.pk if isinstance(job, JobPost) else job


class JobPostManager:

    @staticmethod
    def create(actor, data):
        """Create a job post owned by `actor`; `data` holds validated model fields."""
        job = JobPost.objects.create(homeowner=actor, status=JOB_STATUS_ACTIVE, **data)
        logger.info(f"Homeowner {actor.pk} created job post {job.pk}")
        return job

    @staticmethod
    def update(actor, job, data):
        with transaction.atomic():
            job = _get_job(_job_id(job), lock=True)
            if not job.is_owned_by(actor):
                raise UnauthorizedError("Only the homeowner who posted this job can edit it.")
            if job.status not in EDITABLE_STATUSES:
                raise InvalidStateError(f"A {job.status} job post can no longer be edited.")
            for attr, value in data.items():
                setattr(job, attr, value)
            job.save()
        logger.info(f"Homeowner {actor.pk} updated job post {job.pk}")
        return _get_job(job.pk)

    @staticmethod
    def set_status(actor, job, new_status):
        """
        Move a job post to `new_status`. The homeowner may toggle active and
        paused and archive anything but an archived post; `hired` is only
        reached by accepting an application.
        """
        if new_status not in JOB_STATUSES:
            raise ValidationFailedError(f"Invalid job status: {new_status}")
        if new_status == JOB_STATUS_HIRED:
            raise ValidationFailedError("A job post is marked hired by accepting an application.")
        with transaction.atomic():
            job = _get_job(_job_id(job), lock=True)
            if not job.is_owned_by(actor):
                raise UnauthorizedError("Only the homeowner who posted this job can change its status.")
            if new_status not in JOB_STATUS_TRANSITIONS[job.status]:
                raise InvalidStateError(f"Cannot change a {job.status} job post to {new_status}.")
            previous = job.status
            job.status = new_status
            job.save(update_fields=['status', 'updated_at'])
        logger.info(f"Job post {job.pk} moved from {previous} to {new_status} by {actor.pk}")
        return _get_job(job.pk)

    @staticmethod
    def delete(actor, job):
        """Delete a job post and its applications in one transaction."""
        with transaction.atomic():
            job = _get_job(_job_id(job), lock=True)
            if not job.is_owned_by(actor):
                raise UnauthorizedError("Only the homeowner who posted this job can delete it.")
            job_id = job.pk
            job.delete()
        logger.info(f"Homeowner {actor.pk} deleted job post {job_id}")

    @staticmethod
    def list_my_posts(actor, status=None, sort=SORT_NEWEST):
        queryset = with_applicant_counts(JobPost.objects.filter(homeowner=actor))
        if status:
            if status not in JOB_STATUSES:
                raise ValidationFailedError(f"Invalid job status: {status}")
            queryset = queryset.filter(status=status)
        return JobFilterEngine.sort(queryset, sort)


class ApplicationManager:

    @staticmethod
    def apply(actor, job, data):
        """
        Submit a pending application for `actor`'s housekeeper profile.

        Checks run in order: eligibility, job exists, job is active, no earlier
        application by this housekeeper in any status.
        """
        housekeeper = actor.housekeeper
        require_eligible(housekeeper, action='apply to job posts')
        try:
            with transaction.atomic():
                job = _get_job(_job_id(job), lock=True)
                if job.status != JOB_STATUS_ACTIVE:
                    raise JobClosedError()
                if JobApplication.objects.filter(job=job, housekeeper=housekeeper).exists():
                    raise DuplicateApplicationError()
                application = JobApplication.objects.create(
                    job=job, housekeeper=housekeeper, status=APPLICATION_STATUS_PENDING, **data
                )
                notify_new_application(application)
        except IntegrityError:
            logger.warning(f"Concurrent duplicate application by housekeeper {housekeeper.pk} to job {_job_id(job)}")
            raise DuplicateApplicationError()
        logger.info(f"Housekeeper {housekeeper.pk} applied to job post {application.job_id}")
        return JobApplication.objects.select_related('job', 'housekeeper__user').get(pk=application.pk)

    @staticmethod
    def _lock_application(actor, job_id, application_id):
        job = _get_job(job_id, lock=True)
        try:
            application = JobApplication.objects.select_for_update().get(pk=application_id, job=job)
        except JobApplication.DoesNotExist:
            raise NotFoundError("Application not found.")
        if not job.is_owned_by(actor):
            raise UnauthorizedError("Only the homeowner who posted this job can respond to applications.")
        return job, application

    @classmethod
    def accept(cls, actor, job, application_id):
        """
        Hire the applicant: the application becomes accepted and the job post
        becomes hired together, or neither changes.
        """
        try:
            with transaction.atomic():
                job, application = cls._lock_application(actor, _job_id(job), application_id)
                if job.status == JOB_STATUS_HIRED:
                    raise AlreadyHiredError()
                if application.status != APPLICATION_STATUS_PENDING:
                    raise InvalidStateError(f"This application has already been {application.status}.")
                if job.status not in EDITABLE_STATUSES:
                    raise InvalidStateError(f"Cannot hire for a {job.status} job post.")
                application.status = APPLICATION_STATUS_ACCEPTED
                application.save(update_fields=['status', 'updated_at'])
                job.status = JOB_STATUS_HIRED
                job.hired_at = timezone.now()
                job.save(update_fields=['status', 'hired_at', 'updated_at'])
                notify_application_accepted(application)
        except IntegrityError:
            # Only the one-accepted-application constraint means someone else hired first.
            if not JobApplication.objects.filter(
                job_id=_job_id(job), status=APPLICATION_STATUS_ACCEPTED
            ).exclude(pk=application_id).exists():
                raise
            logger.warning(f"Concurrent accept on job post {_job_id(job)} lost the race")
            raise AlreadyHiredError()
        logger.info(f"Homeowner {actor.pk} hired application {application.pk} for job post {job.pk}")
        return _get_job(job.pk), JobApplication.objects.select_related('housekeeper__user').get(pk=application.pk)

    @classmethod
    def reject(cls, actor, job, application_id):
        with transaction.atomic():
            job, application = cls._lock_application(actor, _job_id(job), application_id)
            if application.status != APPLICATION_STATUS_PENDING:
                raise InvalidStateError(f"This application has already been {application.status}.")
            application.status = APPLICATION_STATUS_REJECTED
            application.save(update_fields=['status', 'updated_at'])
            notify_application_rejected(application)
        logger.info(f"Homeowner {actor.pk} rejected application {application.pk} for job post {job.pk}")
        return _get_job(job.pk), JobApplication.objects.select_related('housekeeper__user').get(pk=application.pk)

    @classmethod
    def set_status(cls, actor, job, application_id, new_status):
        if new_status == APPLICATION_STATUS_ACCEPTED:
            return cls.accept(actor, job, application_id)
        if new_status == APPLICATION_STATUS_REJECTED:
            return cls.reject(actor, job, application_id)
        raise ValidationFailedError("Status must be 'accepted' or 'rejected'.")

    @staticmethod
    def list_active_applicants(actor, job):
        """Pending and accepted applications for the homeowner's own post; rejected ones are hidden."""
        job = _get_job(_job_id(job))
        if not job.is_owned_by(actor):
            raise UnauthorizedError("Only the homeowner who posted this job can view its applicants.")
        return job.active_applications.select_related('housekeeper__user')

    @staticmethod
    def list_my_applications(actor):
        return (
            JobApplication.objects
            .filter(housekeeper=actor.housekeeper)
            .select_related('job', 'job__homeowner')
            .order_by('-applied_at', '-id')
        )
