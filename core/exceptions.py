import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MarketplaceError(APIException):
    """Base class for recoverable job, application and eligibility errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request could not be completed.'
    default_code = 'error'

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail=detail, code=code)
        self.extra = extra

    def as_payload(self):
        payload = {'error': str(self.detail), 'code': self.get_codes()}
        payload.update(self.extra)
        return payload


class NotEligibleError(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Your account is not eligible for this action.'
    default_code = 'not_eligible'

    def __init__(self, verdict, detail=None):
        super().__init__(
            detail=detail or verdict.message,
            verification_status=verdict.status,
            reason=verdict.reason,
        )
        self.verdict = verdict


class JobClosedError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This job post is not accepting applications.'
    default_code = 'job_closed'


class DuplicateApplicationError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'You have already applied to this job post.'
    default_code = 'duplicate_application'


class InvalidStateError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This action is not allowed in the current state.'
    default_code = 'invalid_state'


class AlreadyHiredError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This job post already has a hired housekeeper.'
    default_code = 'already_hired'


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class UnauthorizedError(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You are not allowed to modify this resource.'
    default_code = 'unauthorized'


class ValidationFailedError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'validation'


def custom_exception_handler(exc, context):
    """Render marketplace errors as {"error": ..., "code": ...}; defer the rest to DRF."""
    if isinstance(exc, MarketplaceError):
        view = context.get('view')
        logger.info(f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: {exc.detail}")
        return Response(exc.as_payload(), status=exc.status_code)
    return exception_handler(exc, context)
