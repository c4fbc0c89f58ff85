import logging
import re
from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client as TwilioClient

logger = logging.getLogger(__name__)

PHONE_NUMBER_PATTERN = re.compile(r'^\+\d{9,15}$')


def _send_email(user, subject, email_message):
    if not user.email:
        return
    try:
        send_mail(
            subject=subject,
            message=email_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            fail_silently=False,
        )
        logger.info(f"Email notification sent to {user.email}")
    except Exception as e:
        logger.error(f"Failed to send email to {user.email}: {str(e)}")


def send_notification(user, subject, email_message, sms_message):
    """
    Send notifications to users via email and SMS.

    Delivery problems are logged and never raised: a notification must not
    undo the lifecycle change that triggered it.

    Args:
        user: User object to send notification to
        subject: Email subject
        email_message: Email message content
        sms_message: SMS message content
    """
    _send_email(user, subject, email_message)

    if not user.phone_number:
        return
    if not PHONE_NUMBER_PATTERN.match(user.phone_number):
        logger.warning(f"Invalid phone number format for user {user.id}: {user.phone_number}")
        return
    if not settings.TWILIO_ACCOUNT_SID:
        logger.debug(f"Twilio is not configured, skipping SMS to user {user.id}")
        return
    try:
        client = TwilioClient(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        client.messages.create(
            body=sms_message,
            from_=settings.TWILIO_PHONE_NUMBER,
            to=user.phone_number
        )
        logger.info(f"SMS notification sent to {user.phone_number}")
    except TwilioRestException as e:
        logger.error(f"Failed to send SMS to {user.phone_number}: {str(e)}")


def notify_on_commit(user, subject, email_message, sms_message):
    """Queue a notification to go out once the surrounding transaction commits."""
    transaction.on_commit(lambda: send_notification(user, subject, email_message, sms_message))


def notify_new_application(application):
    job = application.job
    homeowner = job.homeowner
    housekeeper = application.housekeeper.user
    notify_on_commit(
        homeowner,
        f"New Application for Job: {job.title}",
        (
            f"Dear {homeowner.first_name or homeowner.username},\n\n"
            f"{housekeeper.display_name} has applied for your job '{job.title}'.\n"
            f"Please review the application in HouseHelp.\n\n"
            f"Best regards,\nHouseHelp Team"
        ),
        f"New application for '{job.title}' from {housekeeper.display_name}. Review in HouseHelp.",
    )


def notify_application_accepted(application):
    job = application.job
    homeowner = job.homeowner
    housekeeper = application.housekeeper.user
    notify_on_commit(
        housekeeper,
        f"Application Accepted for {job.title}",
        (
            f"Dear {housekeeper.first_name or housekeeper.username},\n\n"
            f"Your application for job '{job.title}' has been accepted.\n"
            f"Contact the homeowner at:\n"
            f"- Email: {homeowner.email or 'Not provided'}\n"
            f"- Phone: {homeowner.phone_number or 'Not provided'}\n\n"
            f"Best regards,\nHouseHelp Team"
        ),
        f"Your application for '{job.title}' was accepted. Contact the homeowner for details.",
    )


def notify_application_rejected(application):
    job = application.job
    housekeeper = application.housekeeper.user
    notify_on_commit(
        housekeeper,
        f"Application Update for {job.title}",
        (
            f"Dear {housekeeper.first_name or housekeeper.username},\n\n"
            f"Your application for job '{job.title}' was not selected by the homeowner.\n\n"
            f"Best regards,\nHouseHelp Team"
        ),
        f"Your application for '{job.title}' was not selected.",
    )
