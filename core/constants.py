JOB_STATUS_ACTIVE = 'active'
JOB_STATUS_PAUSED = 'paused'
JOB_STATUS_HIRED = 'hired'
JOB_STATUS_ARCHIVED = 'archived'

JOB_STATUS_CHOICES = (
    (JOB_STATUS_ACTIVE, 'Active'),      # Initial state, open for applications
    (JOB_STATUS_PAUSED, 'Paused'),      # Temporarily hidden from housekeepers
    (JOB_STATUS_HIRED, 'Hired'),        # An application was accepted
    (JOB_STATUS_ARCHIVED, 'Archived'),  # Closed by the homeowner, terminal
)

# Statuses the homeowner may set directly; 'hired' only follows an accepted application.
JOB_STATUS_TRANSITIONS = {
    JOB_STATUS_ACTIVE: {JOB_STATUS_PAUSED, JOB_STATUS_ARCHIVED},
    JOB_STATUS_PAUSED: {JOB_STATUS_ACTIVE, JOB_STATUS_ARCHIVED},
    JOB_STATUS_HIRED: {JOB_STATUS_ARCHIVED},
    JOB_STATUS_ARCHIVED: set(),
}

APPLICATION_STATUS_PENDING = 'pending'
APPLICATION_STATUS_ACCEPTED = 'accepted'
APPLICATION_STATUS_REJECTED = 'rejected'

JOB_APPLICATION_STATUS_CHOICES = (
    (APPLICATION_STATUS_PENDING, 'Pending'),    # Housekeeper applied, awaiting homeowner response
    (APPLICATION_STATUS_ACCEPTED, 'Accepted'),  # Homeowner hired this housekeeper
    (APPLICATION_STATUS_REJECTED, 'Rejected'),  # Homeowner declined the application
)

SCHEDULE_ONE_TIME = 'one_time'
SCHEDULE_RECURRING = 'recurring'

SCHEDULE_TYPE_CHOICES = (
    (SCHEDULE_ONE_TIME, 'One-time'),
    (SCHEDULE_RECURRING, 'Recurring'),
)

FREQUENCY_CHOICES = (
    ('weekly', 'Weekly'),
    ('biweekly', 'Bi-weekly'),
    ('monthly', 'Monthly'),
)

BUDGET_FIXED = 'fixed'
BUDGET_RANGE = 'range'

BUDGET_TYPE_CHOICES = (
    (BUDGET_FIXED, 'Fixed'),
    (BUDGET_RANGE, 'Range'),
)

RATE_CHOICES = (
    ('hourly', 'Hourly'),
    ('fixed', 'Fixed'),
    ('monthly', 'Monthly'),
)

PRICING_TYPE_CHOICES = (
    ('fixed', 'Fixed'),
    ('hourly', 'Hourly'),
)

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

DOCUMENT_STATUS_NOT_SUBMITTED = 'not_submitted'
DOCUMENT_STATUS_PENDING = 'pending'
DOCUMENT_STATUS_APPROVED = 'approved'
DOCUMENT_STATUS_REJECTED = 'rejected'

DOCUMENT_STATUS_CHOICES = (
    (DOCUMENT_STATUS_NOT_SUBMITTED, 'Not submitted'),
    (DOCUMENT_STATUS_PENDING, 'Pending review'),
    (DOCUMENT_STATUS_APPROVED, 'Approved'),
    (DOCUMENT_STATUS_REJECTED, 'Rejected'),
)

DOC_TYPE_IDENTIFICATION = 'identificationCard'
DOC_TYPE_CERTIFICATIONS = 'certifications'

DOCUMENT_TYPE_CHOICES = (
    (DOC_TYPE_IDENTIFICATION, 'Identification Card'),
    (DOC_TYPE_CERTIFICATIONS, 'Certifications or Experience Documents'),
)

MAX_FILES_PER_DOCUMENT = {
    DOC_TYPE_IDENTIFICATION: 2,
    DOC_TYPE_CERTIFICATIONS: 5,
}

DEFAULT_DISABLED_REASON = 'Your account has been disabled by an administrator.'
