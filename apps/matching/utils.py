import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

from dateutil import parser

from core.constants import BUDGET_FIXED, BUDGET_RANGE

logger = logging.getLogger(__name__)

SORT_NEWEST = 'newest'
SORT_MOST_APPLICANTS = 'most_applicants'
SORT_SOONEST_START_DATE = 'soonest_start_date'

SORT_CHOICES = (
    (SORT_NEWEST, 'Newest'),
    (SORT_MOST_APPLICANTS, 'Most applicants'),
    (SORT_SOONEST_START_DATE, 'Soonest start date'),
)

APPLICATION_FILTER_ALL = 'all'
APPLICATION_FILTER_APPLIED = 'applied'
APPLICATION_FILTER_NOT_APPLIED = 'not_applied'

APPLICATION_FILTER_CHOICES = (
    (APPLICATION_FILTER_ALL, 'All'),
    (APPLICATION_FILTER_APPLIED, 'Applied'),
    (APPLICATION_FILTER_NOT_APPLIED, 'Not applied'),
)


@dataclass(frozen=True)
class FilterConstraints:
    """Search constraints for the open job feed. Unset fields do not filter."""
    search: Optional[str] = None
    location: Optional[str] = None
    budget_max: Optional[Decimal] = None
    schedule_type: Optional[str] = None
    skills: Tuple[str, ...] = ()
    application_status: str = APPLICATION_FILTER_ALL
    sort: str = SORT_NEWEST


class JobFilterEngine:

    @staticmethod
    def normalize_string(s):
        """Normalize strings for comparison."""
        return re.sub(r'\s+', ' ', (s or '').lower().strip())

    @staticmethod
    def parse_amount(value):
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value).replace(',', '').strip())
        except (InvalidOperation, ValueError):
            return None

    @staticmethod
    def parse_start_date(value, fuzzy=True):
        """
        Return a date for `value`, or None when it is missing or cannot be parsed.

        Fuzzy parsing skips unknown words and suits sorting stored text; input
        validation passes `fuzzy=False` so free text is never read as a date.
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not str(value).strip():
            return None
        try:
            return parser.parse(str(value), fuzzy=fuzzy).date()
        except (ValueError, OverflowError, parser.ParserError):
            logger.debug(f"Unparseable start date: {value!r}")
            return None

    @classmethod
    def budget_ceiling(cls, post):
        """A fixed budget's amount or a range's maximum; None when the post has no usable budget."""
        if post.budget_type == BUDGET_FIXED:
            return cls.parse_amount(post.amount)
        if post.budget_type == BUDGET_RANGE:
            return cls.parse_amount(post.max_amount)
        return None

    @staticmethod
    def applicant_count(post):
        count = getattr(post, 'applicant_count', None)
        if count is None:
            count = post.active_applications.count()
        return count

    @staticmethod
    def applied_job_ids(my_applications):
        if my_applications is None:
            return set()
        if isinstance(my_applications, dict):
            return set(my_applications)
        return {application.job_id for application in my_applications}

    @classmethod
    def matches_search(cls, post, term):
        term = cls.normalize_string(term)
        if not term:
            return True
        return term in cls.normalize_string(post.title) or term in cls.normalize_string(post.description)

    @classmethod
    def matches_location(cls, post, location):
        location = cls.normalize_string(location)
        return not location or location in cls.normalize_string(post.location)

    @classmethod
    def matches_budget(cls, post, budget_max):
        if budget_max is None:
            return True
        ceiling = cls.budget_ceiling(post)
        # Posts without a usable budget are not excluded by a ceiling.
        return ceiling is None or ceiling <= budget_max

    @classmethod
    def matches_schedule_type(cls, post, schedule_type):
        schedule_type = cls.normalize_string(schedule_type).replace('-', '_')
        return not schedule_type or cls.normalize_string(post.schedule_type) == schedule_type

    @classmethod
    def matches_skills(cls, post, keywords):
        keywords = [cls.normalize_string(k) for k in keywords]
        keywords = [k for k in keywords if k]
        if not keywords:
            return True
        tags = [cls.normalize_string(tag) for tag in (post.skills or [])]
        return any(keyword in tag for tag in tags for keyword in keywords)

    @staticmethod
    def matches_application_status(post, application_status, applied_ids):
        if application_status == APPLICATION_FILTER_APPLIED:
            return post.id in applied_ids
        if application_status == APPLICATION_FILTER_NOT_APPLIED:
            return post.id not in applied_ids
        return True

    @classmethod
    def matches(cls, post, constraints, applied_ids):
        return (
            cls.matches_search(post, constraints.search)
            and cls.matches_location(post, constraints.location)
            and cls.matches_budget(post, constraints.budget_max)
            and cls.matches_schedule_type(post, constraints.schedule_type)
            and cls.matches_skills(post, constraints.skills)
            and cls.matches_application_status(post, constraints.application_status, applied_ids)
        )

    @classmethod
    def sort(cls, posts, order=SORT_NEWEST):
        """Order posts; every order falls back to newest first for ties."""
        posts = sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)
        if order == SORT_MOST_APPLICANTS:
            posts.sort(key=lambda p: -cls.applicant_count(p))
        elif order == SORT_SOONEST_START_DATE:
            # Missing or unparseable dates go last.
            def start_key(post):
                start = cls.parse_start_date(post.start_date)
                return (start is None, start or date.min)
            posts.sort(key=start_key)
        elif order != SORT_NEWEST:
            logger.warning(f"Unknown sort order {order!r}, using newest first")
        return posts

    @classmethod
    def filter(cls, posts, constraints=None, my_applications=None):
        """
        Return the posts satisfying every supplied constraint, ordered by
        `constraints.sort`. With no constraints every post is returned newest first.
        """
        constraints = constraints or FilterConstraints()
        applied_ids = cls.applied_job_ids(my_applications)
        visible = [post for post in posts if cls.matches(post, constraints, applied_ids)]
        return cls.sort(visible, constraints.sort)
