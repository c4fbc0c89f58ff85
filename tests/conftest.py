"""Pytest configuration and fixtures."""
import pytest
from rest_framework.test import APIClient

from apps.jobs.lifecycle import JobPostManager
from apps.users.models import User, HomeOwner, Housekeeper
from .factories import job_data


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_homeowner(db):
    def _make(username='owner', **extra):
        user = User.objects.create_user(
            username=username, email=f"{username}@example.com", password='secret-pass', **extra
        )
        HomeOwner.objects.create(user=user, city_municipality='Makati')
        return user
    return _make


@pytest.fixture
def make_housekeeper(db):
    """Housekeeper user; `verified=True` sets the legacy flag so the account is eligible."""
    def _make(username='helper', verified=True, **extra):
        user = User.objects.create_user(
            username=username, email=f"{username}@example.com", password='secret-pass',
            is_verified=verified, **extra
        )
        Housekeeper.objects.create(user=user, location='Makati')
        return user
    return _make


@pytest.fixture
def homeowner(make_homeowner):
    return make_homeowner()


@pytest.fixture
def housekeeper(make_housekeeper):
    return make_housekeeper()


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser(username='admin', email='admin@example.com', password='secret-pass')


@pytest.fixture
def make_job(homeowner):
    def _make(owner=None, **overrides):
        return JobPostManager.create(owner or homeowner, job_data(**overrides))
    return _make


@pytest.fixture
def job(make_job):
    return make_job()
