from datetime import date, time, timedelta
from decimal import Decimal

from apps.verification.models import VerificationDocument, DocumentFile


def job_data(**overrides):
    """Validated JobPost fields, as JobPostManager.create expects them."""
    data = {
        'title': 'Weekly house cleaning',
        'description': 'Two bedroom condo, bring your own supplies.',
        'location': 'Makati City',
        'skills': ['Cleaning', 'Laundry'],
        'schedule_type': 'one_time',
        'start_date': date.today() + timedelta(days=7),
        'schedule_time': '09:00',
        'days': [],
        'frequency': '',
        'budget_type': 'fixed',
        'amount': Decimal('3000.00'),
        'rate': 'fixed',
    }
    data.update(overrides)
    return data


def job_payload(**overrides):
    """Request body for creating or updating a job post over HTTP."""
    payload = {
        'title': 'Deep cleaning before move-in',
        'description': 'Empty three bedroom house.',
        'location': 'Quezon City',
        'skills': ['Deep cleaning'],
        'schedule': {'type': 'one_time', 'start_date': (date.today() + timedelta(days=3)).isoformat(), 'time': '08:00'},
        'budget': {'type': 'range', 'min_amount': '1500', 'max_amount': '2500', 'rate': 'fixed'},
    }
    payload.update(overrides)
    return payload


def application_data(**overrides):
    data = {
        'cover_message': 'I have five years of cleaning experience.',
        'proposed_rate': Decimal('2500.00'),
        'experience_summary': 'Condo and house cleaning.',
        'availability': {'monday': True},
        'start_date': date.today() + timedelta(days=7),
    }
    data.update(overrides)
    return data


def application_payload(**overrides):
    payload = {
        'cover_message': 'I have five years of cleaning experience.',
        'proposed_rate': '2500.00',
        'experience_summary': 'Condo and house cleaning.',
        'availability': {'monday': True, 'tuesday': False},
        'start_date': (date.today() + timedelta(days=7)).isoformat(),
    }
    payload.update(overrides)
    return payload


def upload_document(housekeeper, doc_type='identificationCard', name='id-front.jpg'):
    document, _ = VerificationDocument.objects.get_or_create(housekeeper=housekeeper, doc_type=doc_type)
    return DocumentFile.objects.create(
        document=document, file_name=name, file_url=f"https://files.example.com/{name}"
    )


def service_data(**overrides):
    """Validated Service fields, as ServiceCatalogGate.create expects them."""
    data = {
        'name': 'General house cleaning',
        'category': 'Cleaning',
        'tags': ['cleaning', 'laundry'],
        'description': 'Sweeping, mopping and dusting.',
        'service_location': 'Makati City',
        'available_days': {'monday': True, 'wednesday': True},
        'start_time': time(8, 0),
        'end_time': time(17, 0),
        'pricing_type': 'fixed',
        'price': Decimal('800.00'),
        'contact_number': '+639171234567',
    }
    data.update(overrides)
    return data


def service_payload(**overrides):
    payload = {
        'name': 'Laundry and ironing',
        'category': 'Laundry',
        'tags': 'laundry, ironing',
        'description': 'Wash, dry and iron up to 5kg.',
        'service_location': 'Pasig City',
        'available_days': {'Saturday': True},
        'start_time': '09:00',
        'end_time': '15:00',
        'pricing_type': 'hourly',
        'price': '250',
        'contact_number': '+639171234567',
    }
    payload.update(overrides)
    return payload
