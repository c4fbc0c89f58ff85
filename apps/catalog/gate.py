import logging
from django.db import transaction
from core.exceptions import NotFoundError, UnauthorizedError
from apps.verification.eligibility import require_eligible
from .models import Service

logger = logging.getLogger(__name__)


class ServiceCatalogGate:
    """
    Service create, update and delete go through the housekeeper's eligibility
    verdict, evaluated fresh on every call. Reads and the availability toggle
    are not gated.
    """

    @staticmethod
    def _get_owned(actor, service_id, lock=False):
        queryset = Service.objects.select_for_update() if lock else Service.objects.all()
        try:
            service = queryset.select_related('housekeeper').get(pk=service_id)
        except Service.DoesNotExist:
            raise NotFoundError("Service not found.")
        if not service.is_owned_by(actor):
            raise UnauthorizedError("You can only manage your own services.")
        return service

    @staticmethod
    def create(actor, data):
        housekeeper = actor.housekeeper
        require_eligible(housekeeper, action='create a service')
        service = Service.objects.create(housekeeper=housekeeper, **data)
        logger.info(f"Housekeeper {housekeeper.pk} created service {service.pk}")
        return service

    @classmethod
    def update(cls, actor, service_id, data):
        require_eligible(actor.housekeeper, action='update a service')
        with transaction.atomic():
            service = cls._get_owned(actor, service_id, lock=True)
            for attr, value in data.items():
                setattr(service, attr, value)
            service.save()
        logger.info(f"Housekeeper {service.housekeeper_id} updated service {service.pk}")
        return Service.objects.get(pk=service.pk)

    @classmethod
    def delete(cls, actor, service_id):
        require_eligible(actor.housekeeper, action='delete a service')
        with transaction.atomic():
            service = cls._get_owned(actor, service_id, lock=True)
            service.delete()
        logger.info(f"Housekeeper {actor.housekeeper.pk} deleted service {service_id}")

    @classmethod
    def toggle_availability(cls, actor, service_id, is_available):
        with transaction.atomic():
            service = cls._get_owned(actor, service_id, lock=True)
            service.is_available = is_available
            service.save(update_fields=['is_available', 'updated_at'])
        logger.info(f"Service {service.pk} availability set to {is_available}")
        return service

    @staticmethod
    def list_mine(actor):
        return Service.objects.filter(housekeeper=actor.housekeeper)

    @classmethod
    def get(cls, actor, service_id):
        return cls._get_owned(actor, service_id)
