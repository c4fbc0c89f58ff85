from django.db.models import Prefetch
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from core.exceptions import NotFoundError
from core.utils import IsHousekeeper
from apps.users.models import Housekeeper
from apps.verification.eligibility import evaluate_housekeeper
from .gate import ServiceCatalogGate
from .models import Service
from .serializers import ServiceSerializer, ServiceAvailabilitySerializer, BrowseHousekeeperSerializer

not_eligible_response = openapi.Response('Not eligible', openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        'error': openapi.Schema(type=openapi.TYPE_STRING),
        'code': openapi.Schema(type=openapi.TYPE_STRING),
        'verification_status': openapi.Schema(type=openapi.TYPE_STRING, enum=['pending', 'rejected', 'disabled', 'not_submitted']),
        'reason': openapi.Schema(type=openapi.TYPE_STRING, nullable=True),
    }
))


class MyServiceListCreateView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="List your services.",
        responses={200: ServiceSerializer(many=True), 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        return Response(ServiceSerializer(ServiceCatalogGate.list_mine(request.user), many=True).data)

    @swagger_auto_schema(
        operation_description="Publish a new service. Requires a verified, active account.",
        request_body=ServiceSerializer,
        responses={201: ServiceSerializer, 400: 'Bad Request', 403: not_eligible_response}
    )
    def post(self, request):
        serializer = ServiceSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        service = ServiceCatalogGate.create(request.user, serializer.validated_data)
        return Response(ServiceSerializer(service).data, status=status.HTTP_201_CREATED)


class ServiceDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Retrieve a service. Other users only see available services.",
        responses={200: ServiceSerializer, 404: 'Not Found'}
    )
    def get(self, request, id):
        try:
            service = Service.objects.select_related('housekeeper').get(pk=id)
        except Service.DoesNotExist:
            raise NotFoundError("Service not found.")
        if not service.is_owned_by(request.user) and not (service.is_available and service.housekeeper.account_active):
            raise NotFoundError("Service not found.")
        return Response(ServiceSerializer(service).data)

    @swagger_auto_schema(
        operation_description="Update your service. Requires a verified, active account.",
        request_body=ServiceSerializer,
        responses={200: ServiceSerializer, 400: 'Bad Request', 403: not_eligible_response, 404: 'Not Found'}
    )
    def put(self, request, id):
        if not hasattr(request.user, 'housekeeper'):
            self.permission_denied(request, message="Only housekeepers can manage services.")
        serializer = ServiceSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        service = ServiceCatalogGate.update(request.user, id, serializer.validated_data)
        return Response(ServiceSerializer(service).data)

    @swagger_auto_schema(
        operation_description="Delete your service. Requires a verified, active account.",
        responses={204: 'No Content', 403: not_eligible_response, 404: 'Not Found'}
    )
    def delete(self, request, id):
        if not hasattr(request.user, 'housekeeper'):
            self.permission_denied(request, message="Only housekeepers can manage services.")
        ServiceCatalogGate.delete(request.user, id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ServiceAvailabilityView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Show or hide your service from homeowners.",
        request_body=ServiceAvailabilitySerializer,
        responses={200: ServiceSerializer, 400: 'Bad Request', 403: 'Forbidden', 404: 'Not Found'}
    )
    def patch(self, request, id):
        serializer = ServiceAvailabilitySerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        service = ServiceCatalogGate.toggle_availability(request.user, id, serializer.validated_data['is_available'])
        return Response(ServiceSerializer(service).data)


class BrowseServicesView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="List verified housekeepers with their available services.",
        responses={200: BrowseHousekeeperSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request):
        housekeepers = (
            Housekeeper.objects
            .filter(account_active=True, services__is_available=True)
            .distinct()
            .select_related('user')
            .prefetch_related(Prefetch(
                'services', queryset=Service.objects.filter(is_available=True), to_attr='available_services'
            ))
        )
        bookable = [hk for hk in housekeepers if evaluate_housekeeper(hk).eligible]
        return Response(BrowseHousekeeperSerializer(bookable, many=True).data)
