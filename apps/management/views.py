from django.db import transaction
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from core.constants import DOCUMENT_STATUS_CHOICES
from core.exceptions import NotFoundError
from apps.users.models import Housekeeper
from apps.jobs.utils import notify_on_commit
from apps.verification.models import document_status_for
from apps.verification.serializers import (
    DocumentReviewSerializer, HousekeeperReviewSerializer, AccountStatusSerializer,
    document_status_payload, account_status_payload,
)
from apps.verification.utils import review_document, review_housekeeper, set_account_status
from .models import ManagementLog
from .permissions import IsSuperuser
from .serializers import ManagementLogSerializer, ManagementHousekeeperSerializer
import logging

logger = logging.getLogger(__name__)


def get_housekeeper(housekeeper_id):
    try:
        return Housekeeper.objects.select_related('user').get(pk=housekeeper_id)
    except Housekeeper.DoesNotExist:
        raise NotFoundError("Housekeeper not found.")


class HousekeeperListView(APIView):
    permission_classes = [IsAuthenticated, IsSuperuser]

    @swagger_auto_schema(
        operation_description="List housekeepers with their document status and eligibility.",
        manual_parameters=[
            openapi.Parameter('document_status', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              enum=[value for value, _ in DOCUMENT_STATUS_CHOICES]),
        ],
        responses={200: ManagementHousekeeperSerializer(many=True), 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        housekeepers = Housekeeper.objects.select_related('user').order_by('-documents_submitted_at', 'id')
        document_status = request.query_params.get('document_status')
        if document_status:
            housekeepers = [hk for hk in housekeepers if document_status_for(hk) == document_status]
        return Response(ManagementHousekeeperSerializer(housekeepers, many=True).data)


class HousekeeperDocumentsView(APIView):
    permission_classes = [IsAuthenticated, IsSuperuser]

    @swagger_auto_schema(
        operation_description="Get a housekeeper's verification documents, notes and review history.",
        responses={200: 'Document status', 404: 'Not Found'}
    )
    def get(self, request, housekeeper_id):
        housekeeper = get_housekeeper(housekeeper_id)
        return Response(document_status_payload(housekeeper))


class DocumentReviewView(APIView):
    permission_classes = [IsAuthenticated, IsSuperuser]

    @swagger_auto_schema(
        operation_description="Approve or reject one document type of a pending submission.",
        request_body=DocumentReviewSerializer,
        responses={200: 'Document status', 400: 'Bad Request', 404: 'Not Found', 409: 'Not awaiting review'}
    )
    def post(self, request, housekeeper_id, doc_type):
        housekeeper = get_housekeeper(housekeeper_id)
        serializer = DocumentReviewSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        approved = serializer.validated_data['approved']
        with transaction.atomic():
            review_document(request.user, housekeeper, doc_type, approved, serializer.validated_data['notes'])
            ManagementLog.objects.create(
                admin=request.user,
                action='review_document',
                details=f"{'Approved' if approved else 'Rejected'} {doc_type} of {housekeeper.user.username} (ID: {housekeeper.pk})"
            )
        return Response(document_status_payload(housekeeper))


class HousekeeperReviewView(APIView):
    permission_classes = [IsAuthenticated, IsSuperuser]

    @swagger_auto_schema(
        operation_description="Record an overall verification decision for a pending submission.",
        request_body=HousekeeperReviewSerializer,
        responses={200: 'Document status', 400: 'Bad Request', 404: 'Not Found', 409: 'Not awaiting review'}
    )
    def post(self, request, housekeeper_id):
        housekeeper = get_housekeeper(housekeeper_id)
        serializer = HousekeeperReviewSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        approved = serializer.validated_data['approved']
        notes = serializer.validated_data['notes']
        with transaction.atomic():
            review_housekeeper(
                request.user, housekeeper, approved, notes,
                document_review=serializer.validated_data['document_review']
            )
            ManagementLog.objects.create(
                admin=request.user,
                action='approve_housekeeper' if approved else 'reject_housekeeper',
                details=f"{'Approved' if approved else 'Rejected'} verification of {housekeeper.user.username} (ID: {housekeeper.pk})"
            )
            user = housekeeper.user
            if approved:
                notify_on_commit(
                    user,
                    "Your HouseHelp account is verified",
                    f"Dear {user.first_name or user.username},\n\nYour documents have been approved. "
                    f"You can now publish services and apply to job posts.\n\nBest regards,\nHouseHelp Team",
                    "Your HouseHelp documents were approved.",
                )
            else:
                notify_on_commit(
                    user,
                    "Your HouseHelp verification needs attention",
                    f"Dear {user.first_name or user.username},\n\nYour documents were not approved."
                    f"{' Reason: ' + notes if notes else ''}\nPlease review the feedback and resubmit.\n\n"
                    f"Best regards,\nHouseHelp Team",
                    "Your HouseHelp documents were not approved. Please resubmit.",
                )
        return Response(document_status_payload(housekeeper))


class HousekeeperAccountStatusView(APIView):
    permission_classes = [IsAuthenticated, IsSuperuser]

    @swagger_auto_schema(
        operation_description="Get a housekeeper's account active flag and disablement reason.",
        responses={200: 'Account status', 404: 'Not Found'}
    )
    def get(self, request, housekeeper_id):
        return Response(account_status_payload(get_housekeeper(housekeeper_id)))

    @swagger_auto_schema(
        operation_description="Enable or disable a housekeeper account. A disabled housekeeper cannot publish services or apply.",
        request_body=AccountStatusSerializer,
        responses={200: 'Account status', 400: 'Bad Request', 404: 'Not Found'}
    )
    def patch(self, request, housekeeper_id):
        housekeeper = get_housekeeper(housekeeper_id)
        serializer = AccountStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        active = serializer.validated_data['active']
        reason = serializer.validated_data['reason']
        with transaction.atomic():
            set_account_status(request.user, housekeeper, active, reason)
            ManagementLog.objects.create(
                admin=request.user,
                action='enable_housekeeper' if active else 'disable_housekeeper',
                details=(
                    f"{'Enabled' if active else 'Disabled'} {housekeeper.user.username} (ID: {housekeeper.pk})"
                    f"{'' if active else f': {reason}'}"
                )
            )
        return Response(account_status_payload(housekeeper))


class ManagementLogListView(APIView):
    permission_classes = [IsAuthenticated, IsSuperuser]

    @swagger_auto_schema(
        operation_description="List management actions, newest first.",
        manual_parameters=[openapi.Parameter('action', openapi.IN_QUERY, type=openapi.TYPE_STRING)],
        responses={200: ManagementLogSerializer(many=True)}
    )
    def get(self, request):
        logs = ManagementLog.objects.select_related('admin')
        action = request.query_params.get('action')
        if action:
            logs = logs.filter(action=action)
        return Response(ManagementLogSerializer(logs, many=True).data)
