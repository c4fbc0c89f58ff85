from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from core.utils import IsHousekeeper
from .serializers import (
    DocumentFileSerializer, document_status_payload, account_status_payload, eligibility_payload,
)
from .utils import add_document_file, delete_document_file, submit_documents, resubmit_documents

status_schema = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        'document_status': openapi.Schema(type=openapi.TYPE_STRING, enum=['not_submitted', 'pending', 'approved', 'rejected']),
        'documents': openapi.Schema(type=openapi.TYPE_OBJECT),
        'notes': openapi.Schema(type=openapi.TYPE_STRING, nullable=True),
        'history': openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Schema(type=openapi.TYPE_OBJECT)),
    }
)


class DocumentStatusView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Get the verification status of your documents.",
        responses={200: openapi.Response('Document status', status_schema), 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        return Response(document_status_payload(request.user.housekeeper))


class EligibilityView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Whether you may publish services and apply to job posts right now.",
        responses={
            200: openapi.Response('Eligibility verdict', openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={
                    'eligible': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                    'status': openapi.Schema(type=openapi.TYPE_STRING, enum=['verified', 'pending', 'rejected', 'disabled', 'not_submitted']),
                    'reason': openapi.Schema(type=openapi.TYPE_STRING, nullable=True),
                    'message': openapi.Schema(type=openapi.TYPE_STRING),
                }
            )),
            401: 'Unauthorized',
            403: 'Forbidden'
        }
    )
    def get(self, request):
        return Response(eligibility_payload(request.user.housekeeper))


class AccountStatusView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(operation_description="Get your account active flag and disablement reason.")
    def get(self, request):
        return Response(account_status_payload(request.user.housekeeper))


class DocumentFileUploadView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Record an uploaded verification file. The file itself lives in external storage.",
        request_body=DocumentFileSerializer,
        responses={201: DocumentFileSerializer, 400: 'Bad Request', 409: 'Documents locked for review'}
    )
    def post(self, request, doc_type):
        serializer = DocumentFileSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        document_file = add_document_file(
            request.user.housekeeper, doc_type,
            serializer.validated_data['file_name'], serializer.validated_data['file_url']
        )
        return Response(DocumentFileSerializer(document_file).data, status=status.HTTP_201_CREATED)


class DocumentFileDeleteView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(responses={204: 'No Content', 404: 'Not Found', 409: 'Documents locked for review'})
    def delete(self, request, doc_type, file_id):
        delete_document_file(request.user.housekeeper, doc_type, file_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SubmitDocumentsView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Submit uploaded documents for verification.",
        responses={200: openapi.Response('Document status', status_schema), 400: 'Bad Request', 409: 'Already submitted'}
    )
    def post(self, request):
        submit_documents(request.user.housekeeper)
        return Response(document_status_payload(request.user.housekeeper))


class ResubmitDocumentsView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Resubmit documents after a rejection.",
        responses={200: openapi.Response('Document status', status_schema), 400: 'Bad Request', 409: 'Not rejected'}
    )
    def post(self, request):
        resubmit_documents(request.user.housekeeper)
        return Response(document_status_payload(request.user.housekeeper))
