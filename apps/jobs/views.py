from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from core.constants import JOB_STATUS_ACTIVE
from core.exceptions import NotFoundError
from core.utils import IsHomeOwner, IsHousekeeper
from .lifecycle import JobPostManager, ApplicationManager, with_applicant_counts
from .models import JobPost, JobApplication
from .serializers import (
    JobPostSerializer, OpenJobPostSerializer, ApplicantSerializer, JobApplicationSerializer,
    MyApplicationSerializer, JobStatusSerializer, ApplicationStatusSerializer,
    MyJobPostsQuerySerializer,
)
import logging

logger = logging.getLogger(__name__)

error_response = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        'error': openapi.Schema(type=openapi.TYPE_STRING),
        'code': openapi.Schema(type=openapi.TYPE_STRING),
    }
)


class JobPostCreateView(APIView):
    permission_classes = [IsAuthenticated, IsHomeOwner]

    @swagger_auto_schema(
        operation_description="Create a new job post. It starts out active.",
        request_body=JobPostSerializer,
        responses={201: JobPostSerializer, 400: 'Bad Request', 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def post(self, request):
        serializer = JobPostSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        job = JobPostManager.create(request.user, serializer.validated_data)
        return Response(JobPostSerializer(job).data, status=status.HTTP_201_CREATED)


class MyJobPostListView(APIView):
    permission_classes = [IsAuthenticated, IsHomeOwner]

    @swagger_auto_schema(
        operation_description="List your job posts, optionally filtered by status.",
        manual_parameters=[
            openapi.Parameter('status', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=['active', 'paused', 'hired', 'archived']),
            openapi.Parameter('sort', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=['newest', 'most_applicants', 'soonest_start_date']),
        ],
        responses={200: JobPostSerializer(many=True), 400: 'Bad Request', 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        query = MyJobPostsQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        posts = JobPostManager.list_my_posts(
            request.user,
            status=query.validated_data.get('status') or None,
            sort=query.validated_data['sort'],
        )
        return Response(JobPostSerializer(posts, many=True).data)


class JobPostDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description=(
            "Retrieve a job post. Its homeowner sees applicants; a housekeeper sees an "
            "active post or one they applied to, without other applications."
        ),
        responses={200: JobPostSerializer, 401: 'Unauthorized', 404: openapi.Response('Not Found', error_response)}
    )
    def get(self, request, id):
        try:
            job = with_applicant_counts(JobPost.objects.select_related('homeowner')).get(pk=id)
        except JobPost.DoesNotExist:
            raise NotFoundError("Job post not found.")
        if job.is_owned_by(request.user):
            return Response(JobPostSerializer(job).data)
        if hasattr(request.user, 'housekeeper'):
            application = JobApplication.objects.filter(job=job, housekeeper=request.user.housekeeper).first()
            if job.status == JOB_STATUS_ACTIVE or application:
                context = {'my_applications': {job.id: application} if application else {}}
                return Response(OpenJobPostSerializer(job, context=context).data)
        raise NotFoundError("Job post not found.")

    @swagger_auto_schema(
        operation_description="Update a job post. Only active or paused posts can be edited.",
        request_body=JobPostSerializer,
        responses={
            200: JobPostSerializer,
            400: 'Bad Request',
            403: openapi.Response('Not the owner', error_response),
            404: openapi.Response('Not Found', error_response),
            409: openapi.Response('Post is hired or archived', error_response),
        }
    )
    def put(self, request, id):
        serializer = JobPostSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        job = JobPostManager.update(request.user, id, serializer.validated_data)
        return Response(JobPostSerializer(job).data)

    @swagger_auto_schema(
        operation_description="Delete a job post together with its applications.",
        responses={204: 'No Content', 403: 'Forbidden', 404: 'Not Found'}
    )
    def delete(self, request, id):
        JobPostManager.delete(request.user, id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class JobPostStatusView(APIView):
    permission_classes = [IsAuthenticated, IsHomeOwner]

    @swagger_auto_schema(
        operation_description="Pause, resume or archive a job post. 'hired' is set by accepting an application.",
        request_body=JobStatusSerializer,
        responses={
            200: JobPostSerializer,
            400: 'Bad Request',
            403: 'Forbidden',
            404: 'Not Found',
            409: openapi.Response('Transition not allowed', error_response),
        }
    )
    def patch(self, request, id):
        serializer = JobStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        job = JobPostManager.set_status(request.user, id, serializer.validated_data['status'])
        return Response(JobPostSerializer(job).data)


class JobApplyView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Apply to an active job post. Requires a verified, active account.",
        request_body=JobApplicationSerializer,
        responses={
            201: JobApplicationSerializer,
            400: 'Bad Request',
            403: openapi.Response('Not eligible', error_response),
            404: 'Not Found',
            409: openapi.Response('Job closed or already applied', error_response),
        }
    )
    def post(self, request, id):
        serializer = JobApplicationSerializer(data=request.data)
        if not serializer.is_valid():
            logger.info(f"Invalid application by user {request.user.id} to job {id}: {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        application = ApplicationManager.apply(request.user, id, serializer.validated_data)
        return Response(JobApplicationSerializer(application).data, status=status.HTTP_201_CREATED)


class JobApplicantsView(APIView):
    permission_classes = [IsAuthenticated, IsHomeOwner]

    @swagger_auto_schema(
        operation_description="List pending and accepted applicants for your job post.",
        responses={200: ApplicantSerializer(many=True), 403: 'Forbidden', 404: 'Not Found'}
    )
    def get(self, request, id):
        applications = ApplicationManager.list_active_applicants(request.user, id)
        return Response(ApplicantSerializer(applications, many=True).data)


class ApplicationStatusView(APIView):
    permission_classes = [IsAuthenticated, IsHomeOwner]

    @swagger_auto_schema(
        operation_description="Accept (hire) or reject an application on your job post.",
        request_body=ApplicationStatusSerializer,
        responses={
            200: openapi.Response('Updated job post and application', openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={
                    'job': openapi.Schema(type=openapi.TYPE_OBJECT),
                    'application': openapi.Schema(type=openapi.TYPE_OBJECT),
                }
            )),
            400: 'Bad Request',
            403: 'Forbidden',
            404: 'Not Found',
            409: openapi.Response('Already hired or already processed', error_response),
        }
    )
    def patch(self, request, id, application_id):
        serializer = ApplicationStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        job, application = ApplicationManager.set_status(
            request.user, id, application_id, serializer.validated_data['status']
        )
        return Response({
            'job': JobPostSerializer(job).data,
            'application': ApplicantSerializer(application).data,
        })


class MyApplicationsView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="List the applications you have submitted, newest first.",
        responses={200: MyApplicationSerializer(many=True), 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        applications = ApplicationManager.list_my_applications(request.user)
        return Response(MyApplicationSerializer(applications, many=True).data)
