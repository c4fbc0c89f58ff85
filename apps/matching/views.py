from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from core.constants import JOB_STATUS_ACTIVE
from core.utils import IsHousekeeper
from apps.jobs.lifecycle import with_applicant_counts
from apps.jobs.models import JobPost, JobApplication
from apps.jobs.serializers import OpenJobPostSerializer
from .serializers import FilterConstraintsSerializer
from .utils import JobFilterEngine
import logging

logger = logging.getLogger(__name__)


class OpenJobPostListView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description=(
            "List active job posts for housekeepers. All filters are optional and combine; "
            "without filters every active post is returned newest first."
        ),
        manual_parameters=[
            openapi.Parameter('search', openapi.IN_QUERY, type=openapi.TYPE_STRING, description='Matches title or description'),
            openapi.Parameter('location', openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter('budget_max', openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter('schedule_type', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=['one_time', 'recurring']),
            openapi.Parameter('skills', openapi.IN_QUERY, type=openapi.TYPE_STRING, description='Comma separated keywords'),
            openapi.Parameter('application_status', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=['all', 'applied', 'not_applied']),
            openapi.Parameter('sort', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=['newest', 'most_applicants', 'soonest_start_date']),
        ],
        responses={200: OpenJobPostSerializer(many=True), 400: 'Bad Request', 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        query = FilterConstraintsSerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)
        constraints = query.to_constraints()
        posts = with_applicant_counts(
            JobPost.objects.filter(status=JOB_STATUS_ACTIVE).select_related('homeowner')
        )
        my_applications = {
            application.job_id: application
            for application in JobApplication.objects.filter(housekeeper=request.user.housekeeper)
        }
        visible = JobFilterEngine.filter(posts, constraints, my_applications)
        logger.debug(f"Open feed for housekeeper {request.user.housekeeper.pk}: {len(visible)} posts")
        serializer = OpenJobPostSerializer(visible, many=True, context={'my_applications': my_applications})
        return Response(serializer.data)
