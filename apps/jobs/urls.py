from django.urls import path
from apps.matching.views import OpenJobPostListView
from .views import (
    JobPostCreateView, MyJobPostListView, JobPostDetailView, JobPostStatusView,
    JobApplyView, JobApplicantsView, ApplicationStatusView, MyApplicationsView,
)

urlpatterns = [
    path('', JobPostCreateView.as_view(), name='job_create'),
    path('open/', OpenJobPostListView.as_view(), name='open_jobs'),
    path('mine/', MyJobPostListView.as_view(), name='my_jobs'),
    path('applications/mine/', MyApplicationsView.as_view(), name='my_applications'),
    path('<int:id>/', JobPostDetailView.as_view(), name='job_detail'),
    path('<int:id>/status/', JobPostStatusView.as_view(), name='job_status'),
    path('<int:id>/apply/', JobApplyView.as_view(), name='job_apply'),
    path('<int:id>/applications/', JobApplicantsView.as_view(), name='job_applications'),
    path('<int:id>/applications/<int:application_id>/status/', ApplicationStatusView.as_view(), name='application_status'),
]
