from django.urls import path
from .views import (
    HousekeeperListView, HousekeeperDocumentsView, DocumentReviewView,
    HousekeeperReviewView, HousekeeperAccountStatusView, ManagementLogListView,
)

urlpatterns = [
    path('housekeepers/', HousekeeperListView.as_view(), name='management_housekeepers'),
    path('housekeepers/<int:housekeeper_id>/documents/', HousekeeperDocumentsView.as_view(), name='management_housekeeper_documents'),
    path('housekeepers/<int:housekeeper_id>/documents/<str:doc_type>/review/', DocumentReviewView.as_view(), name='management_document_review'),
    path('housekeepers/<int:housekeeper_id>/review/', HousekeeperReviewView.as_view(), name='management_housekeeper_review'),
    path('housekeepers/<int:housekeeper_id>/account-status/', HousekeeperAccountStatusView.as_view(), name='management_account_status'),
    path('logs/', ManagementLogListView.as_view(), name='management_logs'),
]
