from django.urls import path
from .views import (
    DocumentStatusView, EligibilityView, AccountStatusView,
    DocumentFileUploadView, DocumentFileDeleteView,
    SubmitDocumentsView, ResubmitDocumentsView,
)

urlpatterns = [
    path('status/', DocumentStatusView.as_view(), name='document_status'),
    path('eligibility/', EligibilityView.as_view(), name='eligibility'),
    path('account-status/', AccountStatusView.as_view(), name='account_status'),
    path('documents/<str:doc_type>/files/', DocumentFileUploadView.as_view(), name='document_file_upload'),
    path('documents/<str:doc_type>/files/<int:file_id>/', DocumentFileDeleteView.as_view(), name='document_file_delete'),
    path('submit/', SubmitDocumentsView.as_view(), name='documents_submit'),
    path('resubmit/', ResubmitDocumentsView.as_view(), name='documents_resubmit'),
]
