from django.urls import path
from .views import MyServiceListCreateView, ServiceDetailView, ServiceAvailabilityView, BrowseServicesView

urlpatterns = [
    path('', MyServiceListCreateView.as_view(), name='my_services'),
    path('browse/', BrowseServicesView.as_view(), name='browse_services'),
    path('<int:id>/', ServiceDetailView.as_view(), name='service_detail'),
    path('<int:id>/availability/', ServiceAvailabilityView.as_view(), name='service_availability'),
]
