from django.contrib import admin
from django.urls import path, include
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework.permissions import AllowAny

schema_view = get_schema_view(
    openapi.Info(
        title="HouseHelp API",
        default_version='v1',
        description="API for the HouseHelp home-services marketplace",
    ),
    public=True,
    permission_classes=[AllowAny],
)

urlpatterns = [
    path('', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('admin/', admin.site.urls),
    path('users/', include('apps.users.urls')),
    path('verification/', include('apps.verification.urls')),
    path('jobs/', include('apps.jobs.urls')),
    path('services/', include('apps.catalog.urls')),
    path('management/', include('apps.management.urls')),
]
