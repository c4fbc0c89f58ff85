from django.urls import path
from rest_framework.authtoken.views import obtain_auth_token
from .views import UserProfileView, HomeOwnerProfileView, HousekeeperProfileView

urlpatterns = [
    path('auth/login/', obtain_auth_token, name='auth_login'),
    path('profile/', UserProfileView.as_view(), name='user_profile'),
    path('profile/homeowner/', HomeOwnerProfileView.as_view(), name='user_profile_homeowner'),
    path('profile/housekeeper/', HousekeeperProfileView.as_view(), name='user_profile_housekeeper'),
]
